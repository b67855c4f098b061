"""
Value tree model.

A ValueNode is a closed tagged union over the six JSON shapes. Nodes are
immutable and owned by exactly one tree; object fields keep insertion order.

Consumers dispatch with ``match``:

    match node:
        case ObjectNode(fields=fields): ...
        case ArrayNode(items=items): ...
        case NullNode() | BoolNode() | NumberNode() | StringNode(): ...
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class NullNode:
    """The JSON ``null`` scalar."""

    def render(self) -> str:
        return "null"


@dataclass(frozen=True, slots=True)
class BoolNode:
    """A boolean scalar, rendered as ``true`` / ``false``."""

    value: bool

    def render(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class NumberNode:
    """An integer or floating point scalar."""

    value: int | float

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class StringNode:
    """A string scalar, rendered verbatim."""

    value: str

    def render(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ArrayNode:
    """An ordered sequence of nodes."""

    items: tuple[ValueNode, ...] = ()

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class ObjectNode:
    """An ordered mapping of unique keys to nodes."""

    fields: dict[str, ValueNode] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.fields)

    def keys(self) -> list[str]:
        return list(self.fields)


ScalarNode = Union[NullNode, BoolNode, NumberNode, StringNode]
ValueNode = Union[NullNode, BoolNode, NumberNode, StringNode, ArrayNode, ObjectNode]

SCALAR_TYPES = (NullNode, BoolNode, NumberNode, StringNode)


def is_scalar(node: ValueNode) -> bool:
    """Check if node is a non-container scalar."""
    return isinstance(node, SCALAR_TYPES)


def uniform_keys(array: ArrayNode) -> list[str] | None:
    """
    Return the shared key list if the array is uniform, otherwise None.

    An array is uniform when it is non-empty, every element is an object and
    every element has the same key set as the first one. Membership is
    compared order-independently; the returned keys follow the first
    element's order.

    Args:
        array: Array node to classify

    Returns:
        Keys of the first element, or None if the array is not uniform
    """
    if not array.items:
        return None

    first = array.items[0]
    if not isinstance(first, ObjectNode):
        return None

    first_keys = first.keys()
    first_key_set = set(first_keys)

    for item in array.items[1:]:
        if not isinstance(item, ObjectNode):
            return None
        if len(item.fields) != len(first_keys):
            return None
        if not all(key in first_key_set for key in item.fields):
            return None

    return first_keys


def is_primitive_array(array: ArrayNode) -> bool:
    """Check if a non-empty array holds only scalars."""
    if not array.items:
        return False
    return all(is_scalar(item) for item in array.items)


def from_python(value: Any) -> ValueNode:
    """
    Build a value tree from plain Python data (as produced by ``json.loads``).

    Args:
        value: None, bool, int, float, str, list/tuple or dict

    Returns:
        Equivalent ValueNode

    Raises:
        TypeError: If value contains an unsupported type
    """
    if value is None:
        return NullNode()
    # bool must be tested before int
    if isinstance(value, bool):
        return BoolNode(value)
    if isinstance(value, (int, float)):
        return NumberNode(value)
    if isinstance(value, str):
        return StringNode(value)
    if isinstance(value, (list, tuple)):
        return ArrayNode(tuple(from_python(item) for item in value))
    if isinstance(value, dict):
        return ObjectNode({str(key): from_python(item) for key, item in value.items()})
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


def to_python(node: ValueNode) -> Any:
    """Convert a value tree back into plain Python data."""
    match node:
        case NullNode():
            return None
        case BoolNode(value=value) | NumberNode(value=value) | StringNode(value=value):
            return value
        case ArrayNode(items=items):
            return [to_python(item) for item in items]
        case ObjectNode(fields=fields):
            return {key: to_python(item) for key, item in fields.items()}
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def to_compact_json(node: ValueNode) -> str:
    """Serialize a value tree to JSON without whitespace."""
    return json.dumps(to_python(node), separators=(",", ":"), ensure_ascii=False)


__all__ = [
    "NullNode",
    "BoolNode",
    "NumberNode",
    "StringNode",
    "ArrayNode",
    "ObjectNode",
    "ScalarNode",
    "ValueNode",
    "SCALAR_TYPES",
    "is_scalar",
    "uniform_keys",
    "is_primitive_array",
    "from_python",
    "to_python",
    "to_compact_json",
]
