"""
Value Tree Adapter.

Classifies heterogeneous input (structured records, JSON text, plain text,
binary blobs) into a closed set of variants. Parse and serialization
failures become variants too, so nothing raised here reaches the caller of
``adapt``.
"""

import dataclasses
import json
from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel

from ..exceptions import MalformedInputError, SerializationFailureError
from ..models.nodes import ValueNode, from_python

# Deeper trees would exhaust the interpreter stack in the recursive walks
MAX_NESTING_DEPTH = 256


@dataclass(frozen=True, slots=True)
class JsonDocument:
    """JSON-like text that parsed into a tree."""

    text: str
    node: ValueNode


@dataclass(frozen=True, slots=True)
class MalformedJson:
    """JSON-like text that failed to parse."""

    text: str
    message: str
    is_long: bool = False


@dataclass(frozen=True, slots=True)
class PlainText:
    """Text that is not JSON-like."""

    text: str
    is_long: bool


@dataclass(frozen=True, slots=True)
class BinaryBlob:
    """Raw bytes, treated as an image."""

    data: bytes


@dataclass(frozen=True, slots=True)
class StructuredRecord:
    """Any other input, serialized compactly and parsed into a tree."""

    type_name: str
    text: str
    node: ValueNode


@dataclass(frozen=True, slots=True)
class Unserializable:
    """Structured input the serializer rejected."""

    type_name: str
    message: str


AdaptedInput = Union[
    JsonDocument, MalformedJson, PlainText, BinaryBlob, StructuredRecord, Unserializable
]


def is_json_like(text: str) -> bool:
    """
    Check if a string is likely JSON.

    True when the trimmed text is wrapped in ``{}`` or ``[]``.
    """
    trimmed = text.strip()
    if not trimmed:
        return False
    return (trimmed.startswith("{") and trimmed.endswith("}")) or (
        trimmed.startswith("[") and trimmed.endswith("]")
    )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def nesting_depth(data: Any, limit: int | None = None) -> int:
    """
    Return how many containers deep plain JSON data nests (scalars are 0).

    Walks with an explicit stack, so arbitrarily deep data is safe. Stops
    early once ``limit`` is exceeded.
    """
    deepest = 0
    stack = [(data, 0)]
    while stack:
        value, depth = stack.pop()
        if isinstance(value, dict):
            children = value.values()
        elif isinstance(value, (list, tuple)):
            children = value
        else:
            continue
        depth += 1
        deepest = max(deepest, depth)
        if limit is not None and deepest > limit:
            break
        stack.extend((child, depth) for child in children)
    return deepest


def parse_json(text: str) -> ValueNode:
    """
    Parse JSON text into a value tree, preserving key order.

    Args:
        text: JSON text

    Returns:
        Root ValueNode

    Raises:
        MalformedInputError: If the text is not valid JSON or nests deeper
            than MAX_NESTING_DEPTH
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedInputError(str(e), details={"position": e.pos}) from e
    except ValueError as e:
        raise MalformedInputError(str(e)) from e
    except RecursionError as e:
        raise MalformedInputError("Maximum nesting depth exceeded") from e

    if nesting_depth(data, limit=MAX_NESTING_DEPTH) > MAX_NESTING_DEPTH:
        raise MalformedInputError(
            f"Nesting depth exceeds {MAX_NESTING_DEPTH}",
            details={"max_depth": MAX_NESTING_DEPTH},
        )
    return from_python(data)


def _json_default(value: Any) -> Any:
    """Fallback serializer for pydantic models and dataclasses."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_structured(value: Any) -> str:
    """
    Serialize a structured record to compact JSON (no embedded whitespace).

    Args:
        value: dict, list, tuple, scalar, pydantic model or dataclass

    Returns:
        Compact JSON text

    Raises:
        SerializationFailureError: If the value cannot be serialized
    """
    type_name = type(value).__name__
    try:
        if isinstance(value, BaseModel):
            return value.model_dump_json()
        return json.dumps(
            value,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
            default=_json_default,
        )
    except (TypeError, ValueError) as e:
        raise SerializationFailureError(str(e), type_name=type_name) from e
    except RecursionError as e:
        raise SerializationFailureError(
            "Maximum nesting depth exceeded", type_name=type_name
        ) from e


def adapt(raw: Any, long_text_threshold: int) -> AdaptedInput:
    """
    Classify raw input into one of the AdaptedInput variants.

    Args:
        raw: Structured record, string, binary blob or None
        long_text_threshold: Strings longer than this are long text

    Returns:
        The matching AdaptedInput variant
    """
    if raw is None:
        return PlainText(text="", is_long=False)

    if isinstance(raw, str):
        if is_json_like(raw):
            try:
                return JsonDocument(text=raw, node=parse_json(raw))
            except MalformedInputError as e:
                return MalformedJson(
                    text=raw, message=e.message, is_long=len(raw) > long_text_threshold
                )
        return PlainText(text=raw, is_long=len(raw) > long_text_threshold)

    if isinstance(raw, (bytes, bytearray, memoryview)):
        return BinaryBlob(data=bytes(raw))

    type_name = type(raw).__name__
    try:
        text = serialize_structured(raw)
        node = parse_json(text)
    except (SerializationFailureError, MalformedInputError) as e:
        return Unserializable(type_name=type_name, message=e.message)
    return StructuredRecord(type_name=type_name, text=text, node=node)
