"""
Flatten Encoder

Renders a value tree as path/value lines, a compact format optimized for
LLM token efficiency. Uniform object arrays collapse into a CSV-style
tabular block and scalar arrays into a single comma-separated line.
"""

from dataclasses import dataclass, replace
from enum import Enum

from ..models.nodes import (
    ArrayNode,
    ObjectNode,
    ValueNode,
    is_primitive_array,
    is_scalar,
    to_compact_json,
    uniform_keys,
)

ROOT_KEY = "value"


class LineKind(str, Enum):
    """Shape of a rendered FlattenLine."""

    SCALAR = "scalar"
    PRIMITIVE = "primitive"
    TABULAR = "tabular"


@dataclass(frozen=True, slots=True)
class FlattenLine:
    """
    One rendered output entry.

    The first output line is ``path + body``; tabular blocks carry their
    comma-joined rows separately so post-passes can rewrite paths without
    touching values.
    """

    kind: LineKind
    path: str
    body: str
    rows: tuple[str, ...] = ()

    @property
    def head(self) -> str:
        return f"{self.path}{self.body}"

    def render(self) -> str:
        return "\n".join((self.head, *self.rows))

    def with_path(self, path: str) -> "FlattenLine":
        return replace(self, path=path)


def escape_value(value: str) -> str:
    """Escape a value for a comma-joined row (CSV quoting)."""
    if "," in value or '"' in value or "\n" in value or "\r" in value:
        # Escape quotes by doubling them
        escaped = value.replace('"', '""')
        return f'"{escaped}"'
    return value


def unescape_value(value: str) -> str:
    """Invert escape_value for a single cell."""
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1].replace('""', '"')
    return value


def split_row(row: str) -> list[str]:
    """
    Split a comma-joined row into unescaped cells.

    Quoted cells may contain commas, doubled quotes and line breaks.
    """
    cells: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    while i < len(row):
        char = row[i]
        if in_quotes:
            if char == '"':
                if i + 1 < len(row) and row[i + 1] == '"':
                    current.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                current.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ",":
            cells.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    cells.append("".join(current))
    return cells


class FlattenEncoder:
    """
    Path/value flattening encoder with tabular optimization.

    Example:
        Input (JSON):
        {
          "user": {"name": "Javian"},
          "items": [
            {"id": 1, "name": "A"},
            {"id": 2, "name": "B"}
          ],
          "tags": ["x", "y"]
        }

        Output:
        user.name:Javian
        items[2]{id,name}:
        1,A
        2,B
        tags[2]:x,y
    """

    def encode(self, node: ValueNode) -> str:
        """
        Encode a value tree to flattened text.

        Args:
            node: Root of the tree

        Returns:
            Lines joined with a single newline
        """
        return "\n".join(line.render() for line in self.flatten(node))

    def flatten(self, node: ValueNode, prefix: str = "") -> list[FlattenLine]:
        """
        Flatten a value tree into ordered lines.

        Args:
            node: Node to flatten
            prefix: Path of node from the root ("" at the root)

        Returns:
            Lines in document order
        """
        lines: list[FlattenLine] = []
        self._flatten(node, prefix, lines)
        return lines

    def _flatten(self, node: ValueNode, prefix: str, output: list[FlattenLine]) -> None:
        match node:
            case ObjectNode(fields=fields):
                for key, value in fields.items():
                    new_prefix = key if not prefix else f"{prefix}.{key}"
                    self._flatten(value, new_prefix, output)
            case ArrayNode(items=items):
                keys = uniform_keys(node)
                if keys is not None:
                    output.append(self._encode_tabular(node, prefix, keys))
                    return

                if is_primitive_array(node):
                    output.append(self._encode_primitive(node, prefix))
                    return

                # Mixed or non-uniform: one path per index
                for index, item in enumerate(items):
                    self._flatten(item, f"{prefix}[{index}]", output)
            case _:
                output.append(
                    FlattenLine(
                        kind=LineKind.SCALAR,
                        path=prefix or ROOT_KEY,
                        body=f":{node.render()}",
                    )
                )

    def _encode_tabular(self, array: ArrayNode, prefix: str, keys: list[str]) -> FlattenLine:
        """Encode uniform object array as a header plus CSV-style rows."""
        rows = []
        for item in array.items:
            # uniform_keys guarantees every item is an ObjectNode with these keys
            fields = item.fields  # type: ignore[union-attr]
            rows.append(",".join(self._render_cell(fields[key]) for key in keys))

        return FlattenLine(
            kind=LineKind.TABULAR,
            path=prefix,
            body=f"[{len(array)}]{{{','.join(keys)}}}:",
            rows=tuple(rows),
        )

    def _encode_primitive(self, array: ArrayNode, prefix: str) -> FlattenLine:
        """Encode scalar array as one comma-separated line."""
        values = ",".join(self._render_cell(item) for item in array.items)
        return FlattenLine(
            kind=LineKind.PRIMITIVE,
            path=prefix,
            body=f"[{len(array)}]:{values}",
        )

    def _render_cell(self, node: ValueNode) -> str:
        """Render a value placed inside a comma-joined row."""
        if is_scalar(node):
            return escape_value(node.render())  # type: ignore[union-attr]
        return escape_value(to_compact_json(node))
