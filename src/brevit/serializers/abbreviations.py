"""
Abbreviation Engine

Optional post-pass over flattened output. Repeated top-level path segments
are replaced by short aliases declared up front:

    @o=order
    @o.id:o-456
    @o.items[2]:a,b

Only path tokens are rewritten; values and tabular rows are left untouched,
so ``expand`` restores the original output exactly.
"""

import re

from ..models.schemas import AbbreviationEntry
from .flatten import FlattenLine, LineKind

_DEFINITION = re.compile(r"^@([0-9a-z]+)=(.*)$")
_ALIASED_PATH = re.compile(r"^@([0-9a-z]+)(?=[.\[])")
_SEGMENT_END = re.compile(r"[.\[]")


def first_segment(path: str) -> str | None:
    """
    Return the first segment of a path that continues past it.

    ``order.items[0]`` -> ``order``; ``order`` (a leaf at the root) and
    ``[0].a`` have no rewritable segment.
    """
    match = _SEGMENT_END.search(path)
    if match is None or match.start() == 0:
        return None
    return path[: match.start()]


def line_segment(line: FlattenLine) -> str | None:
    """
    Return the rewritable first segment of a line.

    Array headers continue into their ``[N]`` body, so a root-level array
    (``items[2]{id}:``) has ``items`` as its segment.
    """
    if line.kind is LineKind.SCALAR:
        return first_segment(line.path)
    return first_segment(line.head)


class AbbreviationEngine:
    """
    Aliases repeated top-level path segments.

    Aliases are derived deterministically from the segment: its lower-cased
    alphanumeric stem is tried at increasing prefix lengths, then the first
    character with a numeric suffix.
    """

    def __init__(self, threshold: int = 2):
        if threshold < 1:
            raise ValueError(f"threshold must be >= 1, got {threshold}")
        self.threshold = threshold

    def plan(self, lines: list[FlattenLine]) -> list[AbbreviationEntry]:
        """
        Decide which segments get aliases.

        The pass is skipped (no entries) when the output could not be
        expanded unambiguously: a physical output line already starting
        with "@", or a segment containing a line break.

        Args:
            lines: Flattened lines in document order

        Returns:
            Entries ordered by first appearance of their segment
        """
        if not self._is_invertible(lines):
            return []

        counts: dict[str, int] = {}
        for line in lines:
            segment = line_segment(line)
            if segment is not None:
                counts[segment] = counts.get(segment, 0) + 1

        entries = []
        taken: set[str] = set()
        for segment, count in counts.items():
            if count < self.threshold:
                continue
            alias = self._make_alias(segment, taken)
            taken.add(alias)
            entries.append(
                AbbreviationEntry(alias=alias, original_segment=segment, occurrence_count=count)
            )
        return entries

    def apply(self, lines: list[FlattenLine]) -> list[str]:
        """
        Rewrite lines with aliases.

        Args:
            lines: Flattened lines in document order

        Returns:
            Definition lines followed by the rendered, rewritten lines
        """
        entries = self.plan(lines)
        if not entries:
            return [line.render() for line in lines]

        aliases = {entry.original_segment: entry.alias for entry in entries}
        output = [entry.definition() for entry in entries]

        for line in lines:
            segment = line_segment(line)
            if segment in aliases:
                line = line.with_path(f"@{aliases[segment]}{line.path[len(segment):]}")
            output.append(line.render())
        return output

    @staticmethod
    def expand(text: str) -> str:
        """
        Restore abbreviated output using its definition lines.

        Args:
            text: Output produced by apply(), joined with newlines

        Returns:
            Output without definitions and with aliases replaced
        """
        lines = text.split("\n")
        aliases: dict[str, str] = {}

        start = 0
        for line in lines:
            match = _DEFINITION.match(line)
            if match is None:
                break
            aliases[match.group(1)] = match.group(2)
            start += 1

        if not aliases:
            return text

        expanded = []
        for line in lines[start:]:
            match = _ALIASED_PATH.match(line)
            if match is not None and match.group(1) in aliases:
                line = aliases[match.group(1)] + line[match.end():]
            expanded.append(line)
        return "\n".join(expanded)

    @staticmethod
    def _is_invertible(lines: list[FlattenLine]) -> bool:
        for line in lines:
            if any(physical.startswith("@") for physical in line.render().split("\n")):
                return False
            segment = line_segment(line)
            if segment is not None and ("\n" in segment or "\r" in segment):
                return False
        return True

    @staticmethod
    def _make_alias(segment: str, taken: set[str]) -> str:
        stem = "".join(c for c in segment.lower() if c.isascii() and c.isalnum()) or "s"

        for length in range(1, len(stem) + 1):
            candidate = stem[:length]
            if candidate not in taken:
                return candidate

        suffix = 2
        while f"{stem[0]}{suffix}" in taken:
            suffix += 1
        return f"{stem[0]}{suffix}"
