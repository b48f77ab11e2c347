"""Line-indexed markdown documents and section replacement."""

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from chart_sync.domain.entry import Entry
from chart_sync.domain.errors import SectionNotFound

HEAD_COUNT = 50

_HEADING = re.compile(r"^(#{1,6})(?:\s|$)")
_FENCE = re.compile(r"^\s{0,3}(```|~~~)")


def heading_level(line: str) -> Optional[int]:
    """Return the level of an ATX heading line, or None for other lines."""
    match = _HEADING.match(line)
    return len(match.group(1)) if match else None


@dataclass(frozen=True)
class SectionSpan:
    """Half-open line range [start, end) covering a section, heading included."""

    start: int
    end: int


class Document:
    """Immutable markdown document held as a sequence of lines with their endings."""

    def __init__(self, lines: Sequence[str]):
        self.lines = tuple(lines)

    @classmethod
    def from_text(cls, text: str) -> "Document":
        return cls(text.splitlines(keepends=True))

    def to_text(self) -> str:
        return "".join(self.lines)

    @property
    def newline(self) -> str:
        if self.lines and self.lines[0].endswith("\r\n"):
            return "\r\n"
        return "\n"

    def _headings(self):
        """Yield (index, level) for every heading outside fenced code blocks."""
        in_fence = False
        for index, line in enumerate(self.lines):
            if _FENCE.match(line):
                in_fence = not in_fence
                continue
            if in_fence:
                continue
            level = heading_level(line)
            if level is not None:
                yield index, level

    def has_section(self, heading: str) -> bool:
        try:
            self.find_section(heading)
        except SectionNotFound:
            return False
        return True

    def find_section(self, heading: str) -> SectionSpan:
        """
        Locate the section introduced by a heading line.

        The section runs from the first line exactly equal to the heading up
        to the next heading of the same or a higher level, or to the end of
        the document.

        Raises:
            SectionNotFound: If no line equals the heading
        """
        level = heading_level(heading)
        if level is None:
            raise ValueError(f"Not a markdown heading: {heading!r}")

        start = None
        for index, line_level in self._headings():
            if start is None:
                if self.lines[index].rstrip("\r\n") == heading:
                    start = index
            elif line_level <= level:
                return SectionSpan(start, index)

        if start is None:
            raise SectionNotFound(heading)
        return SectionSpan(start, len(self.lines))

    def replace_section(self, span: SectionSpan, body: Sequence[str]) -> "Document":
        """
        Return a new document with the span replaced by body lines.

        Body lines carry no line endings. Lines outside the span are kept
        untouched; when more content follows the span, the new section ends
        with a blank line.
        """
        new_lines = [line + self.newline for line in body]
        if span.end < len(self.lines):
            new_lines.append(self.newline)
        return Document(self.lines[:span.start] + tuple(new_lines) + self.lines[span.end:])

    def append_section(self, body: Sequence[str]) -> "Document":
        """Return a new document with body lines appended after a blank line."""
        lines = list(self.lines)
        if lines and not lines[-1].endswith("\n"):
            lines[-1] += self.newline
        if lines and lines[-1].strip():
            lines.append(self.newline)
        lines.extend(line + self.newline for line in body)
        return Document(lines)


def section_body(heading: str, table: Sequence[str], pointer: Optional[str] = None) -> list[str]:
    """Lines of a chart section: heading, blank line, table, optional pointer."""
    body = [heading, ""]
    body.extend(table)
    if pointer:
        body.extend(["", pointer])
    return body


def split_entries(entries: Sequence[Entry], head_count: int = HEAD_COUNT) -> tuple[list[Entry], list[Entry]]:
    """Split entries into the head listing and the continuation listing, keeping order."""
    if head_count < 1:
        raise ValueError(f"Head count must be positive: {head_count}")
    return list(entries[:head_count]), list(entries[head_count:])
