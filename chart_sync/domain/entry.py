"""Domain entities for ranked chart entries."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Entry:
    """Immutable chart entry, one row of a ranked listing."""

    rank: int
    name: str
    url: str
    description: str
    stars: int
    language: str
    updated: str


@dataclass(frozen=True)
class ParsedRow:
    """A table row that parsed into an entry."""

    entry: Entry
    line_number: int


@dataclass(frozen=True)
class Skipped:
    """A row-shaped line that could not be parsed."""

    line_number: int
    line: str
    reason: str


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing every line of a document."""

    rows: tuple[ParsedRow, ...]
    skipped: tuple[Skipped, ...]
    candidate_lines: int

    @property
    def entries(self) -> list[Entry]:
        return [row.entry for row in self.rows]
