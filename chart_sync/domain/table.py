"""Parsing and rendering of chart table rows."""

import re
from typing import Callable, Iterable, Optional, Union

from chart_sync.domain.entry import Entry, ParsedRow, ParseResult, Skipped
from chart_sync.domain.formatting import DATE_STYLE_SHORT, DESCRIPTION_LIMIT, format_entry

TABLE_HEADER = (
    "|#|Repository|Description|Stars|Language|Updated|",
    "|:-|:-|:-|:-|:-|:-|",
)
COLUMN_COUNT = 6

# Rank, link, then four more cells
_ROW_PATTERN = re.compile(r"^\|\s*[0-9]+\s*\|\s*\[.*\]\(.*\)\s*\|.*\|.*\|.*\|.*\|$")
_LINK_PATTERN = re.compile(r"^\[([^\]]+)\]\(([^)]+)\)$")
_CELL_SEPARATOR = re.compile(r"(?<!\\)\|")
_STAR_PATTERN = re.compile(r"^([0-9]+)(?:\.([0-9]))?[kK]$")


def is_table_line(line: str) -> bool:
    return line.startswith("|")


def parse_stars(text: str) -> Optional[int]:
    """
    Read a star cell.

    Accepts plain integers, integers with thousands separators and the
    abbreviated "41.0k" form written by format_stars.

    Returns:
        The star count, or None if the cell is not a star count
    """
    text = text.strip().replace(",", "")
    if text.isascii() and text.isdigit():
        return int(text)
    match = _STAR_PATTERN.match(text)
    if match is None:
        return None
    return int(match.group(1)) * 1000 + int(match.group(2) or 0) * 100


def parse_row(line: str, line_number: int = 0) -> Union[ParsedRow, Skipped, None]:
    """
    Parse one line of a chart document.

    Args:
        line: Raw line, with or without its line ending
        line_number: 1-based position of the line, carried into the result

    Returns:
        None if the line is not a data row, ParsedRow if it parsed, or
        Skipped with a reason if it looks like a row but is malformed
    """
    line = line.rstrip()
    if not _ROW_PATTERN.match(line):
        return None

    cells = [cell.strip() for cell in _CELL_SEPARATOR.split(line)[1:-1]]
    if len(cells) != COLUMN_COUNT:
        return Skipped(line_number, line, f"expected {COLUMN_COUNT} columns, found {len(cells)}")

    rank, link, description, stars_text, language, updated = cells

    link_match = _LINK_PATTERN.match(link)
    if link_match is None:
        return Skipped(line_number, line, f"malformed repository link: {link}")

    stars = parse_stars(stars_text)
    if stars is None:
        return Skipped(line_number, line, f"unreadable star count: {stars_text}")

    entry = Entry(
        rank=int(rank),
        name=link_match.group(1),
        url=link_match.group(2),
        description=description,
        stars=stars,
        language=language,
        updated=updated,
    )
    return ParsedRow(entry, line_number)


def parse_table(
    lines: Iterable[str],
    on_row: Optional[Callable[[ParsedRow], None]] = None
) -> ParseResult:
    """
    Parse every data row of a document, keeping skipped rows apart.

    Args:
        lines: Document lines
        on_row: Called with each parsed row as it is produced
    """
    rows = []
    skipped = []
    candidate_lines = 0

    for line_number, line in enumerate(lines, start=1):
        if is_table_line(line):
            candidate_lines += 1
        result = parse_row(line, line_number)
        if isinstance(result, ParsedRow):
            rows.append(result)
            if on_row is not None:
                on_row(result)
        elif isinstance(result, Skipped):
            skipped.append(result)

    return ParseResult(rows=tuple(rows), skipped=tuple(skipped), candidate_lines=candidate_lines)


def render_row(cells: Iterable[str]) -> str:
    return "|" + "|".join(cells) + "|"


def render_table(
    entries: Iterable[Entry],
    date_style: str = DATE_STYLE_SHORT,
    description_limit: int = DESCRIPTION_LIMIT
) -> list[str]:
    """Render the table header followed by one formatted row per entry."""
    lines = list(TABLE_HEADER)
    for entry in entries:
        lines.append(render_row(format_entry(entry, date_style, description_limit)))
    return lines
