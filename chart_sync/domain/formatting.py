"""Cell formatters for the synced chart tables."""

import re

from chart_sync.domain.entry import Entry

DATE_STYLE_SHORT = "short"
DATE_STYLE_ISO = "iso"
DATE_STYLES = (DATE_STYLE_SHORT, DATE_STYLE_ISO)

DESCRIPTION_LIMIT = 100
ELLIPSIS = "..."

_ISO_DATE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")


def format_stars(stars: int) -> str:
    """
    Abbreviate a star count.

    Counts of 1000 and above are shown in thousands with one decimal digit,
    which is truncated rather than rounded (1999 -> "1.9k").
    """
    if stars < 0:
        raise ValueError(f"Star count must be non-negative: {stars}")
    if stars >= 1000:
        return f"{stars // 1000}.{stars % 1000 // 100}k"
    return str(stars)


def format_date(date_str: str, style: str = DATE_STYLE_SHORT) -> str:
    """Render a YYYY-MM-DD date as MM/DD, or keep it as-is in the iso style."""
    if style not in DATE_STYLES:
        raise ValueError(f"Unknown date style: {style!r}")
    match = _ISO_DATE.match(date_str)
    if match is None or style == DATE_STYLE_ISO:
        return date_str
    return f"{match.group(2)}/{match.group(3)}"


def format_description(description: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """Truncate a description to limit characters, marking the cut with an ellipsis."""
    if len(description) > limit:
        return description[:limit] + ELLIPSIS
    return description


def format_entry(
    entry: Entry,
    date_style: str = DATE_STYLE_SHORT,
    description_limit: int = DESCRIPTION_LIMIT
) -> tuple[str, ...]:
    """
    Format every cell of an entry for output.

    Args:
        entry: Parsed entry, left unchanged
        date_style: One of DATE_STYLES
        description_limit: Maximum description length before truncation

    Returns:
        The six cell texts of the output row, in column order
    """
    return (
        str(entry.rank),
        f"[{entry.name}]({entry.url})",
        format_description(entry.description, description_limit),
        format_stars(entry.stars),
        entry.language,
        format_date(entry.updated, date_style),
    )
