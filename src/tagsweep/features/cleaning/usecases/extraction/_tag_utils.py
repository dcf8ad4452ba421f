"""Tag utility helpers.

Where: src/tagsweep/features/cleaning/usecases/extraction/_tag_utils.py
What: Provide pure helper routines for parsing and normalising raw tag values.
Why: Share one set of parsing rules between the resolver and the container adapters.
"""

from __future__ import annotations

__all__ = [
    "clean_text",
    "safe_get_first",
    "parse_slash_separated",
    "parse_number",
    "parse_year",
]


def clean_text(value: object) -> str | None:
    """Return ``value`` as trimmed text, or ``None`` when it is missing or blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def safe_get_first(data: list[str] | None, default: str = "") -> str:
    """Safely get the first element from a list or return the default."""
    return data[0] if data else default


def parse_slash_separated(value: str) -> tuple[int | None, int | None]:
    """Parse a string in 'number/total' format.

    Returns a tuple (number, total) or (None, None) if conversion fails.
    """
    parts: list[str] = [part.strip() for part in value.split(sep="/")] if value else []
    num: int | None = int(parts[0]) if parts and parts[0].isdecimal() else None
    total: int | None = int(parts[1]) if len(parts) > 1 and parts[1].isdecimal() else None
    return num, total


def parse_number(value: object) -> int | None:
    """Parse a positive track number from an int or a 'N' / 'N/total' string; 0 means absent."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    text = clean_text(value)
    if text is None:
        return None
    number, _ = parse_slash_separated(text)
    return number if number else None


def parse_year(date_str: str) -> int | None:
    """Parse a year from a string (expects the first 4 characters to be digits)."""
    date_str = date_str.strip() if date_str else date_str
    return int(date_str[:4]) if date_str and len(date_str) >= 4 and date_str[:4].isdecimal() else None
