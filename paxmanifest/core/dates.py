"""
Helpers for the DD/MM/YYYY textual dates carried on passenger records.

Record dates are kept as text. Parsing is lenient about whitespace and
strict about shape: anything that is not three slash-separated integers
forming a real calendar date is treated as absent.
"""

from __future__ import annotations

from datetime import date

DATE_SEPARATOR = "/"


def split_date_parts(value: str | None) -> tuple[str, str, str] | None:
    """
    Split a DD/MM/YYYY string into its three components.

    Returns:
        (day, month, year) strings, or None if the value does not have
        exactly three components.
    """
    if not value:
        return None
    parts = value.strip().split(DATE_SEPARATOR)
    if len(parts) != 3:
        return None
    return parts[0], parts[1], parts[2]


def parse_record_date(value: str | None) -> date | None:
    """
    Parse a DD/MM/YYYY record date.

    Args:
        value: Textual date, possibly empty or malformed.

    Returns:
        The calendar date, or None when the value cannot be parsed.

    Examples:
        >>> parse_record_date("05/11/1990")
        datetime.date(1990, 11, 5)
        >>> parse_record_date("1990-11-05") is None
        True
    """
    parts = split_date_parts(value)
    if parts is None:
        return None
    try:
        day, month, year = (int(p.strip()) for p in parts)
        return date(year, month, day)
    except ValueError:
        return None


def parse_iso_date(value: str | date | None) -> date | None:
    """
    Parse a YYYY-MM-DD filter boundary.

    Raises:
        ValueError: If a non-empty string is not an ISO date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())
