# src/jotlist/tasks/dates.py

"""
Date parsing for human-entered due dates.

Accepted input (separators "-" and "/" are interchangeable):
- D-M-YY, DD-MM-YYYY and any mix of leading zeros: "1-3-25", "01/03/2025"
- YYYY-MM-DD, as written by older task files

Two-digit years pivot at 70: 00-69 -> 2000-2069, 70-99 -> 1970-1999.
Relative words ("today", "tomorrow") are not handled here; the CLI resolves them.
"""

from __future__ import annotations

import datetime as dt
import re

from .errors import DateParseError

YEAR_PIVOT = 70

_SEPARATOR_RE = re.compile(r"[-/]")


def expand_year(two_digit: int) -> int:
    if not 0 <= two_digit <= 99:
        raise ValueError(f"expected a two-digit year, got {two_digit}")
    return (1900 if two_digit >= YEAR_PIVOT else 2000) + two_digit


def _number(raw: str, piece: str, name: str, widths: tuple[int, ...]) -> int:
    if not (piece.isascii() and piece.isdigit()):
        raise DateParseError(raw, f"{name} '{piece}' is not a number")
    if len(piece) not in widths:
        expected = " or ".join(str(w) for w in widths)
        raise DateParseError(raw, f"{name} '{piece}' must have {expected} digits")
    return int(piece)


def parse_date(raw: str) -> dt.date:
    text = raw.strip() if isinstance(raw, str) else ""
    if not text:
        raise DateParseError(str(raw), "date is empty")

    parts = _SEPARATOR_RE.split(text)
    if len(parts) != 3:
        raise DateParseError(raw, "expected day-month-year, e.g. 31-12-2025")

    if len(parts[0]) == 4:
        year_s, month_s, day_s = parts
        year = _number(raw, year_s, "year", (4,))
    else:
        day_s, month_s, year_s = parts
        year = _number(raw, year_s, "year", (2, 4))
        if len(year_s) == 2:
            year = expand_year(year)

    month = _number(raw, month_s, "month", (1, 2))
    day = _number(raw, day_s, "day", (1, 2))

    if not 1 <= month <= 12:
        raise DateParseError(raw, f"month {month} is out of range")
    if year < 1:
        raise DateParseError(raw, "year must be positive")
    try:
        return dt.date(year, month, day)
    except ValueError:
        raise DateParseError(raw, f"day {day} does not exist in {year}-{month:02d}") from None


def format_date(value: dt.date) -> str:
    """Canonical storage/display form: DD-MM-YYYY."""
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"
