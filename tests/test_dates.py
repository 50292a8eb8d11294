# tests/test_dates.py

from __future__ import annotations

import datetime as dt

import pytest

from jotlist.tasks.dates import expand_year, format_date, parse_date
from jotlist.tasks.errors import DateParseError, ParseError


@pytest.mark.parametrize("raw", ["1-3-25", "01-03-2025", "1/3/25", "01/03/25", "1-03/2025", " 1-3-25 "])
def test_flexible_forms_give_same_date(raw: str) -> None:
    assert parse_date(raw) == dt.date(2025, 3, 1)


def test_iso_order_from_older_files() -> None:
    assert parse_date("2025-12-31") == dt.date(2025, 12, 31)
    assert parse_date("2025/1/5") == dt.date(2025, 1, 5)


def test_two_digit_year_pivot() -> None:
    assert expand_year(0) == 2000
    assert expand_year(69) == 2069
    assert expand_year(70) == 1970
    assert expand_year(99) == 1999
    assert parse_date("15-8-69") == dt.date(2069, 8, 15)
    assert parse_date("15-8-70") == dt.date(1970, 8, 15)


def test_day_out_of_range_for_month() -> None:
    with pytest.raises(DateParseError) as exc:
        parse_date("31-04-2025")
    assert exc.value.value == "31-04-2025"
    assert "31-04-2025" in str(exc.value)


def test_leap_years() -> None:
    assert parse_date("29-02-2024") == dt.date(2024, 2, 29)
    with pytest.raises(DateParseError):
        parse_date("29-02-2025")
    with pytest.raises(DateParseError):
        parse_date("29-02-1900")
    assert parse_date("29-02-2000") == dt.date(2000, 2, 29)


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "today",
        "1-3",
        "1-3-25-7",
        "aa-03-2025",
        "1-x-2025",
        "1-3-2k25",
        "0-3-2025",
        "1-13-2025",
        "1-0-2025",
        "001-3-2025",
        "1-3-025",
        "1.3.2025",
        "１-3-2025",
    ],
)
def test_rejects_malformed(raw: str) -> None:
    with pytest.raises(DateParseError):
        parse_date(raw)


def test_parse_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_date("nope")
    with pytest.raises(ParseError):
        parse_date("nope")


def test_format_is_canonical() -> None:
    assert format_date(dt.date(2025, 3, 1)) == "01-03-2025"
    assert format_date(parse_date("5/6/25")) == "05-06-2025"
