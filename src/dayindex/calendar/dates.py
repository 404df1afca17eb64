"""Date helpers for the compact ``YYYYMMDD`` / ``YYYYMM`` / ``YYYY`` formats."""

from __future__ import annotations

import datetime as _dt

from ._exceptions import DateParseError

# Dec 31 of the last indexable year must have a following Jan 1.
MAX_YEAR = _dt.MAXYEAR - 1

# Monday is 0.
WEEKEND_WEEKDAYS = (5, 6)


def _digits(text: object, width: int, what: str) -> str:
    # str.isdigit also accepts superscript and full-width digits.
    if not isinstance(text, str) or len(text) != width or not (text.isascii() and text.isdigit()):
        raise DateParseError(f"{what} must be {width} digits; got {text!r}.")
    return text


def parse_date(text: str) -> _dt.date:
    s = _digits(text, 8, "Date")
    try:
        return _dt.date(int(s[:4]), int(s[4:6]), int(s[6:]))
    except ValueError as exc:
        raise DateParseError(f"Not a calendar date: {text!r} ({exc}).") from exc


def parse_month(text: str) -> _dt.date:
    """Return the first day of a ``YYYYMM`` month."""
    s = _digits(text, 6, "Month")
    return parse_date(s + "01")


def parse_year(text: str) -> int:
    year = int(_digits(text, 4, "Year"))
    if year < 1:
        raise DateParseError(f"Year must be >= 1; got {text!r}.")
    return year


def format_date(date: _dt.date) -> str:
    return f"{date.year:04d}{date.month:02d}{date.day:02d}"


def next_day(date: _dt.date) -> _dt.date:
    return date + _dt.timedelta(days=1)


def days_in_year(year: int) -> int:
    # "day 0 of next January" is Dec 31 of this year.
    return (_dt.date(year + 1, 1, 1) - _dt.timedelta(days=1)).timetuple().tm_yday


def days_between(start: _dt.date, end: _dt.date) -> int:
    """Exact number of calendar days in ``[start, end)``; negative if reversed."""
    return end.toordinal() - start.toordinal()
