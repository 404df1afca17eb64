# src/dayindex/calendar/__init__.py
"""
dayindex.calendar
~~~~~~~~~~~~~~~~~

Per-year day-type index.  Every day of a year is classified as WORKDAY,
WEEKEND or FESTIVAL (weekday default, amended by sparse overrides), and
weekend / festival prefix sums are compiled so that any in-year range count
is a single subtraction.

Basic usage::

    from dayindex.calendar import DayType, build

    snap = build(2019, 2020, {"20200101": DayType.FESTIVAL})
    idx  = snap.year(2020)
    idx.festival_total                       # → 1
    idx.cumulative(DayType.WEEKEND)          # full-year weekend count

Public API
----------
build            Build a CalendarSnapshot for a span of years.
build_year       Build a single YearIndex.
load_overrides   Read an override file, degrading to ``{}`` on any problem.
CalendarSnapshot Immutable mapping of year → YearIndex.
YearIndex        Compiled day types + prefix sums for one year.
DayType          WORKDAY / WEEKEND / FESTIVAL.
CalendarError    Base exception for all calendar-related errors.
"""

from __future__ import annotations

from dayindex.calendar._exceptions import (
    CalendarError,
    ConfigReadError,
    DateParseError,
    InvalidRangeError,
    MalformedOverrideEntry,
    RangeNotLoadedError,
)
from dayindex.calendar.builder import build, build_year, normalize_overrides
from dayindex.calendar.calendar import CalendarSnapshot, YearIndex
from dayindex.calendar.overrides import load_overrides, read_overrides
from dayindex.calendar.types import CalendarDay, DayType

__all__ = [
    "build",
    "build_year",
    "normalize_overrides",
    "load_overrides",
    "read_overrides",
    "CalendarSnapshot",
    "YearIndex",
    "CalendarDay",
    "DayType",
    "CalendarError",
    "ConfigReadError",
    "DateParseError",
    "InvalidRangeError",
    "MalformedOverrideEntry",
    "RangeNotLoadedError",
]
