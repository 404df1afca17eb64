from __future__ import annotations

import datetime as _dt
from typing import Iterable

from loguru import logger

from dayindex.calendar import (
    CalendarError,
    CalendarSnapshot,
    DayType,
    InvalidRangeError,
)
from dayindex.calendar.dates import (
    days_between,
    format_date,
    next_day,
    parse_date,
    parse_month,
    parse_year,
)

DayTypeMap = dict[str, DayType]


class RangeQueryEngine:
    """
    Read-only queries over one CalendarSnapshot.

    Range counts use half-open ``[start, end)`` semantics.  A range spanning
    several years is stitched from a partial first year, whole middle years
    and a partial last year, each of which is one prefix-sum subtraction.

    ``count`` raises; the ``*_count`` / ``count_day_type`` / ``day_types_by_*``
    methods return ``(value, ok)`` and never raise for bad input.
    """

    def __init__(self, snapshot: CalendarSnapshot) -> None:
        self._snapshot = snapshot

    # ── range counts ─────────────────────────────────────────────────────

    def _stitched(self, day_type: DayType, start: _dt.date, end: _dt.date) -> int:
        total = 0
        for year in range(start.year, end.year + 1):
            index = self._snapshot.year(year)
            lower = start if year == start.year else _dt.date(year, 1, 1)
            upper = end if year == end.year else None
            total += index.cumulative(day_type, upper) - index.cumulative(day_type, lower)
        return total

    def count(self, day_type: DayType, start: str, end: str) -> int:
        """Number of ``day_type`` days in ``[start, end)``.

        Raises DateParseError, RangeNotLoadedError or InvalidRangeError.
        """
        day_type = DayType(day_type)
        st, ed = parse_date(start), parse_date(end)
        if st > ed:
            raise InvalidRangeError(f"Range start {start} is after end {end}.")

        if day_type == DayType.WORKDAY:
            weekend = self._stitched(DayType.WEEKEND, st, ed)
            festival = self._stitched(DayType.FESTIVAL, st, ed)
            return days_between(st, ed) - weekend - festival
        return self._stitched(day_type, st, ed)

    def count_day_type(self, day_type: DayType, start: str, end: str) -> tuple[int, bool]:
        try:
            return self.count(day_type, start, end), True
        except CalendarError as e:
            logger.info(f"Count of {DayType(day_type).name} in [{start!r}, {end!r}) failed: {e}")
            return 0, False

    def weekend_count(self, start: str, end: str) -> tuple[int, bool]:
        return self.count_day_type(DayType.WEEKEND, start, end)

    def festival_count(self, start: str, end: str) -> tuple[int, bool]:
        return self.count_day_type(DayType.FESTIVAL, start, end)

    def workday_count(self, start: str, end: str) -> tuple[int, bool]:
        return self.count_day_type(DayType.WORKDAY, start, end)

    def holiday_count(self, start: str, end: str) -> tuple[int, bool]:
        """Weekend plus festival days."""
        weekend, ok1 = self.weekend_count(start, end)
        festival, ok2 = self.festival_count(start, end)
        if ok1 and ok2:
            return weekend + festival, True
        return 0, False

    # ── point lookups ────────────────────────────────────────────────────

    def day_types_by_year(self, year: str) -> tuple[DayTypeMap, bool]:
        try:
            index = self._snapshot.year(parse_year(year))
        except CalendarError as e:
            logger.info(f"Year lookup {year!r} failed: {e}")
            return {}, False
        return index.as_mapping(), True

    def day_types_by_month(self, month: str) -> tuple[DayTypeMap, bool]:
        try:
            first = parse_month(month)
            index = self._snapshot.year(first.year)
        except CalendarError as e:
            logger.info(f"Month lookup {month!r} failed: {e}")
            return {}, False

        result: DayTypeMap = {}
        date = first
        while date.month == first.month:
            # A loaded year covers every one of its days; a miss here is a bug.
            result[format_date(date)] = index.day_type(date)
            date = next_day(date)
        return result, True

    def day_types_by_dates(self, dates: Iterable[str]) -> tuple[DayTypeMap, bool]:
        """Look up each date; unparseable or unloaded dates are left out."""
        result: DayTypeMap = {}
        for text in dates:
            try:
                date = parse_date(text)
                result[text] = self._snapshot.year(date.year).day_type(date)
            except CalendarError as e:
                logger.debug(f"Skipping date {text!r}: {e}")
        return result, True

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def snapshot(self) -> CalendarSnapshot:
        return self._snapshot

    def __repr__(self) -> str:
        return (
            f"RangeQueryEngine(start_year={self._snapshot.start_year}, "
            f"end_year={self._snapshot.end_year})"
        )
