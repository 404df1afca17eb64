from __future__ import annotations

import datetime as _dt
from typing import Mapping, Optional, Union

import numpy as np
from loguru import logger

from ._exceptions import CalendarError, DateParseError, MalformedOverrideEntry
from .calendar import CalendarSnapshot, YearIndex
from .dates import MAX_YEAR, WEEKEND_WEEKDAYS, days_in_year, format_date, parse_date
from .types import DayType

OverrideValue = Union[DayType, int, str]


def parse_override_value(value: object) -> DayType:
    # bool is an int subclass; true/false in a config file is a typo, not a tag.
    if isinstance(value, bool):
        raise MalformedOverrideEntry(f"Override value must be 0, 1 or 2; got {value!r}.")
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            value = int(text)
    if isinstance(value, int):
        try:
            return DayType(value)
        except ValueError:
            pass
    raise MalformedOverrideEntry(f"Override value must be 0, 1 or 2; got {value!r}.")


def normalize_overrides(
    overrides: Optional[Mapping[str, OverrideValue]],
) -> dict[str, DayType]:
    """Validate override entries, logging and dropping the malformed ones."""
    result: dict[str, DayType] = {}
    if not overrides:
        return result
    for key, value in overrides.items():
        try:
            date = parse_date(key)
            result[format_date(date)] = parse_override_value(value)
        except (DateParseError, MalformedOverrideEntry) as e:
            logger.warning(f"Skipping override {key!r}: {value!r}: {e}")
    return result


def build_year(year: int, overrides: Mapping[_dt.date, DayType]) -> YearIndex:
    """Classify every day of ``year`` and compile its prefix sums.

    Saturdays and Sundays default to WEEKEND, everything else to WORKDAY;
    an entry in ``overrides`` wins over the default.  FESTIVAL only ever
    comes from an override.
    """
    n = days_in_year(year)
    first_weekday = _dt.date(year, 1, 1).weekday()
    weekdays = (np.arange(n, dtype=np.int64) + first_weekday) % 7
    weekend = np.isin(weekdays, WEEKEND_WEEKDAYS)
    types = np.where(weekend, DayType.WEEKEND, DayType.WORKDAY).astype(np.int8)

    applied = 0
    for date, day_type in overrides.items():
        if date.year == year:
            types[date.timetuple().tm_yday - 1] = int(day_type)
            applied += 1

    index = YearIndex(year, types)
    logger.debug(
        f"Built year {year}: {n} days, {index.weekend_total} weekend, "
        f"{index.festival_total} festival, {applied} overrides applied"
    )
    return index


def build(
    start_year: int,
    end_year: int,
    overrides: Optional[Mapping[str, OverrideValue]] = None,
) -> CalendarSnapshot:
    """Build one YearIndex per year in ``[start_year, end_year]``, in order."""
    if start_year < 1:
        raise CalendarError(f"Start year must be >= 1; got {start_year}.")
    if start_year > end_year:
        raise CalendarError(
            f"Start year {start_year} is after end year {end_year}."
        )
    if end_year > MAX_YEAR:
        raise CalendarError(f"End year must be <= {MAX_YEAR}; got {end_year}.")

    by_date = {parse_date(k): v for k, v in normalize_overrides(overrides).items()}
    years = {y: build_year(y, by_date) for y in range(start_year, end_year + 1)}

    logger.info(
        f"Calendar index built for {start_year}-{end_year} "
        f"({len(years)} years, {len(by_date)} overrides)"
    )
    return CalendarSnapshot(start_year, end_year, years)
