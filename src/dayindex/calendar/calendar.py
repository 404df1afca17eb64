import datetime as _dt
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Sequence, Union

import numpy as np

from ._exceptions import CalendarError, RangeNotLoadedError
from .dates import days_in_year, format_date
from .types import CalendarDay, DayType

ArrayLike = Union[Sequence[int], "np.ndarray"]


class YearIndex:
    """
    Compiled year: dense day-type array + one prefix-sum array per counted
    type.  ``cum[i]`` holds the count strictly before day-of-year ``i``
    (zero based), so ``cum[n_days]`` is the full-year total and any
    ``[d1, d2)`` count is ``cum[d2] - cum[d1]``.
    """

    def __init__(self, year: int, day_types: ArrayLike) -> None:
        n = days_in_year(year)
        types = np.asarray(day_types, dtype=np.int8)
        if types.shape != (n,):
            raise CalendarError(
                f"Year {year} has {n} days; got {types.shape[0] if types.ndim else 0} day types."
            )
        valid = np.isin(types, [int(t) for t in DayType])
        if not valid.all():
            bad = int(types[~valid][0])
            raise CalendarError(f"Unknown day type {bad} in year {year}.")

        self._year: int = year
        self._n: int = n
        self._day_types: np.ndarray = types.copy()
        self._weekend_cum: np.ndarray = self._build_prefix(DayType.WEEKEND)
        self._festival_cum: np.ndarray = self._build_prefix(DayType.FESTIVAL)
        for arr in (self._day_types, self._weekend_cum, self._festival_cum):
            arr.flags.writeable = False

    # ── prefix management ────────────────────────────────────────────────

    def _build_prefix(self, day_type: DayType) -> np.ndarray:
        prefix = np.empty(self._n + 1, dtype=np.int64)
        prefix[0] = 0
        np.cumsum(self._day_types == day_type, dtype=np.int64, out=prefix[1:])
        return prefix

    def _table(self, day_type: DayType) -> np.ndarray:
        if day_type == DayType.WEEKEND:
            return self._weekend_cum
        if day_type == DayType.FESTIVAL:
            return self._festival_cum
        raise CalendarError(
            f"No cumulative table for {DayType(day_type).name}; "
            "workdays are derived from the weekend and festival counts."
        )

    def _offset(self, date: _dt.date) -> int:
        if date.year != self._year:
            raise RangeNotLoadedError(
                f"{format_date(date)} is not in year {self._year}."
            )
        return date.timetuple().tm_yday - 1

    # ── lookups ──────────────────────────────────────────────────────────

    def cumulative(self, day_type: DayType, date: Optional[_dt.date] = None) -> int:
        """Count of ``day_type`` days before ``date``; ``None`` means through year end."""
        table = self._table(day_type)
        if date is None:
            return int(table[self._n])
        return int(table[self._offset(date)])

    def day_type(self, date: _dt.date) -> DayType:
        return DayType(int(self._day_types[self._offset(date)]))

    def days(self) -> Iterator[CalendarDay]:
        date = _dt.date(self._year, 1, 1)
        one = _dt.timedelta(days=1)
        for t in self._day_types:
            yield CalendarDay(date, DayType(int(t)))
            date += one

    def as_mapping(self) -> dict[str, DayType]:
        return {format_date(d.date): d.day_type for d in self.days()}

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def year(self) -> int:
        return self._year

    @property
    def n_days(self) -> int:
        return self._n

    @property
    def day_types(self) -> np.ndarray:
        return self._day_types

    @property
    def weekend_cumulative(self) -> np.ndarray:
        return self._weekend_cum

    @property
    def festival_cumulative(self) -> np.ndarray:
        return self._festival_cum

    @property
    def weekend_total(self) -> int:
        return int(self._weekend_cum[self._n])

    @property
    def festival_total(self) -> int:
        return int(self._festival_cum[self._n])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, YearIndex):
            return NotImplemented
        return self._year == other._year and np.array_equal(
            self._day_types, other._day_types
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"YearIndex(year={self._year}, "
            f"n_days={self._n}, "
            f"weekend_total={self.weekend_total}, "
            f"festival_total={self.festival_total})"
        )


@dataclass(frozen=True)
class CalendarSnapshot:
    """Immutable set of YearIndexes covering ``[start_year, end_year]``."""

    start_year: int
    end_year: int
    years: Mapping[int, YearIndex] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "years", MappingProxyType(dict(self.years)))

    def year(self, year: int) -> YearIndex:
        try:
            return self.years[year]
        except KeyError:
            raise RangeNotLoadedError(
                f"Year {year} is outside the loaded range "
                f"[{self.start_year}, {self.end_year}]."
            ) from None

    def __contains__(self, year: object) -> bool:
        return year in self.years
