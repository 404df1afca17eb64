from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from enum import IntEnum


class DayType(IntEnum):
    """Classification tag of a calendar day.

    The integer values double as the encoding used in override files and
    query responses; their order carries no meaning.
    """

    WORKDAY = 0
    WEEKEND = 1
    FESTIVAL = 2


@dataclass(frozen=True)
class CalendarDay:
    date: _dt.date
    day_type: DayType
