"""Shared fixtures: loguru capture and small brute-force reference helpers."""

import datetime as dt

import pytest
from loguru import logger

from dayindex.calendar import DayType


@pytest.fixture
def log_records():
    """Loguru records emitted during the test (DEBUG and up)."""
    records = []
    handler_id = logger.add(lambda m: records.append(m.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


def _brute_type(date, overrides=None):
    key = date.strftime("%Y%m%d")
    if overrides and key in overrides:
        return DayType(int(overrides[key]))
    return DayType.WEEKEND if date.weekday() >= 5 else DayType.WORKDAY


def _brute_count(day_type, start, end, overrides=None):
    """Count ``day_type`` days in [start, end) by walking every day."""
    n = 0
    d = start
    while d < end:
        if _brute_type(d, overrides) == day_type:
            n += 1
        d += dt.timedelta(days=1)
    return n


@pytest.fixture
def brute_type():
    return _brute_type


@pytest.fixture
def brute_count():
    return _brute_count
