# src/dayindex/query/__init__.py
"""
dayindex.query
~~~~~~~~~~~~~~

Range counts and point lookups over a compiled calendar snapshot.

Basic usage::

    from dayindex.query import DayIndexService

    svc = DayIndexService(start_year=2019, end_year=2020)
    count, ok = svc.engine.weekend_count("20191230", "20200103")
    types, ok = svc.engine.day_types_by_month("202002")

``DayIndexService.reload()`` rebuilds every year and swaps the snapshot in
one step; queries in flight keep reading the snapshot they started with.
"""

from dayindex.query.engine import RangeQueryEngine
from dayindex.query.service import DayIndexService

__all__ = ["RangeQueryEngine", "DayIndexService"]
