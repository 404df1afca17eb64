"""
dayindex
~~~~~~~~

Workday / weekend / festival calendar with O(1) per-year range counts.

Subpackages
-----------
dayindex.calendar   Day classification, overrides and per-year prefix sums.
dayindex.query      Range counts, point lookups and the reloadable service.
"""

from dayindex.calendar import DayType, build
from dayindex.query import DayIndexService, RangeQueryEngine

__all__ = ["DayType", "build", "DayIndexService", "RangeQueryEngine"]
