from __future__ import annotations

import datetime as _dt
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from loguru import logger

from dayindex.calendar import CalendarSnapshot, build, load_overrides
from dayindex.query.engine import RangeQueryEngine

if TYPE_CHECKING:
    from dayindex.config import Settings


class DayIndexService:
    """Owns the published snapshot and rebuilds it on demand.

    Readers go through ``engine`` (or ``snapshot``) and never lock; each
    call sees one complete snapshot.  ``reload`` builds a new snapshot off
    to the side and publishes it with a single reference assignment.
    """

    def __init__(
        self,
        start_year: int,
        end_year: Optional[int] = None,
        override_path: Optional[Union[str, Path]] = None,
    ) -> None:
        self._start_year = start_year
        self._end_year = end_year
        self._override_path = override_path
        self._reload_lock = threading.Lock()
        self._engine: RangeQueryEngine = self._build_engine()

    @classmethod
    def from_settings(cls, settings: "Settings") -> "DayIndexService":
        return cls(settings.start_year, settings.end_year, settings.override_file)

    def _build_engine(self) -> RangeQueryEngine:
        end_year = self._end_year if self._end_year is not None else _dt.date.today().year
        overrides = load_overrides(self._override_path)
        return RangeQueryEngine(build(self._start_year, end_year, overrides))

    def reload(self) -> CalendarSnapshot:
        with self._reload_lock:
            engine = self._build_engine()
            self._engine = engine
        logger.info(
            f"Published calendar snapshot {engine.snapshot.start_year}-{engine.snapshot.end_year}"
        )
        return engine.snapshot

    @property
    def engine(self) -> RangeQueryEngine:
        return self._engine

    @property
    def snapshot(self) -> CalendarSnapshot:
        return self._engine.snapshot

    def __repr__(self) -> str:
        snap = self.snapshot
        return (
            f"DayIndexService(start_year={snap.start_year}, "
            f"end_year={snap.end_year}, "
            f"override_path={self._override_path!r})"
        )
