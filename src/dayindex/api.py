"""HTTP surface: thin FastAPI routes over DayIndexService."""

from __future__ import annotations

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger

from dayindex.calendar import DayType
from dayindex.query import DayIndexService, RangeQueryEngine

HELP_TEXT = """Holiday Service

Usage:
1. /                this help text
2. /holiday         day type of every day in a period, 0-workday / 1-weekend / 2-festival.
                    Parameters: y=2018 (a year), m=201801 (a month), d=20180101 (a day, may repeat).
                    The result is a JSON object.
3. /holidayCount    number of weekend + festival days (1/2) in [st, ed), e.g. ?st=20180101&ed=20180205
4. /weekendCount    like 3, weekend days (1) only
5. /festivalCount   like 3, festival days (2) only
6. /workdayCount    like 3, workdays (0) only: total days minus the result of 3
"""

OUT_OF_RANGE = "query is outside the configured range"

router = APIRouter()


def get_engine(request: Request) -> RangeQueryEngine:
    service: DayIndexService = request.app.state.service
    return service.engine


def _not_found(message: str) -> PlainTextResponse:
    return PlainTextResponse(f"{message}\n\n{HELP_TEXT}", status_code=404)


def _encode(types: dict[str, DayType]) -> dict[str, int]:
    return {date: int(t) for date, t in types.items()}


@router.get("/", response_class=PlainTextResponse)
def help_info() -> str:
    return HELP_TEXT


@router.get("/holiday")
def holiday(
    y: str | None = None,
    m: str | None = None,
    d: list[str] | None = Query(default=None),
    engine: RangeQueryEngine = Depends(get_engine),
):
    # One y or m is honoured; extra values are ignored.
    if y is not None:
        types, ok = engine.day_types_by_year(y)
        if not ok:
            return _not_found("the configured range does not include this year")
        return JSONResponse(_encode(types))
    if m is not None:
        types, ok = engine.day_types_by_month(m)
        if not ok:
            return _not_found("the configured range does not include this month")
        return JSONResponse(_encode(types))
    if d:
        types, _ = engine.day_types_by_dates(d)
        return JSONResponse(_encode(types))
    return PlainTextResponse(HELP_TEXT, status_code=400)


def _count_response(count: int, ok: bool, route: str, st: str, ed: str) -> PlainTextResponse:
    if not ok:
        logger.info(f"{route} rejected st={st!r} ed={ed!r}")
        return _not_found(OUT_OF_RANGE)
    return PlainTextResponse(str(count))


@router.get("/holidayCount", response_class=PlainTextResponse)
def holiday_count(st: str, ed: str, engine: RangeQueryEngine = Depends(get_engine)):
    return _count_response(*engine.holiday_count(st, ed), "/holidayCount", st, ed)


@router.get("/weekendCount", response_class=PlainTextResponse)
def weekend_count(st: str, ed: str, engine: RangeQueryEngine = Depends(get_engine)):
    return _count_response(*engine.weekend_count(st, ed), "/weekendCount", st, ed)


@router.get("/festivalCount", response_class=PlainTextResponse)
def festival_count(st: str, ed: str, engine: RangeQueryEngine = Depends(get_engine)):
    return _count_response(*engine.festival_count(st, ed), "/festivalCount", st, ed)


@router.get("/workdayCount", response_class=PlainTextResponse)
def workday_count(st: str, ed: str, engine: RangeQueryEngine = Depends(get_engine)):
    return _count_response(*engine.workday_count(st, ed), "/workdayCount", st, ed)


def create_app(service: DayIndexService) -> FastAPI:
    app = FastAPI(title="dayindex")
    app.state.service = service
    app.include_router(router)
    return app
