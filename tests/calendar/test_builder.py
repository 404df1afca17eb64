"""
tests/calendar/test_builder.py

Covers:
  - Default weekday classification; FESTIVAL only from overrides
  - Override precedence and validation (malformed entries skipped + logged)
  - Prefix-sum correctness against brute-force counting
  - Full-year identity (year total == count over whole year)
  - Leap years
  - Immutability and idempotence
  - Snapshot lookups and edge cases
"""

import calendar
import datetime as dt

import numpy as np
import pytest

from dayindex.calendar import (
    CalendarError,
    CalendarSnapshot,
    DayType,
    RangeNotLoadedError,
    YearIndex,
    build,
    build_year,
    normalize_overrides,
)


OVERRIDES = {
    "20200104": 0,   # Saturday worked
    "20200107": 2,   # Tuesday festival
    "20201001": DayType.FESTIVAL,
    "20201010": "0",  # Saturday worked, tag given as a string
}


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def plain_2020():
    return build(2020, 2020).year(2020)


@pytest.fixture
def amended_2020():
    return build(2020, 2020, OVERRIDES).year(2020)


# ── Classification ────────────────────────────────────────────────────────────

class TestClassification:

    def test_leap_year_has_366_days(self, plain_2020):
        assert plain_2020.n_days == 366
        assert len(plain_2020.weekend_cumulative) == 367

    def test_non_leap_year(self):
        assert build(2019, 2019).year(2019).n_days == 365

    def test_defaults_follow_weekday(self, plain_2020, brute_type):
        for day in plain_2020.days():
            assert day.day_type is brute_type(day.date)

    def test_no_festival_without_overrides(self, plain_2020):
        assert plain_2020.festival_total == 0
        assert not (plain_2020.day_types == DayType.FESTIVAL).any()

    def test_override_precedence(self, amended_2020):
        assert amended_2020.day_type(dt.date(2020, 1, 4)) is DayType.WORKDAY
        assert amended_2020.day_type(dt.date(2020, 1, 7)) is DayType.FESTIVAL
        assert amended_2020.day_type(dt.date(2020, 10, 1)) is DayType.FESTIVAL
        assert amended_2020.day_type(dt.date(2020, 10, 10)) is DayType.WORKDAY

    def test_override_moves_counts(self, plain_2020, amended_2020):
        assert amended_2020.weekend_total == plain_2020.weekend_total - 2
        assert amended_2020.festival_total == 2

    def test_override_for_other_year_is_ignored(self):
        idx = build(2020, 2020, {"20210101": 2}).year(2020)
        assert idx.festival_total == 0

    def test_as_mapping_covers_every_day(self, amended_2020):
        m = amended_2020.as_mapping()
        assert len(m) == 366
        assert m["20200229"] is DayType.WEEKEND
        assert m["20200107"] is DayType.FESTIVAL


# ── Override validation ───────────────────────────────────────────────────────

class TestOverrideValidation:

    def test_malformed_entries_are_skipped(self, log_records):
        raw = {
            "20200101": 2,
            "2020011": 2,       # short key
            "20200230": 2,      # not a date
            "20200102": 7,      # unknown tag
            "20200103": True,   # bool is not a tag
            "20200106": "x",
            "20200108": "\u00b2",  # superscript two is not a tag
        }
        result = normalize_overrides(raw)
        assert result == {"20200101": DayType.FESTIVAL}
        warnings = [r for r in log_records if r["level"].name == "WARNING"]
        assert len(warnings) == 6

    def test_build_skips_malformed_entries(self):
        idx = build(2020, 2020, {"20200107": 2, "bogus": 2}).year(2020)
        assert idx.festival_total == 1

    def test_empty_and_none(self):
        assert normalize_overrides(None) == {}
        assert normalize_overrides({}) == {}


# ── Prefix sums ───────────────────────────────────────────────────────────────

class TestPrefixSums:

    def test_first_day_counts_nothing(self, amended_2020):
        assert amended_2020.cumulative(DayType.WEEKEND, dt.date(2020, 1, 1)) == 0
        assert amended_2020.cumulative(DayType.FESTIVAL, dt.date(2020, 1, 1)) == 0

    def test_own_day_excluded(self, amended_2020):
        # Jan 7 is a festival; it is only counted from Jan 8 on.
        assert amended_2020.cumulative(DayType.FESTIVAL, dt.date(2020, 1, 7)) == 0
        assert amended_2020.cumulative(DayType.FESTIVAL, dt.date(2020, 1, 8)) == 1

    @pytest.mark.parametrize("day_type", [DayType.WEEKEND, DayType.FESTIVAL])
    def test_differences_match_brute_force(self, amended_2020, brute_count, day_type):
        days = [d.date for d in amended_2020.days()]
        rng = np.random.default_rng(11)
        for _ in range(60):
            i, j = sorted(rng.integers(0, len(days), size=2))
            d1, d2 = days[i], days[j]
            got = amended_2020.cumulative(day_type, d2) - amended_2020.cumulative(day_type, d1)
            assert got == brute_count(day_type, d1, d2, OVERRIDES)

    @pytest.mark.parametrize("year", [2019, 2020, 2021, 2022])
    def test_full_year_identity(self, year, brute_count):
        idx = build(year, year).year(year)
        expected = brute_count(DayType.WEEKEND, dt.date(year, 1, 1), dt.date(year + 1, 1, 1))
        assert idx.weekend_total == expected
        assert idx.cumulative(DayType.WEEKEND) == expected
        assert idx.weekend_cumulative[-1] == expected

    def test_known_weekend_totals(self):
        snap = build(2019, 2022)
        assert [snap.year(y).weekend_total for y in range(2019, 2023)] == [104, 104, 104, 105]

    def test_full_year_total_equals_day_after_last(self, amended_2020):
        last = dt.date(2020, 12, 31)
        before_last = amended_2020.cumulative(DayType.WEEKEND, last)
        is_weekend = amended_2020.day_type(last) is DayType.WEEKEND
        assert amended_2020.weekend_total == before_last + int(is_weekend)

    def test_january_2020_weekends_via_calendar(self, plain_2020):
        expected = sum(
            1
            for week in calendar.Calendar().monthdatescalendar(2020, 1)
            for d in week
            if d.month == 1 and d.weekday() >= 5
        )
        got = plain_2020.cumulative(DayType.WEEKEND, dt.date(2020, 2, 1)) - plain_2020.cumulative(
            DayType.WEEKEND, dt.date(2020, 1, 1)
        )
        assert got == expected == 8

    def test_workday_has_no_table(self, plain_2020):
        with pytest.raises(CalendarError):
            plain_2020.cumulative(DayType.WORKDAY, dt.date(2020, 1, 1))

    def test_date_from_other_year_raises(self, plain_2020):
        with pytest.raises(RangeNotLoadedError):
            plain_2020.cumulative(DayType.WEEKEND, dt.date(2021, 1, 1))


# ── Immutability / idempotence ────────────────────────────────────────────────

class TestInvariants:

    def test_arrays_are_read_only(self, amended_2020):
        with pytest.raises(ValueError):
            amended_2020.weekend_cumulative[0] = 5
        with pytest.raises(ValueError):
            amended_2020.day_types[0] = 2

    def test_snapshot_years_are_read_only(self):
        snap = build(2020, 2020)
        with pytest.raises(TypeError):
            snap.years[2021] = snap.year(2020)

    def test_rebuild_is_identical(self):
        a = build(2019, 2021, OVERRIDES)
        b = build(2019, 2021, dict(OVERRIDES))
        for y in range(2019, 2022):
            np.testing.assert_array_equal(a.year(y).weekend_cumulative, b.year(y).weekend_cumulative)
            np.testing.assert_array_equal(a.year(y).festival_cumulative, b.year(y).festival_cumulative)
            assert a.year(y) == b.year(y)

    def test_build_does_not_mutate_overrides(self):
        raw = {"20200107": 2, "bogus": 1}
        build(2020, 2020, raw)
        assert raw == {"20200107": 2, "bogus": 1}


# ── Snapshot / construction edge cases ────────────────────────────────────────

class TestSnapshot:

    def test_years_in_order(self):
        snap = build(2016, 2020)
        assert list(snap.years) == [2016, 2017, 2018, 2019, 2020]
        assert 2018 in snap and 2021 not in snap

    def test_missing_year_raises(self):
        with pytest.raises(RangeNotLoadedError):
            build(2020, 2020).year(2015)

    def test_reversed_years_raise(self):
        with pytest.raises(CalendarError):
            build(2021, 2020)

    def test_last_calendar_year_rejected(self):
        with pytest.raises(CalendarError):
            build(9998, 9999)

    def test_max_year_builds(self):
        assert build(9998, 9998).year(9998).n_days == 365

    def test_build_year_direct(self):
        idx = build_year(2020, {dt.date(2020, 1, 7): DayType.FESTIVAL})
        assert idx.festival_total == 1

    def test_year_index_rejects_wrong_length(self):
        with pytest.raises(CalendarError):
            YearIndex(2020, np.zeros(365, dtype=np.int8))

    def test_year_index_rejects_unknown_type(self):
        types = np.zeros(366, dtype=np.int8)
        types[10] = 3
        with pytest.raises(CalendarError):
            YearIndex(2020, types)

    def test_snapshot_type(self):
        assert isinstance(build(2020, 2020), CalendarSnapshot)

    def test_repr(self, amended_2020):
        assert "year=2020" in repr(amended_2020)
        assert "festival_total=2" in repr(amended_2020)
