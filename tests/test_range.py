"""Tests for week snapping and the RangeController state machine."""

from __future__ import annotations

from datetime import date

import pytest

from scoremap.heatmap.dates import (
    end_of_week,
    format_as_param,
    parse_journal_date,
    start_of_week,
)
from scoremap.heatmap.range import (
    NAVIGATION_WEEKS,
    NUM_WEEKS,
    DateRange,
    RangeController,
    RangeState,
    initial_range,
    shift_range,
)

from helpers import SignalCollector


TODAY = date(2024, 1, 10)  # a Wednesday


# ═══════════════════════════════════════════════════════════════════════
#  DATE HELPERS
# ═══════════════════════════════════════════════════════════════════════


class TestDateHelpers:
    def test_start_of_week_is_sunday(self):
        assert start_of_week(TODAY) == date(2024, 1, 7)

    def test_end_of_week_is_saturday(self):
        assert end_of_week(TODAY) == date(2024, 1, 13)

    def test_week_bounds_are_fixed_points(self):
        assert start_of_week(date(2024, 1, 7)) == date(2024, 1, 7)
        assert end_of_week(date(2024, 1, 13)) == date(2024, 1, 13)

    def test_saturday_start_of_week(self):
        assert start_of_week(date(2024, 1, 13)) == date(2024, 1, 7)

    def test_journal_day_roundtrip(self):
        assert parse_journal_date(20240105) == date(2024, 1, 5)
        assert format_as_param(date(2024, 1, 5)) == 20240105


# ═══════════════════════════════════════════════════════════════════════
#  RANGE MATH
# ═══════════════════════════════════════════════════════════════════════


class TestRangeMath:
    def test_constants(self):
        assert NUM_WEEKS == 16
        assert NAVIGATION_WEEKS == 12

    def test_initial_range(self):
        r = initial_range(TODAY)
        assert r == DateRange("2023-09-17", "2024-01-13")

    def test_initial_range_is_week_aligned(self):
        r = initial_range(TODAY)
        assert r.first_day.weekday() == 6   # Sunday
        assert r.last_day.weekday() == 5    # Saturday
        assert r.total_days % 7 == 0
        assert r.total_days == (NUM_WEEKS + 1) * 7

    def test_initial_range_contains_today(self):
        assert initial_range(TODAY).includes(TODAY)

    def test_shift_back(self):
        r = shift_range(initial_range(TODAY), -12)
        assert r == DateRange("2023-06-25", "2023-10-21")

    def test_shift_roundtrip(self):
        r = initial_range(TODAY)
        assert shift_range(shift_range(r, -12), 12) == r

    def test_includes_bounds(self):
        r = DateRange("2024-01-01", "2024-01-07")
        assert r.includes("2024-01-01")
        assert r.includes(date(2024, 1, 7))
        assert not r.includes("2024-01-08")


# ═══════════════════════════════════════════════════════════════════════
#  CONTROLLER
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestRangeController:
    def test_starts_uninitialized(self):
        rc = RangeController()
        assert rc.state == RangeState.UNINITIALIZED
        assert rc.range is None

    def test_initialize_activates(self):
        rc = RangeController()
        c = SignalCollector()
        rc.range_changed.connect(c)
        rc.initialize(TODAY)
        assert rc.state == RangeState.ACTIVE
        assert rc.range == initial_range(TODAY)
        assert c.last == rc.range

    def test_initialize_twice_is_noop(self):
        rc = RangeController()
        rc.initialize(TODAY)
        c = SignalCollector()
        rc.range_changed.connect(c)
        rc.initialize(date(2030, 6, 1))
        assert rc.range == initial_range(TODAY)
        assert len(c) == 0

    def test_navigation_while_uninitialized_is_noop(self):
        rc = RangeController()
        c = SignalCollector()
        rc.range_changed.connect(c)
        rc.previous()
        rc.next()
        assert rc.range is None
        assert len(c) == 0

    def test_previous_moves_end_back(self):
        rc = RangeController()
        rc.initialize(TODAY)
        rc.previous()
        assert rc.range.end_date == "2023-10-21"

    def test_next_moves_end_forward(self):
        rc = RangeController()
        rc.initialize(TODAY)
        rc.next()
        assert rc.range.end_date == "2024-04-06"
        assert rc.range.first_day.weekday() == 6

    @pytest.mark.parametrize("n", [1, 3, 7])
    def test_n_previous_then_n_next_returns_home(self, n):
        rc = RangeController()
        rc.initialize(TODAY)
        home = rc.range
        for _ in range(n):
            rc.previous()
        assert rc.range != home
        for _ in range(n):
            rc.next()
        assert rc.range == home

    def test_every_transition_emits_new_range(self):
        rc = RangeController()
        c = SignalCollector()
        rc.range_changed.connect(c)
        rc.initialize(TODAY)
        rc.previous()
        rc.next()
        assert len(c) == 3
        assert c[0] == c[2]
        assert c[0] != c[1]

    def test_custom_window(self):
        rc = RangeController(num_weeks=4, step_weeks=2)
        rc.initialize(TODAY)
        assert rc.range.total_days == 5 * 7
        rc.next()
        assert rc.range.end_date == "2024-01-27"
