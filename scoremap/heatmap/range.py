"""Week-aligned date window driving the heatmap.

States
------
UNINITIALIZED   No range yet, nothing to fetch or draw.
ACTIVE          ``[start_date, end_date]`` is set.

Transitions
-----------
UNINITIALIZED → ACTIVE   (initialize: trailing ``num_weeks`` ending this week)
ACTIVE → ACTIVE          (previous: end moves back ``step_weeks``)
ACTIVE → ACTIVE          (next: end moves forward ``step_weeks``)

Every transition replaces the range with a fresh ``DateRange``; the
start is always recomputed from the end, so N ``previous()`` calls
followed by N ``next()`` calls land back on the original window.
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import NamedTuple

from PyQt6.QtCore import QObject, pyqtSignal

from .dates import (
    add_weeks,
    end_of_week,
    format_as_dashed,
    parse_dashed,
    start_of_week,
)

logger = logging.getLogger(__name__)


# ── constants ─────────────────────────────────────────────────────────────

NUM_WEEKS = 16        # default window, roughly a third of a year
NAVIGATION_WEEKS = 12  # how far previous/next move the window


class RangeState(Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"


class DateRange(NamedTuple):
    """Inclusive ``[start_date, end_date]`` as canonical date strings."""

    start_date: str
    end_date: str

    @property
    def first_day(self) -> date:
        return parse_dashed(self.start_date)

    @property
    def last_day(self) -> date:
        return parse_dashed(self.end_date)

    @property
    def total_days(self) -> int:
        return (self.last_day - self.first_day).days + 1

    def includes(self, day: date | str) -> bool:
        return self.start_date <= format_as_dashed(day) <= self.end_date


# ── range math ────────────────────────────────────────────────────────────


def range_ending(end: date, num_weeks: int = NUM_WEEKS) -> DateRange:
    """Window whose last day is *end*, starting ``num_weeks`` earlier."""
    start = start_of_week(add_weeks(end, -num_weeks))
    return DateRange(format_as_dashed(start), format_as_dashed(end))


def initial_range(today: date, num_weeks: int = NUM_WEEKS) -> DateRange:
    return range_ending(end_of_week(today), num_weeks)


def shift_range(
    current: DateRange, weeks: int, num_weeks: int = NUM_WEEKS,
) -> DateRange:
    """Move the window's end by *weeks* (negative = back in time)."""
    return range_ending(add_weeks(current.last_day, weeks), num_weeks)


# ── controller ────────────────────────────────────────────────────────────


class RangeController(QObject):
    """Owns the active ``DateRange`` of one heatmap view.

    Signals
    -------
    range_changed(range: DateRange)
        Emitted after every transition with the new range.
    """

    range_changed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        num_weeks: int = NUM_WEEKS,
        step_weeks: int = NAVIGATION_WEEKS,
    ) -> None:
        super().__init__(parent)
        self._num_weeks = num_weeks
        self._step_weeks = step_weeks
        self._range: DateRange | None = None

    @property
    def state(self) -> RangeState:
        if self._range is None:
            return RangeState.UNINITIALIZED
        return RangeState.ACTIVE

    @property
    def range(self) -> DateRange | None:
        return self._range

    @property
    def num_weeks(self) -> int:
        return self._num_weeks

    @property
    def step_weeks(self) -> int:
        return self._step_weeks

    def initialize(self, today: date) -> None:
        """Anchor the window on the week containing *today*.

        Only valid while UNINITIALIZED; an active range is left alone.
        """
        if self._range is not None:
            return
        self._set_range(initial_range(today, self._num_weeks))

    def previous(self) -> None:
        self._shift(-self._step_weeks)

    def next(self) -> None:
        self._shift(self._step_weeks)

    def _shift(self, weeks: int) -> None:
        if self._range is None:
            return
        self._set_range(shift_range(self._range, weeks, self._num_weeks))

    def _set_range(self, new_range: DateRange) -> None:
        logger.debug("range %s → %s", self._range, new_range)
        self._range = new_range
        self.range_changed.emit(new_range)
