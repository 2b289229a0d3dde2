"""Recompute-on-change orchestration for one heatmap view.

The data itself is produced by the pure :func:`recompute`; the
controller only decides *when* to call it: after rows arrive, after the
range moves, and after the current journal date changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from .aggregate import Datum, RawRow, aggregate
from .loader import ActivityLoader, FetchRows
from .range import DateRange, NAVIGATION_WEEKS, NUM_WEEKS, RangeController
from .presentation import period_average

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecomputeInputs:
    date_range: DateRange | None
    rows: Sequence[RawRow] = field(default_factory=tuple)
    current_date: date | None = None


def recompute(inputs: RecomputeInputs) -> list[Datum]:
    """Aggregate *inputs* into the heatmap sequence; ``[]`` without a range."""
    if inputs.date_range is None:
        return []
    return aggregate(
        inputs.rows,
        inputs.date_range.start_date,
        inputs.date_range.end_date,
        inputs.current_date,
    )


class HeatmapController(QObject):
    """Ties a ``RangeController`` and an ``ActivityLoader`` together.

    Signals
    -------
    range_changed(range: DateRange)
        Re-emitted from the range controller.
    data_changed(values: list[Datum])
        A fresh sequence is ready to draw.
    failed(message: str)
        Fetching raised; the view should give up.
    """

    range_changed = pyqtSignal(object)
    data_changed = pyqtSignal(object)
    failed = pyqtSignal(str)

    def __init__(
        self,
        fetch: FetchRows,
        parent: QObject | None = None,
        *,
        today_provider: Callable[[], date] = date.today,
        num_weeks: int = NUM_WEEKS,
        step_weeks: int = NAVIGATION_WEEKS,
        threaded: bool = True,
    ) -> None:
        super().__init__(parent)
        self._today_provider = today_provider
        self._rows: Sequence[RawRow] = ()
        self._current_date: date | None = None
        self._values: list[Datum] = []
        self._alive = True

        self._range = RangeController(
            self, num_weeks=num_weeks, step_weeks=step_weeks,
        )
        self._loader = ActivityLoader(fetch, self, threaded=threaded)

        self._range.range_changed.connect(self._on_range_changed)
        self._loader.rows_loaded.connect(self._on_rows_loaded)
        self._loader.load_failed.connect(self.failed)

    # ── properties ────────────────────────────────────────────────────

    @property
    def range_controller(self) -> RangeController:
        return self._range

    @property
    def loader(self) -> ActivityLoader:
        return self._loader

    @property
    def date_range(self) -> DateRange | None:
        return self._range.range

    @property
    def current_date(self) -> date | None:
        return self._current_date

    @property
    def values(self) -> list[Datum]:
        return self._values

    @property
    def is_alive(self) -> bool:
        return self._alive

    @property
    def average(self) -> float:
        return period_average(self._values)

    def today(self) -> date:
        return self._today_provider()

    # ── controls ──────────────────────────────────────────────────────

    def start(self) -> None:
        """First mount: anchor the range on today (no-op if already set)."""
        if not self._alive:
            return
        self._range.initialize(self.today())

    def set_current_date(self, current: date | None) -> None:
        self._current_date = current
        if self._range.range is None:
            self.start()
        else:
            self._recompute()

    def previous(self) -> None:
        if self._alive:
            self._range.previous()

    def next(self) -> None:
        if self._alive:
            self._range.next()

    def refresh(self) -> None:
        """Re-fetch the active range."""
        if self._alive and self._range.range is not None:
            self._loader.request(self._range.range)

    def dispose(self) -> None:
        """Stop fetching and drawing; in-flight results are dropped."""
        self._alive = False
        self._loader.dispose()

    # ── internal ──────────────────────────────────────────────────────

    def _on_range_changed(self, new_range: DateRange) -> None:
        self.range_changed.emit(new_range)
        self._recompute()
        self._loader.request(new_range)

    def _on_rows_loaded(self, date_range: DateRange, rows: list) -> None:
        if date_range != self._range.range:
            logger.debug("rows for %s no longer match active range", date_range)
            return
        self._rows = tuple(rows)
        self._recompute()

    def _recompute(self) -> None:
        if not self._alive:
            return
        try:
            values = recompute(RecomputeInputs(
                date_range=self._range.range,
                rows=self._rows,
                current_date=self._current_date,
            ))
        except Exception as exc:
            logger.exception("aggregating %d rows failed", len(self._rows))
            self.failed.emit(f"{type(exc).__name__}: {exc}")
            return
        self._values = values
        self.data_changed.emit(values)
