"""Background fetching of raw rows for a date range.

Each ``request()`` bumps a generation counter.  Results come back
through queued signals and are applied only when their generation is
still the newest and the loader has not been disposed, so a slow fetch
for an old range can never overwrite a newer one.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

from .range import DateRange

logger = logging.getLogger(__name__)

FetchRows = Callable[[str, str], list]


class _FetchSignals(QObject):
    finished = pyqtSignal(int, object, object)   # generation, range, rows
    failed = pyqtSignal(int, object, str)        # generation, range, message


class _FetchTask(QRunnable):
    def __init__(
        self,
        generation: int,
        date_range: DateRange,
        fetch: FetchRows,
        signals: _FetchSignals,
    ) -> None:
        super().__init__()
        self._generation = generation
        self._range = date_range
        self._fetch = fetch
        self._signals = signals

    def run(self) -> None:
        try:
            rows = self._fetch(self._range.start_date, self._range.end_date)
        except Exception as exc:
            logger.exception("fetch for %s..%s failed", *self._range)
            self._signals.failed.emit(
                self._generation, self._range, f"{type(exc).__name__}: {exc}",
            )
            return
        self._signals.finished.emit(self._generation, self._range, rows)


class ActivityLoader(QObject):
    """Runs ``fetch(start_date, end_date)`` off the UI thread.

    Signals
    -------
    rows_loaded(range: DateRange, rows: list)
        The newest request completed.
    load_failed(message: str)
        The newest request raised.
    """

    rows_loaded = pyqtSignal(object, object)
    load_failed = pyqtSignal(str)

    def __init__(
        self,
        fetch: FetchRows,
        parent: QObject | None = None,
        *,
        threaded: bool = True,
        pool: QThreadPool | None = None,
    ) -> None:
        super().__init__(parent)
        self._fetch = fetch
        self._threaded = threaded
        self._pool = pool or QThreadPool.globalInstance()
        self._generation = 0
        self._alive = True

        self._signals = _FetchSignals()
        self._signals.finished.connect(self._on_finished)
        self._signals.failed.connect(self._on_failed)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_alive(self) -> bool:
        return self._alive

    def request(self, date_range: DateRange) -> int:
        """Start fetching *date_range*; supersedes any in-flight request."""
        self._generation += 1
        task = _FetchTask(self._generation, date_range, self._fetch, self._signals)
        logger.debug("request #%d for %s..%s", self._generation, *date_range)
        if self._threaded:
            self._pool.start(task)
        else:
            task.run()
        return self._generation

    def dispose(self) -> None:
        """Stop applying results; in-flight fetches finish but are dropped."""
        self._alive = False

    def wait(self, msecs: int = -1) -> bool:
        return self._pool.waitForDone(msecs)

    # ── internal ──────────────────────────────────────────────────────

    def _is_current(self, generation: int) -> bool:
        if not self._alive:
            logger.debug("loader disposed, dropping result #%d", generation)
            return False
        if generation != self._generation:
            logger.debug(
                "dropping stale result #%d (newest is #%d)",
                generation, self._generation,
            )
            return False
        return True

    def _on_finished(self, generation: int, date_range: DateRange, rows: list) -> None:
        if self._is_current(generation):
            self.rows_loaded.emit(date_range, rows)

    def _on_failed(self, generation: int, date_range: DateRange, message: str) -> None:
        if self._is_current(generation):
            self.load_failed.emit(message)
