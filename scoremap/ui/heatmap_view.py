"""Heatmap panel: range header, calendar grid and period average.

Any failure while fetching or drawing swaps the whole panel for a static
notice; there is no partial rendering and no retry.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QStackedWidget,
)

from ..heatmap.controller import HeatmapController
from ..heatmap.dates import format_as_locale
from ..heatmap.presentation import format_average, period_average, render_props
from ..heatmap.range import DateRange
from .calendar_heatmap import CalendarHeatmap

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = (
    "Heatmap failed to render. Can you re-index your graph and try again?"
)


class HeatmapView(QWidget):
    """Presents one ``HeatmapController``.

    Signals
    -------
    page_requested(name: str)
        A day was clicked; *name* is the page to open.
    """

    page_requested = pyqtSignal(str)

    def __init__(
        self, controller: HeatmapController, parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._failed = False
        self._build_ui()

        controller.range_changed.connect(self._on_range_changed)
        controller.data_changed.connect(self._on_data_changed)
        controller.failed.connect(self.show_fallback)

    # ── build UI ──────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        self._stack = QStackedWidget(self)
        outer.addWidget(self._stack)

        # ── content page ──────────────────────────────────────────────
        content = QWidget(self._stack)
        layout = QVBoxLayout(content)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(6)

        self._range_row = QWidget(content)
        row = QHBoxLayout(self._range_row)
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(0)
        row.addWidget(QLabel("From", self._range_row))
        self._start_tag = QPushButton("", self._range_row)
        self._start_tag.setObjectName("dateRangeTag")
        self._start_tag.setCursor(Qt.CursorShape.PointingHandCursor)
        self._start_tag.setToolTip("Show earlier weeks")
        self._start_tag.clicked.connect(self._controller.previous)
        row.addWidget(self._start_tag)
        row.addWidget(QLabel("to", self._range_row))
        self._end_tag = QPushButton("", self._range_row)
        self._end_tag.setObjectName("dateRangeTag")
        self._end_tag.setCursor(Qt.CursorShape.PointingHandCursor)
        self._end_tag.setToolTip("Show later weeks")
        self._end_tag.clicked.connect(self._controller.next)
        row.addWidget(self._end_tag)
        row.addStretch()
        self._range_row.setVisible(False)
        layout.addWidget(self._range_row)

        self._chart = CalendarHeatmap(content)
        layout.addWidget(self._chart)

        self._average_lbl = QLabel("", content)
        self._average_lbl.setObjectName("averageLabel")
        self._average_lbl.setAlignment(Qt.AlignmentFlag.AlignRight)
        self._average_lbl.setTextFormat(Qt.TextFormat.RichText)
        layout.addWidget(self._average_lbl)

        self._stack.addWidget(content)

        # ── fallback page ─────────────────────────────────────────────
        self._fallback_lbl = QLabel(FALLBACK_MESSAGE, self._stack)
        self._fallback_lbl.setObjectName("fallbackLabel")
        self._fallback_lbl.setWordWrap(True)
        self._fallback_lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._stack.addWidget(self._fallback_lbl)

    # ── accessors ─────────────────────────────────────────────────────

    @property
    def chart(self) -> CalendarHeatmap:
        return self._chart

    @property
    def failed(self) -> bool:
        return self._failed

    def range_text(self) -> tuple[str, str]:
        return self._start_tag.text(), self._end_tag.text()

    def average_text(self) -> str:
        return self._average_lbl.text()

    # ── slots ─────────────────────────────────────────────────────────

    def show_fallback(self, message: str = "") -> None:
        if message:
            logger.error("heatmap disabled: %s", message)
        self._failed = True
        self._stack.setCurrentWidget(self._fallback_lbl)

    def _on_range_changed(self, date_range: DateRange) -> None:
        self._start_tag.setText(format_as_locale(date_range.start_date))
        self._end_tag.setText(format_as_locale(date_range.end_date))
        self._range_row.setVisible(True)

    def _on_data_changed(self, values: list) -> None:
        if self._failed:
            return
        date_range = self._controller.date_range
        if date_range is None:
            return
        try:
            self._chart.set_props(render_props(
                date_range,
                values,
                self._controller.today(),
                self.page_requested.emit,
            ))
            self._average_lbl.setText(
                "Average score during this period: "
                f"<b>{format_average(period_average(values))}</b>"
            )
        except Exception:
            logger.exception("rendering the heatmap failed")
            self.show_fallback()
