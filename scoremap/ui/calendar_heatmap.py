"""GitHub-style calendar grid.

One column per week, one row per weekday (Sunday on top).  The widget
knows nothing about scores: it draws whatever ``set_props`` gives it and
asks the ``class_for_value`` / ``tooltip_attrs`` / ``on_click``
callbacks about each cell.
"""

from __future__ import annotations

from datetime import timedelta

from PyQt6.QtCore import Qt, QRectF, QPointF, pyqtSignal
from PyQt6.QtGui import QPainter, QColor, QPen
from PyQt6.QtWidgets import QWidget, QToolTip

from ..heatmap.aggregate import Datum
from ..heatmap.dates import format_as_dashed, parse_dashed
from ..heatmap.presentation import ACTIVE_CLASS, TODAY_CLASS, bucket_from_class
from .styles import color_for_bucket, get_palette


class CalendarHeatmap(QWidget):
    """Week-column heatmap with hover tooltips and clickable days.

    Signals
    -------
    day_clicked(datum: Datum)
        Emitted after the ``on_click`` callback for an in-range cell.
    """

    CELL_SIZE = 12
    CELL_GAP = 4
    RADIUS = 3
    MARGIN = 2

    day_clicked = pyqtSignal(object)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._props: dict | None = None
        self._cells: list[tuple[QRectF, Datum | None]] = []
        self._palette = get_palette()
        self.setMouseTracking(True)
        self._resize_for(0)

    # ── data ──────────────────────────────────────────────────────────

    def set_props(self, props: dict) -> None:
        """props: start_date, end_date, values, class_for_value,
        tooltip_attrs, on_click."""
        self._props = props
        self._layout_cells()
        self.update()

    def set_palette(self, palette: dict[str, str]) -> None:
        self._palette = palette
        self.update()

    @property
    def week_count(self) -> int:
        return len(self._cells) // 7

    # ── geometry ──────────────────────────────────────────────────────

    def _resize_for(self, weeks: int) -> None:
        step = self.CELL_SIZE + self.CELL_GAP
        w = max(1, weeks) * step - self.CELL_GAP + 2 * self.MARGIN
        h = 7 * step - self.CELL_GAP + 2 * self.MARGIN
        self.setMinimumSize(w, h)

    def _cell_rect(self, index: int) -> QRectF:
        step = self.CELL_SIZE + self.CELL_GAP
        col, row = divmod(index, 7)
        return QRectF(
            self.MARGIN + col * step,
            self.MARGIN + row * step,
            self.CELL_SIZE,
            self.CELL_SIZE,
        )

    def _layout_cells(self) -> None:
        """Pad the range out to whole weeks; padding cells carry no datum."""
        self._cells = []
        if not self._props:
            self._resize_for(0)
            return
        start = parse_dashed(self._props["start_date"])
        end = parse_dashed(self._props["end_date"])
        by_date = {d.date: d for d in self._props["values"]}

        lead = (start.weekday() + 1) % 7
        first = start - timedelta(days=lead)
        total = lead + (end - start).days + 1
        total += (-total) % 7
        for i in range(total):
            day = first + timedelta(days=i)
            datum = by_date.get(format_as_dashed(day)) if start <= day <= end else None
            self._cells.append((self._cell_rect(i), datum))
        self._resize_for(total // 7)

    def _cell_at(self, pos) -> Datum | None:
        point = QPointF(pos.x(), pos.y())
        for rect, datum in self._cells:
            if rect.contains(point):
                return datum
        return None

    # ── events ────────────────────────────────────────────────────────

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        datum = self._cell_at(event.position())
        attrs = self._props["tooltip_attrs"](datum) if self._props else None
        if attrs:
            QToolTip.showText(event.globalPosition().toPoint(), attrs["tip"], self)
        else:
            QToolTip.hideText()

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            return
        datum = self._cell_at(event.position())
        self.click_datum(datum)

    def click_datum(self, datum: Datum | None) -> None:
        if datum is None or not self._props:
            return
        self._props["on_click"](datum)
        self.day_clicked.emit(datum)

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        class_for_value = self._props["class_for_value"] if self._props else None
        for rect, datum in self._cells:
            if datum is None:
                painter.setPen(Qt.PenStyle.NoPen)
                painter.setBrush(QColor(self._palette["out_of_range"]))
                painter.drawRoundedRect(rect, self.RADIUS, self.RADIUS)
                continue

            class_name = class_for_value(datum)
            classes = class_name.split()
            painter.setBrush(QColor(color_for_bucket(bucket_from_class(class_name))))
            if ACTIVE_CLASS in classes:
                painter.setPen(QPen(QColor(self._palette["active"]), 2))
            elif TODAY_CLASS in classes:
                painter.setPen(QPen(QColor(self._palette["today"]), 2))
            else:
                painter.setPen(Qt.PenStyle.NoPen)
            painter.drawRoundedRect(rect, self.RADIUS, self.RADIUS)

        painter.end()
