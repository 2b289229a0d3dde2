"""Main application window for ScoreMap.

The window plays host to the heatmap: it owns the journal store, opens
pages when a day is clicked, and tells the heatmap which journal day is
currently open.
"""

from __future__ import annotations

import logging
from datetime import date
from functools import partial
from typing import Callable

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QListWidget, QFrame,
)

from .database.db import get_session
from .database.journal import find_journal_page, find_page
from .database.query import fetch_rows
from .heatmap.controller import HeatmapController
from .heatmap.dates import parse_dashed, parse_journal_date
from .settings import Settings, load_settings, save_settings
from .ui.heatmap_view import HeatmapView
from .ui.styles import build_stylesheet, get_palette

logger = logging.getLogger(__name__)


def _outline(blocks, depth: int = 0):
    """Yield (depth, block) in reading order."""
    for block in blocks:
        yield depth, block
        yield from _outline(block.children, depth + 1)


class ScoreMapApp(QMainWindow):
    """Heatmap on top, the open page below."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        today_provider: Callable[[], date] = date.today,
        threaded: bool = True,
    ) -> None:
        super().__init__()
        self._settings = settings or load_settings()
        self._current_page: str | None = None

        self.setWindowTitle("ScoreMap")
        self.resize(self._settings.window_width, self._settings.window_height)
        if self._settings.window_x is not None and self._settings.window_y is not None:
            self.move(self._settings.window_x, self._settings.window_y)
        self.setStyleSheet(build_stylesheet(get_palette()))

        self._controller = HeatmapController(
            partial(fetch_rows, tag=self._settings.score_tag),
            self,
            today_provider=today_provider,
            num_weeks=self._settings.num_weeks,
            step_weeks=self._settings.navigation_weeks,
            threaded=threaded,
        )
        self._build_ui()
        self._build_menu_bar()

        self._view.page_requested.connect(self.navigate)
        self._controller.start()

    # ── build UI ──────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(8)

        self._view = HeatmapView(self._controller, central)
        layout.addWidget(self._view)

        divider = QFrame(central)
        divider.setFrameShape(QFrame.Shape.HLine)
        layout.addWidget(divider)

        self._page_title = QLabel("", central)
        self._page_title.setObjectName("pageTitle")
        layout.addWidget(self._page_title)

        self._blocks = QListWidget(central)
        layout.addWidget(self._blocks, 1)

        self.setCentralWidget(central)

    def _build_menu_bar(self) -> None:
        menu = self.menuBar().addMenu("&View")

        refresh = QAction("&Refresh", self)
        refresh.setShortcut(QKeySequence.StandardKey.Refresh)
        refresh.triggered.connect(self._controller.refresh)
        menu.addAction(refresh)

        previous = QAction("&Earlier Weeks", self)
        previous.setShortcut(QKeySequence("Ctrl+Left"))
        previous.triggered.connect(self._controller.previous)
        menu.addAction(previous)

        later = QAction("&Later Weeks", self)
        later.setShortcut(QKeySequence("Ctrl+Right"))
        later.triggered.connect(self._controller.next)
        menu.addAction(later)

        menu.addSeparator()
        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        menu.addAction(quit_action)

    # ── accessors ─────────────────────────────────────────────────────

    @property
    def controller(self) -> HeatmapController:
        return self._controller

    @property
    def heatmap_view(self) -> HeatmapView:
        return self._view

    @property
    def current_page(self) -> str | None:
        return self._current_page

    def block_texts(self) -> list[str]:
        return [self._blocks.item(i).text() for i in range(self._blocks.count())]

    # ── navigation sink ───────────────────────────────────────────────

    def navigate(self, name: str) -> None:
        """Open page *name*; a journal page becomes the current journal date.

        Empty heatmap days carry their locale date as name rather than a
        page name; those resolve to the journal page of that day, which
        may not exist yet.
        """
        logger.info("opening page %r", name)
        self._current_page = name
        self._page_title.setText(name)
        self._blocks.clear()

        current: date | None = None
        with get_session() as db:
            page = find_page(db, name)
            if page is None:
                current = self._placeholder_day(name)
                if current is not None:
                    page = find_journal_page(db, current)
            if page is not None:
                self._page_title.setText(page.original_name)
                if page.is_journal:
                    current = parse_journal_date(page.journal_day)
                roots = [b for b in page.blocks if b.parent_id is None]
                for depth, block in _outline(roots):
                    self._blocks.addItem("    " * depth + "• " + block.content)
        if self._blocks.count() == 0:
            self._blocks.addItem("No blocks on this page yet.")

        if current is not None:
            self._controller.set_current_date(current)

    def _placeholder_day(self, name: str) -> date | None:
        for datum in self._controller.values:
            if datum.original_name == name:
                return parse_dashed(datum.date)
        return None

    # ── Qt events ─────────────────────────────────────────────────────

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._controller.dispose()
        geo = self.geometry()
        self._settings.window_x = geo.x()
        self._settings.window_y = geo.y()
        self._settings.window_width = geo.width()
        self._settings.window_height = geo.height()
        try:
            save_settings(self._settings)
        except OSError:
            logger.warning("could not save window geometry", exc_info=True)
        super().closeEvent(event)
