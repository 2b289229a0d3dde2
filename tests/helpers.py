"""Shared test helpers for ScoreMap."""

from datetime import date

from scoremap.database.db import get_session
from scoremap.database.journal import add_block, get_or_create_journal_page
from scoremap.heatmap.dates import format_as_param


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def raw_row(day: date, content: str, name: str | None = None) -> tuple[dict, str]:
    """A query row as the journal store would return it."""
    return (
        {
            "journal_day": format_as_param(day),
            "original_name": name or day.isoformat(),
        },
        content,
    )


def write_scores(day: date, *lines: str, tag: str = "daily_statistic") -> None:
    """Journal *day* with ``#tag`` and one child block per line."""
    with get_session() as db:
        page = get_or_create_journal_page(db, day)
        parent = add_block(db, page, f"#{tag}")
        for line in lines:
            add_block(db, page, line, parent=parent)
