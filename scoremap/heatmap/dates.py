"""Date helpers shared by the heatmap pipeline.

Three encodings are in play:

* **journal day**: the store's integer ``YYYYMMDD`` (e.g. ``20240105``)
* **canonical date**: the ``YYYY-MM-DD`` string used as aggregation key
* **locale date**: the human-readable form shown to the user

Weeks run Sunday → Saturday.
"""

from __future__ import annotations

from datetime import date, timedelta

from PyQt6.QtCore import QDate, QLocale


def parse_journal_date(journal_day: int) -> date:
    """20240105 → date(2024, 1, 5)."""
    value = int(journal_day)
    return date(value // 10000, (value // 100) % 100, value % 100)


def format_as_param(day: date) -> int:
    """date(2024, 1, 5) → 20240105, for range predicates on journal days."""
    return day.year * 10000 + day.month * 100 + day.day


def format_as_dashed(day: date | str) -> str:
    """Canonical ``YYYY-MM-DD`` string.  Strings pass through unchanged."""
    if isinstance(day, str):
        return day
    return day.isoformat()


def parse_dashed(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def format_as_locale(day: date | str) -> str:
    """Localized display form, e.g. ``Jan 5, 2024`` for en_US."""
    d = parse_dashed(day)
    return QLocale().toString(
        QDate(d.year, d.month, d.day), QLocale.FormatType.ShortFormat,
    )


# ── week snapping ───────────────────────────────────────────────────────


def start_of_week(day: date) -> date:
    """The Sunday on or before *day*."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def end_of_week(day: date) -> date:
    """The Saturday on or after *day*."""
    return start_of_week(day) + timedelta(days=6)


def add_weeks(day: date, weeks: int) -> date:
    return day + timedelta(weeks=weeks)


def days_between(start: date, end: date) -> int:
    return (end - start).days
