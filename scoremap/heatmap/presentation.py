"""Glue between aggregated data and the calendar widget.

The widget is dumb: it draws whatever ``render_props`` hands it and
asks these callbacks for a class name, a tooltip and a click action per
cell.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Sequence

from PyQt6.QtCore import QLocale

from .aggregate import Datum
from .buckets import classify
from .dates import format_as_dashed
from .range import DateRange

CLASS_PREFIX = "color-github-score-"
TODAY_CLASS = "today"
ACTIVE_CLASS = "active"

Navigate = Callable[[str], None]


def class_for_value(datum: Datum | None, today: date | str | None = None) -> str:
    """``color-github-score-<bucket>`` plus ``today`` / ``active`` markers."""
    score = datum.score if datum is not None else 0
    classes = [f"{CLASS_PREFIX}{classify(score)}"]
    if datum is not None:
        if today is not None and datum.date == format_as_dashed(today):
            classes.append(TODAY_CLASS)
        if datum.is_active:
            classes.append(ACTIVE_CLASS)
    return " ".join(classes)


def bucket_from_class(class_name: str) -> int:
    """Inverse of the first token of :func:`class_for_value`."""
    for token in class_name.split():
        if token.startswith(CLASS_PREFIX):
            try:
                return int(token[len(CLASS_PREFIX):])
            except ValueError:
                return 0
    return 0


def tooltip_attrs(datum: Datum | None) -> dict[str, str] | None:
    if datum is None or not datum.date:
        return None
    count = "No" if datum.score == 0 else str(datum.score)
    return {"tip": f"<b>{count} score</b> on {datum.original_name}"}


def period_average(values: Sequence[Datum]) -> float:
    """Mean daily score; 0.0 for an empty period."""
    if not values:
        return 0.0
    return sum(d.score for d in values) / len(values)


def format_average(value: float, locale: QLocale | None = None) -> str:
    """Locale-aware, at most three fraction digits: 12.3333 → ``12.333``."""
    locale = locale or QLocale()
    rounded = round(value, 3)
    if rounded == int(rounded):
        return locale.toString(int(rounded))
    return locale.toString(rounded, "f", 3).rstrip(locale.zeroDigit())


def on_click(datum: Datum | None, navigate: Navigate) -> None:
    if datum is None:
        return
    navigate(datum.original_name)


def render_props(
    date_range: DateRange,
    values: Sequence[Datum],
    today: date | str | None,
    navigate: Navigate,
) -> dict:
    """Everything the calendar widget needs for one draw."""
    return {
        "start_date": date_range.start_date,
        "end_date": date_range.end_date,
        "values": list(values),
        "class_for_value": lambda d: class_for_value(d, today),
        "tooltip_attrs": tooltip_attrs,
        "on_click": lambda d: on_click(d, navigate),
    }
