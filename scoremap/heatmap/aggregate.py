"""Turn raw statistic rows into one ``Datum`` per day of a range.

Rows arrive as ``(page, content)`` pairs straight from the journal
query.  Several rows may land on the same day (one block per tracked
metric); their scores are summed.  Days without rows are filled with a
zero-score placeholder so the heatmap always has a dense, gap-free
sequence to draw.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Iterable, Mapping, Sequence

from .dates import (
    days_between,
    format_as_dashed,
    format_as_locale,
    parse_dashed,
    parse_journal_date,
)
from .score import parse_score

RawRow = tuple[Mapping[str, object], str]


@dataclass
class Datum:
    """One day of the heatmap."""

    date: str
    original_name: str
    score: int = 0
    is_active: bool = False


def aggregate(
    raw_rows: Iterable[RawRow],
    start_date: date | str,
    end_date: date | str,
    current_date: date | str | None = None,
    *,
    locale_format: Callable[[str], str] = format_as_locale,
) -> list[Datum]:
    """Build the dense, chronological ``Datum`` list for ``[start, end]``.

    * Scores of rows sharing a day are summed (each floored at 0 first).
    * The day's ``original_name`` is taken from the last row seen for it;
      when two pages share a day only one name survives.
    * ``current_date``, when inside the range, marks exactly one datum
      ``is_active``.
    """
    first = parse_dashed(start_date)
    last = parse_dashed(end_date)

    by_day: dict[str, Datum] = {}
    for page, content in raw_rows:
        key = format_as_dashed(parse_journal_date(page["journal_day"]))
        score = parse_score(content)
        previous = by_day.get(key)
        if previous is not None:
            score += previous.score
        by_day[key] = Datum(
            date=key,
            original_name=str(page["original_name"]),
            score=score,
        )

    total_days = days_between(first, last) + 1
    values: list[Datum] = []
    for offset in range(total_days):
        key = format_as_dashed(first + timedelta(days=offset))
        datum = by_day.get(key)
        if datum is None:
            datum = Datum(date=key, original_name=locale_format(key))
        values.append(datum)

    if current_date is not None:
        mark_active(values, format_as_dashed(current_date))
    return values


def mark_active(values: Sequence[Datum], current: str) -> Datum | None:
    """Flag the datum dated *current*, if any.  Returns it."""
    for datum in values:
        if datum.date == current:
            datum.is_active = True
            return datum
    return None
