"""The heatmap's query source.

``fetch_rows`` returns one ``(page_record, content)`` pair per statistic
block on a journal page inside the requested day range.  A statistic
block is any block under the score tag (``#daily_statistic`` by
default), either tagged itself or nested below a tagged block; the bare
tag block itself is skipped.
"""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import selectinload

from ..heatmap.dates import format_as_param, parse_dashed
from .db import get_session
from .journal import find_page, path_refs
from .models import Block, Page

logger = logging.getLogger(__name__)

SCORE_TAG = "daily_statistic"


def fetch_rows(
    start_date: date | str,
    end_date: date | str,
    *,
    tag: str = SCORE_TAG,
) -> list[tuple[dict, str]]:
    first = format_as_param(parse_dashed(start_date))
    last = format_as_param(parse_dashed(end_date))
    bare_tag = f"#{tag}"

    with get_session() as db:
        tag_page = find_page(db, tag)
        if tag_page is None:
            logger.debug("no %r page yet, nothing to fetch", tag)
            return []

        blocks = (
            db.query(Block)
            .join(Page, Block.page_id == Page.id)
            .filter(
                Page.is_journal.is_(True),
                Page.journal_day >= first,
                Page.journal_day <= last,
                Block.content != bare_tag,
            )
            .options(selectinload(Block.refs), selectinload(Block.page))
            .order_by(Page.journal_day, Block.id)
            .all()
        )
        rows = [
            (block.page.as_record(), block.content)
            for block in blocks
            if tag_page.id in path_refs(block)
        ]

    logger.debug("fetched %d rows for %s..%s", len(rows), first, last)
    return rows
