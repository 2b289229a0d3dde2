"""Authoring helpers: pages, journal days, blocks and their references.

References are parsed out of block content the way the outliner writes
them: ``#tag``, ``#[[multi word tag]]`` and ``[[page link]]``.  Every
referenced page is created on demand.
"""

from __future__ import annotations

import re
from datetime import date

from sqlalchemy import func
from sqlalchemy.orm import Session as OrmSession

from ..heatmap.dates import format_as_param
from .models import Block, Page

_LINK_RE = re.compile(r"\[\[([^\[\]]+)\]\]")
_TAG_RE = re.compile(r"(?<![\w#])#(?!\[\[)([^\s#,.:;!?()\[\]]+)")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def extract_refs(content: str) -> list[str]:
    """``"#work_done_score : 4 [[Project X]]"`` → ``["Project X", "work_done_score"]``."""
    refs: list[str] = []
    for name in _LINK_RE.findall(content) + _TAG_RE.findall(content):
        if name not in refs:
            refs.append(name)
    return refs


def _ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def journal_page_name(day: date) -> str:
    """date(2024, 1, 5) → ``Jan 5th, 2024``."""
    return f"{_MONTHS[day.month - 1]} {_ordinal(day.day)}, {day.year}"


def find_page(db: OrmSession, name: str) -> Page | None:
    return db.query(Page).filter(Page.name == name.strip().lower()).first()


def get_or_create_page(db: OrmSession, name: str) -> Page:
    page = find_page(db, name)
    if page is None:
        page = Page(name=name.strip().lower(), original_name=name.strip())
        db.add(page)
        db.flush()
    return page


def find_journal_page(db: OrmSession, day: date) -> Page | None:
    return (
        db.query(Page)
        .filter(Page.is_journal.is_(True), Page.journal_day == format_as_param(day))
        .first()
    )


def get_or_create_journal_page(db: OrmSession, day: date) -> Page:
    page = find_journal_page(db, day)
    if page is None:
        page = get_or_create_page(db, journal_page_name(day))
        page.is_journal = True
        page.journal_day = format_as_param(day)
        db.flush()
    return page


def add_block(
    db: OrmSession,
    page: Page,
    content: str,
    parent: Block | None = None,
) -> Block:
    """Append *content* to *page* (under *parent*, if given)."""
    position = (
        db.query(func.count(Block.id))
        .filter(Block.page_id == page.id, Block.parent_id == (parent.id if parent else None))
        .scalar()
    ) or 0
    block = Block(page=page, parent=parent, content=content, position=position)
    block.refs = [get_or_create_page(db, name) for name in extract_refs(content)]
    db.add(block)
    db.flush()
    return block


def path_refs(block: Block) -> set[int]:
    """Ids of every page referenced by *block*, its ancestors and its page."""
    ids = {block.page_id}
    node: Block | None = block
    while node is not None:
        ids.update(page.id for page in node.refs)
        node = node.parent
    return ids
