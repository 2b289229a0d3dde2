"""Tests for the journal store: authoring helpers and fetch_rows."""

from __future__ import annotations

from datetime import date

from scoremap.database.db import get_session
from scoremap.database.journal import (
    add_block,
    extract_refs,
    find_page,
    get_or_create_journal_page,
    get_or_create_page,
    journal_page_name,
    path_refs,
)
from scoremap.database.models import Page
from scoremap.database.query import fetch_rows
from scoremap.heatmap.aggregate import aggregate

from helpers import write_scores


# ═══════════════════════════════════════════════════════════════════════
#  AUTHORING
# ═══════════════════════════════════════════════════════════════════════


class TestExtractRefs:
    def test_tag(self):
        assert extract_refs("#work_done_score : 42") == ["work_done_score"]

    def test_link_and_tag(self):
        assert extract_refs("#mood : 7 [[Project X]]") == ["Project X", "mood"]

    def test_bracket_tag(self):
        assert extract_refs("#[[deep work]] : 3") == ["deep work"]

    def test_no_refs(self):
        assert extract_refs("just text : 5") == []

    def test_duplicates_collapsed(self):
        assert extract_refs("#a #a [[a]]") == ["a"]

    def test_heading_hash_is_not_a_tag(self):
        assert extract_refs("## Notes") == []


class TestJournalPages:
    def test_journal_page_name(self):
        assert journal_page_name(date(2024, 1, 5)) == "Jan 5th, 2024"
        assert journal_page_name(date(2024, 3, 1)) == "Mar 1st, 2024"
        assert journal_page_name(date(2024, 3, 22)) == "Mar 22nd, 2024"
        assert journal_page_name(date(2024, 3, 13)) == "Mar 13th, 2024"

    def test_get_or_create_journal_page_is_idempotent(self):
        with get_session() as db:
            a = get_or_create_journal_page(db, date(2024, 1, 5))
            b = get_or_create_journal_page(db, date(2024, 1, 5))
            assert a.id == b.id
            assert a.is_journal
            assert a.journal_day == 20240105
            assert a.original_name == "Jan 5th, 2024"

    def test_page_lookup_is_case_insensitive(self):
        with get_session() as db:
            get_or_create_page(db, "Project X")
        with get_session() as db:
            page = find_page(db, "project x")
            assert page is not None
            assert page.original_name == "Project X"

    def test_add_block_creates_referenced_pages(self):
        with get_session() as db:
            page = get_or_create_journal_page(db, date(2024, 1, 5))
            add_block(db, page, "#daily_statistic")
        with get_session() as db:
            assert db.query(Page).filter_by(name="daily_statistic").count() == 1

    def test_path_refs_include_parents(self):
        with get_session() as db:
            page = get_or_create_journal_page(db, date(2024, 1, 5))
            parent = add_block(db, page, "#daily_statistic")
            child = add_block(db, page, "#mood : 4", parent=parent)
            tag = find_page(db, "daily_statistic")
            mood = find_page(db, "mood")
            refs = path_refs(child)
            assert {tag.id, mood.id, page.id} <= refs

    def test_block_positions(self):
        with get_session() as db:
            page = get_or_create_journal_page(db, date(2024, 1, 5))
            first = add_block(db, page, "one")
            second = add_block(db, page, "two")
            nested = add_block(db, page, "three", parent=first)
            assert (first.position, second.position, nested.position) == (0, 1, 0)


# ═══════════════════════════════════════════════════════════════════════
#  FETCH
# ═══════════════════════════════════════════════════════════════════════


class TestFetchRows:
    def test_empty_store(self):
        assert fetch_rows("2024-01-01", "2024-01-07") == []

    def test_returns_child_statistics(self):
        write_scores(date(2024, 1, 5), "#work_done_score : 42", "#mood : 8")
        rows = fetch_rows("2024-01-01", "2024-01-07")
        assert [content for _, content in rows] == ["#work_done_score : 42", "#mood : 8"]
        page, _ = rows[0]
        assert page["journal_day"] == 20240105
        assert page["original_name"] == "Jan 5th, 2024"

    def test_bare_tag_block_excluded(self):
        write_scores(date(2024, 1, 5))
        assert fetch_rows("2024-01-01", "2024-01-07") == []

    def test_inline_tagged_block_included(self):
        with get_session() as db:
            page = get_or_create_journal_page(db, date(2024, 1, 2))
            add_block(db, page, "#daily_statistic focus : 30")
        rows = fetch_rows(date(2024, 1, 1), date(2024, 1, 7))
        assert [c for _, c in rows] == ["#daily_statistic focus : 30"]

    def test_untagged_blocks_excluded(self):
        write_scores(date(2024, 1, 5), "#mood : 8")
        with get_session() as db:
            page = get_or_create_journal_page(db, date(2024, 1, 5))
            add_block(db, page, "#mood : 99")
        rows = fetch_rows("2024-01-01", "2024-01-07")
        assert [c for _, c in rows] == ["#mood : 8"]

    def test_range_is_inclusive(self):
        write_scores(date(2023, 12, 31), "a : 1")
        write_scores(date(2024, 1, 1), "a : 2")
        write_scores(date(2024, 1, 7), "a : 3")
        write_scores(date(2024, 1, 8), "a : 4")
        rows = fetch_rows("2024-01-01", "2024-01-07")
        assert [c for _, c in rows] == ["a : 2", "a : 3"]

    def test_non_journal_pages_excluded(self):
        with get_session() as db:
            page = get_or_create_page(db, "Someday")
            parent = add_block(db, page, "#daily_statistic")
            add_block(db, page, "a : 5", parent=parent)
        assert fetch_rows("2000-01-01", "2100-01-01") == []

    def test_custom_tag(self):
        write_scores(date(2024, 1, 3), "steps : 60", tag="fitness")
        write_scores(date(2024, 1, 3), "mood : 5")
        rows = fetch_rows("2024-01-01", "2024-01-07", tag="fitness")
        assert [c for _, c in rows] == ["steps : 60"]

    def test_feeds_aggregate(self):
        write_scores(date(2024, 1, 5), "score : 42", "score : 8")
        rows = fetch_rows("2024-01-01", "2024-01-07")
        values = aggregate(rows, "2024-01-01", "2024-01-07")
        assert [v.score for v in values] == [0, 0, 0, 0, 50, 0, 0]
        assert values[4].original_name == "Jan 5th, 2024"
