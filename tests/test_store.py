"""Tests for persisted state: crawl memory, vote aggregates and the index file.

All tests work in ``tmp_path``; nothing touches the real data directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from zep.catalog import CatalogEntry
from zep.discovery import DiscoveredCandidate
from zep.scraper.models import ExtractedPage, PageType
from zep.store.index import write_index
from zep.store.memory import CrawlMemory
from zep.store.models import IndexEntry, VoteAggregate
from zep.store.votes import VoteStore

_INDEX_KEYS = {
    "name",
    "url",
    "description",
    "title",
    "keywords",
    "metaDescription",
    "content",
    "headings",
    "pageType",
    "structuredData",
    "voteScore",
    "positiveVotes",
    "negativeVotes",
}


def _page(**overrides) -> ExtractedPage:
    fields = dict(
        title="Page Title",
        description="Meta description",
        keywords="a, b",
        content="Heading Body",
        headings=["Heading"],
        page_type=PageType.DOCUMENTATION,
        structured_data={"@type": "WebSite"},
    )
    fields.update(overrides)
    return ExtractedPage(**fields)


# ---------------------------------------------------------------------------
# CrawlMemory
# ---------------------------------------------------------------------------

class TestCrawlMemory:
    def test_missing_file_is_empty(self, tmp_path) -> None:
        memory = CrawlMemory.load(tmp_path / "crawled.json")
        assert len(memory) == 0

    def test_corrupt_file_is_empty_with_warning(self, tmp_path, caplog) -> None:
        path = tmp_path / "crawled.json"
        path.write_text("[{broken", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="zep.store.memory"):
            memory = CrawlMemory.load(path)
        assert len(memory) == 0
        assert "corrupt" in caplog.text

    def test_unreadable_file_is_empty_with_warning(self, tmp_path, caplog) -> None:
        path = tmp_path / "crawled.json"
        path.mkdir()
        with caplog.at_level(logging.WARNING, logger="zep.store.memory"):
            memory = CrawlMemory.load(path)
        assert len(memory) == 0
        assert "unreadable" in caplog.text

    def test_non_array_file_is_empty(self, tmp_path) -> None:
        path = tmp_path / "crawled.json"
        path.write_text('{"url": "https://a.test"}', encoding="utf-8")
        assert len(CrawlMemory.load(path)) == 0

    def test_records_without_url_are_skipped(self, tmp_path) -> None:
        path = tmp_path / "crawled.json"
        path.write_text(
            json.dumps([{"name": "A", "url": "https://a.test"}, {"name": "B"}, "junk"]),
            encoding="utf-8",
        )
        assert CrawlMemory.load(path).urls == ["https://a.test"]

    def test_membership_is_exact_string_match(self) -> None:
        memory = CrawlMemory([{"name": "A", "url": "https://a.test"}])
        assert memory.contains("https://a.test")
        assert "https://a.test" in memory
        assert "https://a.test/" not in memory
        assert "http://a.test" not in memory
        assert "https://A.test" not in memory

    def test_add_is_idempotent(self) -> None:
        memory = CrawlMemory()
        assert memory.add({"name": "A", "url": "https://a.test", "description": "first"})
        assert not memory.add({"name": "A", "url": "https://a.test", "description": "second"})
        assert memory.records() == [{"name": "A", "url": "https://a.test", "description": "first"}]

    def test_persist_rewrites_whole_file(self, tmp_path) -> None:
        path = tmp_path / "crawled.json"
        path.write_text(json.dumps([{"name": "Old", "url": "https://old.test"}]), encoding="utf-8")

        memory = CrawlMemory.load(path)
        memory.add({"name": "New", "url": "https://new.test", "description": None})
        memory.persist(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [r["url"] for r in data] == ["https://old.test", "https://new.test"]
        assert list(tmp_path.iterdir()) == [path]


# ---------------------------------------------------------------------------
# VoteStore
# ---------------------------------------------------------------------------

class TestVoteStore:
    def _write(self, tmp_path, payload) -> Path:
        path = tmp_path / "votes.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_lookup_hit_maps_wire_names(self, tmp_path) -> None:
        path = self._write(
            tmp_path, [{"url": "https://x.test", "score": 5, "positive": 7, "negative": 2}]
        )
        agg = VoteStore.load(path).lookup("https://x.test")
        assert (agg.score, agg.positive_count, agg.negative_count) == (5, 7, 2)

    def test_lookup_miss_is_zero(self, tmp_path) -> None:
        path = self._write(tmp_path, [{"url": "https://x.test", "score": 5, "positive": 7, "negative": 2}])
        agg = VoteStore.load(path).lookup("https://x.test/")
        assert (agg.score, agg.positive_count, agg.negative_count) == (0, 0, 0)

    def test_missing_file_is_empty(self, tmp_path) -> None:
        assert len(VoteStore.load(tmp_path / "votes.json")) == 0

    def test_corrupt_file_is_empty_with_warning(self, tmp_path, caplog) -> None:
        path = tmp_path / "votes.json"
        path.write_text("not json at all", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="zep.store.votes"):
            store = VoteStore.load(path)
        assert len(store) == 0
        assert "corrupt" in caplog.text

    def test_unreadable_file_is_empty_with_warning(self, tmp_path, caplog) -> None:
        path = tmp_path / "votes.json"
        path.mkdir()
        with caplog.at_level(logging.WARNING, logger="zep.store.votes"):
            store = VoteStore.load(path)
        assert len(store) == 0
        assert "unreadable" in caplog.text

    def test_malformed_records_are_skipped(self, tmp_path) -> None:
        path = self._write(
            tmp_path,
            [
                {"url": "https://ok.test", "score": 1, "positive": 1, "negative": 0},
                {"score": 3},
                {"url": "https://bad.test", "score": "lots"},
            ],
        )
        store = VoteStore.load(path)
        assert len(store) == 1
        assert store.lookup("https://ok.test").score == 1

    def test_later_record_wins(self, tmp_path) -> None:
        path = self._write(
            tmp_path,
            [
                {"url": "https://x.test", "score": 1, "positive": 1, "negative": 0},
                {"url": "https://x.test", "score": 4, "positive": 5, "negative": 1},
            ],
        )
        assert VoteStore.load(path).lookup("https://x.test").score == 4


# ---------------------------------------------------------------------------
# IndexEntry / write_index
# ---------------------------------------------------------------------------

class TestIndexEntry:
    def test_build_merges_page_and_votes(self) -> None:
        entry = CatalogEntry("X", "https://x.test", "Catalog description")
        votes = VoteAggregate(url="https://x.test", score=5, positive=7, negative=2)

        row = IndexEntry.build(entry, _page(), votes).to_json()

        assert set(row) == _INDEX_KEYS
        assert row["description"] == "Catalog description"
        assert row["metaDescription"] == "Meta description"
        assert row["pageType"] == "documentation"
        assert (row["voteScore"], row["positiveVotes"], row["negativeVotes"]) == (5, 7, 2)

    def test_blank_title_falls_back_to_name(self) -> None:
        entry = CatalogEntry("X", "https://x.test")
        assert IndexEntry.build(entry, _page(title="")).title == "X"

    def test_votes_default_to_zero(self) -> None:
        row = IndexEntry.build(CatalogEntry("X", "https://x.test"), _page()).to_json()
        assert (row["voteScore"], row["positiveVotes"], row["negativeVotes"]) == (0, 0, 0)

    def test_discovered_candidate_row(self) -> None:
        candidate = DiscoveredCandidate(name="new.test", url="https://new.test/page")
        row = IndexEntry.build(candidate).to_json()
        assert set(row) == _INDEX_KEYS
        assert row["description"] == "discovered"
        assert row["title"] == "new.test"
        assert row["pageType"] is None
        assert row["headings"] == []

    def test_empty_url_rejected(self) -> None:
        with pytest.raises(ValueError):
            IndexEntry.build(CatalogEntry("X", ""))

    def test_memory_record_excludes_votes(self) -> None:
        votes = VoteAggregate(url="https://x.test", score=5, positive=7, negative=2)
        record = IndexEntry.build(CatalogEntry("X", "https://x.test"), _page(), votes).to_memory_record()
        assert {"name", "url", "description"} <= set(record)
        assert "voteScore" not in record

    def test_memory_record_round_trips_through_validation(self) -> None:
        original = IndexEntry.build(CatalogEntry("X", "https://x.test"), _page())
        restored = IndexEntry.model_validate(original.to_memory_record())
        assert restored.to_json() == original.to_json()


class TestWriteIndex:
    def test_replaces_previous_file(self, tmp_path) -> None:
        path = tmp_path / "index.json"
        path.write_text(json.dumps([{"url": "https://stale.test"}]), encoding="utf-8")

        write_index([IndexEntry.build(CatalogEntry("X", "https://x.test"))], path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [row["url"] for row in data] == ["https://x.test"]

    def test_empty_index_is_empty_array(self, tmp_path) -> None:
        path = write_index([], tmp_path / "out" / "index.json")
        assert json.loads(path.read_text(encoding="utf-8")) == []
