"""Crawl orchestrator: one batch run from catalog to index.

``run_crawl`` drives the whole job, strictly in sequence:

    load state → crawl catalog → fold in discoveries → persist index + memory

Every step receives the same :class:`CrawlState` and mutates it in place;
nothing is written to disk until :func:`persist_state`, so a crash mid-run
leaves the previous memory file untouched.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from zep.catalog import CatalogEntry, load_catalog
from zep.config import settings
from zep.discovery import discover
from zep.scraper.extractor import extract_page
from zep.store.index import write_index
from zep.store.memory import CrawlMemory
from zep.store.models import IndexEntry
from zep.store.votes import VoteStore

logger = logging.getLogger(__name__)

INDEX_MODES = ("delta", "full")


@dataclass
class CrawlState:
    """Everything one run reads, builds and eventually persists."""

    catalog: list[CatalogEntry]
    memory: CrawlMemory
    votes: VoteStore
    # URLs remembered before this run started, in memory order
    carried_over: list[str] = field(default_factory=list)
    index: list[IndexEntry] = field(default_factory=list)
    crawled: int = 0
    skipped: int = 0
    failed: int = 0
    discovered: int = 0

    def summary(self) -> str:
        return (
            f"crawled={self.crawled} skipped={self.skipped} failed={self.failed} "
            f"discovered={self.discovered} indexed={len(self.index)}"
        )


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

def load_state(
    catalog_source: Optional[str] = None,
    memory_path: Optional[Path] = None,
    votes_path: Optional[Path] = None,
) -> CrawlState:
    """Load crawl memory, vote aggregates and the catalog."""
    memory = CrawlMemory.load(memory_path)
    votes = VoteStore.load(votes_path)
    catalog = load_catalog(catalog_source)
    return CrawlState(catalog=catalog, memory=memory, votes=votes, carried_over=memory.urls)


def crawl_catalog(state: CrawlState) -> None:
    """Extract every catalog entry not yet in memory.

    Successful entries are indexed and remembered; failed ones are left out
    of memory so the next run retries them.  The politeness delay follows
    every attempted fetch, successful or not.
    """
    for entry in state.catalog:
        if entry.url in state.memory:
            logger.info("Already crawled, skipping %s", entry.url)
            state.skipped += 1
            continue

        logger.info("Crawling %s", entry.url)
        page = extract_page(entry.url)
        if page is None:
            state.failed += 1
        else:
            indexed = IndexEntry.build(entry, page, state.votes.lookup(entry.url))
            state.index.append(indexed)
            state.memory.add(indexed.to_memory_record())
            state.crawled += 1

        time.sleep(settings.politeness_delay)


def fold_discoveries(state: CrawlState, limit: Optional[int] = None) -> None:
    """Run the discovery pass and add unseen candidates with zero votes."""
    limit = settings.discovery_limit if limit is None else limit
    for candidate in discover(state.catalog, limit):
        if candidate.url in state.memory:
            continue
        indexed = IndexEntry.build(candidate)
        state.memory.add(indexed.to_memory_record())
        state.index.append(indexed)
        state.discovered += 1


def _resolve_index_mode(index_mode: Optional[str]) -> str:
    index_mode = index_mode or settings.index_mode
    if index_mode not in INDEX_MODES:
        raise ValueError(f"Unknown index mode {index_mode!r}; expected one of {INDEX_MODES}")
    return index_mode


def _carried_over_entries(state: CrawlState) -> list[IndexEntry]:
    """Rebuild index rows for URLs remembered from earlier runs, with fresh votes."""
    remembered = {record["url"]: record for record in state.memory.records()}
    entries: list[IndexEntry] = []
    for url in state.carried_over:
        try:
            entry = IndexEntry.model_validate(remembered[url])
        except ValidationError as exc:
            logger.warning("Cannot re-emit remembered entry %s: %s", url, exc)
            continue
        entries.append(entry.with_votes(state.votes.lookup(url)))
    return entries


def persist_state(
    state: CrawlState,
    index_path: Optional[Path] = None,
    memory_path: Optional[Path] = None,
    index_mode: Optional[str] = None,
) -> Path:
    """Write the index, then the memory.  The vote file is never touched."""
    index_mode = _resolve_index_mode(index_mode)
    entries = list(state.index)
    if index_mode == "full":
        entries = _carried_over_entries(state) + entries

    path = write_index(entries, index_path)
    state.memory.persist(memory_path)
    return path


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------

def run_crawl(
    catalog_source: Optional[str] = None,
    discovery_limit: Optional[int] = None,
    index_mode: Optional[str] = None,
) -> CrawlState:
    """Run one complete crawl and return the final state.

    Expected failures (unreachable sites, missing or corrupt files) are
    logged and absorbed; errors writing the output files propagate.
    """
    index_mode = _resolve_index_mode(index_mode)
    state = load_state(catalog_source)
    logger.info(
        "Starting crawl: %d catalog entries, %d remembered URLs, %d vote aggregates",
        len(state.catalog),
        len(state.memory),
        len(state.votes),
    )
    crawl_catalog(state)
    fold_discoveries(state, discovery_limit)
    persist_state(state, index_mode=index_mode)
    logger.info("Crawl finished: %s", state.summary())
    return state
