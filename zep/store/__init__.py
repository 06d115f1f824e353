"""Persisted state: crawl memory, vote aggregates and the index artifact."""

from zep.store.index import write_index
from zep.store.memory import CrawlMemory
from zep.store.models import IndexEntry, VoteAggregate
from zep.store.votes import VoteStore

__all__ = ["CrawlMemory", "VoteStore", "VoteAggregate", "IndexEntry", "write_index"]
