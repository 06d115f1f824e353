"""Crawl memory: the persisted set of URLs already processed successfully.

Membership is exact string equality.  ``https://a.test`` and
``https://a.test/`` are different URLs here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, Optional

from zep.config import settings
from zep.store.files import read_json, write_json_atomic

logger = logging.getLogger(__name__)


class CrawlMemory:
    """Insertion-ordered mapping of URL to the record remembered for it."""

    def __init__(self, records: Optional[list[dict[str, Any]]] = None) -> None:
        self._records: dict[str, dict[str, Any]] = {}
        for record in records or []:
            self.add(record)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    @classmethod
    def load(cls, path: Optional[Path] = None) -> CrawlMemory:
        """Load memory from *path* (default ``settings.memory_path``).

        A missing file gives an empty memory.  So does a corrupt or
        unreadable one, with a warning: re-crawling everything beats aborting
        the run.
        """
        path = path or settings.memory_path
        try:
            data = read_json(path)
        except (ValueError, OSError) as exc:
            logger.warning(
                "Crawl memory %s is unreadable or corrupt, starting empty: %s", path, exc
            )
            return cls()

        if data is None:
            return cls()
        if not isinstance(data, list):
            logger.warning("Crawl memory %s is not a JSON array, starting empty", path)
            return cls()

        memory = cls()
        for item in data:
            if not isinstance(item, dict) or not isinstance(item.get("url"), str) or not item["url"]:
                logger.warning("Skipping malformed crawl memory record: %r", item)
                continue
            memory.add(item)
        logger.info("Loaded %d remembered URLs from %s", len(memory), path)
        return memory

    def persist(self, path: Optional[Path] = None) -> None:
        """Rewrite the whole memory file."""
        write_json_atomic(path or settings.memory_path, self.records())

    # ------------------------------------------------------------------
    # Set-like API
    # ------------------------------------------------------------------
    def contains(self, url: str) -> bool:
        return url in self._records

    def add(self, record: dict[str, Any]) -> bool:
        """Remember *record* under its ``url``.

        Returns:
            ``True`` if the URL was new, ``False`` if it was already known
            (the existing record is kept).
        """
        url = record["url"]
        if url in self._records:
            return False
        self._records[url] = dict(record)
        return True

    @property
    def urls(self) -> list[str]:
        return list(self._records)

    def records(self) -> list[dict[str, Any]]:
        return [dict(r) for r in self._records.values()]

    def __contains__(self, url: object) -> bool:
        return url in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
