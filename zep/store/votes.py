"""Read-only access to the materialized vote aggregates."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from zep.config import settings
from zep.store.files import read_json
from zep.store.models import VoteAggregate

logger = logging.getLogger(__name__)


class VoteStore:
    """Per-URL vote totals keyed by exact URL string."""

    def __init__(self, aggregates: Optional[list[VoteAggregate]] = None) -> None:
        self._by_url: dict[str, VoteAggregate] = {}
        for agg in aggregates or []:
            self._by_url[agg.url] = agg

    @classmethod
    def load(cls, path: Optional[Path] = None) -> VoteStore:
        """Load aggregates from *path* (default ``settings.votes_path``).

        Missing, unreadable or corrupt files give an empty store; records
        that fail validation are skipped.  A later record for the same URL
        replaces an earlier one.
        """
        path = path or settings.votes_path
        try:
            data = read_json(path)
        except (ValueError, OSError) as exc:
            logger.warning(
                "Vote file %s is unreadable or corrupt, ignoring votes: %s", path, exc
            )
            return cls()

        if data is None:
            return cls()
        if not isinstance(data, list):
            logger.warning("Vote file %s is not a JSON array, ignoring votes", path)
            return cls()

        aggregates: list[VoteAggregate] = []
        for item in data:
            try:
                aggregates.append(VoteAggregate.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping malformed vote record %r: %s", item, exc)
        return cls(aggregates)

    def lookup(self, url: str) -> VoteAggregate:
        """Return the aggregate for *url*, or an all-zero one."""
        return self._by_url.get(url) or VoteAggregate.zero(url)

    def __len__(self) -> int:
        return len(self._by_url)
