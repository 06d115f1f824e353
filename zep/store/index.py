"""Index artifact writer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from zep.config import settings
from zep.store.files import write_json_atomic
from zep.store.models import IndexEntry

logger = logging.getLogger(__name__)


def write_index(entries: Iterable[IndexEntry], path: Optional[Path] = None) -> Path:
    """Replace the index file with *entries* and return its path."""
    path = path or settings.index_path
    rows = [entry.to_json() for entry in entries]
    write_json_atomic(path, rows)
    logger.info("Wrote %d index entries to %s", len(rows), path)
    return path
