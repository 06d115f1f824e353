"""Catalog parser: turns the hand-maintained site list into :class:`CatalogEntry` values.

The catalog is plain text made of blocks::

    Name: Example
    URL: https://example.com
    Description: An example site

Blocks are separated by a blank line or by a ``---`` marker line.  A block
that lacks a ``Name`` or ``URL`` is dropped without complaint; hand-edited
catalogs are full of half-finished entries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from zep.config import settings

logger = logging.getLogger(__name__)

BLOCK_MARKER = "---"

_LABELS = {
    "Name:": "name",
    "URL:": "url",
    "Description:": "description",
}


@dataclass(frozen=True)
class CatalogEntry:
    """A single site declared in the catalog."""

    name: str
    url: str
    description: Optional[str] = None


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _split_blocks(text: str) -> list[list[str]]:
    blocks: list[list[str]] = []
    current: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped == BLOCK_MARKER:
            if current:
                blocks.append(current)
            current = []
            continue
        current.append(stripped)
    if current:
        blocks.append(current)
    return blocks


def _parse_block(lines: list[str]) -> Optional[CatalogEntry]:
    fields: dict[str, str] = {}
    for line in lines:
        for label, key in _LABELS.items():
            if line.startswith(label):
                fields[key] = line[len(label):].strip()
                break

    name = fields.get("name")
    url = fields.get("url")
    if not name or not url:
        return None
    return CatalogEntry(name=name, url=url, description=fields.get("description") or None)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_catalog(text: str) -> list[CatalogEntry]:
    """Parse raw catalog *text* into entries, in catalog order."""
    entries: list[CatalogEntry] = []
    for block in _split_blocks(text):
        entry = _parse_block(block)
        if entry is not None:
            entries.append(entry)
    return entries


def load_catalog(source: Optional[str] = None) -> list[CatalogEntry]:
    """Read and parse the catalog from a local path or an ``http(s)`` URL.

    Args:
        source: File path or URL.  Defaults to ``settings.catalog_path``.

    Returns:
        The parsed entries.  An absent file or unreachable URL is reported
        at error level and yields an empty list; the run carries on.
    """
    source = source or settings.catalog_path

    if source.startswith(("http://", "https://")):
        try:
            response = httpx.get(
                source,
                timeout=settings.fetch_timeout,
                follow_redirects=True,
                headers={"User-Agent": settings.user_agent},
            )
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Catalog source %s could not be fetched: %s", source, exc)
            return []
        text = response.text
    else:
        path = Path(source)
        if not path.is_file():
            logger.error("Catalog source %s does not exist", source)
            return []
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Catalog source %s could not be read: %s", source, exc)
            return []

    entries = parse_catalog(text)
    logger.info("Parsed %d catalog entries from %s", len(entries), source)
    return entries
