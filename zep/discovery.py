"""Discovery pass: harvest outbound links from catalog pages as new candidates.

Only one hop is followed: the catalog pages themselves are fetched, never the
candidates they point to.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import urlsplit

import httpx

from zep.catalog import CatalogEntry
from zep.config import settings
from zep.scraper.fetcher import fetch_url
from zep.scraper.html import HtmlDocument

logger = logging.getLogger(__name__)

DISCOVERED_DESCRIPTION = "discovered"

_ABSOLUTE_RE = re.compile(r"^https?://", re.IGNORECASE)

_JUNK_EXTENSION_RE = re.compile(
    r"\.(?:jpe?g|png|gif|bmp|svg|webp|ico|tiff?"
    r"|pdf|docx?|xlsx?|pptx?"
    r"|zip|rar|7z|tar|gz|tgz|bz2|xz|dmg|exe|iso"
    r"|mp4|m4v|mov|avi|mkv|webm|wmv|flv|mp3|wav|ogg|flac)"
    r"(?:[?#]|$)",
    re.IGNORECASE,
)

_DENYLIST = (
    "login",
    "signin",
    "signup",
    "register",
    "logout",
    "discord.gg",
    "discord.com/invite",
    "utm_",
)


@dataclass(frozen=True)
class DiscoveredCandidate(CatalogEntry):
    """A catalog-shaped entry proposed by the discovery pass."""

    description: Optional[str] = DISCOVERED_DESCRIPTION


# ---------------------------------------------------------------------------
# Link filtering
# ---------------------------------------------------------------------------

def is_candidate_link(href: str) -> bool:
    """Return ``True`` if *href* may become a discovery candidate.

    The link must be absolute http(s) with a parseable host, must not point
    at an image, document, archive or media file, and must not contain a
    denylisted fragment.
    """
    if not _ABSOLUTE_RE.match(href):
        return False
    try:
        if not urlsplit(href).hostname:
            return False
    except ValueError:
        return False
    if _JUNK_EXTENSION_RE.search(href):
        return False
    lowered = href.lower()
    return not any(fragment in lowered for fragment in _DENYLIST)


def candidate_name(href: str) -> str:
    """Derive a display name from the host of *href*."""
    return urlsplit(href).hostname or href


def harvest_links(html: str) -> list[str]:
    """Return every ``<a href>`` value on the page, in document order."""
    doc = HtmlDocument.parse(html)
    return [a.attr("href").strip() for a in doc.select("a[href]")]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def discover(
    entries: Iterable[CatalogEntry],
    limit: Optional[int] = None,
    timeout: Optional[float] = None,
) -> list[DiscoveredCandidate]:
    """Collect up to *limit* new candidate sites linked from the catalog pages.

    Entries are visited in order and each page is fetched on its own, with
    the politeness delay between fetches.  Hrefs are deduplicated by exact
    string across the whole pass.  The scan stops as soon as *limit*
    candidates exist, even halfway through a page.

    Args:
        entries: Catalog entries whose pages are scanned.
        limit: Maximum number of candidates.  Defaults to
            ``settings.discovery_limit``.
        timeout: Per-fetch timeout.  Defaults to ``settings.discovery_timeout``.

    Returns:
        Candidates in first-seen order.  Pages that fail to load are skipped.
    """
    limit = settings.discovery_limit if limit is None else limit
    timeout = settings.discovery_timeout if timeout is None else timeout

    seen: set[str] = set()
    candidates: list[DiscoveredCandidate] = []
    if limit <= 0:
        return candidates

    for entry in entries:
        try:
            raw = fetch_url(entry.url, timeout=timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Discovery skipped %s: %s", entry.url, exc)
            time.sleep(settings.politeness_delay)
            continue

        for href in harvest_links(raw.html):
            if href in seen or not is_candidate_link(href):
                continue
            seen.add(href)
            candidates.append(DiscoveredCandidate(name=candidate_name(href), url=href))
            if len(candidates) >= limit:
                logger.info("Discovery limit of %d reached on %s", limit, entry.url)
                return candidates

        time.sleep(settings.politeness_delay)

    logger.info("Discovery found %d candidates", len(candidates))
    return candidates
