"""Content extraction: turns a :class:`RawPage` into an :class:`ExtractedPage`."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from zep.config import settings
from zep.scraper.classifier import classify_page
from zep.scraper.fetcher import fetch_url
from zep.scraper.html import HtmlDocument, HtmlNode
from zep.scraper.models import ExtractedPage, RawPage

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _extract_title(doc: HtmlDocument) -> str:
    """Return the text of the first ``<title>`` tag, or empty string."""
    node = doc.select_one("title")
    return node.text if node is not None else ""


def _meta_content(doc: HtmlDocument, name: str) -> str:
    node = doc.select_one(f'meta[name="{name}" i]')
    return node.attr("content").strip() if node is not None else ""


def _find_container(doc: HtmlDocument, selectors: list[str]) -> HtmlNode:
    """Return the first element of the first selector that matches anything.

    Falls back to the document body when no selector matches.
    """
    for selector in selectors:
        matches = doc.select(selector)
        if matches:
            return matches[0]
    return doc.body


def _build_excerpt(headings: list[str], paragraphs: list[str]) -> str:
    parts = headings + paragraphs[: settings.content_paragraphs]
    return " ".join(parts)[: settings.content_max_chars]


def _extract_structured_data(doc: HtmlDocument) -> Optional[Any]:
    """Parse the first JSON-LD block; malformed payloads are ignored."""
    node = doc.select_one('script[type="application/ld+json"]')
    if node is None:
        return None
    try:
        return json.loads(node.raw_text)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_content(raw: RawPage) -> ExtractedPage:
    """Extract title, meta tags, a bounded content excerpt and a page type from *raw*.

    The excerpt comes from the main content container (see
    ``settings.content_selectors``): every h1-h3 heading followed by the
    first few paragraphs, joined with spaces and cut to
    ``settings.content_max_chars`` characters.
    """
    doc = HtmlDocument.parse(raw.html)

    container = _find_container(doc, settings.content_selectors)
    headings = [h.text for h in container.select("h1, h2, h3") if h.text]
    paragraphs = [p.text for p in container.select("p") if p.text]

    return ExtractedPage(
        title=_extract_title(doc),
        description=_meta_content(doc, "description"),
        keywords=_meta_content(doc, "keywords"),
        content=_build_excerpt(headings, paragraphs),
        headings=headings,
        page_type=classify_page(raw.url, doc.body.text),
        structured_data=_extract_structured_data(doc),
    )


def extract_page(url: str, timeout: Optional[float] = None) -> Optional[ExtractedPage]:
    """Fetch *url* and extract it.

    Returns:
        The :class:`ExtractedPage`, or ``None`` when the fetch fails
        (timeout, transport error, non-2xx status or an unusable URL).  Failures are logged
        and never raised.
    """
    try:
        raw = fetch_url(url, timeout=settings.fetch_timeout if timeout is None else timeout)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Failed to fetch %s: %s", url, exc)
        return None
    return extract_content(raw)
