"""Heuristic page-type classification.

URL patterns are checked first and win outright; body-text keywords are only
consulted when no URL pattern matches.
"""

from __future__ import annotations

from zep.scraper.models import PageType

_URL_RULES: list[tuple[tuple[str, ...], PageType]] = [
    (("/docs/", "/documentation/"), PageType.DOCUMENTATION),
    (("/blog/", "/news/"), PageType.BLOG),
    (("/tutorial/", "/learn/"), PageType.TUTORIAL),
    (("/product/", "/service/"), PageType.PRODUCT),
]

_TEXT_RULES: list[tuple[tuple[str, ...], PageType]] = [
    (("tutorial", "how to"), PageType.TUTORIAL),
    (("documentation", "api reference"), PageType.DOCUMENTATION),
    (("blog", "news"), PageType.BLOG),
]


def classify_page(url: str, body_text: str) -> PageType:
    """Return the :class:`PageType` for a page at *url* with visible *body_text*."""
    for patterns, page_type in _URL_RULES:
        if any(p in url for p in patterns):
            return page_type

    lowered = body_text.lower()
    for keywords, page_type in _TEXT_RULES:
        if any(k in lowered for k in keywords):
            return page_type

    return PageType.GENERAL
