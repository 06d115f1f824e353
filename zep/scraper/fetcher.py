"""Blocking HTTP fetcher shared by the extractor and the discovery pass."""

from __future__ import annotations

import httpx

from zep.config import settings
from zep.scraper.models import RawPage


def _default_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
    }


def fetch_url(url: str, timeout: float | None = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    One request, no retries and no sleeping: pacing between fetches is the
    caller's job.

    Args:
        url: Absolute URL to fetch.
        timeout: Seconds before the request is abandoned.  Defaults to
            ``settings.fetch_timeout``.

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
        httpx.RequestError: On timeouts and transport failures.
    """
    with httpx.Client(
        headers=_default_headers(),
        timeout=settings.fetch_timeout if timeout is None else timeout,
        follow_redirects=True,
    ) as client:
        response = client.get(url)
        response.raise_for_status()
        html = response.text
        status_code = response.status_code

    return RawPage(url=url, html=html, status_code=status_code)
