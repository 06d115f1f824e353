"""Scraper package — web fetch & content extraction."""

from zep.scraper.classifier import classify_page
from zep.scraper.extractor import extract_content, extract_page
from zep.scraper.fetcher import fetch_url
from zep.scraper.models import ExtractedPage, PageType, RawPage

__all__ = [
    "fetch_url",
    "extract_content",
    "extract_page",
    "classify_page",
    "RawPage",
    "ExtractedPage",
    "PageType",
]
