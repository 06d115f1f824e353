"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class PageType(str, Enum):
    DOCUMENTATION = "documentation"
    BLOG = "blog"
    TUTORIAL = "tutorial"
    PRODUCT = "product"
    GENERAL = "general"


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass
class ExtractedPage:
    """Descriptive metadata and a bounded content excerpt for one page."""

    title: str
    description: str
    keywords: str
    content: str
    headings: List[str] = field(default_factory=list)
    page_type: PageType = PageType.GENERAL
    structured_data: Optional[Any] = None
