"""Thin traversal layer over BeautifulSoup.

The extractor and the discovery pass only ever need to parse a document,
select nodes with a CSS selector, and read text or attributes.  Keeping those
operations behind :class:`HtmlDocument` / :class:`HtmlNode` means the rest of
the package never touches ``bs4`` types directly.
"""

from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag


class HtmlNode:
    """A single element inside an :class:`HtmlDocument`."""

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    @property
    def name(self) -> str:
        return self._tag.name

    @property
    def text(self) -> str:
        """Visible text of the element, whitespace-collapsed and trimmed."""
        return " ".join(self._tag.get_text(separator=" ").split())

    @property
    def raw_text(self) -> str:
        """Unmodified text content (used for embedded script payloads)."""
        string = self._tag.string
        return str(string) if string is not None else self._tag.get_text()

    def attr(self, name: str, default: str = "") -> str:
        value = self._tag.get(name)
        if value is None:
            return default
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def select(self, selector: str) -> list[HtmlNode]:
        return [HtmlNode(tag) for tag in self._tag.select(selector)]

    def select_one(self, selector: str) -> Optional[HtmlNode]:
        tag = self._tag.select_one(selector)
        return HtmlNode(tag) if tag is not None else None


class HtmlDocument(HtmlNode):
    """A parsed HTML document."""

    def __init__(self, soup: BeautifulSoup) -> None:
        super().__init__(soup)
        self._soup = soup

    @classmethod
    def parse(cls, html: str) -> HtmlDocument:
        return cls(BeautifulSoup(html, "html.parser"))

    @property
    def body(self) -> HtmlNode:
        """The ``<body>`` element, or the whole document when there is none."""
        body = self._soup.body
        return HtmlNode(body) if body is not None else self
