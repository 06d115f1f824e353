"""Wire-format records for the persisted JSON files.

Field names on disk are fixed by external collaborators (the vote
materializer and the presentation layer), so both models use aliases and are
always dumped ``by_alias``.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zep.catalog import CatalogEntry
from zep.scraper.models import ExtractedPage, PageType

VOTE_FIELDS = {"vote_score", "positive_votes", "negative_votes"}


class VoteAggregate(BaseModel):
    """Per-URL vote totals as produced by the vote materializer."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    url: str
    score: int = 0
    positive_count: int = Field(0, alias="positive")
    negative_count: int = Field(0, alias="negative")

    @classmethod
    def zero(cls, url: str) -> VoteAggregate:
        return cls(url=url)


class IndexEntry(BaseModel):
    """One row of the index artifact."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    name: str
    url: str = Field(min_length=1)
    description: Optional[str] = None
    title: str = ""
    keywords: str = ""
    meta_description: str = ""
    content: str = ""
    headings: list[str] = Field(default_factory=list)
    page_type: Optional[PageType] = None
    structured_data: Optional[Any] = None
    vote_score: int = 0
    positive_votes: int = 0
    negative_votes: int = 0

    @classmethod
    def build(
        cls,
        entry: CatalogEntry,
        page: Optional[ExtractedPage] = None,
        votes: Optional[VoteAggregate] = None,
    ) -> IndexEntry:
        """Merge a catalog entry, its extracted page and its votes.

        A blank page title falls back to the catalog name.
        """
        fields: dict[str, Any] = {
            "name": entry.name,
            "url": entry.url,
            "description": entry.description,
            "title": entry.name,
        }
        if page is not None:
            fields.update(
                title=page.title or entry.name,
                keywords=page.keywords,
                meta_description=page.description,
                content=page.content,
                headings=list(page.headings),
                page_type=page.page_type,
                structured_data=page.structured_data,
            )
        entry_model = cls(**fields)
        return entry_model.with_votes(votes) if votes is not None else entry_model

    def with_votes(self, votes: VoteAggregate) -> IndexEntry:
        return self.model_copy(
            update={
                "vote_score": votes.score,
                "positive_votes": votes.positive_count,
                "negative_votes": votes.negative_count,
            }
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_memory_record(self) -> dict[str, Any]:
        """The entry as remembered in crawl memory: everything except votes."""
        return self.model_dump(mode="json", by_alias=True, exclude=VOTE_FIELDS)
