"""Data models for topic discovery and item ingestion."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Topic:
    """Topic listed in the wire feed; url points at the topic's own RSS feed."""
    title: str
    url: str


@dataclass(frozen=True)
class FeedItem:
    """Article metadata parsed from a topic feed.

    Items are shared between rendering passes, so enrichment goes through
    with_article() and never mutates an instance.
    """
    title: str
    link: str
    description: str
    pub_date: datetime
    guid: str
    source_category: str
    mapped_categories: tuple[str, ...] = ()
    content: str = ""
    featured_image: Optional[str] = None

    def with_article(self, content: str, featured_image: Optional[str]) -> "FeedItem":
        """Return a copy carrying the scraped body and featured image."""
        return replace(self, content=content, featured_image=featured_image)
