"""Data models for article scraping."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ScrapedArticle:
    """Sanitized article body and featured image scraped from a source page."""
    content: str
    featured_image: Optional[str] = None
