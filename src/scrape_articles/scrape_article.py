"""Rate-limited, cached article scraping."""

import logging
from datetime import timedelta

from common import cache_keys
from common.http import fetch_text
from common.ttl_cache import TtlCache
from scrape_articles.models import ScrapedArticle
from scrape_articles.rate_limiter import RateLimiter
from scrape_articles.sanitize import (
    BODY_CLASS,
    LOGO_CLASS,
    extract_featured_image,
    sanitize_article,
)

logger = logging.getLogger(__name__)

ARTICLE_TTL = timedelta(days=7)


class ArticleScraper:
    """Fetches article pages and turns them into sanitized ScrapedArticles.

    Results are cached by guid; a cached article is returned without touching
    the rate limiter. Network and HTTP errors propagate.
    """

    def __init__(
        self,
        cache: TtlCache,
        rate_limiter: RateLimiter,
        user_agent: str,
        timeout: float = 30,
        ttl: timedelta = ARTICLE_TTL,
        body_class: str = BODY_CLASS,
        logo_class: str = LOGO_CLASS,
    ):
        self.cache = cache
        self.rate_limiter = rate_limiter
        self.user_agent = user_agent
        self.timeout = timeout
        self.ttl = ttl
        self.body_class = body_class
        self.logo_class = logo_class

    def scrape_article(self, url: str | None, guid: str) -> ScrapedArticle:
        """Return the scraped article for url, keyed by guid in the cache."""
        if not url or not url.strip():
            return ScrapedArticle(content="", featured_image=None)

        key = cache_keys.article(guid)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        with self.rate_limiter.slot():
            logger.info("Scraping article %s", url)
            page = fetch_text(url, timeout=self.timeout, user_agent=self.user_agent)

        article = ScrapedArticle(
            content=sanitize_article(page, self.body_class),
            featured_image=extract_featured_image(page, self.logo_class),
        )
        self.cache.set(key, article, self.ttl)
        return article
