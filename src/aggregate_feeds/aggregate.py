"""Core aggregation: topics in, category-balanced enriched RSS out."""

import logging
from datetime import timedelta

from aggregate_feeds.config import FeedsConfig
from aggregate_feeds.helpers import featured_image_from_description, is_excluded_topic
from aggregate_feeds.render import render_feed
from aggregate_feeds.select import (
    balance_by_category,
    cap_most_recent,
    deduplicate,
    filter_by_category,
    sort_newest_first,
)
from common import cache_keys
from common.ttl_cache import TtlCache
from ingest_topics.categories import ALL_CATEGORIES
from ingest_topics.fetch_topic_items import fetch_topic_items
from ingest_topics.fetch_topics import discover_topics
from ingest_topics.models import FeedItem
from scrape_articles.scrape_article import ArticleScraper

logger = logging.getLogger(__name__)


class FeedAggregator:
    """Builds RSS documents from the wire feed.

    Pipeline: discover topics -> ingest (per-topic isolation) -> dedup by guid
    -> recency cap -> round-robin by source category -> scrape and enrich ->
    newest first -> filter by output category -> render.
    """

    def __init__(
        self,
        config: FeedsConfig,
        scraper: ArticleScraper,
        cache: TtlCache,
        categories: list[str] | None = None,
    ):
        self.config = config
        self.scraper = scraper
        self.cache = cache
        self.categories = list(categories) if categories is not None else list(ALL_CATEGORIES)

    def resolve_category(self, name: str) -> str:
        """Map a lowercased route name to its output category.

        Raises:
            KeyError: If no output category has that lowercased name
        """
        for category in self.categories:
            if category.lower() == name:
                return category
        raise KeyError(name)

    def get_cached_feed(self, category: str | None = None) -> str:
        """Return the cached document, rebuilding and caching it on a miss."""
        key = cache_keys.feed(category)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        logger.info("Cache miss for %s, rebuilding", key)
        xml = self.build_feed(category)
        self.cache.set(key, xml, timedelta(hours=self.config.cache_ttl_hours))
        return xml

    def build_feed(self, category: str | None = None) -> str:
        """Run the full pipeline and render one category (None: every item)."""
        return self.render(self.build_items(), category)

    def build_items(self) -> list[FeedItem]:
        """Final enriched items, newest first."""
        pool = self.collect_items()
        selected = self.select_items(pool)
        enriched = self.enrich(selected)
        logger.info(
            "Pooled %d items, selected %d, enriched %d",
            len(pool), len(selected), len(enriched),
        )
        return sort_newest_first(enriched)

    def collect_items(self) -> list[FeedItem]:
        """Ingest every non-excluded topic, skipping topics that fail."""
        topics = discover_topics(
            self.config.wire_feed_url,
            timeout=self.config.request_timeout,
            user_agent=self.config.user_agent,
        )

        pool: list[FeedItem] = []
        for topic in topics:
            if is_excluded_topic(topic.title, self.config.excluded_topics):
                logger.debug("Skipping excluded topic %s", topic.title)
                continue
            try:
                pool.extend(
                    fetch_topic_items(
                        topic,
                        timeout=self.config.request_timeout,
                        user_agent=self.config.user_agent,
                    )
                )
            except Exception as e:
                logger.error("Failed to ingest topic %s (%s): %s", topic.title, topic.url, e)
                continue

        return pool

    def select_items(self, pool: list[FeedItem]) -> list[FeedItem]:
        limit = self.config.max_items
        recent = cap_most_recent(deduplicate(pool), limit)
        return balance_by_category(recent, limit)

    def enrich(self, items: list[FeedItem]) -> list[FeedItem]:
        """Attach scraped bodies; items whose body has no paragraph are dropped.

        Scrape errors propagate and abort the remaining items.
        """
        enriched = []
        for item in items:
            article = self.scraper.scrape_article(item.link, item.guid)
            if "<p>" not in (article.content or ""):
                logger.debug("Dropping %s: no article body", item.link)
                continue
            featured_image = article.featured_image or featured_image_from_description(item.description)
            enriched.append(item.with_article(article.content, featured_image))
        return enriched

    def render(self, items: list[FeedItem], category: str | None = None) -> str:
        if category is None:
            return render_feed(
                items,
                title=self.config.site_title,
                link=self.config.site_url,
                description=self.config.site_title,
                self_link=f"{self.config.public_url.rstrip('/')}/feed",
                language=self.config.language,
            )

        return render_feed(
            filter_by_category(items, category),
            title=category,
            link=category,
            description=category,
            self_link=f"{self.config.public_url.rstrip('/')}/{category.lower()}",
            language=self.config.language,
        )
