"""Wiring of cache, rate limiter, scraper, aggregator and scheduler."""

from dataclasses import dataclass
from datetime import timedelta

from aggregate_feeds.aggregate import FeedAggregator
from aggregate_feeds.config import Config
from aggregate_feeds.scheduler import HealthState, RefreshScheduler
from common.ttl_cache import TtlCache
from scrape_articles.rate_limiter import RateLimiter
from scrape_articles.scrape_article import ArticleScraper


@dataclass
class Services:
    config: Config
    cache: TtlCache
    scraper: ArticleScraper
    aggregator: FeedAggregator
    health: HealthState
    scheduler: RefreshScheduler


def build_services(config: Config) -> Services:
    """Create the process-wide objects; the cache and limiter are shared by all."""
    cache = TtlCache()
    rate_limiter = RateLimiter(
        max_concurrent=config.scraper.max_concurrent,
        min_interval=config.scraper.min_interval_ms / 1000,
    )
    scraper = ArticleScraper(
        cache=cache,
        rate_limiter=rate_limiter,
        user_agent=config.feeds.user_agent,
        timeout=config.scraper.request_timeout,
        ttl=timedelta(days=config.scraper.cache_ttl_days),
        body_class=config.scraper.body_class,
        logo_class=config.scraper.logo_class,
    )
    aggregator = FeedAggregator(config.feeds, scraper, cache)
    health = HealthState()
    scheduler = RefreshScheduler(
        aggregator,
        cache,
        health,
        interval_hours=config.schedule.refresh_interval_hours,
    )
    return Services(
        config=config,
        cache=cache,
        scraper=scraper,
        aggregator=aggregator,
        health=health,
        scheduler=scheduler,
    )
