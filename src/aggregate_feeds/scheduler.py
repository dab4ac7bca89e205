"""Periodic background refresh of every category feed."""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import schedule

from aggregate_feeds.aggregate import FeedAggregator
from common import cache_keys
from common.ttl_cache import TtlCache

logger = logging.getLogger(__name__)


@dataclass
class HealthState:
    """Process start and last completed refresh, reported by /health."""
    started_utc: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_refresh_utc: datetime | None = None


class RefreshScheduler:
    """Rebuilds every category feed now and then once per interval.

    Categories are refreshed one after another. A failure ends the current
    tick (categories not yet rebuilt keep their previous document) and the
    loop carries on at the next interval.
    """

    def __init__(
        self,
        aggregator: FeedAggregator,
        cache: TtlCache,
        health: HealthState,
        interval_hours: float,
        categories: list[str] | None = None,
    ):
        self.aggregator = aggregator
        self.cache = cache
        self.health = health
        self.interval = timedelta(hours=interval_hours)
        self.categories = list(categories) if categories is not None else list(aggregator.categories)
        self._scheduler = schedule.Scheduler()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def refresh_all(self) -> None:
        """One tick: rebuild and cache every category, then stamp the refresh time."""
        try:
            for category in self.categories:
                xml = self.aggregator.build_feed(category)
                self.cache.set(cache_keys.feed(category), xml, self.interval)
                logger.info("Refreshed feed for %s", category)

            self.health.last_refresh_utc = datetime.now(timezone.utc)
        except Exception:
            logger.exception("Error while building feeds from the wire feed")

    def run_forever(self, poll_seconds: float = 1.0) -> None:
        self.refresh_all()

        interval_seconds = max(1, int(self.interval.total_seconds()))
        self._scheduler.every(interval_seconds).seconds.do(self.refresh_all)
        try:
            while not self._stop.is_set():
                self._scheduler.run_pending()
                self._stop.wait(poll_seconds)
        finally:
            self._scheduler.clear()

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run_forever, name="feed-refresh", daemon=True)
        self._thread.start()
        logger.info("Feed refresh scheduled every %s", self.interval)

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
