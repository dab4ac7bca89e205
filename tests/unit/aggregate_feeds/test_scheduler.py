"""Tests for aggregate_feeds.scheduler module."""

import threading
from datetime import timedelta
from unittest.mock import Mock

import requests

from aggregate_feeds.scheduler import HealthState, RefreshScheduler
from common import cache_keys
from common.ttl_cache import TtlCache


def _scheduler(aggregator=None, cache=None, health=None, categories=("Sportas", "Verslas")) -> RefreshScheduler:
    if aggregator is None:
        aggregator = Mock()
        aggregator.build_feed.side_effect = lambda category: f"<rss>{category}</rss>"
    return RefreshScheduler(
        aggregator,
        cache if cache is not None else TtlCache(),
        health or HealthState(),
        interval_hours=4,
        categories=list(categories),
    )


class TestRefreshAll:
    def test_caches_every_category(self) -> None:
        cache = TtlCache()
        health = HealthState()
        _scheduler(cache=cache, health=health).refresh_all()

        assert cache.get(cache_keys.feed("Sportas")) == "<rss>Sportas</rss>"
        assert cache.get(cache_keys.feed("Verslas")) == "<rss>Verslas</rss>"
        assert health.last_refresh_utc is not None

    def test_cache_ttl_is_refresh_interval(self) -> None:
        now = [0.0]
        cache = TtlCache(clock=lambda: now[0])
        _scheduler(cache=cache).refresh_all()

        now[0] = timedelta(hours=4).total_seconds() - 1
        assert cache.contains(cache_keys.feed("Sportas"))
        now[0] = timedelta(hours=4).total_seconds()
        assert not cache.contains(cache_keys.feed("Sportas"))

    def test_failure_aborts_tick_and_is_logged(self, caplog) -> None:
        aggregator = Mock()
        aggregator.build_feed.side_effect = requests.ConnectionError("wire down")
        cache = TtlCache()
        health = HealthState()

        _scheduler(aggregator, cache, health).refresh_all()

        assert aggregator.build_feed.call_count == 1
        assert health.last_refresh_utc is None
        assert len(cache) == 0
        assert "Error while building feeds" in caplog.text

    def test_previous_documents_survive_failed_tick(self) -> None:
        cache = TtlCache()
        cache.set(cache_keys.feed("Verslas"), "<rss>old</rss>", 3600)
        aggregator = Mock()
        aggregator.build_feed.side_effect = ["<rss>new</rss>", RuntimeError("boom")]

        _scheduler(aggregator, cache).refresh_all()

        assert cache.get(cache_keys.feed("Sportas")) == "<rss>new</rss>"
        assert cache.get(cache_keys.feed("Verslas")) == "<rss>old</rss>"

    def test_defaults_to_aggregator_categories(self) -> None:
        aggregator = Mock()
        aggregator.categories = ["Aktualijos"]
        scheduler = RefreshScheduler(aggregator, TtlCache(), HealthState(), interval_hours=1)
        assert scheduler.categories == ["Aktualijos"]


class TestRunLoop:
    def test_start_refreshes_immediately_and_stops(self) -> None:
        refreshed = threading.Event()
        aggregator = Mock()

        def build(category):
            refreshed.set()
            return "<rss/>"

        aggregator.build_feed.side_effect = build
        scheduler = _scheduler(aggregator)

        scheduler.start()
        try:
            assert refreshed.wait(5)
        finally:
            scheduler.stop()

        assert scheduler._thread is None

    def test_loop_survives_failures(self) -> None:
        calls = threading.Event()
        aggregator = Mock()

        def build(category):
            calls.set()
            raise RuntimeError("boom")

        aggregator.build_feed.side_effect = build
        scheduler = _scheduler(aggregator)

        scheduler.start()
        try:
            assert calls.wait(5)
            assert scheduler._thread.is_alive()
        finally:
            scheduler.stop()
