"""Cache key builders shared by the scraper, aggregator and API."""

FEED = "rss_feed_xml"


def feed(category: str | None = None) -> str:
    """Key of a rendered feed; None is the combined feed."""
    if category is None:
        return FEED
    return f"{FEED}_{category}"


def article(guid: str) -> str:
    return f"article::{guid}"
