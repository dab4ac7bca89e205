"""Topic discovery from the wire feed."""

import logging

from common.http import fetch_text
from ingest_topics.feed_xml import child_text, parse_feed_xml
from ingest_topics.models import Topic

logger = logging.getLogger(__name__)


def discover_topics(wire_feed_url: str, timeout: float, user_agent: str) -> list[Topic]:
    """Fetch the wire feed and return its topic feeds in feed order.

    Only items whose link ends with "/rss" are topics. Fetch and parse errors
    propagate to the caller.
    """
    xml = fetch_text(wire_feed_url, timeout=timeout, user_agent=user_agent)
    topics = parse_topics(xml)
    logger.info("Discovered %d topics from %s", len(topics), wire_feed_url)
    return topics


def parse_topics(xml: str) -> list[Topic]:
    """Parse wire feed XML into topics."""
    root = parse_feed_xml(xml)

    topics = []
    for item in root.iter("item"):
        title = (child_text(item, "title") or "").strip()
        url = (child_text(item, "link") or "").strip()
        if url and url.lower().endswith("/rss"):
            topics.append(Topic(title=title, url=url))
    return topics
