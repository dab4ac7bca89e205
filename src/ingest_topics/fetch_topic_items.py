"""Per-topic item ingestion."""

import logging
import uuid

from common.datetime import parse_pub_date
from common.http import fetch_text
from ingest_topics.categories import map_topic_to_categories
from ingest_topics.feed_xml import child_text, parse_feed_xml
from ingest_topics.models import FeedItem, Topic

logger = logging.getLogger(__name__)


def fetch_topic_items(topic: Topic, timeout: float, user_agent: str) -> list[FeedItem]:
    """Fetch a topic feed and return its items (metadata only, no scraping).

    Fetch and parse errors propagate to the caller.
    """
    xml = fetch_text(topic.url, timeout=timeout, user_agent=user_agent)
    items = parse_topic_items(xml, topic)
    logger.info("Found %d items in topic %s", len(items), topic.title)
    return items


def parse_topic_items(xml: str, topic: Topic) -> list[FeedItem]:
    """Parse topic feed XML into FeedItems categorised by the topic title."""
    root = parse_feed_xml(xml)
    mapped_categories = map_topic_to_categories(topic.title)

    items = []
    for element in root.iter("item"):
        guid = child_text(element, "guid")
        if not guid:
            guid = str(uuid.uuid4())

        items.append(
            FeedItem(
                title=(child_text(element, "title") or "").strip(),
                link=(child_text(element, "link") or "").strip(),
                description=(child_text(element, "description") or "").strip(),
                pub_date=parse_pub_date(child_text(element, "pubDate")),
                guid=guid,
                source_category=topic.title,
                mapped_categories=mapped_categories,
            )
        )
    return items
