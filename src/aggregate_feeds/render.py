"""RSS 2.0 rendering for the publishing platform's feed importer."""

import re
from datetime import datetime, timezone
from typing import Iterable

from lxml import etree

from aggregate_feeds.helpers import image_media_type
from common.datetime import format_rfc1123
from ingest_topics.models import FeedItem

CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
DC_NS = "http://purl.org/dc/elements/1.1/"
ATOM_NS = "http://www.w3.org/2005/Atom"
MEDIA_NS = "http://search.yahoo.com/mrss/"

NAMESPACES = {
    "content": CONTENT_NS,
    "dc": DC_NS,
    "atom": ATOM_NS,
    "media": MEDIA_NS,
}

# Characters XML 1.0 does not allow
_INVALID_XML_CHARS_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def render_feed(
    items: Iterable[FeedItem],
    *,
    title: str,
    link: str,
    description: str,
    self_link: str,
    language: str = "lt",
    build_date: datetime | None = None,
) -> str:
    """Serialize items into an RSS 2.0 document, in the order given."""
    rss = etree.Element("rss", nsmap=NAMESPACES)
    rss.set("version", "2.0")

    channel = etree.SubElement(rss, "channel")
    _add_text(channel, "title", title)
    _add_text(channel, "link", link)
    _add_text(channel, "description", description)
    _add_text(channel, "lastBuildDate", format_rfc1123(build_date or datetime.now(timezone.utc)))
    _add_text(channel, "language", language)
    etree.SubElement(
        channel,
        f"{{{ATOM_NS}}}link",
        href=self_link,
        rel="self",
        type="application/rss+xml",
    )

    for item in items:
        _append_item(channel, item)

    xml = etree.tostring(rss, xml_declaration=True, encoding="UTF-8", pretty_print=True)
    return xml.decode("utf-8")


def _append_item(channel: etree._Element, item: FeedItem) -> None:
    node = etree.SubElement(channel, "item")
    _add_cdata(node, "title", item.title)
    _add_text(node, "link", item.link)
    guid = _add_text(node, "guid", item.guid)
    guid.set("isPermaLink", "false")
    _add_text(node, "pubDate", format_rfc1123(item.pub_date))
    for category in item.mapped_categories:
        _add_cdata(node, "category", category)
    _add_cdata(node, "description", item.description)
    _add_cdata(node, f"{{{CONTENT_NS}}}encoded", item.content)

    if item.featured_image:
        etree.SubElement(
            node,
            "enclosure",
            url=_xml_safe(item.featured_image),
            length="0",
            type=image_media_type(item.featured_image),
        )


def _add_text(parent: etree._Element, tag: str, text: str) -> etree._Element:
    child = etree.SubElement(parent, tag)
    child.text = _xml_safe(text)
    return child


def _add_cdata(parent: etree._Element, tag: str, text: str) -> etree._Element:
    child = etree.SubElement(parent, tag)
    text = _xml_safe(text)
    # A CDATA section cannot contain its own terminator; such text is escaped instead
    child.text = text if "]]>" in text else etree.CDATA(text)
    return child


def _xml_safe(text: str | None) -> str:
    return _INVALID_XML_CHARS_RE.sub("", text or "")
