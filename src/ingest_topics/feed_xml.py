"""Permissive parsing of wire and topic feed XML."""

from lxml import etree

# Named HTML entities the wire emits that strict XML does not define
_HTML_ENTITIES = {
    "&nbsp;": " ",
    "&laquo;": "«",
    "&raquo;": "»",
}


def sanitize_xml(xml: str | None) -> str:
    """Replace HTML-only named entities with their literal characters."""
    if not xml or not xml.strip():
        return ""
    for entity, literal in _HTML_ENTITIES.items():
        xml = xml.replace(entity, literal)
    return xml


def parse_feed_xml(xml: str) -> etree._Element:
    """Parse feed text into an element tree root.

    DTDs are neither loaded nor fetched, external entities are not resolved and
    whitespace is preserved. Raises etree.XMLSyntaxError or ValueError when
    nothing usable can be recovered.
    """
    parser = etree.XMLParser(
        encoding="utf-8",
        load_dtd=False,
        no_network=True,
        resolve_entities=False,
        remove_blank_text=False,
        recover=True,
        huge_tree=False,
    )
    root = etree.fromstring(sanitize_xml(xml).encode("utf-8"), parser)
    if root is None:
        raise ValueError("Feed document is empty or unparsable")
    return root


def child_text(element: etree._Element, tag: str) -> str | None:
    """Text of the first direct child with the given tag, or None if absent."""
    child = element.find(tag)
    if child is None:
        return None
    return child.text or ""
