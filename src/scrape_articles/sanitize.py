"""Whitelist extraction and sanitization of scraped article markup.

Only a fixed set of block tags (p, h1-h3, blockquote, figure, ul/ol) is taken
from the direct children of the article body container, and inside them only
strong, em/i and safe anchors survive. Everything else is unwrapped or dropped.
The output is the body format handed to the publishing platform.
"""

import html
import re
from typing import Optional

from lxml import etree
from lxml import html as lxml_html

BODY_CLASS = "sc-item-body"
LOGO_CLASS = "sc-item-logo"

_HEADINGS = ("h1", "h2", "h3")
_LISTS = ("ul", "ol")
_ALLOWED_HREF_PREFIXES = ("http://", "https://", "mailto:")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_article(page_html: str, body_class: str = BODY_CLASS) -> str:
    """Extract the article body and strip anything executable from it."""
    return strip_unsafe_markup(extract_article_body(page_html, body_class))


def extract_article_body(page_html: str, body_class: str = BODY_CLASS) -> str:
    """Re-emit the allowed direct children of the article body container.

    Returns "" when the page is blank or has no body container.
    """
    if not page_html or not page_html.strip():
        return ""

    doc = _parse_page(page_html)
    if doc is None:
        return ""
    containers = doc.xpath("//div[contains(@class, $cls)]", cls=body_class)
    if not containers:
        return ""

    blocks: list[str] = []
    # Direct children only; nested blocks are reached through clean_inline
    for node in containers[0]:
        if not isinstance(node.tag, str):
            continue
        tag = node.tag.lower()

        if tag == "p":
            text = clean_inline(node)
            if text:
                blocks.append(f"<p>{text}</p>")
        elif tag in _HEADINGS:
            blocks.append(f"<{tag}>{clean_inline(node)}</{tag}>")
        elif tag == "blockquote":
            blocks.append(f"<blockquote>{clean_inline(node)}</blockquote>")
        elif tag == "figure":
            blocks.extend(_figure_lines(node))
        elif tag in _LISTS:
            blocks.extend(_list_lines(node, tag))

    return "\n".join(blocks).strip()


def clean_inline(element: etree._Element) -> str:
    """Inline-clean an element's content.

    strong is kept, em/i become em, anchors follow the anchor policy and every
    other tag is unwrapped. The result is entity-decoded once, whitespace
    collapsed and trimmed.
    """
    parts: list[str] = []
    _append_children(element, parts)
    text = html.unescape("".join(parts))
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_unsafe_markup(fragment: str) -> str:
    """Reparse markup, remove script/style elements and return the inner HTML."""
    if not fragment or not fragment.strip():
        return ""

    container = lxml_html.fragment_fromstring(fragment, create_parent="div")
    for node in container.xpath(".//script | .//style"):
        node.drop_tree()

    inner = html.escape(container.text, quote=False) if container.text else ""
    inner += "".join(
        etree.tostring(child, encoding="unicode", method="html") for child in container
    )
    return inner.strip()


def extract_featured_image(page_html: str, logo_class: str = LOGO_CLASS) -> Optional[str]:
    """Return the src of the hero/logo figure image on the raw page, if any."""
    if not page_html or not page_html.strip():
        return None

    doc = _parse_page(page_html)
    if doc is None:
        return None
    images = doc.xpath("//figure[contains(@class, $cls)]//img", cls=logo_class)
    if not images:
        return None
    return images[0].get("src")


def _parse_page(page_html: str) -> Optional[etree._Element]:
    """Parse a page as UTF-8 bytes; None when nothing but comments or whitespace is left."""
    # Bytes, so XHTML pages with an encoding declaration parse too
    parser = lxml_html.HTMLParser(encoding="utf-8")
    try:
        return lxml_html.document_fromstring(page_html.encode("utf-8"), parser=parser)
    except etree.ParserError:
        return None


def _raw(text: str) -> str:
    # lxml hands back decoded text; re-encode so the single decode in
    # clean_inline sees the same markup the page contained
    return html.escape(text, quote=False)


def _raw_attribute(value: str) -> str:
    return html.escape(html.escape(value))


def _append_children(element: etree._Element, parts: list[str]) -> None:
    if element.text:
        parts.append(_raw(element.text))
    for child in element:
        _append_inline(child, parts)
        if child.tail:
            parts.append(_raw(child.tail))


def _append_inline(node: etree._Element, parts: list[str]) -> None:
    # Comments and processing instructions
    if not isinstance(node.tag, str):
        return
    tag = node.tag.lower()

    if tag == "strong":
        parts.append("<strong>")
        _append_children(node, parts)
        parts.append("</strong>")
    elif tag in ("em", "i"):
        parts.append("<em>")
        _append_children(node, parts)
        parts.append("</em>")
    elif tag == "a":
        _append_link(node, parts)
    else:
        _append_children(node, parts)


def _append_link(node: etree._Element, parts: list[str]) -> None:
    """Keep http(s)/mailto anchors; drop any other anchor with its content."""
    href = node.get("href")
    if not href or not href.strip():
        return
    if not href.lower().startswith(_ALLOWED_HREF_PREFIXES):
        return

    parts.append(f'<a href="{_raw_attribute(href)}"')
    target = node.get("target")
    if target and target.strip():
        parts.append(f' target="{_raw_attribute(target)}"')
    parts.append(' rel="noopener noreferrer">')
    _append_children(node, parts)
    parts.append("</a>")


def _figure_lines(figure: etree._Element) -> list[str]:
    img = figure.find(".//img")
    if img is None:
        return []
    src = img.get("src") or ""
    if not src.strip():
        return []

    lines = ["<figure>", f'<img src="{html.escape(src)}" alt="" />']
    caption = figure.find(".//figcaption")
    if caption is not None:
        lines.append(f"<figcaption>{html.escape(caption.text_content().strip(), quote=False)}</figcaption>")
    lines.append("</figure>")
    return lines


def _list_lines(list_node: etree._Element, tag: str) -> list[str]:
    lines = [f"<{tag}>"]
    for li in list_node.findall("li"):
        text = clean_inline(li)
        if text:
            lines.append(f"<li>{text}</li>")
    lines.append(f"</{tag}>")
    return lines
