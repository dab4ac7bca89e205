"""Tests for scrape_articles.sanitize module."""

from lxml import html as lxml_html

from scrape_articles.sanitize import (
    extract_article_body,
    extract_featured_image,
    sanitize_article,
    strip_unsafe_markup,
)


def _page(body: str, extra: str = "") -> str:
    return (
        "<html><head><title>t</title></head><body>"
        f"{extra}<div class=\"sc-item-body\">{body}</div>"
        "<div class=\"footer\"><p>Footer</p></div>"
        "</body></html>"
    )


class TestSanitizeArticle:
    def test_inline_whitelist_and_anchor_policy(self) -> None:
        page = _page(
            '<p>Hello <strong>world</strong> and <a href="javascript:alert(1)">bad</a> '
            '<a href="https://x.lt/a?b=1&amp;c=2" target="_blank">good</a></p>'
        )
        assert sanitize_article(page) == (
            '<p>Hello <strong>world</strong> and '
            '<a href="https://x.lt/a?b=1&amp;c=2" target="_blank" rel="noopener noreferrer">good</a></p>'
        )

    def test_mailto_anchor_kept_without_target(self) -> None:
        page = _page('<p><a href="mailto:info@bns.lt">Rašykite</a></p>')
        assert sanitize_article(page) == (
            '<p><a href="mailto:info@bns.lt" rel="noopener noreferrer">Rašykite</a></p>'
        )

    def test_anchor_without_href_dropped_with_text(self) -> None:
        page = _page('<p>Keep <a name="x">anchor text</a>this</p>')
        assert sanitize_article(page) == "<p>Keep this</p>"

    def test_attribute_quotes_cannot_break_out(self) -> None:
        page = _page("<p><a href='https://x.lt/\"onmouseover=\"alert(1)'>x</a></p>")
        result = sanitize_article(page)

        anchor = lxml_html.fragment_fromstring(result).find("a")
        assert set(anchor.attrib) == {"href", "rel"}
        assert anchor.get("href") == 'https://x.lt/"onmouseover="alert(1)'

    def test_italic_becomes_em_and_other_tags_unwrapped(self) -> None:
        page = _page('<p><i>Pirma</i> <span class="x">antra</span> <em>trečia</em></p>')
        assert sanitize_article(page) == "<p><em>Pirma</em> antra <em>trečia</em></p>"

    def test_whitespace_collapsed_and_empty_paragraphs_dropped(self) -> None:
        page = _page("<p>  a\n\n   b  </p><p>   </p><p>c</p>")
        assert sanitize_article(page) == "<p>a b</p>\n<p>c</p>"

    def test_headings_and_blockquote(self) -> None:
        page = _page("<h2>Antraštė</h2><blockquote>Citata</blockquote>")
        assert sanitize_article(page) == "<h2>Antraštė</h2>\n<blockquote>Citata</blockquote>"

    def test_only_direct_children_of_allowed_tags(self) -> None:
        page = _page("<div><p>nested</p></div><table><tr><td>cell</td></tr></table><p>kept</p>")
        assert sanitize_article(page) == "<p>kept</p>"

    def test_decoded_script_is_removed(self) -> None:
        page = _page("<p>&lt;script&gt;alert(1)&lt;/script&gt;text</p>")
        result = sanitize_article(page)
        assert "script" not in result
        assert "alert" not in result
        assert "text" in result

    def test_figure_with_caption(self) -> None:
        page = _page(
            '<figure class="wide"><a href="#"><img src="https://sc.bns.lt/docs/a.jpg" width="10"></a>'
            "<figcaption> Nuotr. <b>BNS</b> </figcaption></figure>"
        )
        result = sanitize_article(page)

        assert result.startswith("<figure>")
        assert '<img src="https://sc.bns.lt/docs/a.jpg" alt="">' in result
        assert "<figcaption>Nuotr. BNS</figcaption>" in result
        assert "width" not in result

    def test_figure_without_image_dropped(self) -> None:
        page = _page("<figure><figcaption>Nothing</figcaption></figure><p>x</p>")
        assert sanitize_article(page) == "<p>x</p>"

    def test_lists(self) -> None:
        page = _page("<ul><li>Vienas</li><li>  </li><li><b>Du</b> <i>trys</i></li></ul>")
        result = sanitize_article(page)

        assert result.startswith("<ul>")
        assert "<li>Vienas</li>" in result
        assert "<li>Du <em>trys</em></li>" in result
        assert result.count("<li>") == 2

    def test_missing_container(self) -> None:
        assert sanitize_article("<html><body><p>No body</p></body></html>") == ""

    def test_blank_page(self) -> None:
        assert sanitize_article("") == ""
        assert extract_article_body("   ") == ""

    def test_xhtml_page_with_encoding_declaration(self) -> None:
        page = (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            '<html xmlns="http://www.w3.org/1999/xhtml"><body>'
            '<div class="sc-item-body"><p>Labas, <strong>pasauli</strong></p></div>'
            "</body></html>"
        )
        assert sanitize_article(page) == "<p>Labas, <strong>pasauli</strong></p>"

    def test_comment_only_page(self) -> None:
        assert sanitize_article("<!-- nothing -->") == ""

    def test_custom_body_class(self) -> None:
        page = '<html><body><div class="article-text"><p>x</p></div></body></html>'
        assert sanitize_article(page, body_class="article-text") == "<p>x</p>"


class TestStripUnsafeMarkup:
    def test_removes_script_and_style(self) -> None:
        fragment = "<p>a<script>evil()</script>b</p><style>p{}</style><p>c</p>"
        assert strip_unsafe_markup(fragment) == "<p>ab</p><p>c</p>"

    def test_blank(self) -> None:
        assert strip_unsafe_markup("  ") == ""


class TestExtractFeaturedImage:
    def test_logo_figure_image(self) -> None:
        page = _page(
            "<p>x</p>",
            extra='<figure class="sc-item-logo big"><div><img src="https://sc.bns.lt/docs/logo.jpg"></div></figure>',
        )
        assert extract_featured_image(page) == "https://sc.bns.lt/docs/logo.jpg"

    def test_xhtml_page_with_encoding_declaration(self) -> None:
        page = (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            '<html><body><figure class="sc-item-logo"><img src="https://sc.bns.lt/docs/logo.jpg" /></figure></body></html>'
        )
        assert extract_featured_image(page) == "https://sc.bns.lt/docs/logo.jpg"

    def test_comment_only_page(self) -> None:
        assert extract_featured_image("<!-- nothing -->") is None

    def test_no_logo_figure(self) -> None:
        page = _page('<figure><img src="https://sc.bns.lt/docs/body.jpg"></figure>')
        assert extract_featured_image(page) is None

    def test_blank_page(self) -> None:
        assert extract_featured_image("") is None
