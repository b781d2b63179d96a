"""Tests for the markdown preview."""

import pytest

from notetree.core.preview import MarkdownRenderer, is_safe_url, render_preview
from notetree.protocols import RendererProtocol


def test_renderer_satisfies_protocol() -> None:
    """MarkdownRenderer can be injected as a RendererProtocol."""
    assert isinstance(MarkdownRenderer(), RendererProtocol)


def test_render_basic_markdown() -> None:
    """Headings and emphasis become HTML."""
    html = MarkdownRenderer().render("# Title\n\nsome **bold** text")
    assert "<h1>Title</h1>" in html
    assert "<strong>bold</strong>" in html


def test_blank_content_renders_empty() -> None:
    """Whitespace-only notes have an empty preview."""
    assert MarkdownRenderer().render("  \n\t") == ""


def test_line_breaks_are_kept() -> None:
    """Single newlines become <br />."""
    assert "<br />" in MarkdownRenderer().render("one\ntwo")


def test_raw_html_is_escaped() -> None:
    """Embedded tags are shown as text, never as markup."""
    html = MarkdownRenderer().render("<script>alert(1)</script>\n\nhi <b onclick='x'>there</b>")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "<b " not in html


def test_unsafe_link_urls_are_blanked() -> None:
    """javascript: links lose their URL; https links open in a new tab."""
    renderer = MarkdownRenderer()
    bad = renderer.render("[click](javascript:alert(1))")
    good = renderer.render("[docs](https://example.com)")
    assert "javascript:" not in bad
    assert 'href="https://example.com"' in good
    assert 'rel="noopener noreferrer"' in good


def test_is_safe_url_ignores_case_and_whitespace() -> None:
    """Obfuscated schemes are still caught."""
    assert not is_safe_url(" JavaScript:alert(1)")
    assert not is_safe_url("java\tscript:alert(1)")
    assert is_safe_url("https://example.com")
    assert is_safe_url("#anchor")


def test_raw_mode_returns_source() -> None:
    """Raw previews show the markdown unchanged."""
    assert render_preview("# Title", "raw") == "# Title"
    assert "<h1>" in render_preview("# Title")


def test_renderer_is_reusable() -> None:
    """State from one render does not leak into the next."""
    renderer = MarkdownRenderer()
    renderer.render("[a]: https://example.com\n\n[a]")
    assert "example.com" not in renderer.render("[a]")


@pytest.mark.parametrize(
    "source",
    [
        "[x](&#106;avascript:alert(1))",
        "[x](javascript&#58;alert(1))",
        "[x](&#x6A;avascript:alert(1))",
    ],
)
def test_entity_encoded_link_schemes_are_blanked(source: str) -> None:
    """Character references cannot smuggle a javascript: scheme into href."""
    html = MarkdownRenderer().render(source)
    assert 'href=""' in html
    assert "avascript" not in html


def test_entity_encoded_image_scheme_is_blanked() -> None:
    """The same decoding applies to image sources."""
    html = MarkdownRenderer().render("![a](&#106;avascript:alert(1))")
    assert 'src=""' in html
    assert "avascript" not in html


def test_is_safe_url_decodes_character_references() -> None:
    """Decimal, hex and named references are decoded before the scheme check."""
    assert not is_safe_url("&#106;avascript:alert(1)")
    assert not is_safe_url("&#x6A;avascript:alert(1)")
    assert not is_safe_url("javascript&colon;alert(1)")
    assert is_safe_url("https://example.com/?a=1&amp;b=2")
