"""Markdown preview: render note content to HTML that is safe to display."""

import html
import re
import xml.etree.ElementTree as etree
from typing import Literal

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from notetree.protocols import RendererProtocol

PreviewMode = Literal["rendered", "raw"]

_UNSAFE_SCHEME = re.compile(r"^(javascript|vbscript|data):", re.IGNORECASE)
_IGNORED_URL_CHARS = re.compile(r"[\x00-\x20]+")
_EXTENSIONS = ["fenced_code", "tables", "sane_lists", "nl2br"]


def is_safe_url(url: str) -> bool:
    """False for script-capable schemes, however they are encoded, spaced or cased.

    Character references are decoded first, the way a browser reads the
    attribute value.
    """
    return not _UNSAFE_SCHEME.match(_IGNORED_URL_CHARS.sub("", html.unescape(url)))


class _SafeUrlTreeprocessor(Treeprocessor):
    def run(self, root: etree.Element) -> None:
        for element in root.iter():
            for attr in ("href", "src"):
                url = element.get(attr)
                if url is not None and not is_safe_url(url):
                    element.set(attr, "")
            if element.tag == "a" and element.get("href", "").startswith(("http://", "https://")):
                element.set("target", "_blank")
                element.set("rel", "noopener noreferrer")


class SanitizeExtension(Extension):
    """Escape raw HTML and blank out links or images with unsafe URLs."""

    def extendMarkdown(self, md: markdown.Markdown) -> None:  # noqa: N802
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        # After the inline processor (20) has turned link syntax into elements.
        md.treeprocessors.register(_SafeUrlTreeprocessor(md), "safe_urls", 5)


class MarkdownRenderer:
    """Render markdown to sanitized HTML with Python-Markdown."""

    def __init__(self) -> None:
        self._md = markdown.Markdown(extensions=[*_EXTENSIONS, SanitizeExtension()])

    def render(self, markdown_text: str) -> str:
        """Return sanitized HTML; whitespace-only input renders as ""."""
        if not markdown_text.strip():
            return ""
        try:
            return self._md.convert(markdown_text)
        finally:
            self._md.reset()


def render_preview(
    content: str,
    mode: PreviewMode = "rendered",
    renderer: RendererProtocol | None = None,
) -> str:
    """Preview text for a note: rendered HTML, or the markdown source in raw mode."""
    if mode == "raw":
        return content
    return (renderer or MarkdownRenderer()).render(content)
