"""Plain text to HTML conversion for request comments."""

import html
import re
from typing import Optional

from dataprivacy.core.interfaces import HtmlFormatter


_PARAGRAPH_BREAK = re.compile(r"\n(?:[ \t]*\n)+")


def text_to_html(text: Optional[str], paragraphs: bool = True, newlines: bool = True) -> str:
    """Convert plain text to escaped HTML.

    Blank lines separate ``<p>`` paragraphs and single newlines become
    ``<br />``. Empty or missing text renders as an empty string.
    """
    if text is None:
        return ""

    text = text.replace("\r\n", "\n").replace("\r", "\n").strip()
    if not text:
        return ""

    blocks = _PARAGRAPH_BREAK.split(text) if paragraphs else [text]
    rendered = []
    for block in blocks:
        block = html.escape(block.strip(), quote=True)
        if newlines:
            block = block.replace("\n", "<br />\n")
        rendered.append(f"<p>{block}</p>" if paragraphs else block)

    return "\n".join(rendered)


class PlainTextHtmlFormatter(HtmlFormatter):
    """HtmlFormatter backed by text_to_html."""

    def __init__(self, paragraphs: bool = True, newlines: bool = True):
        self.paragraphs = paragraphs
        self.newlines = newlines

    def to_html(self, text: Optional[str]) -> str:
        return text_to_html(text, paragraphs=self.paragraphs, newlines=self.newlines)
