"""Text formatting helpers."""

from .text_to_html import PlainTextHtmlFormatter, text_to_html

__all__ = ["PlainTextHtmlFormatter", "text_to_html"]
