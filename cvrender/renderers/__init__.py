"""
Output renderers.

This module provides pluggable output formats for rendered documents.
"""

from .base import DocumentRenderer
from .docx_renderer import DocxDocumentRenderer
from .html_renderer import HtmlDocumentRenderer, node_to_html
from .renderer_registry import get_renderer, list_renderers, register_renderer, unregister_renderer
from .text_renderer import TextDocumentRenderer

register_renderer("html", HtmlDocumentRenderer)
register_renderer("docx", DocxDocumentRenderer)
register_renderer("text", TextDocumentRenderer)

__all__ = [
    "DocumentRenderer",
    "DocxDocumentRenderer",
    "HtmlDocumentRenderer",
    "TextDocumentRenderer",
    "get_renderer",
    "list_renderers",
    "node_to_html",
    "register_renderer",
    "unregister_renderer",
]
