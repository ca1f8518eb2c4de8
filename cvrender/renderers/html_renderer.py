"""
HTML renderer.

Serializes the visual tree into a standalone, printable HTML page using a
Jinja2 page template.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from ..logging_utils import LOG
from ..rendering import MODE_RESUME, Node
from ..rendering.context import PAPER_SIZES_MM
from ..shared import as_dict, as_text
from ..themes import Theme
from .base import DocumentRenderer

_TEMPLATES_DIR = Path(__file__).parent / "templates"
_VOID_TAGS = frozenset({"img", "br", "hr"})

_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "j2"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


_STYLE_BREAKERS = str.maketrans("", "", ";{}")


def _style_attr(style: Dict[str, str]) -> str:
    # a value must not be able to end its declaration
    return "; ".join(f"{k}: {str(v).translate(_STYLE_BREAKERS)}" for k, v in style.items())


def node_to_html(node: Node) -> Markup:
    """Serialize a node and its children; all text and attributes are escaped."""
    attrs = dict(node.attrs)
    if node.role:
        attrs["data-role"] = node.role
    if node.style:
        attrs["style"] = _style_attr(node.style)
    attr_text = "".join(f' {k}="{escape(v)}"' for k, v in attrs.items())

    if node.tag in _VOID_TAGS:
        return Markup(f"<{node.tag}{attr_text}>")
    inner = escape(node.text) + Markup("").join(node_to_html(child) for child in node.children)
    return Markup(f"<{node.tag}{attr_text}>") + inner + Markup(f"</{node.tag}>")


class HtmlDocumentRenderer(DocumentRenderer):
    """Standalone printable HTML page."""

    suffix = ".html"

    def __init__(self, template_name: str = "page.html.j2"):
        self.template_name = template_name

    def render_string(
        self,
        document: Dict[str, Any],
        *,
        theme: Union[Theme, str, None] = None,
        settings: Optional[Dict[str, Any]] = None,
        mode: str = MODE_RESUME,
    ) -> str:
        tree = self.build_tree(document, theme, settings, mode)
        width, height = PAPER_SIZES_MM.get(tree.attrs.get("data-paper", "a4"), PAPER_SIZES_MM["a4"])
        info = as_dict(as_dict(document).get("personalInfo"))
        doc_settings = as_dict(as_dict(document).get("settings"))
        template = _env.get_template(self.template_name)
        return template.render(
            lang=as_text(doc_settings.get("locale")) or "en",
            title=as_text(info.get("fullName")) or as_text(as_dict(document).get("profileName")) or "Resume",
            page_width=width,
            page_height=height,
            body=node_to_html(tree),
        )

    def render(
        self,
        document: Dict[str, Any],
        output_path: Path,
        *,
        theme: Union[Theme, str, None] = None,
        settings: Optional[Dict[str, Any]] = None,
        mode: str = MODE_RESUME,
    ) -> Path:
        html = self.render_string(document, theme=theme, settings=settings, mode=mode)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        LOG.debug("Wrote HTML to %s", output_path)
        return output_path
