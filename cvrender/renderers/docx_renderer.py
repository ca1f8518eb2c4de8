"""
DOCX renderer implementation.

Walks the visual tree and writes a Word .docx document with python-docx.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Mm, Pt, RGBColor

from ..formatting import parse_hex_color
from ..logging_utils import LOG
from ..rendering import MODE_RESUME, Node, iter_nodes, text_content
from ..rendering.context import PAPER_SIZES_MM
from ..shared import sanitize_for_xml
from ..themes import Theme
from .base import DocumentRenderer

# Decorative or screen-only nodes with no Word counterpart
_SKIPPED_ROLES = frozenset({"watermark", "photo", "qr-code", "timeline-dot", "bar", "dots", "bullet"})
_LIST_ROLE_RE = re.compile(r"^(skills|languages|interests)(-list)?$")
_NUMBER_RE = re.compile(r"[\d.]+")


def _measure(value: str, default: float) -> float:
    match = _NUMBER_RE.search(value or "")
    return float(match.group(0)) if match else default


def _rgb(color: Optional[str]) -> Optional[RGBColor]:
    rgb = parse_hex_color(color)
    return RGBColor(*rgb) if rgb else None


class DocxDocumentRenderer(DocumentRenderer):
    """
    Word .docx document built with python-docx.

    This implementation:
    - Maps names and section titles to Word headings
    - Keeps bold/italic markup as runs and bullets as list paragraphs
    - Writes links as their visible text
    - Sizes the page from the paper size setting
    """

    suffix = ".docx"

    def render(
        self,
        document: Dict[str, Any],
        output_path: Path,
        *,
        theme: Union[Theme, str, None] = None,
        settings: Optional[Dict[str, Any]] = None,
        mode: str = MODE_RESUME,
    ) -> Path:
        tree = self.build_tree(document, theme, settings, mode)
        doc = self.build_document(tree)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        doc.save(str(output_path))
        LOG.debug("Wrote DOCX to %s", output_path)
        return output_path

    def build_document(self, tree: Node):
        doc = Document()
        self._accent = _rgb(tree.style.get("--primary"))

        width, height = PAPER_SIZES_MM.get(tree.attrs.get("data-paper", "a4"), PAPER_SIZES_MM["a4"])
        margin = _measure(tree.style.get("padding", ""), 15.0)
        for section in doc.sections:
            section.page_width = Mm(width)
            section.page_height = Mm(height)
            section.left_margin = section.right_margin = Mm(margin)
            section.top_margin = section.bottom_margin = Mm(margin)

        normal = doc.styles["Normal"]
        normal.font.size = Pt(_measure(tree.style.get("font-size", ""), 10.0))

        self._walk(doc, tree)
        return doc

    def _heading(self, doc, text: str, level: int) -> None:
        heading = doc.add_heading(sanitize_for_xml(text), level=level)
        if self._accent is not None:
            for run in heading.runs:
                run.font.color.rgb = self._accent

    def _markup_paragraph(self, doc, node: Node) -> None:
        style = "List Bullet" if node.role == "bullet-line" else None
        paragraph = doc.add_paragraph(style=style)
        for child in node.children:
            if child.role == "bullet":
                continue
            run = paragraph.add_run(sanitize_for_xml(child.text))
            run.bold = child.tag == "strong"
            run.italic = child.tag == "em"

    def _walk(self, doc, node: Node) -> None:
        role = node.role
        if role in _SKIPPED_ROLES:
            return

        if role == "full-name":
            self._heading(doc, node.text, 0)
            return
        if role == "section-title":
            self._heading(doc, node.text, 1)
            return
        if role == "entry-header":
            paragraph = doc.add_paragraph()
            for child in node.children:
                if child.role == "entry-title":
                    paragraph.add_run(sanitize_for_xml(child.text)).bold = True
                elif child.role == "date-range":
                    paragraph.add_run("  " + sanitize_for_xml(child.text)).italic = True
            return
        if role in ("line", "bullet-line"):
            self._markup_paragraph(doc, node)
            return
        if role == "contact-line":
            parts = [text_content(child) for child in node.children]
            paragraph = doc.add_paragraph(sanitize_for_xml(" | ".join(p for p in parts if p)))
            paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
            return
        if _LIST_ROLE_RE.match(role):
            if node.text:
                doc.add_paragraph(sanitize_for_xml(node.text))
                return
            names = [n.text for n in iter_nodes(node) if n.role in ("pill", "skill-name")]
            if names:
                doc.add_paragraph(sanitize_for_xml(", ".join(names)))
            return
        if role == "job-title":
            doc.add_paragraph().add_run(sanitize_for_xml(node.text)).italic = True
            return

        if node.text:
            doc.add_paragraph(sanitize_for_xml(node.text))
        for child in node.children:
            self._walk(doc, child)
