"""
Plain-text renderer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..document_io import export_plain_text
from ..logging_utils import LOG
from ..model import normalize_document
from ..rendering import MODE_COVER, MODE_RESUME, render, text_content
from ..shared import as_dict
from ..themes import Theme
from .base import DocumentRenderer


class TextDocumentRenderer(DocumentRenderer):
    """Plain-text projection (name, contact, summary, experience, education, skills)."""

    suffix = ".txt"

    def render_string(
        self,
        document: Dict[str, Any],
        *,
        theme: Union[Theme, str, None] = None,
        settings: Optional[Dict[str, Any]] = None,
        mode: str = MODE_RESUME,
    ) -> str:
        if mode == MODE_COVER:
            return text_content(render(document, theme, settings, mode), separator="\n") + "\n"
        document = normalize_document(as_dict(document))
        if settings:
            document["settings"].update(settings)
        return export_plain_text(document)

    def render(
        self,
        document: Dict[str, Any],
        output_path: Path,
        *,
        theme: Union[Theme, str, None] = None,
        settings: Optional[Dict[str, Any]] = None,
        mode: str = MODE_RESUME,
    ) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            self.render_string(document, theme=theme, settings=settings, mode=mode),
            encoding="utf-8",
        )
        LOG.debug("Wrote text to %s", output_path)
        return output_path
