"""
Base interface for document renderers.

Defines the contract for pluggable output formats.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..rendering import MODE_RESUME, Node, render
from ..themes import Theme


class DocumentRenderer(ABC):
    """
    Abstract base class for document renderers.

    Implementations serialize a rendered document (or a projection of it)
    into a file format.
    """

    #: File suffix written by this renderer
    suffix: str = ""

    def build_tree(
        self,
        document: Dict[str, Any],
        theme: Union[Theme, str, None] = None,
        settings: Optional[Dict[str, Any]] = None,
        mode: str = MODE_RESUME,
    ) -> Node:
        return render(document, theme, settings, mode)

    @abstractmethod
    def render(
        self,
        document: Dict[str, Any],
        output_path: Path,
        *,
        theme: Union[Theme, str, None] = None,
        settings: Optional[Dict[str, Any]] = None,
        mode: str = MODE_RESUME,
    ) -> Path:
        """
        Render a document to an output file.

        Args:
            document: Resume document
            output_path: Path where the rendered output should be saved
            theme: Theme instance or theme id
            settings: Settings overriding the document's own settings
            mode: "resume" or "cover"

        Returns:
            Path to the rendered output file
        """
