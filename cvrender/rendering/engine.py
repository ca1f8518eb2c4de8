"""
Rendering engine entry point.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from ..logging_utils import LOG
from ..model import normalize_document
from ..shared import ErrorKind
from ..themes import Theme, resolve_theme
from .components import page_node
from .context import build_context
from .layouts import COVER_LAYOUT, FALLBACK_LAYOUT, get_layout
from .nodes import Node

MODE_RESUME = "resume"
MODE_COVER = "cover"
RENDER_MODES = (MODE_RESUME, MODE_COVER)


def render(
    document: Any,
    theme: Union[Theme, str, None] = None,
    settings: Optional[Dict[str, Any]] = None,
    mode: str = MODE_RESUME,
) -> Node:
    """
    Render a document into a visual tree.

    The document is merged over the blank template first, so partial or
    slightly malformed documents still render. Nothing passed in is
    mutated.

    Args:
        document: Resume document (camelCase wire keys)
        theme: Theme instance or theme id; unknown ids fall back to the default theme
        settings: Settings overriding the document's own settings
        mode: "resume" or "cover"

    Returns:
        Root page node

    Raises:
        ValueError: If mode is not a known render mode
    """
    if mode not in RENDER_MODES:
        raise ValueError(f"Unknown render mode: {mode!r}")
    if not isinstance(document, dict):
        LOG.warning("%s: document is not an object; rendering the blank template.", ErrorKind.MALFORMED_ENTRY.value)
        document = {}

    resolved = resolve_theme(theme)
    ctx = build_context(normalize_document(document), resolved, settings, mode)

    if mode == MODE_COVER:
        layout = get_layout(COVER_LAYOUT)
    else:
        layout = get_layout(resolved.layout)
        if layout is None:
            LOG.debug("No layout for family %r; using %s", resolved.layout, FALLBACK_LAYOUT)
            layout = get_layout(FALLBACK_LAYOUT)

    return page_node(ctx, layout(ctx))
