"""
Rendering engine: documents and themes in, visual trees out.
"""

from .engine import MODE_COVER, MODE_RESUME, RENDER_MODES, render
from .layouts import get_layout, list_layouts, register_layout
from .nodes import Node, el, find_by_role, iter_nodes, text_content

__all__ = [
    "MODE_COVER",
    "MODE_RESUME",
    "RENDER_MODES",
    "Node",
    "el",
    "find_by_role",
    "get_layout",
    "iter_nodes",
    "list_layouts",
    "register_layout",
    "render",
    "text_content",
]
