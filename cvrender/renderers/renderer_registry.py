"""
Renderer registry for managing named output renderers.

Lets the CLI choose the output format by name.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Type

from .base import DocumentRenderer

# Global renderer registry
_RENDERER_REGISTRY: Dict[str, Type[DocumentRenderer]] = {}


def register_renderer(name: str, renderer_class: Type[DocumentRenderer]) -> None:
    """
    Register a renderer class in the global registry.

    Args:
        name: The name to register the renderer under (e.g., "html")
        renderer_class: The renderer class to register
    """
    _RENDERER_REGISTRY[name] = renderer_class


def get_renderer(name: str, **kwargs) -> Optional[DocumentRenderer]:
    """
    Get a renderer instance by name.

    Args:
        name: The renderer name (e.g., "docx")
        **kwargs: Arguments to pass to the renderer constructor

    Returns:
        Renderer instance, or None if not found
    """
    renderer_class = _RENDERER_REGISTRY.get(name)
    if renderer_class:
        return renderer_class(**kwargs)
    return None


def list_renderers() -> List[Dict[str, str]]:
    """
    List all registered renderers with their descriptions.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    renderers = []
    for name, renderer_class in _RENDERER_REGISTRY.items():
        description = renderer_class.__doc__ or "No description available"
        description = description.strip().split("\n")[0]
        renderers.append({"name": name, "description": description})
    return sorted(renderers, key=lambda x: x["name"])


def unregister_renderer(name: str) -> None:
    _RENDERER_REGISTRY.pop(name, None)


__all__ = [
    "register_renderer",
    "get_renderer",
    "list_renderers",
    "unregister_renderer",
]
