"""
Transform registry for managing named text transforms.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Type

from .base import TextTransform

# Global transform registry
_TRANSFORM_REGISTRY: Dict[str, Type[TextTransform]] = {}


def register_transform(transform_class: Type[TextTransform]) -> None:
    """
    Register a transform class in the global registry.

    Args:
        transform_class: The transform class to register
    """
    instance = transform_class()
    _TRANSFORM_REGISTRY[instance.name()] = transform_class


def get_transform(name: str, **kwargs) -> Optional[TextTransform]:
    """
    Get a transform instance by name.

    Returns:
        Transform instance, or None if not found
    """
    transform_class = _TRANSFORM_REGISTRY.get(name)
    if transform_class:
        return transform_class(**kwargs)
    return None


def list_transforms() -> List[Dict[str, str]]:
    """
    List all registered transforms with their descriptions.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    transforms = []
    for name, transform_class in _TRANSFORM_REGISTRY.items():
        instance = transform_class()
        transforms.append({"name": name, "description": instance.description()})
    return sorted(transforms, key=lambda x: x["name"])


def unregister_transform(name: str) -> None:
    _TRANSFORM_REGISTRY.pop(name, None)


__all__ = [
    "register_transform",
    "get_transform",
    "list_transforms",
    "unregister_transform",
]
