"""
AI text-transform adapter and its built-in transforms.
"""

from __future__ import annotations

from .adapter import TextTransformAdapter, TransformResult, normalize_payload
from .base import TextTransform
from .openai_client import AIConfig, OpenAITextClient
from .operations import BUILTIN_TRANSFORMS
from .transform_registry import get_transform, list_transforms, register_transform, unregister_transform

for _transform_class in BUILTIN_TRANSFORMS:
    register_transform(_transform_class)


__all__ = [
    "AIConfig",
    "OpenAITextClient",
    "TextTransform",
    "TextTransformAdapter",
    "TransformResult",
    "get_transform",
    "list_transforms",
    "normalize_payload",
    "register_transform",
    "unregister_transform",
]
