"""
Helpers for reading structured values out of model output.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional


def strip_markdown_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```json"):
        text = text[len("```json") :]
    elif text.startswith("```"):
        text = text[len("```") :]
    if text.endswith("```"):
        text = text[: -len("```")]
    return text.strip()


def _loads_between(text: str, open_ch: str, close_ch: str) -> Any:
    start = text.find(open_ch)
    end = text.rfind(close_ch)
    if start == -1 or end == -1 or end <= start:
        return None
    try:
        return json.loads(text[start : end + 1])
    except ValueError:
        return None


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """
    Robustly extract a JSON object from model output.

    Handles:
    - pure JSON
    - fenced code blocks
    - extra commentary around JSON
    """
    if not isinstance(text, str):
        return None

    cleaned = strip_markdown_fences(text)
    try:
        obj = json.loads(cleaned)
        return obj if isinstance(obj, dict) else None
    except ValueError:
        pass

    obj = _loads_between(cleaned, "{", "}")
    return obj if isinstance(obj, dict) else None


def extract_json_array(text: str) -> Optional[List[Any]]:
    """Like extract_json_object, for a top-level JSON array."""
    if not isinstance(text, str):
        return None

    cleaned = strip_markdown_fences(text)
    try:
        obj = json.loads(cleaned)
        return obj if isinstance(obj, list) else None
    except ValueError:
        pass

    obj = _loads_between(cleaned, "[", "]")
    return obj if isinstance(obj, list) else None
