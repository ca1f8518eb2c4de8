"""
Shared models, errors and file helpers.

Defines the error kinds surfaced across the package, the verification
result type, JSON file helpers and prompt template loading.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .logging_utils import LOG


# ------------------------- Errors -------------------------

class ErrorKind(str, Enum):
    INVALID_IMPORT = "InvalidImport"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    INVALID_RESPONSE = "InvalidResponse"
    UNRESOLVED_THEME = "UnresolvedTheme"
    MALFORMED_ENTRY = "MalformedEntry"
    STORAGE_QUOTA = "StorageQuota"


class CVRenderError(Exception):
    """Base class for errors raised by cvrender."""

    kind: ErrorKind = ErrorKind.MALFORMED_ENTRY

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class InvalidImportError(CVRenderError):
    """Raised when an import payload is not an object."""

    kind = ErrorKind.INVALID_IMPORT


class StorageQuotaError(CVRenderError):
    """Raised when the persistent store is out of space."""

    kind = ErrorKind.STORAGE_QUOTA


class IntegrationError(CVRenderError):
    """Raised when an external metadata service cannot be used."""

    kind = ErrorKind.SERVICE_UNAVAILABLE


# ------------------------- Models -------------------------

@dataclass(frozen=True)
class VerificationResult:
    ok: bool
    errors: List[str]
    warnings: List[str]


# ------------------------- JSON helpers -------------------------

def load_input_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_output_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    return path


# ---------------------- Prompt Loading ----------------------

_PROMPTS_DIR = Path(__file__).parent / "transforms" / "prompts"


def load_prompt(prompt_name: str) -> Optional[str]:
    """
    Load a prompt template from a Markdown file.

    Args:
        prompt_name: Name of the prompt file (without .md extension)

    Returns:
        The prompt text, or None if the file doesn't exist or can't be read

    Example:
        >>> system = load_prompt("rewrite")
        >>> if system:
        ...     print(system[:50])
    """
    prompt_path = _PROMPTS_DIR / f"{prompt_name}.md"
    try:
        return prompt_path.read_text(encoding="utf-8")
    except OSError as e:
        LOG.error("Failed to read prompt %s: %s", prompt_path, e)
        return None


def format_prompt(prompt_name: str, **kwargs: Any) -> Optional[str]:
    """
    Load a prompt template and format it with the provided variables.

    Args:
        prompt_name: Name of the prompt file (without .md extension)
        **kwargs: Variables to substitute in the prompt template

    Returns:
        The formatted prompt text, or None if the file doesn't exist or can't be formatted
    """
    template = load_prompt(prompt_name)
    if template is None:
        return None

    try:
        return template.format(**kwargs)
    except (KeyError, IndexError, ValueError) as e:
        LOG.error("Failed to format prompt %s: %s", prompt_name, e)
        return None


def as_dict(value: Any) -> Dict[str, Any]:
    """Return value when it is a dict, else an empty dict."""
    return value if isinstance(value, dict) else {}


def as_text(value: Any) -> str:
    """Return value when it is a string (numbers are stringified), else ''."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


# ------------------------- Text helpers -------------------------

def _is_xml_char(ch: str) -> bool:
    cp = ord(ch)
    return (
        cp in (0x9, 0xA, 0xD)
        or 0x20 <= cp <= 0xD7FF
        or 0xE000 <= cp <= 0xFFFD
        or 0x10000 <= cp <= 0x10FFFF
    )


def sanitize_for_xml(text: str) -> str:
    """
    Make text safe for XML-based output formats:
    - convert NBSP to normal space
    - normalize newlines
    - strip characters invalid in XML 1.0
    """
    text = text.replace("\u00A0", " ").replace("\r\n", "\n").replace("\r", "\n")
    return "".join(ch for ch in text if _is_xml_char(ch))
