"""
CLI configuration data structures.

Defines stage configuration dataclasses and UserConfig used across
the three-phase CLI architecture.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

LIST_KINDS = ("themes", "renderers", "layouts", "transforms")


@dataclass
class RenderStage:
    """Configuration for the render stage."""
    format: str  # Registered renderer name (html, docx, text)
    output: Optional[Path] = None  # Defaults to <data stem><suffix> next to the data file
    theme: Optional[str] = None  # Theme id; the default theme when omitted
    mode: str = "resume"  # resume or cover


@dataclass
class TransformStage:
    """Configuration for a single AI text transform."""
    operation: str
    params: Dict[str, str] = field(default_factory=dict)
    model: Optional[str] = None
    provider: str = "openai"
    output: Optional[Path] = None  # Result JSON; printed to stdout when omitted


@dataclass
class UserConfig:
    """Configuration gathered from user input."""

    data: Optional[Path] = None  # Document JSON (enveloped or bare)

    render: Optional[RenderStage] = None
    transform: Optional[TransformStage] = None
    list_kind: Optional[str] = None
    verify: bool = False

    # Execution settings
    strict: bool = False
    debug: bool = False
    verbosity: int = 0
    log_file: Optional[str] = None

    @property
    def has_render(self) -> bool:
        return self.render is not None

    @property
    def has_transform(self) -> bool:
        return self.transform is not None
