"""
Base interface for text transforms.

Each transform is one request/response round trip to the text-generation
service: it validates its payload, builds the instruction from a prompt
template, parses the reply and knows the value to fall back to.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..shared import format_prompt


class TextTransform(ABC):
    """
    Abstract base class for text transforms.
    """

    #: Prompt template under transforms/prompts (without .md)
    prompt_name: str = ""
    #: Ask the service for a JSON object reply
    json_mode: bool = False
    #: Payload keys that must be present
    required: tuple = ()

    @abstractmethod
    def name(self) -> str:
        """
        Return the unique name/identifier for this transform.

        Returns:
            String identifier used in CLI (e.g., "rewrite")
        """
        ...

    @abstractmethod
    def description(self) -> str:
        ...

    @abstractmethod
    def user_message(self, payload: Dict[str, Any]) -> str:
        """Build the user message carrying the structured context."""
        ...

    @abstractmethod
    def parse(self, content: str) -> Any:
        """
        Parse the service reply.

        Raises:
            ValueError: If the reply cannot be used
        """
        ...

    @abstractmethod
    def fallback(self, payload: Dict[str, Any]) -> Any:
        """Value returned when the service cannot be used."""
        ...

    def validate_params(self, **kwargs) -> None:
        """
        Validate that required parameters are present.

        Raises:
            ValueError: If required parameters are missing
        """
        missing = [key for key in self.required if key not in kwargs or kwargs[key] is None]
        if missing:
            raise ValueError(f"Transform '{self.name()}' requires parameter(s): {', '.join(missing)}")

    def is_noop(self, payload: Dict[str, Any]) -> bool:
        """True when the payload needs no round trip at all (e.g. empty text)."""
        return False

    def prompt_vars(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return {}

    def system_prompt(self, payload: Dict[str, Any]) -> Optional[str]:
        return format_prompt(self.prompt_name, **self.prompt_vars(payload))

    @staticmethod
    def to_json(value: Any) -> str:
        return json.dumps(value, ensure_ascii=False)
