"""
OpenAI chat-completions client used by the text-transform adapter.

Supports the OpenAI API directly and OpenRouter through its
OpenAI-compatible endpoint.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

try:
    from openai import OpenAI  # type: ignore
except Exception:  # pragma: no cover
    OpenAI = None  # type: ignore

from ..logging_utils import LOG

PROVIDER_OPENAI = "openai"
PROVIDER_OPENROUTER = "openrouter"
PROVIDERS = (PROVIDER_OPENAI, PROVIDER_OPENROUTER)

DEFAULT_MODELS = {
    PROVIDER_OPENAI: "gpt-4o-mini",
    PROVIDER_OPENROUTER: "google/gemini-2.0-flash-001",
}
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
_API_KEY_ENV = {
    PROVIDER_OPENAI: "OPENAI_API_KEY",
    PROVIDER_OPENROUTER: "OPENROUTER_API_KEY",
}


@dataclass(frozen=True)
class AIConfig:
    """
    Connection settings for the text-generation service.

    Attributes:
        provider: "openai" or "openrouter"
        api_key: Credential; read from the provider's environment variable when empty
        model: Model name; the provider default when empty
        base_url: Endpoint override
        timeout: Request timeout in seconds
    """

    provider: str = PROVIDER_OPENAI
    api_key: Optional[str] = None
    model: Optional[str] = None
    base_url: Optional[str] = None
    timeout: float = 60.0

    def __post_init__(self):
        if self.provider not in PROVIDERS:
            raise ValueError(f"Unknown AI provider: {self.provider!r} (expected one of {', '.join(PROVIDERS)})")

    @property
    def resolved_api_key(self) -> Optional[str]:
        return self.api_key or os.environ.get(_API_KEY_ENV[self.provider]) or None

    @property
    def resolved_model(self) -> str:
        return self.model or DEFAULT_MODELS[self.provider]

    @property
    def resolved_base_url(self) -> Optional[str]:
        if self.base_url:
            return self.base_url
        return OPENROUTER_BASE_URL if self.provider == PROVIDER_OPENROUTER else None


class OpenAITextClient:
    """Thin wrapper over ``client.chat.completions.create``."""

    def __init__(self, config: Optional[AIConfig] = None):
        self.config = config or AIConfig()
        self._client = None

    @property
    def available(self) -> bool:
        return OpenAI is not None and bool(self.config.resolved_api_key)

    def _get_client(self):
        if self._client is None:
            kwargs = {"api_key": self.config.resolved_api_key, "timeout": self.config.timeout}
            if self.config.resolved_base_url:
                kwargs["base_url"] = self.config.resolved_base_url
            self._client = OpenAI(**kwargs)
        return self._client

    def complete(self, system: str, user: str, *, json_mode: bool = False) -> str:
        """
        Run one chat completion and return the message text ('' when empty).

        Raises:
            RuntimeError: If the client is not available
            Exception: Whatever the SDK raises for network or API errors
        """
        if not self.available:
            raise RuntimeError("OpenAI unavailable or API key missing")

        kwargs = {
            "model": self.config.resolved_model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": 0.4,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        LOG.debug("AI request: model=%s json=%s", kwargs["model"], json_mode)
        completion = self._get_client().chat.completions.create(**kwargs)
        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""
