"""
Text-transform adapter.

One entry point for every transform: validate the payload, short-circuit
when the service is not configured, run a single request and parse the
reply. Failures never raise to the caller; they come back as a
TransformResult carrying the transform's fallback value.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..logging_utils import LOG
from ..shared import ErrorKind
from .openai_client import AIConfig, OpenAITextClient
from .transform_registry import get_transform


@dataclass(frozen=True)
class TransformResult:
    value: Any
    ok: bool = True
    error_kind: Optional[ErrorKind] = None
    message: str = ""


def normalize_payload(payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Accept both ``job-title`` and ``job_title`` style keys."""
    return {str(key).replace("-", "_"): value for key, value in (payload or {}).items()}


class TextTransformAdapter:
    """
    Runs named transforms against a text-generation client.

    Args:
        client: Object with ``available`` and ``complete(system, user, *, json_mode)``;
            an OpenAITextClient built from config when omitted
        config: AIConfig used to build the default client
    """

    def __init__(self, client: Any = None, config: Optional[AIConfig] = None):
        self.config = config or AIConfig()
        self.client = client if client is not None else OpenAITextClient(self.config)

    def transform(self, operation: str, payload: Optional[Dict[str, Any]] = None) -> TransformResult:
        """
        Run one transform.

        Raises:
            ValueError: If the operation is unknown or the payload is missing required fields
        """
        transform = get_transform(operation)
        if transform is None:
            raise ValueError(f"Unknown transform: {operation!r}")

        payload = normalize_payload(payload)
        transform.validate_params(**payload)
        fallback = transform.fallback(payload)

        if transform.is_noop(payload):
            return TransformResult(fallback)

        if not getattr(self.client, "available", False):
            LOG.warning("%s skipped: AI service unavailable or API key missing.", operation)
            return TransformResult(fallback, False, ErrorKind.SERVICE_UNAVAILABLE,
                                   "AI service unavailable or API key missing")

        system = transform.system_prompt(payload)
        if not system:
            LOG.warning("%s skipped: failed to load prompt template.", operation)
            return TransformResult(fallback, False, ErrorKind.SERVICE_UNAVAILABLE,
                                   "prompt template unavailable")

        try:
            content = self.client.complete(system, transform.user_message(payload), json_mode=transform.json_mode)
        except Exception as e:
            LOG.warning("%s error (%s); keeping existing data.", operation, type(e).__name__)
            return TransformResult(fallback, False, ErrorKind.SERVICE_UNAVAILABLE, str(e))

        if not content or not content.strip():
            LOG.warning("%s: empty completion; keeping existing data.", operation)
            return TransformResult(fallback, False, ErrorKind.INVALID_RESPONSE, "empty completion")

        try:
            value = transform.parse(content)
        except (ValueError, ArithmeticError) as e:
            LOG.warning("%s: unusable response (%s); keeping existing data.", operation, e)
            return TransformResult(fallback, False, ErrorKind.INVALID_RESPONSE, str(e))

        LOG.debug("%s completed", operation)
        return TransformResult(value)

    async def atransform(self, operation: str, payload: Optional[Dict[str, Any]] = None) -> TransformResult:
        """Awaitable transform; the blocking request runs in a worker thread."""
        return await asyncio.to_thread(self.transform, operation, payload)
