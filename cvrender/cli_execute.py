"""
CLI Phase 3: Execute.

Runs the configured listing, verification, render or transform with the
paths resolved during preparation.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, List, Optional

from .cli_config import TransformStage, UserConfig
from .document_io import import_payload, read_payload, unwrap_envelope
from .logging_utils import LOG, fmt_issues
from .renderers import get_renderer, list_renderers
from .rendering import list_layouts
from .shared import write_output_json
from .themes import list_themes
from .transforms import AIConfig, TextTransformAdapter, list_transforms
from .verification import verify_document

_LISTINGS = {
    "themes": list_themes,
    "renderers": list_renderers,
    "layouts": list_layouts,
    "transforms": list_transforms,
}


def _print_listing(kind: str) -> None:
    for item in _LISTINGS[kind]():
        print(f"{item['name']:<24} {item['description']}")


def _verify(config: UserConfig, payload: Any) -> int:
    result = verify_document(unwrap_envelope(payload))
    icon = "🟢" if result.ok and not result.warnings else ("🟡" if result.ok else "❌")
    print(f"{icon} {config.data.name}: {fmt_issues(result.errors, result.warnings)}")
    if not result.ok:
        return 1
    if config.strict and result.warnings:
        LOG.error("Strict mode: verification warnings treated as failure.")
        return 2
    return 0


def _run_transform(stage: TransformStage, document: Optional[Dict[str, Any]]) -> int:
    payload: Dict[str, Any] = dict(stage.params)
    if document is not None:
        payload.setdefault("document", document)

    adapter = TextTransformAdapter(config=AIConfig(provider=stage.provider, model=stage.model))
    result = adapter.transform(stage.operation, payload)

    out = {"operation": stage.operation, "ok": result.ok, "value": result.value}
    if not result.ok:
        out["error"] = {"kind": result.error_kind.value if result.error_kind else None, "message": result.message}

    if stage.output is not None:
        write_output_json(stage.output, out)
        LOG.info("Wrote %s", stage.output)
    else:
        json.dump(out, sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
    return 0 if result.ok else 1


def execute_pipeline(config: UserConfig) -> int:
    """
    Phase 3: Execute the requested operations.

    Returns exit code (0 = success, 1 = failure, 2 = strict mode warnings).
    """
    if config.list_kind:
        _print_listing(config.list_kind)
        if not (config.verify or config.render or config.transform):
            return 0

    payload = read_payload(config.data) if config.data is not None else None

    exit_codes: List[int] = []
    if config.verify:
        exit_codes.append(_verify(config, payload))
        if exit_codes[-1] == 1:
            return 1

    # Verification sees the raw file; everything else works on the merged document
    document = import_payload(None, payload) if payload is not None else None

    if config.render:
        stage = config.render
        renderer = get_renderer(stage.format)
        out = renderer.render(document, stage.output, theme=stage.theme, mode=stage.mode)
        LOG.info("Rendered %s (%s, %s)", out, stage.format, stage.mode)
        print(str(out))
        exit_codes.append(0)

    if config.transform:
        exit_codes.append(_run_transform(config.transform, document))

    return max(exit_codes, default=0)
