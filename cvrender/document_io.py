"""
Document import/export: the versioned JSON envelope, file helpers and the
one-way plain-text projection.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from .formatting import DEFAULT_DATE_FORMAT, DEFAULT_LOCALE, format_date_range, parse_inline_markup
from .logging_utils import LOG
from .model import default_document, list_entries, merge_document
from .rendering.context import LABELS
from .shared import InvalidImportError, as_dict, as_text, load_input_json, write_output_json

ENVELOPE_VERSION = 1


def export_envelope(document: Dict[str, Any]) -> Dict[str, Any]:
    return {"version": ENVELOPE_VERSION, "data": document}


def is_envelope(payload: Any) -> bool:
    return isinstance(payload, dict) and "version" in payload and "data" in payload


def import_payload(base: Optional[Dict[str, Any]], payload: Any) -> Dict[str, Any]:
    """
    Merge an imported payload onto base.

    Accepts both the enveloped form ``{"version": 1, "data": {...}}`` and a
    bare document. Envelopes from a newer version are still merged, with a
    warning.

    Args:
        base: Document providing defaults (the blank template when None)
        payload: Parsed JSON

    Returns:
        Merged document

    Raises:
        InvalidImportError: If the payload (or its data) is not an object
    """
    if base is None:
        base = default_document()
    if not isinstance(payload, dict):
        raise InvalidImportError(f"import payload must be an object, got {type(payload).__name__}")

    if is_envelope(payload):
        version = payload.get("version")
        if isinstance(version, int) and not isinstance(version, bool) and version > ENVELOPE_VERSION:
            LOG.warning("Import envelope version %s is newer than supported version %s; merging anyway.",
                        version, ENVELOPE_VERSION)
        data = payload.get("data")
        if not isinstance(data, dict):
            raise InvalidImportError("import envelope 'data' must be an object")
        payload = data

    return merge_document(base, payload)


def read_payload(path: Path) -> Any:
    """
    Parse a JSON file without merging it.

    Raises:
        InvalidImportError: If the file is not valid JSON
    """
    try:
        return load_input_json(path)
    except ValueError as e:
        raise InvalidImportError(f"{path.name}: not valid JSON ({e})") from e


def unwrap_envelope(payload: Any) -> Any:
    return payload.get("data") if is_envelope(payload) else payload


def load_document_file(path: Path, base: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Read a JSON file (enveloped or bare) and merge it onto base.

    Raises:
        InvalidImportError: If the file is not valid JSON or not an object
    """
    return import_payload(base, read_payload(path))


def save_document_file(document: Dict[str, Any], path: Path, *, envelope: bool = True) -> Path:
    return write_output_json(path, export_envelope(document) if envelope else document)


# ------------------------- Plain text -------------------------

def _plain_lines(value: Any) -> List[str]:
    return [("• " if line.bullet else "") + line.plain for line in parse_inline_markup(value)]


def export_plain_text(document: Dict[str, Any]) -> str:
    """
    Project a document into a human-readable text block.

    Covers name, title, contact line, summary, experience, education and
    skills. The result is not meant to be imported back.
    """
    document = as_dict(document)
    info = as_dict(document.get("personalInfo"))
    settings = as_dict(document.get("settings"))
    locale = as_text(settings.get("locale")) or DEFAULT_LOCALE
    labels = LABELS.get(locale, LABELS[DEFAULT_LOCALE])
    fmt = as_text(settings.get("dateFormat")) or DEFAULT_DATE_FORMAT

    blocks: List[List[str]] = []

    head = [as_text(info.get(key)).strip() for key in ("fullName", "jobTitle")]
    contact = " | ".join(
        v for v in (as_text(info.get(k)).strip() for k in ("email", "phone", "address", "linkedin", "website")) if v
    )
    blocks.append([line for line in head + [contact] if line])

    summary = _plain_lines(info.get("summary"))
    if summary:
        blocks.append([labels["summary"].upper()] + summary)

    experience = [e for e in list_entries(document, "experience") if isinstance(e, dict)]
    if experience:
        lines = [labels["experience"].upper()]
        for exp in experience:
            title = " @ ".join(v for v in (as_text(exp.get("role")), as_text(exp.get("company"))) if v)
            dates = format_date_range(exp.get("startDate"), exp.get("endDate"), exp.get("current") is True, fmt, locale)
            lines.append(f"{title} ({dates})" if dates else title)
            lines.extend(_plain_lines(exp.get("description")))
            lines.append("")
        blocks.append(lines[:-1])

    education = [e for e in list_entries(document, "education") if isinstance(e, dict)]
    if education:
        lines = [labels["education"].upper()]
        for edu in education:
            title = ", ".join(v for v in (as_text(edu.get("degree")), as_text(edu.get("school"))) if v)
            dates = format_date_range(edu.get("startDate"), edu.get("endDate"), False, fmt, locale)
            lines.append(f"{title} ({dates})" if dates else title)
        blocks.append(lines)

    skills = [as_text(as_dict(s).get("name")).strip() for s in list_entries(document, "skills")]
    skills = [s for s in skills if s]
    if skills:
        blocks.append([labels["skills"].upper(), ", ".join(skills)])

    return "\n\n".join("\n".join(block) for block in blocks if block) + "\n"
