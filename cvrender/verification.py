"""
Structural verification of documents.

Reports problems without fixing them: the renderer tolerates all of
these, but the editor surfaces them to the user.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .model import LIST_FIELDS, SECTION_KEYS
from .shared import VerificationResult, as_dict


def _check_entries(field: str, entries: List[Any], errs: List[str], warns: List[str]) -> None:
    if field == "languages":
        for idx, value in enumerate(entries):
            if not isinstance(value, str):
                warns.append(f"languages[{idx}] must be a string")
        return

    seen = set()
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            warns.append(f"{field}[{idx}] must be an object")
            continue
        entry_id = entry.get("id")
        if not entry_id:
            warns.append(f"{field}[{idx}] missing id")
        elif isinstance(entry_id, bool) or not isinstance(entry_id, (str, int)):
            warns.append(f"{field}[{idx}].id must be a string")
        elif entry_id in seen:
            warns.append(f"{field}[{idx}] duplicate id: {entry_id}")
        else:
            seen.add(entry_id)

        if field == "skills":
            level = entry.get("level")
            if not isinstance(level, (int, float)) or isinstance(level, bool) or not 1 <= level <= 5:
                warns.append(f"skills[{idx}].level must be between 1 and 5")
        if field == "customSections":
            items = entry.get("items")
            if items is not None and not isinstance(items, list):
                warns.append(f"customSections[{idx}].items must be an array")


def verify_document(document: Any) -> VerificationResult:
    """
    Verify document structure.

    Errors: the document or one of its list fields has the wrong type.
    Warnings: malformed, unidentified or duplicated entries, out-of-range
    skill levels and unknown section keys.

    Returns:
        VerificationResult with ok=True when there are no errors
    """
    if not isinstance(document, dict):
        return VerificationResult(ok=False, errors=["document must be an object"], warnings=[])

    errs: List[str] = []
    warns: List[str] = []

    for section in ("personalInfo", "settings", "coverLetter"):
        if section in document and not isinstance(document[section], dict):
            errs.append(f"{section} must be an object")

    for field in LIST_FIELDS:
        entries = document.get(field)
        if entries is None:
            continue
        if not isinstance(entries, list):
            errs.append(f"{field} must be an array")
            continue
        _check_entries(field, entries, errs, warns)

    settings: Dict[str, Any] = as_dict(document.get("settings"))
    order = settings.get("sectionOrder")
    if order is not None:
        if not isinstance(order, list):
            errs.append("settings.sectionOrder must be an array")
        else:
            for key in order:
                if key not in SECTION_KEYS:
                    warns.append(f"settings.sectionOrder has unknown section: {key}")

    return VerificationResult(ok=not errs, errors=errs, warnings=warns)
