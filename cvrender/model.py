"""
Document model: the blank template, the import merger and entry operations.

Documents are plain JSON-compatible dicts using the editor's camelCase
wire keys. Every operation here returns a new document and leaves its
inputs untouched.
"""

from __future__ import annotations

import copy
import uuid
from typing import Any, Dict, List

from .logging_utils import LOG
from .shared import InvalidImportError, as_dict

# Scalar nested sections are overlaid field by field on merge.
SCALAR_SECTIONS = ("personalInfo", "coverLetter", "settings")

# List fields are substituted whole on merge.
LIST_FIELDS = (
    "experience",
    "education",
    "projects",
    "certifications",
    "volunteer",
    "awards",
    "publications",
    "interests",
    "references",
    "customSections",
    "skills",
    "languages",
)

# Category keys as used by settings.sectionOrder / settings.visibleSections.
# "custom" maps to the customSections list; "summary" has no list.
SECTION_KEYS = (
    "experience",
    "education",
    "skills",
    "projects",
    "certifications",
    "publications",
    "languages",
    "volunteer",
    "interests",
    "awards",
    "references",
    "custom",
)

CATEGORY_LIST_FIELD = {key: key for key in SECTION_KEYS}
CATEGORY_LIST_FIELD["custom"] = "customSections"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "fontScale": 1.0,
    "spacingScale": 1.0,
    "marginScale": 1.0,
    "lineHeight": 1.4,
    "sectionOrder": list(SECTION_KEYS),
    "visibleSections": {key: True for key in ("summary",) + SECTION_KEYS},
    "paperSize": "a4",
    "dateFormat": "MMM yyyy",
    "headerFont": "",
    "bodyFont": "",
    "headerStyle": "plain",
    "headerAlignment": "left",
    "photoShape": "rounded",
    "skillStyle": "tags",
    "showQrCode": False,
    "compactMode": False,
    "showDuration": True,
    "grayscale": False,
    "privacyMode": False,
    "aiTone": "professional",
    "backgroundPattern": "none",
    "glassmorphism": False,
    "watermark": False,
    "locale": "en",
}

_BLANK_DOCUMENT: Dict[str, Any] = {
    "id": "default",
    "profileName": "My Resume",
    "personalInfo": {
        "fullName": "",
        "jobTitle": "",
        "email": "",
        "phone": "",
        "address": "",
        "website": "",
        "linkedin": "",
        "github": "",
        "twitter": "",
        "behance": "",
        "dribbble": "",
        "medium": "",
        "photoUrl": "",
        "summary": "",
        "signature": "",
    },
    "coverLetter": {
        "recipientName": "Hiring Manager",
        "companyName": "",
        "jobTitle": "",
        "content": "",
    },
    "settings": DEFAULT_SETTINGS,
}
for _field in LIST_FIELDS:
    _BLANK_DOCUMENT[_field] = []

ENTRY_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "experience": {"role": "", "company": "", "location": "", "startDate": "", "endDate": "", "current": False, "description": ""},
    "education": {"school": "", "degree": "", "location": "", "startDate": "", "endDate": "", "description": ""},
    "projects": {"name": "", "description": "", "url": "", "startDate": "", "endDate": ""},
    "certifications": {"name": "", "issuer": "", "date": ""},
    "volunteer": {"role": "", "organization": "", "startDate": "", "endDate": "", "current": False, "description": ""},
    "awards": {"title": "", "issuer": "", "date": ""},
    "publications": {"title": "", "publisher": "", "date": "", "url": ""},
    "interests": {"name": ""},
    "references": {"name": "", "role": "", "company": "", "contact": ""},
    "customSections": {"name": "", "icon": "", "items": []},
    "skills": {"name": "", "level": 3},
}


def generate_id() -> str:
    return uuid.uuid4().hex


def default_document() -> Dict[str, Any]:
    """Return a fresh copy of the blank template document."""
    return copy.deepcopy(_BLANK_DOCUMENT)


def default_settings() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_SETTINGS)


def merge_document(base: Dict[str, Any], imported: Any) -> Dict[str, Any]:
    """
    Coalesce a possibly partial imported record onto a base document.

    Scalar sections (personalInfo, coverLetter, settings) are overlaid
    field by field. List fields are replaced whole when the import
    provides a list (even an empty one) and kept from the base otherwise.
    Unknown top-level keys are carried over untouched.

    Args:
        base: Complete document providing defaults
        imported: Partial document, typically parsed JSON

    Returns:
        New document in which every list field is a list

    Raises:
        InvalidImportError: If imported is not an object
    """
    if not isinstance(imported, dict):
        raise InvalidImportError(
            f"import payload must be an object, got {type(imported).__name__}"
        )

    base = as_dict(base)
    merged = copy.deepcopy(base)

    for key, value in imported.items():
        if key in SCALAR_SECTIONS:
            section = dict(as_dict(merged.get(key)))
            if isinstance(value, dict):
                section.update(copy.deepcopy(value))
            else:
                LOG.debug("Ignoring non-object %s in import", key)
            merged[key] = section
        elif key in LIST_FIELDS:
            if isinstance(value, list):
                merged[key] = copy.deepcopy(value)
            elif value is not None:
                LOG.debug("Ignoring non-list %s in import", key)
        else:
            merged[key] = copy.deepcopy(value)

    for key in SCALAR_SECTIONS:
        if not isinstance(merged.get(key), dict):
            merged[key] = {}
    for key in LIST_FIELDS:
        if not isinstance(merged.get(key), list):
            merged[key] = []
    return merged


def normalize_document(document: Any) -> Dict[str, Any]:
    """Merge a document over the blank template so every field exists."""
    return merge_document(default_document(), document)


# ------------------------- Entry operations -------------------------

def _list_field(category: str) -> str:
    field = CATEGORY_LIST_FIELD.get(category, category)
    if field not in LIST_FIELDS:
        raise ValueError(f"Unknown category: {category!r}")
    return field


def _copy_with_list(document: Dict[str, Any], field: str) -> tuple:
    new_document = copy.deepcopy(document)
    entries = new_document.get(field)
    if not isinstance(entries, list):
        entries = []
        new_document[field] = entries
    return new_document, entries


def new_entry(category: str) -> Dict[str, Any]:
    """Create a blank entry for category with a fresh identifier."""
    field = _list_field(category)
    if field == "languages":
        raise ValueError("languages are plain strings, not entries")
    entry = copy.deepcopy(ENTRY_TEMPLATES[field])
    entry["id"] = generate_id()
    return entry


def add_entry(document: Dict[str, Any], category: str, entry: Any = None) -> Dict[str, Any]:
    """Prepend an entry (a blank one by default) to a category."""
    field = _list_field(category)
    new_document, entries = _copy_with_list(document, field)
    if entry is None:
        entry = new_entry(category)
    elif isinstance(entry, dict):
        entry = copy.deepcopy(entry)
        entry.setdefault("id", generate_id())
    entries.insert(0, entry)
    return new_document


def remove_entry(document: Dict[str, Any], category: str, index: int) -> Dict[str, Any]:
    field = _list_field(category)
    new_document, entries = _copy_with_list(document, field)
    if 0 <= index < len(entries):
        del entries[index]
    return new_document


def duplicate_entry(document: Dict[str, Any], category: str, index: int) -> Dict[str, Any]:
    """Insert a copy of an entry right after it, under a fresh identifier."""
    field = _list_field(category)
    new_document, entries = _copy_with_list(document, field)
    if 0 <= index < len(entries):
        clone = copy.deepcopy(entries[index])
        if isinstance(clone, dict):
            clone["id"] = generate_id()
        entries.insert(index + 1, clone)
    return new_document


def update_entry(document: Dict[str, Any], category: str, index: int, changes: Dict[str, Any]) -> Dict[str, Any]:
    field = _list_field(category)
    new_document, entries = _copy_with_list(document, field)
    if 0 <= index < len(entries) and isinstance(entries[index], dict):
        updated = dict(entries[index])
        updated.update(copy.deepcopy(changes))
        updated["id"] = entries[index].get("id", updated.get("id"))
        entries[index] = updated
    return new_document


def move_entry(document: Dict[str, Any], category: str, from_index: int, to_index: int) -> Dict[str, Any]:
    """
    Move one entry within its list.

    Out-of-range indices leave the order unchanged.
    """
    field = _list_field(category)
    new_document, entries = _copy_with_list(document, field)
    if from_index == to_index:
        return new_document
    if not (0 <= from_index < len(entries) and 0 <= to_index < len(entries)):
        return new_document
    item = entries.pop(from_index)
    entries.insert(to_index, item)
    return new_document


def update_field(document: Dict[str, Any], section: str, field: str, value: Any) -> Dict[str, Any]:
    """Set one field of a scalar section (personalInfo, coverLetter, settings)."""
    if section not in SCALAR_SECTIONS:
        raise ValueError(f"Unknown section: {section!r}")
    new_document = copy.deepcopy(document)
    target = dict(as_dict(new_document.get(section)))
    target[field] = copy.deepcopy(value)
    new_document[section] = target
    return new_document


def toggle_section(document: Dict[str, Any], key: str) -> Dict[str, Any]:
    settings = as_dict(document.get("settings"))
    visible = dict(as_dict(settings.get("visibleSections")))
    visible[key] = not visible.get(key, True)
    return update_field(document, "settings", "visibleSections", visible)


def list_entries(document: Dict[str, Any], category: str) -> List[Any]:
    entries = as_dict(document).get(_list_field(category))
    return entries if isinstance(entries, list) else []
