# cvrender/__init__.py

from .document_io import export_envelope, export_plain_text, import_payload, load_document_file, save_document_file
from .editor import ResumeEditor
from .history import EditHistory
from .model import default_document, merge_document, normalize_document
from .rendering import render
from .themes import THEMES, get_theme, list_themes
from .transforms import TextTransformAdapter, TransformResult
from .verification import verify_document

__all__ = [
    "THEMES",
    "EditHistory",
    "ResumeEditor",
    "TextTransformAdapter",
    "TransformResult",
    "default_document",
    "export_envelope",
    "export_plain_text",
    "get_theme",
    "import_payload",
    "list_themes",
    "load_document_file",
    "merge_document",
    "normalize_document",
    "render",
    "save_document_file",
    "verify_document",
]
