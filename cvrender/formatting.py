"""
Pure formatting helpers used by the rendering engine.

Date display, inline markup parsing, link sanitization, color
luminance/contrast and word counting. Nothing here touches IO and
nothing here raises on bad input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple
from urllib.parse import urlsplit

from .shared import as_dict, as_text

# ------------------------- Dates -------------------------

DATE_FORMATS = ("MM/yyyy", "MMM yyyy", "yyyy", "full")
DEFAULT_DATE_FORMAT = "MMM yyyy"
DEFAULT_LOCALE = "en"

_MONTHS_SHORT: Dict[str, Tuple[str, ...]] = {
    "en": ("", "Jan.", "Feb.", "Mar.", "Apr.", "May", "Jun.",
           "Jul.", "Aug.", "Sep.", "Oct.", "Nov.", "Dec."),
    "pt-BR": ("", "Jan.", "Fev.", "Mar.", "Abr.", "Mai.", "Jun.",
              "Jul.", "Ago.", "Set.", "Out.", "Nov.", "Dez."),
}

_MONTHS_FULL: Dict[str, Tuple[str, ...]] = {
    "en": ("", "January", "February", "March", "April", "May", "June",
           "July", "August", "September", "October", "November", "December"),
    "pt-BR": ("", "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
              "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro"),
}

PRESENT_MARKER: Dict[str, str] = {
    "en": "Present",
    "pt-BR": "Atual",
}

DATE_RANGE_SEPARATOR = " – "

_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})(?:-\d{1,2})?$")
_MONTH_YEAR_RE = re.compile(r"^(\d{1,2})/(\d{4})$")
_YEAR_RE = re.compile(r"^\d{4}$")
_DIGIT_RE = re.compile(r"\d")


def _locale_table(table: Dict[str, Tuple[str, ...]], locale: str) -> Tuple[str, ...]:
    return table.get(locale) or table[DEFAULT_LOCALE]


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _parse_year_month(text: str) -> Optional[Tuple[int, int]]:
    match = _YEAR_MONTH_RE.match(text)
    if match:
        year, month = int(match.group(1)), int(match.group(2))
    else:
        match = _MONTH_YEAR_RE.match(text)
        if not match:
            return None
        month, year = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return None
    return year, month


def format_date(value: Any, fmt: Optional[str] = DEFAULT_DATE_FORMAT, locale: str = DEFAULT_LOCALE) -> str:
    """
    Format a loosely typed date string for display.

    Accepts ``YYYY-MM``, ``YYYY-MM-DD``, ``MM/YYYY`` and ``YYYY``. Free text
    (longer than 10 characters or without digits) is passed through with
    its first letter capitalized. Anything else that fails to parse is
    returned as given.

    Args:
        value: Stored date value
        fmt: One of ``MM/yyyy``, ``MMM yyyy``, ``yyyy`` or ``full``
        locale: Month-name locale (``en`` or ``pt-BR``)

    Returns:
        Display string, possibly empty
    """
    text = as_text(value).strip()
    if not text:
        return ""
    if len(text) > 10 or not _DIGIT_RE.search(text):
        return _capitalize_first(text)
    if _YEAR_RE.match(text):
        return text

    parsed = _parse_year_month(text)
    if parsed is None:
        return text
    year, month = parsed

    if fmt == "yyyy":
        return f"{year:04d}"
    if fmt == "MM/yyyy":
        return f"{month:02d}/{year:04d}"
    if fmt == "full":
        return f"{_locale_table(_MONTHS_FULL, locale)[month]} {year:04d}"
    short = _locale_table(_MONTHS_SHORT, locale)[month].rstrip(".")
    return f"{_capitalize_first(short)} {year:04d}"


def format_date_range(
    start: Any,
    end: Any,
    current: bool = False,
    fmt: Optional[str] = DEFAULT_DATE_FORMAT,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """
    Return ``start – end`` for display.

    When ``current`` is true the stored end value is ignored and the
    localized present marker is used instead.
    """
    start_str = format_date(start, fmt, locale)
    if current:
        end_str = PRESENT_MARKER.get(locale, PRESENT_MARKER[DEFAULT_LOCALE])
    else:
        end_str = format_date(end, fmt, locale)

    if start_str and end_str:
        return f"{start_str}{DATE_RANGE_SEPARATOR}{end_str}"
    return start_str or end_str


# ------------------------- Inline markup -------------------------

SPAN_TEXT = "text"
SPAN_STRONG = "strong"
SPAN_EM = "em"

_BULLET_MARKERS = ("•", "-")
_INLINE_RE = re.compile(r"\*\*(.+?)\*\*|\*(.+?)\*")


@dataclass(frozen=True)
class Span:
    kind: str
    text: str


@dataclass(frozen=True)
class MarkupLine:
    bullet: bool
    spans: Tuple[Span, ...]

    @property
    def plain(self) -> str:
        return "".join(span.text for span in self.spans)


def parse_inline_spans(line: str) -> Tuple[Span, ...]:
    spans = []
    pos = 0
    for match in _INLINE_RE.finditer(line):
        if match.start() > pos:
            spans.append(Span(SPAN_TEXT, line[pos:match.start()]))
        if match.group(1) is not None:
            spans.append(Span(SPAN_STRONG, match.group(1)))
        else:
            spans.append(Span(SPAN_EM, match.group(2)))
        pos = match.end()
    if pos < len(line):
        spans.append(Span(SPAN_TEXT, line[pos:]))
    return tuple(spans)


def parse_markup_line(line: str) -> MarkupLine:
    stripped = line.strip()
    if stripped.startswith(_BULLET_MARKERS):
        return MarkupLine(True, parse_inline_spans(stripped[1:].strip()))
    return MarkupLine(False, parse_inline_spans(line.rstrip()))


class MarkupLines:
    """
    Lazy, restartable view of free text as rendered lines.

    Every iteration re-parses the source string, so the object can be
    iterated any number of times and always yields equal results.
    """

    def __init__(self, text: Any):
        self._text = as_text(text).replace("\r\n", "\n").replace("\r", "\n")

    def __iter__(self) -> Iterator[MarkupLine]:
        if not self._text.strip():
            return
        for line in self._text.split("\n"):
            yield parse_markup_line(line)

    def __bool__(self) -> bool:
        return bool(self._text.strip())


def parse_inline_markup(text: Any) -> MarkupLines:
    return MarkupLines(text)


# ------------------------- Links -------------------------

ALLOWED_LINK_SCHEMES = ("http", "https", "mailto")

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+\-]*):(.*)$", re.DOTALL)
_PORT_RE = re.compile(r"^\d+(?:[/?#]|$)")
_EMAIL_RE = re.compile(r"^[^\s@/:<>\"']+@[^\s@/:<>\"']+\.[^\s@/:<>\"']+$")
_HOST_RE = re.compile(r"^[\w.-]+$", re.UNICODE)
_IMAGE_DATA_RE = re.compile(r"^data:image/[a-z0-9.+-]+;base64,[A-Za-z0-9+/=\s]+$", re.IGNORECASE)


def _as_mailto(text: str) -> str:
    address = text.strip()
    return f"mailto:{address}" if _EMAIL_RE.match(address) else ""


def sanitize_link(value: Any) -> str:
    """
    Turn a free-text link field into a safe href.

    Schemeless values get ``https://``; only http, https and mailto
    survive. E-mail-like strings become mailto links. Anything else
    returns ``""`` so the caller renders plain text.

    Example:
        >>> sanitize_link("linkedin.com/in/ana")
        'https://linkedin.com/in/ana'
        >>> sanitize_link("javascript:alert(1)")
        ''
    """
    text = as_text(value).strip()
    if not text:
        return ""

    match = _SCHEME_RE.match(text)
    if match and not _PORT_RE.match(match.group(2)):
        scheme = match.group(1).lower()
        if scheme not in ALLOWED_LINK_SCHEMES:
            return ""
        if scheme == "mailto":
            return _as_mailto(match.group(2).split("?", 1)[0])
        candidate = text
    else:
        if _EMAIL_RE.match(text):
            return f"mailto:{text}"
        candidate = f"https://{text}"

    try:
        parts = urlsplit(candidate)
        host = parts.hostname
        _ = parts.port  # raises ValueError on a malformed port
    except ValueError:
        return _as_mailto(text) if "@" in text else ""

    if parts.scheme not in ("http", "https") or not host or not _HOST_RE.match(host):
        return _as_mailto(text) if "@" in text else ""
    if "." not in host and host != "localhost":
        return ""
    return parts.geturl()


def sanitize_image_source(value: Any) -> str:
    """Accept embedded ``data:image/...`` payloads and http(s) URLs only."""
    text = as_text(value).strip()
    if not text:
        return ""
    if text.lower().startswith("data:"):
        return text if _IMAGE_DATA_RE.match(text) else ""
    link = sanitize_link(text)
    return link if link.startswith(("http://", "https://")) else ""


# ------------------------- Colors -------------------------

# Readable text color flips at this luminance (dark text on light surfaces).
CONTRAST_THRESHOLD = 128
# Colors at or above this luminance are too pale to carry a solid accent.
TOO_LIGHT_THRESHOLD = 200

DARK_TEXT = "#0f172a"
LIGHT_TEXT = "#ffffff"

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex_color(color: Any) -> Optional[Tuple[int, int, int]]:
    match = _HEX_RE.match(as_text(color).strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def normalize_hex(color: Any) -> Optional[str]:
    rgb = parse_hex_color(color)
    if rgb is None:
        return None
    return "#%02x%02x%02x" % rgb


def luminance(color: Any) -> float:
    """Perceptual luminance (0-255); unparsable colors count as black."""
    rgb = parse_hex_color(color)
    if rgb is None:
        return 0.0
    r, g, b = rgb
    return 0.299 * r + 0.587 * g + 0.114 * b


def contrast_color(color: Any) -> str:
    return DARK_TEXT if luminance(color) >= CONTRAST_THRESHOLD else LIGHT_TEXT


def is_too_light(color: Any) -> bool:
    return luminance(color) >= TOO_LIGHT_THRESHOLD


def is_dark(color: Any) -> bool:
    return contrast_color(color) == LIGHT_TEXT


def with_alpha(color: Any, alpha_hex: str) -> str:
    """Append a two-digit hex alpha, e.g. ``with_alpha("#3b82f6", "1a")``."""
    normalized = normalize_hex(color)
    if normalized is None:
        return as_text(color)
    return f"{normalized}{alpha_hex}"


# ------------------------- Word count -------------------------

def _entry_texts(entries: Any, *fields: str) -> Iterator[str]:
    if not isinstance(entries, list):
        return
    for entry in entries:
        entry = as_dict(entry)
        yield " ".join(as_text(entry.get(field)) for field in fields)


def count_words(document: Dict[str, Any]) -> int:
    """Count whitespace-separated tokens across the user-visible text fields."""
    document = as_dict(document)
    info = as_dict(document.get("personalInfo"))
    texts = [
        as_text(info.get("summary")),
        as_text(info.get("fullName")),
        as_text(info.get("jobTitle")),
    ]
    texts.extend(_entry_texts(document.get("experience"), "role", "company", "description"))
    texts.extend(_entry_texts(document.get("education"), "school", "degree"))
    texts.extend(_entry_texts(document.get("projects"), "name", "description"))
    texts.extend(_entry_texts(document.get("skills"), "name"))
    return len(" ".join(texts).split())
