"""
Render context: the resolved view of (document, theme, settings, mode)
shared by every layout and component.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..formatting import DATE_FORMATS, DEFAULT_DATE_FORMAT, DEFAULT_LOCALE, normalize_hex
from ..logging_utils import LOG
from ..model import DEFAULT_SETTINGS, SECTION_KEYS
from ..shared import as_dict, as_text
from ..themes import Theme, ThemeOverrides, get_overrides

HEADER_STYLES = ("plain", "underline", "boxed", "left-bar", "gradient")
_HEADER_STYLE_ALIASES = {"simple": "plain", "box": "boxed"}

SKILL_STYLES = ("tags", "bar", "dots", "circles", "hidden")
PHOTO_SHAPES = ("square", "rounded", "circle")
PAPER_SIZES_MM = {"a4": (210, 297), "letter": (216, 279)}

DEFAULT_FONT = "sans-serif"

# Font class names saved by the web editor, mapped to CSS families.
FONT_CLASSES = {
    "font-sans": "Inter, sans-serif",
    "font-serif": "Merriweather, serif",
    "font-mono": "'Roboto Mono', monospace",
    "font-display": "Poppins, sans-serif",
    "font-lato": "Lato, sans-serif",
    "font-open": "'Open Sans', sans-serif",
    "font-montserrat": "Montserrat, sans-serif",
    "font-raleway": "Raleway, sans-serif",
    "font-[Oswald]": "Oswald, sans-serif",
    "font-[Playfair_Display]": "'Playfair Display', serif",
    "font-dyslexic": "'Comic Neue', cursive",
}

_FONT_FAMILY_RE = re.compile(r"[A-Za-z0-9 ,_-]+")

LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "summary": "Summary",
        "about": "About",
        "contact": "Contact",
        "experience": "Experience",
        "education": "Education",
        "skills": "Skills",
        "projects": "Projects",
        "certifications": "Certifications",
        "publications": "Publications",
        "languages": "Languages",
        "volunteer": "Volunteering",
        "interests": "Interests",
        "awards": "Awards",
        "references": "References",
        "custom": "Additional",
        "closing": "Sincerely,",
        "watermark": "CONFIDENTIAL",
    },
    "pt-BR": {
        "summary": "Resumo",
        "about": "Sobre",
        "contact": "Contato",
        "experience": "Experiência",
        "education": "Educação",
        "skills": "Habilidades",
        "projects": "Projetos",
        "certifications": "Certificações",
        "publications": "Publicações",
        "languages": "Idiomas",
        "volunteer": "Voluntariado",
        "interests": "Interesses",
        "awards": "Prêmios",
        "references": "Referências",
        "custom": "Adicional",
        "closing": "Atenciosamente,",
        "watermark": "CONFIDENCIAL",
    },
}


def _as_float(value: Any, default: float, low: float = 0.5, high: float = 3.0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return default
    try:
        number = float(value)
    except ValueError:
        return default
    if number != number:  # NaN
        return default
    return min(max(number, low), high)


def _choice(value: Any, allowed: tuple, default: str) -> str:
    value = as_text(value)
    return value if value in allowed else default


def _font_family(value: Any, default: str) -> str:
    """
    Resolve a font setting to a CSS font-family list.

    Editor class names are mapped; anything else must be a plain comma
    separated list of names, otherwise the default is used.
    """
    text = as_text(value).strip()
    if not text:
        return default
    if text in FONT_CLASSES:
        return FONT_CLASSES[text]
    if not _FONT_FAMILY_RE.fullmatch(text):
        LOG.debug("Ignoring unsupported font value %r", text)
        return default
    return text


def effective_settings(document: Dict[str, Any], settings: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Defaults, then the document's settings, then explicit settings."""
    merged = dict(DEFAULT_SETTINGS)
    merged.update(as_dict(document.get("settings")))
    if settings:
        merged.update(as_dict(settings))
    return merged


@dataclass(frozen=True)
class RenderContext:
    document: Dict[str, Any]
    theme: Theme
    overrides: ThemeOverrides
    settings: Dict[str, Any]
    mode: str
    primary: str
    accent: str
    secondary: str
    text_color: str
    page_bg: str
    header_font: str
    body_font: str
    date_format: str
    locale: str
    header_style: str
    skill_style: str
    photo_shape: str
    paper_size: str
    font_scale: float
    spacing_scale: float
    margin_scale: float
    line_height: float

    @property
    def info(self) -> Dict[str, Any]:
        return as_dict(self.document.get("personalInfo"))

    @property
    def cover_letter(self) -> Dict[str, Any]:
        return as_dict(self.document.get("coverLetter"))

    @property
    def show_duration(self) -> bool:
        return bool(self.settings.get("showDuration"))

    def flag(self, key: str) -> bool:
        return bool(self.settings.get(key))

    def label(self, key: str) -> str:
        table = LABELS.get(self.locale) or LABELS[DEFAULT_LOCALE]
        return table.get(key, key.title())

    def is_visible(self, key: str) -> bool:
        """Only an explicit ``False`` hides a section."""
        visible = as_dict(self.settings.get("visibleSections"))
        return visible.get(key, True) is not False

    def section_order(self) -> List[str]:
        order = self.settings.get("sectionOrder")
        if not isinstance(order, list):
            order = list(SECTION_KEYS)
        seen = []
        for key in order:
            if key in SECTION_KEYS and key not in seen:
                seen.append(key)
        return seen


def build_context(document: Dict[str, Any], theme: Theme, settings: Optional[Dict[str, Any]], mode: str) -> RenderContext:
    merged = effective_settings(document, settings)
    colors = theme.colors
    fonts = theme.fonts

    primary = normalize_hex(merged.get("primaryColor")) or colors.primary
    header_style = as_text(merged.get("headerStyle"))
    header_style = _HEADER_STYLE_ALIASES.get(header_style, header_style)
    locale = as_text(merged.get("locale")) or DEFAULT_LOCALE

    return RenderContext(
        document=document,
        theme=theme,
        overrides=get_overrides(theme),
        settings=merged,
        mode=mode,
        primary=primary,
        accent=colors.accent,
        secondary=colors.secondary,
        text_color=colors.text,
        page_bg=colors.bg,
        header_font=_font_family(merged.get("headerFont"), _font_family(fonts.header if fonts else None, DEFAULT_FONT)),
        body_font=_font_family(merged.get("bodyFont"), _font_family(fonts.body if fonts else None, DEFAULT_FONT)),
        date_format=_choice(merged.get("dateFormat"), DATE_FORMATS, DEFAULT_DATE_FORMAT),
        locale=locale if locale in LABELS else DEFAULT_LOCALE,
        header_style=_choice(header_style, HEADER_STYLES, "plain"),
        skill_style=_choice(merged.get("skillStyle"), SKILL_STYLES, "tags"),
        photo_shape=_choice(merged.get("photoShape"), PHOTO_SHAPES, "rounded"),
        paper_size=_choice(merged.get("paperSize"), tuple(PAPER_SIZES_MM), "a4"),
        font_scale=_as_float(merged.get("fontScale"), 1.0),
        spacing_scale=_as_float(merged.get("spacingScale"), 1.0),
        margin_scale=_as_float(merged.get("marginScale"), 1.0, low=0.0),
        line_height=_as_float(merged.get("lineHeight"), 1.4),
    )
