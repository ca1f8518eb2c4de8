"""
Theme registry.

Static catalog of theme descriptors plus the declarative per-theme
override table consulted by the rendering engine. Themes are read-only;
documents refer to them by identifier only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from .logging_utils import LOG
from .shared import ErrorKind

LAYOUT_FAMILIES = (
    "sidebar-left",
    "sidebar-right",
    "stacked",
    "banner",
    "single-column",
    "grid-complex",
)


@dataclass(frozen=True)
class ThemeColors:
    primary: str
    secondary: str
    text: str
    bg: str
    accent: str


@dataclass(frozen=True)
class FontPairing:
    header: Optional[str] = None
    body: Optional[str] = None


@dataclass(frozen=True)
class Theme:
    id: str
    name: str
    description: str
    colors: ThemeColors
    layout: str
    fonts: Optional[FontPairing] = None
    gradient: Optional[str] = None


@dataclass(frozen=True)
class ThemeOverrides:
    """
    Visual treatments that belong to a theme's identity.

    Attributes:
        section_title: Fixed section-title treatment that wins over the
            ``headerStyle`` setting (``double-rule`` or ``centered-serif``)
        timeline: Draw a timeline rail next to experience entries
        light_sidebar: Sidebar layouts use a pale surface instead of the
            primary color
        name_in_main: Sidebar layouts show the name header in the main column
        photo_frame: CSS border applied around the photo
    """

    section_title: Optional[str] = None
    timeline: bool = False
    light_sidebar: bool = False
    name_in_main: bool = False
    photo_frame: Optional[str] = None


THEMES: Tuple[Theme, ...] = (
    Theme(
        id="modern-slate",
        name="Modern Slate",
        description="Balanced and safe. A recruiter favourite.",
        colors=ThemeColors(primary="#334155", secondary="#64748b", text="#1e293b", bg="#ffffff", accent="#3b82f6"),
        layout="sidebar-left",
    ),
    Theme(
        id="executive-gold",
        name="The CEO",
        description="High-end minimalism with generous white space and serif headings.",
        colors=ThemeColors(primary="#171717", secondary="#404040", text="#262626", bg="#ffffff", accent="#d4af37"),
        layout="single-column",
        fonts=FontPairing(header="serif", body="sans-serif"),
    ),
    Theme(
        id="tech-lead-dark",
        name="Tech Lead",
        description="Dark high-contrast sidebar. Striking and modern.",
        colors=ThemeColors(primary="#0f172a", secondary="#334155", text="#334155", bg="#ffffff", accent="#22d3ee"),
        layout="sidebar-left",
    ),
    Theme(
        id="creative-blob",
        name="Creative Studio",
        description="Gradient hero band. For designers and creatives.",
        colors=ThemeColors(primary="#4f46e5", secondary="#818cf8", text="#312e81", bg="#ffffff", accent="#c7d2fe"),
        layout="banner",
        gradient="linear-gradient(120deg, #4f46e5 0%, #c026d3 100%)",
    ),
    Theme(
        id="swiss-international",
        name="Swiss Grid",
        description="Bold typography, strong rules, magazine layout.",
        colors=ThemeColors(primary="#000000", secondary="#171717", text="#000000", bg="#ffffff", accent="#ef4444"),
        layout="grid-complex",
    ),
    Theme(
        id="startup-pop",
        name="Startup Pop",
        description="Young and dynamic with a vibrant accent.",
        colors=ThemeColors(primary="#2563eb", secondary="#60a5fa", text="#1e293b", bg="#eff6ff", accent="#3b82f6"),
        layout="single-column",
    ),
    Theme(
        id="ivy-league",
        name="Ivy League",
        description="Traditional and academic with serif type.",
        colors=ThemeColors(primary="#451a03", secondary="#78350f", text="#292524", bg="#fffbeb", accent="#92400e"),
        layout="stacked",
        fonts=FontPairing(header="serif", body="serif"),
    ),
    Theme(
        id="mono-hacker",
        name="System.Out",
        description="Terminal style with a monospaced font.",
        colors=ThemeColors(primary="#16a34a", secondary="#86efac", text="#14532d", bg="#f0fdf4", accent="#15803d"),
        layout="single-column",
        fonts=FontPairing(header="monospace", body="monospace"),
    ),
    Theme(
        id="timeline-pro",
        name="Timeline Pro",
        description="Connects experience entries with a visual timeline.",
        colors=ThemeColors(primary="#0ea5e9", secondary="#7dd3fc", text="#0c4a6e", bg="#ffffff", accent="#0284c7"),
        layout="sidebar-right",
    ),
)

_THEMES_BY_ID: Dict[str, Theme] = {theme.id: theme for theme in THEMES}

THEME_OVERRIDES: Dict[str, ThemeOverrides] = {
    "swiss-international": ThemeOverrides(section_title="double-rule"),
    "ivy-league": ThemeOverrides(section_title="centered-serif", photo_frame="3px double #92400e"),
    "timeline-pro": ThemeOverrides(timeline=True, light_sidebar=True, name_in_main=True),
}

_NO_OVERRIDES = ThemeOverrides()

DEFAULT_THEME = THEMES[0]


def get_theme(theme_id: Optional[str]) -> Theme:
    """
    Resolve a theme by identifier.

    Unknown identifiers fall back to the first registered theme.
    """
    theme = _THEMES_BY_ID.get(theme_id or "")
    if theme is None:
        LOG.warning("%s: theme %r not found; using %r.", ErrorKind.UNRESOLVED_THEME.value, theme_id, DEFAULT_THEME.id)
        return DEFAULT_THEME
    return theme


def resolve_theme(theme: Union[Theme, str, None]) -> Theme:
    if isinstance(theme, Theme):
        return theme
    return get_theme(theme)


def get_overrides(theme: Theme) -> ThemeOverrides:
    return THEME_OVERRIDES.get(theme.id, _NO_OVERRIDES)


def list_themes() -> List[Dict[str, str]]:
    """
    List all registered themes with their descriptions.

    Returns:
        List of dicts with 'name', 'description' and 'layout' keys
    """
    themes = [
        {"name": theme.id, "description": f"{theme.name}: {theme.description}", "layout": theme.layout}
        for theme in THEMES
    ]
    return sorted(themes, key=lambda x: x["name"])
