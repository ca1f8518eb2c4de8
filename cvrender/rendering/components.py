"""
Reusable visual components: section titles, date ranges, markup blocks,
contact lines, photos and skill visualizers.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlparse

from ..formatting import (
    SPAN_EM,
    SPAN_STRONG,
    contrast_color,
    format_date_range,
    is_too_light,
    parse_inline_markup,
    sanitize_image_source,
    sanitize_link,
    with_alpha,
)
from ..shared import as_text
from .context import PAPER_SIZES_MM, RenderContext
from .nodes import Node, el, text_node

BASE_FONT_PT = 10.0
BASE_MARGIN_MM = 15.0

PATTERNS = {
    "dots": "radial-gradient(#cbd5e1 1px, transparent 1px) 0 0 / 16px 16px",
    "grid": "linear-gradient(#f1f5f9 1px, transparent 1px) 0 0 / 20px 20px, "
            "linear-gradient(90deg, #f1f5f9 1px, transparent 1px) 0 0 / 20px 20px",
    "lines": "repeating-linear-gradient(0deg, transparent, transparent 19px, #f1f5f9 20px)",
    "geometric": "linear-gradient(135deg, #f8fafc 25%, transparent 25%) 0 0 / 24px 24px",
}

# (settings key, icon key used when the host gives no better hint)
CONTACT_FIELDS = (
    ("email", "email"),
    ("phone", "phone"),
    ("address", "location"),
    ("linkedin", "linkedin"),
    ("github", "github"),
    ("website", "website"),
    ("twitter", "twitter"),
    ("behance", "behance"),
    ("dribbble", "dribbble"),
    ("medium", "medium"),
)
_PLAIN_CONTACTS = ("phone", "address")
_ICON_HOSTS = ("linkedin", "github", "twitter", "behance", "dribbble", "medium")

QR_SERVICE = "https://api.qrserver.com/v1/create-qr-code/?size=96x96&data="


# ------------------------- Section titles -------------------------

def section_title(ctx: RenderContext, text: str, *, dark: bool = False) -> Node:
    """
    Section heading. A theme's own title treatment wins over the
    ``headerStyle`` setting.
    """
    color = contrast_color(ctx.primary) if dark else ctx.primary
    base = {
        "font-family": ctx.header_font,
        "font-size": f"{BASE_FONT_PT * ctx.font_scale * 1.2:.1f}pt",
        "font-weight": "700",
        "margin-bottom": "2mm",
    }

    override = ctx.overrides.section_title
    if override == "double-rule":
        style = dict(base, color=color, **{"border-top": f"3px solid {color}",
                                           "border-bottom": f"1px solid {color}",
                                           "text-transform": "uppercase"})
        return el("h2", role="section-title", text=text, style=style, attrs={"data-style": override})
    if override == "centered-serif":
        style = dict(base, color=color, **{"text-align": "center", "font-family": "serif",
                                           "border-bottom": f"1px solid {ctx.accent}"})
        return el("h2", role="section-title", text=text, style=style, attrs={"data-style": override})

    kind = ctx.header_style
    if kind == "underline":
        style = dict(base, color=color, **{"border-bottom": f"2px solid {ctx.accent}"})
    elif kind == "boxed":
        style = dict(base, color=contrast_color(ctx.accent), background=ctx.accent,
                     padding="1mm 2mm")
    elif kind == "left-bar":
        style = dict(base, color=color, **{"border-left": f"4px solid {ctx.accent}",
                                           "padding-left": "2mm"})
    elif kind == "gradient":
        fill = ctx.theme.gradient or f"linear-gradient(90deg, {ctx.primary}, {ctx.accent})"
        style = dict(base, color=contrast_color(ctx.primary), background=fill,
                     padding="1mm 2mm")
    else:
        style = dict(base, color=color)
    return el("h2", role="section-title", text=text, style=style, attrs={"data-style": kind})


# ------------------------- Text -------------------------

def date_range_node(ctx: RenderContext, start: Any, end: Any, current: Any = False) -> Optional[Node]:
    if not ctx.show_duration:
        return None
    text = format_date_range(start, end, current is True, ctx.date_format, ctx.locale)
    return text_node(text, role="date-range", style={"color": ctx.secondary, "white-space": "nowrap"})


def markup_block(value: Any, *, role: str = "markup", style: Optional[Dict[str, Any]] = None) -> Optional[Node]:
    """Render free text with bullets and bold/italic spans, or None when blank."""
    lines = parse_inline_markup(value)
    if not lines:
        return None

    rows = []
    for line in lines:
        parts: List[Node] = []
        if line.bullet:
            parts.append(el("span", role="bullet", text="•", style={"margin-right": "1.5mm"}))
        for span in line.spans:
            if span.kind == SPAN_STRONG:
                parts.append(el("strong", text=span.text))
            elif span.kind == SPAN_EM:
                parts.append(el("em", text=span.text))
            else:
                parts.append(el("span", text=span.text))
        rows.append(el("p", *parts, role="bullet-line" if line.bullet else "line",
                       style={"margin": "0"}))
    return el("div", *rows, role=role, style=style)


def link_node(value: Any, *, label: Optional[str] = None, role: str = "link", style: Optional[Dict[str, Any]] = None) -> Optional[Node]:
    """Anchor to a sanitized link; unsafe values render as plain text."""
    raw = as_text(value).strip()
    if not raw:
        return None
    href = sanitize_link(raw)
    display = label or raw
    if not href:
        return el("span", role=role, text=display, style=style)
    return el("a", role=role, text=display, style=style,
              attrs={"href": href, "target": "_blank", "rel": "noopener noreferrer"})


def icon_key(field: str, href: str) -> str:
    host = (urlparse(href).hostname or "").lower() if href else ""
    for name in _ICON_HOSTS:
        if name in host:
            return name
    if href.startswith("mailto:"):
        return "email"
    return dict(CONTACT_FIELDS).get(field, "link")


def contact_line(ctx: RenderContext, *, vertical: bool = False, color: Optional[str] = None) -> Optional[Node]:
    """
    Contact details from personalInfo. Empty values render nothing; in
    privacy mode the values are blurred.
    """
    info = ctx.info
    blur = ctx.flag("privacyMode")
    items = []
    for field, _ in CONTACT_FIELDS:
        value = as_text(info.get(field)).strip()
        if not value:
            continue
        item_style = {"color": color, "filter": "blur(4px)" if blur else None}
        if field in _PLAIN_CONTACTS:
            node = el("span", text=value, style=item_style)
            icon = dict(CONTACT_FIELDS)[field]
        else:
            node = link_node(value, style=item_style)
            icon = icon_key(field, node.attrs.get("href", ""))
        items.append(el("span", node, role=f"contact:{field}", attrs={"data-icon": icon},
                        style={"display": "block" if vertical else "inline-block",
                               "margin-right": None if vertical else "4mm"}))
    if not items:
        return None
    return el("div", *items, role="contact-line")


def photo(ctx: RenderContext, *, size_mm: float = 30.0) -> Optional[Node]:
    src = sanitize_image_source(ctx.info.get("photoUrl"))
    if not src:
        return None
    radius = {"circle": "50%", "rounded": "12%", "square": "0"}[ctx.photo_shape]
    style = {
        "width": f"{size_mm:g}mm",
        "height": f"{size_mm:g}mm",
        "object-fit": "cover",
        "border-radius": radius,
        "border": ctx.overrides.photo_frame,
    }
    return el("img", role="photo", style=style,
              attrs={"src": src, "alt": as_text(ctx.info.get("fullName")), "data-shape": ctx.photo_shape})


def qr_code(ctx: RenderContext) -> Optional[Node]:
    """Print-only QR code linking to the LinkedIn profile."""
    if not ctx.flag("showQrCode"):
        return None
    target = sanitize_link(ctx.info.get("linkedin"))
    if not target:
        return None
    return el("img", role="qr-code", style={"width": "20mm", "height": "20mm"},
              attrs={"src": QR_SERVICE + quote(target, safe=""), "alt": "QR", "data-print-only": "true"})


# ------------------------- Skills -------------------------

def pill(name: str, ctx: RenderContext, *, dark: bool = False) -> Node:
    if dark:
        style = {"background": "rgba(255,255,255,0.15)", "color": "#ffffff"}
    else:
        accent = ctx.primary if is_too_light(ctx.accent) else ctx.accent
        style = {"background": with_alpha(accent, "1a"), "color": accent}
    style.update({"padding": "0.5mm 2mm", "border-radius": "3mm", "display": "inline-block",
                  "margin": "0 1mm 1mm 0"})
    return el("span", role="pill", text=name, style=style)


def _level(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return int(min(max(round(value), 0), 5))


def skill_item(ctx: RenderContext, name: str, level: Any = None, *, dark: bool = False) -> Node:
    """One skill in the configured visual style (bar, dots or pill)."""
    lvl = _level(level)
    style = ctx.skill_style
    if lvl is None or style not in ("bar", "dots"):
        return pill(name, ctx, dark=dark)

    fill = "#ffffff" if dark else ctx.accent
    track = "rgba(255,255,255,0.2)" if dark else "#e2e8f0"
    label = el("span", role="skill-name", text=name)
    if style == "bar":
        bar = el("div",
                 el("div", role="bar-fill", style={"width": f"{lvl * 20}%", "height": "100%",
                                                   "background": fill}),
                 role="bar", style={"height": "1.5mm", "background": track})
        return el("div", label, bar, role="skill", attrs={"data-level": lvl})
    dots = [el("span", role="dot-filled" if i < lvl else "dot-empty",
               style={"display": "inline-block", "width": "2mm", "height": "2mm",
                      "border-radius": "50%", "background": fill if i < lvl else track,
                      "margin-right": "0.8mm"})
            for i in range(5)]
    return el("div", label, el("span", *dots, role="dots"), role="skill", attrs={"data-level": lvl})


def skill_list(ctx: RenderContext, items: List[Dict[str, Any]], *, dark: bool = False, role: str = "skills") -> Optional[Node]:
    """
    Visualize a list of named items. Under ``hidden`` the whole list
    collapses into a single comma-joined text node.

    Args:
        items: Dicts with a 'name' and an optional numeric 'level'
    """
    names = [(as_text(item.get("name")).strip(), item.get("level")) for item in items]
    names = [(n, lvl) for n, lvl in names if n]
    if not names:
        return None
    if ctx.skill_style == "hidden":
        return el("p", role=role, text=", ".join(n for n, _ in names), style={"margin": "0"})
    return el("div", *[skill_item(ctx, n, lvl, dark=dark) for n, lvl in names], role=role)


# ------------------------- Page -------------------------

def page_node(ctx: RenderContext, *children: Any, role: str = "page") -> Node:
    width, height = PAPER_SIZES_MM[ctx.paper_size]
    pattern = PATTERNS.get(as_text(ctx.settings.get("backgroundPattern")))
    style = {
        "width": f"{width}mm",
        "min-height": f"{height}mm",
        "padding": f"{BASE_MARGIN_MM * ctx.margin_scale:.1f}mm",
        "box-sizing": "border-box",
        "font-family": ctx.body_font,
        "font-size": f"{BASE_FONT_PT * ctx.font_scale:.1f}pt",
        "line-height": f"{ctx.line_height * ctx.spacing_scale:.2f}",
        "color": ctx.text_color,
        "background": f"{pattern}, {ctx.page_bg}" if pattern else ctx.page_bg,
        "filter": "grayscale(100%)" if ctx.flag("grayscale") else None,
        "position": "relative",
        "--primary": ctx.primary,
        "--accent": ctx.accent,
        "--secondary": ctx.secondary,
        "--text": ctx.text_color,
    }
    watermark = None
    if ctx.flag("watermark"):
        watermark = el("div", role="watermark", text=ctx.label("watermark"),
                       style={"position": "absolute", "top": "45%", "left": "0", "right": "0",
                              "text-align": "center", "font-size": "48pt", "opacity": "0.06",
                              "transform": "rotate(-30deg)"})
    return el("div", watermark, *children, role=role, style=style,
              attrs={"data-theme": ctx.theme.id, "data-paper": ctx.paper_size, "data-mode": ctx.mode})


def card_style(ctx: RenderContext) -> Dict[str, str]:
    """Section wrapper style; glass cards when glassmorphism is on."""
    gap = "3mm" if ctx.flag("compactMode") else "5mm"
    style = {"margin-bottom": gap}
    if ctx.flag("glassmorphism"):
        style.update({"background": "rgba(255,255,255,0.6)", "border": "1px solid rgba(255,255,255,0.8)",
                      "border-radius": "3mm", "padding": "3mm", "backdrop-filter": "blur(8px)"})
    return style
