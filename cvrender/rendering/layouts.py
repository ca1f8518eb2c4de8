"""
Layout registry.

A layout turns a RenderContext into the page's child nodes. Layouts are
registered by family name, the same way output renderers are.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from ..formatting import LIGHT_TEXT, contrast_color, is_dark
from ..shared import as_text
from .components import contact_line, markup_block, photo, qr_code, section_title
from .context import RenderContext
from .nodes import Node, el, text_node
from .sections import ordered_keys, render_sections, render_summary

Layout = Callable[[RenderContext], List[Node]]

# Global layout registry
_LAYOUT_REGISTRY: Dict[str, Layout] = {}

COVER_LAYOUT = "cover-letter"
FALLBACK_LAYOUT = "single-column"

SIDEBAR_PINNED = ("skills", "languages", "interests", "awards")
BANNER_PINNED = ("education", "skills", "languages", "awards")
GRID_PINNED = ("skills", "education", "languages")

LIGHT_SIDEBAR_BG = "#f8fafc"


def register_layout(name: str, layout: Layout) -> None:
    """Register a layout function under a family name."""
    _LAYOUT_REGISTRY[name] = layout


def get_layout(name: str) -> Optional[Layout]:
    return _LAYOUT_REGISTRY.get(name)


def list_layouts() -> List[Dict[str, str]]:
    """
    List all registered layouts.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    layouts = []
    for name, layout in _LAYOUT_REGISTRY.items():
        doc = (layout.__doc__ or "").strip().split("\n")[0]
        layouts.append({"name": name, "description": doc or "No description available"})
    return sorted(layouts, key=lambda x: x["name"])


# ------------------------- Shared parts -------------------------

def name_block(ctx: RenderContext, *, color: Optional[str] = None, align: Optional[str] = None) -> Node:
    info = ctx.info
    return el(
        "div",
        text_node(as_text(info.get("fullName")), tag="h1", role="full-name",
                  style={"margin": "0", "font-family": ctx.header_font, "font-size": "2.2em",
                         "color": color or ctx.primary}),
        text_node(as_text(info.get("jobTitle")), tag="p", role="job-title",
                  style={"margin": "0", "font-size": "1.15em", "color": color or ctx.accent}),
        role="name-block",
        style={"text-align": align},
    )


def _pinned(ctx: RenderContext, keys, *, dark: bool) -> List[Node]:
    return render_sections(ctx, keys, dark=dark)


def _main_column(ctx: RenderContext, pinned) -> List[Node]:
    return render_sections(ctx, ordered_keys(ctx, exclude=pinned))


# ------------------------- Layouts -------------------------

def _sidebar(ctx: RenderContext, side: str) -> List[Node]:
    light = ctx.overrides.light_sidebar
    bg = LIGHT_SIDEBAR_BG if light else ctx.primary
    dark = is_dark(bg)
    fg = contrast_color(bg)

    contacts = contact_line(ctx, vertical=True, color=fg if dark else None)
    side_children = [
        photo(ctx),
        None if ctx.overrides.name_in_main else name_block(ctx, color=fg if dark else None),
        el("div", section_title(ctx, ctx.label("contact"), dark=dark), contacts,
           role="section:contact") if contacts is not None else None,
        _pinned(ctx, SIDEBAR_PINNED, dark=dark),
        qr_code(ctx),
    ]
    side_style = {"width": "32%", "background": bg, "color": fg, "padding": "6mm", "box-sizing": "border-box"}
    sidebar = el("aside", *side_children, role="sidebar", style=side_style)

    main = el(
        "main",
        name_block(ctx) if ctx.overrides.name_in_main else None,
        render_summary(ctx),
        _main_column(ctx, SIDEBAR_PINNED),
        role="main",
        style={"flex": "1", "padding": "6mm"},
    )
    columns = [sidebar, main] if side == "left" else [main, sidebar]
    return [el("div", *columns, role=f"columns:{side}", style={"display": "flex", "min-height": "100%"})]


def sidebar_left(ctx: RenderContext) -> List[Node]:
    """Colored side column on the left with contact details and skills."""
    return _sidebar(ctx, "left")


def sidebar_right(ctx: RenderContext) -> List[Node]:
    """Side column on the right with contact details and skills."""
    return _sidebar(ctx, "right")


def banner(ctx: RenderContext) -> List[Node]:
    """Full-width hero band above a two-column body."""
    fill = ctx.theme.gradient or ctx.primary
    fg = LIGHT_TEXT if ctx.theme.gradient else contrast_color(ctx.primary)
    hero = el(
        "header",
        photo(ctx, size_mm=28),
        el("div",
           name_block(ctx, color=fg),
           contact_line(ctx, color=fg),
           role="hero-text"),
        qr_code(ctx),
        role="hero",
        style={"background": fill, "color": fg, "padding": "8mm", "display": "flex", "gap": "6mm"},
    )
    body = el(
        "div",
        el("main", render_summary(ctx), _main_column(ctx, BANNER_PINNED),
           role="main", style={"flex": "2"}),
        el("aside", _pinned(ctx, BANNER_PINNED, dark=False),
           role="narrow-column", style={"flex": "1"}),
        role="columns:banner",
        style={"display": "flex", "gap": "6mm", "padding": "6mm"},
    )
    return [hero, body]


def single_column(ctx: RenderContext) -> List[Node]:
    """Aligned header followed by every section in the configured order."""
    align = as_text(ctx.settings.get("headerAlignment"))
    if align not in ("left", "center", "right"):
        align = "center"
    header = el(
        "header",
        photo(ctx),
        name_block(ctx, align=align),
        contact_line(ctx),
        qr_code(ctx),
        role="header",
        style={"text-align": align, "margin-bottom": "6mm"},
    )
    return [header, render_summary(ctx), render_sections(ctx, ordered_keys(ctx))]


def grid_complex(ctx: RenderContext) -> List[Node]:
    """Magazine grid: heavy rule header, bio and skills in a narrow column."""
    header = el(
        "header",
        name_block(ctx, color=ctx.text_color),
        contact_line(ctx),
        role="header",
        style={"border-bottom": f"6px solid {ctx.primary}", "padding-bottom": "4mm", "margin-bottom": "6mm"},
    )
    narrow = el(
        "aside",
        photo(ctx),
        render_summary(ctx, label_key="about"),
        _pinned(ctx, GRID_PINNED, dark=False),
        qr_code(ctx),
        role="narrow-column",
        style={"width": "34%"},
    )
    main = el("main", _main_column(ctx, GRID_PINNED), role="main", style={"flex": "1"})
    return [header, el("div", narrow, main, role="columns:grid", style={"display": "flex", "gap": "6mm"})]


def cover_letter(ctx: RenderContext) -> List[Node]:
    """Letterhead, recipient block, body and signature."""
    info = ctx.info
    letter = ctx.cover_letter
    letterhead = el(
        "header",
        name_block(ctx),
        contact_line(ctx),
        role="letterhead",
        style={"border-bottom": f"2px solid {ctx.accent}", "padding-bottom": "4mm", "margin-bottom": "8mm"},
    )
    recipient = el(
        "div",
        text_node(as_text(letter.get("recipientName")), tag="p", role="recipient-name",
                  style={"margin": "0", "font-weight": "700"}),
        text_node(as_text(letter.get("jobTitle")), tag="p", role="recipient-title", style={"margin": "0"}),
        text_node(as_text(letter.get("companyName")), tag="p", role="recipient-company", style={"margin": "0"}),
        role="recipient",
        style={"margin-bottom": "8mm"},
    )
    body = markup_block(letter.get("content"), role="letter-body", style={"margin-bottom": "8mm"})

    signer = as_text(info.get("signature")) or as_text(info.get("fullName"))
    signature = None
    if signer:
        signature = el(
            "div",
            text_node(ctx.label("closing"), tag="p", role="closing", style={"margin": "0"}),
            text_node(signer, tag="p", role="signature",
                      style={"margin": "6mm 0 0", "font-family": ctx.header_font, "font-size": "1.3em"}),
            role="signature-block",
        )
    return [letterhead, recipient, body, signature]


register_layout("sidebar-left", sidebar_left)
register_layout("sidebar-right", sidebar_right)
register_layout("banner", banner)
register_layout("single-column", single_column)
register_layout("stacked", single_column)
register_layout("grid-complex", grid_complex)
register_layout(COVER_LAYOUT, cover_letter)
