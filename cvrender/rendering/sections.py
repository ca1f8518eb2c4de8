"""
Per-category section rendering.

Each category maps entry fields onto a common entry shape (title,
subtitle, dates, link, body) so every layout renders sections the same
way. Empty or hidden sections produce nothing.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional

from ..logging_utils import LOG
from ..shared import ErrorKind, as_dict, as_text
from .components import card_style, date_range_node, link_node, markup_block, section_title, skill_list
from .context import RenderContext
from .nodes import Node, el, text_node

TAG_CATEGORIES = ("skills", "languages", "interests")


def _join(*parts: Any, sep: str = " · ") -> str:
    return sep.join(p for p in (as_text(x).strip() for x in parts) if p)


def _entries(ctx: RenderContext, field: str) -> List[Dict[str, Any]]:
    entries = ctx.document.get(field)
    if not isinstance(entries, list):
        return []
    result = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            LOG.debug("%s: skipping %s[%d]", ErrorKind.MALFORMED_ENTRY.value, field, idx)
            continue
        result.append(entry)
    return result


def entry_block(
    ctx: RenderContext,
    *,
    title: str,
    subtitle: str = "",
    dates: Optional[Node] = None,
    link: Optional[Node] = None,
    body: Any = None,
    dark: bool = False,
    timeline: bool = False,
) -> Optional[Node]:
    """Common entry shape: header row, subtitle, optional link and body."""
    body_node = markup_block(body, role="entry-body")
    if not (title or subtitle or body_node or link):
        return None

    title_color = "#ffffff" if dark else ctx.text_color
    header = el(
        "div",
        text_node(title, tag="h3", role="entry-title",
                  style={"margin": "0", "font-size": "1.05em", "color": title_color}),
        dates,
        role="entry-header",
        style={"display": "flex", "justify-content": "space-between", "gap": "2mm"},
    )
    style = {"margin-bottom": "2mm" if ctx.flag("compactMode") else "3.5mm"}
    if timeline:
        style.update({"border-left": f"2px solid {ctx.accent}", "padding-left": "4mm"})
    return el(
        "div",
        el("span", role="timeline-dot") if timeline else None,
        header,
        text_node(subtitle, role="entry-subtitle", style={"color": ctx.primary if not dark else None,
                                                          "font-weight": "600"}),
        link,
        body_node,
        role="entry",
        style=style,
    )


# ------------------------- Entry mappings -------------------------

def _experience(ctx: RenderContext, e: Dict[str, Any], dark: bool) -> Optional[Node]:
    return entry_block(
        ctx,
        title=as_text(e.get("role")),
        subtitle=_join(e.get("company"), e.get("location")),
        dates=date_range_node(ctx, e.get("startDate"), e.get("endDate"), e.get("current")),
        body=e.get("description"),
        dark=dark,
        timeline=ctx.overrides.timeline,
    )


def _education(ctx: RenderContext, e: Dict[str, Any], dark: bool) -> Optional[Node]:
    return entry_block(
        ctx,
        title=as_text(e.get("degree")),
        subtitle=_join(e.get("school"), e.get("location")),
        dates=date_range_node(ctx, e.get("startDate"), e.get("endDate")),
        body=e.get("description"),
        dark=dark,
    )


def _project(ctx: RenderContext, e: Dict[str, Any], dark: bool) -> Optional[Node]:
    return entry_block(
        ctx,
        title=as_text(e.get("name")),
        dates=date_range_node(ctx, e.get("startDate"), e.get("endDate")),
        link=link_node(e.get("url"), style={"color": ctx.accent}),
        body=e.get("description"),
        dark=dark,
    )


def _dated(title_key: str, issuer_key: str) -> Callable[[RenderContext, Dict[str, Any], bool], Optional[Node]]:
    def render_entry(ctx: RenderContext, e: Dict[str, Any], dark: bool) -> Optional[Node]:
        return entry_block(
            ctx,
            title=as_text(e.get(title_key)),
            subtitle=as_text(e.get(issuer_key)),
            dates=date_range_node(ctx, e.get("date"), None),
            link=link_node(e.get("url"), style={"color": ctx.accent}) if e.get("url") else None,
            dark=dark,
        )
    return render_entry


def _volunteer(ctx: RenderContext, e: Dict[str, Any], dark: bool) -> Optional[Node]:
    return entry_block(
        ctx,
        title=as_text(e.get("role")),
        subtitle=as_text(e.get("organization")),
        dates=date_range_node(ctx, e.get("startDate"), e.get("endDate"), e.get("current")),
        body=e.get("description"),
        dark=dark,
    )


def _reference(ctx: RenderContext, e: Dict[str, Any], dark: bool) -> Optional[Node]:
    return entry_block(
        ctx,
        title=as_text(e.get("name")),
        subtitle=_join(e.get("role"), e.get("company"), sep=", "),
        link=link_node(e.get("contact"), style={"color": ctx.accent}),
        dark=dark,
    )


def _custom_item(ctx: RenderContext, e: Dict[str, Any], dark: bool) -> Optional[Node]:
    return entry_block(
        ctx,
        title=as_text(e.get("title")),
        subtitle=as_text(e.get("subtitle")),
        dates=date_range_node(ctx, e.get("date"), None),
        body=e.get("description"),
        dark=dark,
    )


ENTRY_RENDERERS: Dict[str, Callable[[RenderContext, Dict[str, Any], bool], Optional[Node]]] = {
    "experience": _experience,
    "education": _education,
    "projects": _project,
    "certifications": _dated("name", "issuer"),
    "awards": _dated("title", "issuer"),
    "publications": _dated("title", "publisher"),
    "volunteer": _volunteer,
    "references": _reference,
}


# ------------------------- Sections -------------------------

def _section(ctx: RenderContext, key: str, title: str, body: Iterable[Optional[Node]], dark: bool) -> Optional[Node]:
    children = [node for node in body if node is not None]
    if not children:
        return None
    return el("section", section_title(ctx, title, dark=dark), *children,
              role=f"section:{key}", style=card_style(ctx))


def _tag_items(ctx: RenderContext, key: str) -> List[Dict[str, Any]]:
    if key == "languages":
        values = ctx.document.get("languages")
        if not isinstance(values, list):
            return []
        return [{"name": v} for v in values if isinstance(v, str)]
    entries = _entries(ctx, key)
    if key == "skills":
        return [{"name": e.get("name"), "level": e.get("level")} for e in entries]
    return [{"name": e.get("name")} for e in entries]


def render_custom_sections(ctx: RenderContext, *, dark: bool = False) -> List[Node]:
    sections = []
    for custom in _entries(ctx, "customSections"):
        items = custom.get("items")
        if not isinstance(items, list) or not items:
            continue
        body = [_custom_item(ctx, as_dict(item), dark) for item in items if isinstance(item, dict)]
        title = as_text(custom.get("name")) or ctx.label("custom")
        node = _section(ctx, "custom", title, body, dark)
        if node is not None:
            sections.append(node)
    return sections


def render_section(ctx: RenderContext, key: str, *, dark: bool = False) -> List[Node]:
    """
    Render one category. Returns a list because the custom category can
    expand into several sections.
    """
    if not ctx.is_visible(key):
        return []
    if key == "custom":
        return render_custom_sections(ctx, dark=dark)

    if key in TAG_CATEGORIES:
        items = _tag_items(ctx, key)
        # Only skills carry a level; other tag lists always render as pills.
        if key != "skills":
            items = [{"name": item["name"]} for item in items]
        node = _section(ctx, key, ctx.label(key), [skill_list(ctx, items, dark=dark, role=f"{key}-list")], dark)
        return [node] if node is not None else []

    render_entry = ENTRY_RENDERERS.get(key)
    if render_entry is None:
        return []
    body = [render_entry(ctx, entry, dark) for entry in _entries(ctx, key)]
    node = _section(ctx, key, ctx.label(key), body, dark)
    return [node] if node is not None else []


def render_summary(ctx: RenderContext, *, dark: bool = False, label_key: str = "summary") -> Optional[Node]:
    if not ctx.is_visible("summary"):
        return None
    body = markup_block(ctx.info.get("summary"), role="summary-text")
    return _section(ctx, "summary", ctx.label(label_key), [body], dark)


def ordered_keys(ctx: RenderContext, exclude: Iterable[str] = ()) -> List[str]:
    excluded = set(exclude)
    return [key for key in ctx.section_order() if key not in excluded]


def render_sections(ctx: RenderContext, keys: Iterable[str], *, dark: bool = False) -> List[Node]:
    nodes: List[Node] = []
    for key in keys:
        nodes.extend(render_section(ctx, key, dark=dark))
    return nodes
