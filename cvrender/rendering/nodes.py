"""
Visual tree nodes.

The rendering engine produces a tree of ``Node`` values. Nodes carry a
tag, a semantic role (``section:experience``, ``entry-title`` ...), an
optional text payload, inline styles and attributes. Output renderers
serialize the tree; tests query it by role.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Node:
    tag: str
    role: str = ""
    text: str = ""
    style: Dict[str, str] = field(default_factory=dict)
    attrs: Dict[str, str] = field(default_factory=dict)
    children: Tuple["Node", ...] = ()

    def __hash__(self) -> int:
        return hash((self.tag, self.role, self.text, tuple(self.style.items()),
                     tuple(self.attrs.items()), self.children))


def _flatten(items: Iterable[Any]) -> Iterator[Node]:
    for item in items:
        if item is None:
            continue
        if isinstance(item, Node):
            yield item
        elif isinstance(item, (list, tuple)):
            yield from _flatten(item)
        else:
            raise TypeError(f"unexpected child: {item!r}")


def el(
    tag: str,
    *children: Any,
    role: str = "",
    text: str = "",
    style: Optional[Dict[str, Any]] = None,
    attrs: Optional[Dict[str, Any]] = None,
) -> Node:
    """
    Build a node. ``None`` children are dropped and lists are flattened,
    so callers can pass optional parts inline.
    """
    clean_style = {k: str(v) for k, v in (style or {}).items() if v is not None and v != ""}
    clean_attrs = {k: str(v) for k, v in (attrs or {}).items() if v is not None and v != ""}
    return Node(
        tag=tag,
        role=role,
        text=text,
        style=clean_style,
        attrs=clean_attrs,
        children=tuple(_flatten(children)),
    )


def text_node(text: str, *, tag: str = "span", role: str = "", style: Optional[Dict[str, Any]] = None) -> Optional[Node]:
    """Text leaf, or None when there is nothing to show."""
    if not text:
        return None
    return el(tag, role=role, text=text, style=style)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Depth-first, pre-order walk."""
    yield node
    for child in node.children:
        yield from iter_nodes(child)


def text_content(node: Node, separator: str = " ") -> str:
    return separator.join(n.text for n in iter_nodes(node) if n.text)


def find_by_role(node: Node, role: str, *, prefix: bool = False) -> List[Node]:
    if prefix:
        return [n for n in iter_nodes(node) if n.role.startswith(role)]
    return [n for n in iter_nodes(node) if n.role == role]
