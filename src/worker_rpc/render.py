"""Render deserialized UI nodes to an HTML string on the caller side."""

from __future__ import annotations

import html
import re
from typing import Any, Mapping

from .models.ui import CompositeReference, Fragment, HostElement, UINode

VOID_TAGS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)

# Map element prop names to their HTML attribute names
attrs_map = {"className": "class", "htmlFor": "for"}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

# Tag and attribute names; anything else could break out of the markup.
_NAME = re.compile(r"[A-Za-z][A-Za-z0-9:._-]*")


def render_html(node: UINode) -> str:
    parts: list[str] = []
    _render_into(node, parts)
    return "".join(parts)


def _render_into(node: Any, parts: list[str]) -> None:
    # Booleans first: they are ints too, and render nothing.
    if node is None or isinstance(node, bool):
        return
    if isinstance(node, str):
        parts.append(html.escape(node))
        return
    if isinstance(node, (int, float)):
        parts.append(_format_number(node))
        return
    if isinstance(node, (list, tuple)):
        for child in node:
            _render_into(child, parts)
        return
    if isinstance(node, Fragment):
        for child in node.children:
            _render_into(child, parts)
        return
    if isinstance(node, HostElement):
        _render_element(node, parts)
        return
    if isinstance(node, CompositeReference):
        raise TypeError(f"Composite component {node.component!r} cannot be rendered by the caller")
    raise TypeError(f"Cannot render node of type {type(node).__name__}")


def _render_element(element: HostElement, parts: list[str]) -> None:
    if not _NAME.fullmatch(element.tag):
        raise TypeError(f"Invalid tag name {element.tag!r}")
    parts.append(_build_open_tag(element))
    if element.tag in VOID_TAGS:
        return
    _render_into(element.children, parts)
    parts.append(f"</{element.tag}>")


def _build_open_tag(element: HostElement) -> str:
    tag = f"<{element.tag}"
    for key, val in element.props.items():
        if key in ("children", "key") or val is None or val is False:
            continue
        name = attrs_map.get(key, key)
        if not _NAME.fullmatch(name):
            continue
        if val is True:
            tag += f" {name}"
            continue
        if key == "style" and isinstance(val, Mapping):
            val = _style_to_css(val)
        tag += f' {name}="{html.escape(str(val), quote=True)}"'
    tag += " />" if element.tag in VOID_TAGS else ">"
    return tag


def _style_to_css(style: Mapping[str, Any]) -> str:
    declarations = [
        f"{_CAMEL_BOUNDARY.sub('-', prop).lower()}: {_format_number(value) if isinstance(value, (int, float)) else value}"
        for prop, value in style.items()
        if value is not None
    ]
    return "; ".join(declarations)


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


__all__ = ["render_html"]
