"""Convert UI node trees into the JSON wire format.

The wire format has no fragment concept, so a group of two or more siblings is
reified as a ``div`` container and a single survivor is returned bare. That
collapse is lossy: the caller cannot tell a synthesized container from a real
one.

Composite components are never evaluated here. They (and fragments, and host
elements whose tag is not a string) are sent as the fallback container with
their props and children, so they must be turned into host elements before
serialization if their own markup matters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from .models.ui import CompositeReference, Fragment, HostElement, UINode, is_primitive
from .models.wire import FALLBACK_TAG, WireElement, WireNode, WireProperties

logger = logging.getLogger(__name__)


@dataclass
class _Pending:
    """A container waiting for its children to be serialized."""

    out: list[WireNode]
    tag: str | None = None
    properties: WireProperties = field(default_factory=dict)
    children: list[WireNode] = field(default_factory=list)

    def finish(self) -> WireNode:
        survivors = [child for child in self.children if child is not None]
        if self.tag is None:
            if not survivors:
                return None
            if len(survivors) == 1:
                return survivors[0]
            return {"tag": FALLBACK_TAG, "properties": {}, "children": survivors}

        element: WireElement = {"tag": self.tag, "properties": self.properties}
        if survivors:
            element["children"] = survivors
        return element


def serialize(node: UINode) -> WireNode:
    """Serialize ``node`` into a wire node.

    Uses an explicit stack, so arbitrarily deep trees do not hit the
    interpreter recursion limit.
    """
    result: list[WireNode] = []
    stack: list[_Pending | tuple[Any, list[WireNode]]] = [(node, result)]

    while stack:
        entry = stack.pop()
        if isinstance(entry, _Pending):
            entry.out.append(entry.finish())
            continue

        item, out = entry
        if is_primitive(item):
            out.append(item)
            continue

        if isinstance(item, (list, tuple)):
            pending = _Pending(out=out)
            children = list(item)
        elif isinstance(item, (HostElement, CompositeReference, Fragment)):
            tag, properties, children = _split_element(item)
            pending = _Pending(out=out, tag=tag, properties=properties)
        else:
            logger.debug("Dropping unserializable node", extra={"node_type": type(item).__name__})
            out.append(None)
            continue

        stack.append(pending)
        # Reversed so children are popped, and therefore appended, in order.
        for child in reversed(children):
            stack.append((child, pending.children))

    return result[0]


def _split_element(element: HostElement | CompositeReference | Fragment) -> tuple[str, WireProperties, list[Any]]:
    if isinstance(element, Fragment):
        return FALLBACK_TAG, {}, list(element.children)

    props: Mapping[str, Any] = element.props or {}
    properties = {key: value for key, value in props.items() if key != "children"}
    children = element.children if element.children is not None else props.get("children")

    if isinstance(element, HostElement) and isinstance(element.tag, str):
        tag = element.tag
    else:
        # Composite identity does not survive the boundary.
        tag = FALLBACK_TAG

    return tag, properties, _as_child_list(children)


def _as_child_list(children: Any) -> list[Any]:
    if children is None:
        return []
    if isinstance(children, (list, tuple)):
        return list(children)
    return [children]


__all__ = ["serialize"]
