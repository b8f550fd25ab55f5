"""Rebuild renderable UI nodes from wire nodes on the caller side.

Deserialization never raises: anything that is not a primitive, a list or an
element-shaped dict becomes ``None``.

Known limitation: a list received where a single node was expected is turned
into fragments keyed by list position. Those keys only mean something inside
one payload. A renderer that diffs successive payloads by key will pair up
unrelated nodes when items are inserted, removed or reordered between calls.
A stable per-node identity would have to be added to the wire format to fix
this.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .models.ui import Fragment, HostElement, UINode, is_primitive
from .models.wire import WireNode


@dataclass
class _Pending:
    out: list[UINode]
    tag: str | None = None
    props: dict[str, Any] = field(default_factory=dict)
    children: list[UINode] = field(default_factory=list)

    def finish(self) -> UINode:
        if self.tag is None:
            return [Fragment(children=(child,), key=index) for index, child in enumerate(self.children)]
        return HostElement(tag=self.tag, props=self.props, children=list(self.children))


def deserialize(node: WireNode) -> UINode:
    result: list[UINode] = []
    stack: list[_Pending | tuple[Any, list[UINode]]] = [(node, result)]

    while stack:
        entry = stack.pop()
        if isinstance(entry, _Pending):
            entry.out.append(entry.finish())
            continue

        item, out = entry
        if is_primitive(item):
            out.append(item)
            continue

        if isinstance(item, list):
            pending = _Pending(out=out)
            children = item
        elif _is_element(item):
            properties = item.get("properties") or {}
            pending = _Pending(
                out=out,
                tag=item["tag"],
                props={key: value for key, value in properties.items() if key != "children"},
            )
            children = item.get("children") or []
        else:
            out.append(None)
            continue

        stack.append(pending)
        for child in reversed(children):
            stack.append((child, pending.children))

    return result[0]


def _is_element(item: Any) -> bool:
    return (
        isinstance(item, dict)
        and isinstance(item.get("tag"), str)
        and isinstance(item.get("properties", {}), dict)
        and isinstance(item.get("children", []), list)
    )


__all__ = ["deserialize"]
