from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, TypeAlias, Union


@dataclass(frozen=True)
class HostElement:
    """An element the caller can render directly, named by a tag string."""

    tag: str
    props: Mapping[str, Any] = field(default_factory=dict)
    children: "UINode" = None


@dataclass(frozen=True)
class CompositeReference:
    """A component only the worker can resolve.

    It never crosses the binding with its identity intact: the serializer
    replaces it with the fallback container tag.
    """

    component: Any
    props: Mapping[str, Any] = field(default_factory=dict)
    children: "UINode" = None


@dataclass(frozen=True)
class Fragment:
    children: tuple["UINode", ...] = ()
    key: int | str | None = None


Primitive: TypeAlias = Union[str, int, float, bool, None]
UINode: TypeAlias = Union[
    Primitive,
    HostElement,
    CompositeReference,
    Fragment,
    list["UINode"],
    tuple["UINode", ...],
]


def h(tag: str, props: Mapping[str, Any] | None = None, *children: UINode) -> HostElement:
    """Shorthand for building host elements."""
    if not children:
        return HostElement(tag=tag, props=dict(props or {}))
    if len(children) == 1:
        return HostElement(tag=tag, props=dict(props or {}), children=children[0])
    return HostElement(tag=tag, props=dict(props or {}), children=list(children))


def is_primitive(node: object) -> bool:
    return node is None or isinstance(node, (str, int, float, bool))


__all__ = [
    "CompositeReference",
    "Fragment",
    "HostElement",
    "Primitive",
    "UINode",
    "h",
    "is_primitive",
]
