"""JSON wire format for element trees crossing the worker binding.

A wire node is plain data: it can be handed to ``json.dumps`` without a custom
encoder and carries no worker-side object identities.

Notes:
- ``tag`` is always a host tag name. Anything else collapses to ``FALLBACK_TAG``.
- ``properties`` never holds ``children``; children travel in their own list.
- ``children`` is omitted rather than sent empty.
"""

from __future__ import annotations

from typing import NotRequired, TypeAlias, TypedDict

FALLBACK_TAG = "div"

WireScalar: TypeAlias = str | int | float | bool | None
WireProperties: TypeAlias = dict[str, WireScalar | dict[str, WireScalar]]


class WireElement(TypedDict):
    tag: str
    properties: WireProperties
    children: NotRequired[list["WireNode"]]


WireNode: TypeAlias = WireScalar | WireElement


__all__ = ["FALLBACK_TAG", "WireElement", "WireNode", "WireProperties", "WireScalar"]
