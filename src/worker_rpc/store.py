from __future__ import annotations

from typing import Protocol


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None:
        ...


class EmptyKeyValueStore:
    """Backing store for ``lookup`` until a real one is bound to the worker."""

    def get(self, key: str) -> str | None:
        return None


__all__ = ["EmptyKeyValueStore", "KeyValueStore"]
