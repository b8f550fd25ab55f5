from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from pydantic import BaseModel

from .address_lookup import PublicAddressLookup
from .components import build_worker_panel
from .errors import DivisionByZeroError, UnknownMethodError, UnknownOperationError
from .models.rpc import ArithmeticOperation, BatchTransformResult, GreetResult, LookupResult
from .models.wire import WireNode
from .serializer import serialize
from .store import EmptyKeyValueStore, KeyValueStore

logger = logging.getLogger(__name__)

ADDRESS_PLACEHOLDER = "Unable to fetch"

# Wire name -> method name
OPERATIONS: dict[str, str] = {
    "greet": "greet",
    "arithmetic": "arithmetic",
    "lookup": "lookup",
    "batch-transform": "batch_transform",
    "render-element": "render_element",
}


class WorkerRpc:
    """Operations the worker exposes over its internal binding.

    Every operation is a function of its explicit arguments. The instance only
    holds read-only collaborators, so concurrent calls share no mutable state.
    """

    def __init__(
        self,
        *,
        worker_vars: Mapping[str, str] | None = None,
        address_lookup: PublicAddressLookup | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        self._worker_vars = dict(worker_vars or {})
        self._address_lookup = address_lookup or PublicAddressLookup()
        self._store = store or EmptyKeyValueStore()

    async def invoke(
        self,
        operation: str,
        args: Sequence[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Any:
        """Dispatch a call received on the binding and return a JSON-ready result."""
        method_name = OPERATIONS.get(operation)
        if method_name is None:
            raise UnknownMethodError(f"Unknown RPC method: {operation}")

        result = await getattr(self, method_name)(*args, **(kwargs or {}))
        if isinstance(result, BaseModel):
            return result.model_dump(mode="json", exclude_none=True)
        return result

    async def greet(self, name: str) -> GreetResult:
        return GreetResult(message=f"Hello, {name}!", timestamp=int(time.time() * 1000))

    async def arithmetic(self, operation: str, a: float, b: float) -> float:
        try:
            op = ArithmeticOperation(operation)
        except ValueError:
            raise UnknownOperationError(f"Unknown operation: {operation}") from None

        if op is ArithmeticOperation.add:
            return a + b
        if op is ArithmeticOperation.subtract:
            return a - b
        if op is ArithmeticOperation.multiply:
            return a * b
        if b == 0:
            raise DivisionByZeroError("Division by zero")
        return a / b

    async def lookup(self, key: str) -> LookupResult:
        value = self._store.get(key)
        return LookupResult(key=key, found=value is not None, value=value)

    async def batch_transform(self, items: Sequence[str]) -> BatchTransformResult:
        return BatchTransformResult(processed=len(items), items=[item.upper() for item in items])

    async def render_element(self) -> WireNode:
        """Build the worker panel and return it in wire format.

        A failed address lookup is replaced by ``ADDRESS_PLACEHOLDER``; it is
        never reported to the caller.
        """
        try:
            worker_ip = await self._address_lookup.fetch()
        except Exception as exc:
            logger.warning(
                "Failed to fetch worker public address",
                exc_info=True,
                extra={"lookup_url": self._address_lookup.url, "error": str(exc)},
            )
            worker_ip = ADDRESS_PLACEHOLDER

        panel = build_worker_panel(
            worker_ip=worker_ip,
            worker_vars=self._worker_vars,
            timestamp=datetime.now(timezone.utc),
        )
        return serialize(panel)


__all__ = ["ADDRESS_PLACEHOLDER", "OPERATIONS", "WorkerRpc"]
