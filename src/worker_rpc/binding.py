from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx
from pydantic import ValidationError

from .errors import BindingError, error_from_code
from .logging_config import TRACE_HEADER, get_trace_id
from .models.rpc import BatchTransformResult, GreetResult, LookupResult, RpcRequest, RpcResponse
from .models.wire import WireNode

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Binding-Token"


class WorkerBinding:
    """Caller-side proxy for the worker's internal RPC endpoint."""

    def __init__(
        self,
        *,
        base_url: str,
        token: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the binding.

        Args:
            base_url: Internal address of the worker RPC app
            token: Shared token sent with every call, if the worker requires one
            client: Optional preconfigured client (its base_url wins)
        """
        self.base_url = base_url
        self._token = token
        self._client = client or httpx.AsyncClient(base_url=base_url)

    async def call(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke ``operation`` on the worker and return its JSON result.

        Raises:
            RpcError: The subclass matching the error code the worker returned
            BindingError: The worker could not be reached or answered garbage
        """
        payload = RpcRequest(args=list(args), kwargs=kwargs).model_dump(mode="json")
        headers: dict[str, str] = {}
        trace_id = get_trace_id()
        if trace_id:
            headers[TRACE_HEADER] = trace_id
        if self._token:
            headers[TOKEN_HEADER] = self._token

        try:
            response = await self._client.post(f"/rpc/{operation}", json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.error(
                "Worker binding call failed",
                exc_info=True,
                extra={"operation": operation, "error": str(exc)},
            )
            raise BindingError(f"Worker unreachable: {exc}") from exc

        try:
            envelope = RpcResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise BindingError(
                f"Unexpected response from worker (HTTP {response.status_code})"
            ) from exc

        if not envelope.ok:
            if envelope.error is None:
                raise BindingError("Worker reported a failure without an error body")
            logger.info(
                "Worker call returned an error",
                extra={"operation": operation, "code": envelope.error.code},
            )
            raise error_from_code(envelope.error.code, envelope.error.message)

        return envelope.result

    async def greet(self, name: str) -> GreetResult:
        return GreetResult.model_validate(await self.call("greet", name))

    async def arithmetic(self, operation: str, a: float, b: float) -> float:
        return await self.call("arithmetic", operation, a, b)

    async def lookup(self, key: str) -> LookupResult:
        return LookupResult.model_validate(await self.call("lookup", key))

    async def batch_transform(self, items: Sequence[str]) -> BatchTransformResult:
        return BatchTransformResult.model_validate(await self.call("batch-transform", list(items)))

    async def render_element(self) -> WireNode:
        return await self.call("render-element")

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["TOKEN_HEADER", "WorkerBinding"]
