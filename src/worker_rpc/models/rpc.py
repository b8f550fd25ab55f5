from __future__ import annotations

from enum import Enum
from typing import Any, Sequence

from pydantic import BaseModel, Field


class ArithmeticOperation(str, Enum):
    add = "add"
    subtract = "subtract"
    multiply = "multiply"
    divide = "divide"


class GreetResult(BaseModel):
    message: str
    timestamp: int = Field(description="Milliseconds since the Unix epoch")


class LookupResult(BaseModel):
    key: str
    found: bool
    value: str | None = None


class BatchTransformResult(BaseModel):
    processed: int
    items: Sequence[str] = Field(default_factory=list)


class RpcRequest(BaseModel):
    args: list[Any] = Field(default_factory=list)
    kwargs: dict[str, Any] = Field(default_factory=dict)


class RpcErrorBody(BaseModel):
    code: str
    message: str


class RpcResponse(BaseModel):
    ok: bool
    result: Any = None
    error: RpcErrorBody | None = None


__all__ = [
    "ArithmeticOperation",
    "BatchTransformResult",
    "GreetResult",
    "LookupResult",
    "RpcErrorBody",
    "RpcRequest",
    "RpcResponse",
]
