from __future__ import annotations


class RpcError(Exception):
    """Base class for failures that cross the worker binding.

    ``code`` is the stable identifier sent on the wire; the caller uses it to
    raise the same exception class on its side.
    """

    code = "rpc_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnknownOperationError(RpcError):
    code = "unknown_operation"


class DivisionByZeroError(RpcError, ZeroDivisionError):
    code = "division_by_zero"


class UnknownMethodError(RpcError):
    code = "unknown_method"


class BindingError(RpcError):
    """The binding itself failed: transport error or a response that is not an RPC envelope."""

    code = "binding_error"


ERRORS_BY_CODE: dict[str, type[RpcError]] = {
    cls.code: cls
    for cls in (RpcError, UnknownOperationError, DivisionByZeroError, UnknownMethodError, BindingError)
}


def error_from_code(code: str, message: str) -> RpcError:
    return ERRORS_BY_CODE.get(code, RpcError)(message)


__all__ = [
    "BindingError",
    "DivisionByZeroError",
    "ERRORS_BY_CODE",
    "RpcError",
    "UnknownMethodError",
    "UnknownOperationError",
    "error_from_code",
]
