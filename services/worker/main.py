from __future__ import annotations

import logging
import os
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from worker_rpc.address_lookup import DEFAULT_LOOKUP_URL, PublicAddressLookup
from worker_rpc.binding import TOKEN_HEADER
from worker_rpc.errors import RpcError, UnknownMethodError
from worker_rpc.logging_config import TRACE_HEADER, set_trace_id, setup_logging
from worker_rpc.models.rpc import RpcErrorBody, RpcRequest, RpcResponse
from worker_rpc.rpc import OPERATIONS, WorkerRpc
from worker_rpc.worker_env import load_worker_vars

# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
WORKER_RPC_TOKEN = os.getenv("WORKER_RPC_TOKEN")
PUBLIC_IP_LOOKUP_URL = os.getenv("PUBLIC_IP_LOOKUP_URL", DEFAULT_LOOKUP_URL)

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)
logger = logging.getLogger(__name__)

worker_rpc = WorkerRpc(
    worker_vars=load_worker_vars(os.environ),
    address_lookup=PublicAddressLookup(url=PUBLIC_IP_LOOKUP_URL),
)

# Public HTTP surface
app = FastAPI(title="Worker", version="0.1.0")

# Internal RPC surface; serve it only on the private network the web service uses.
rpc_app = FastAPI(title="Worker RPC", version="0.1.0", docs_url=None, redoc_url=None, openapi_url=None)


@app.get("/")
async def index() -> JSONResponse:
    return JSONResponse(
        {
            "message": "Welcome to the worker API",
            "endpoints": {"health": "/health", "api": "/api/v1"},
        }
    )


@app.get("/health")
async def healthcheck() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({"status": "ok", "message": "Worker is running!"})


@app.get("/api/v1/hello")
async def hello(name: str = "World") -> JSONResponse:
    return JSONResponse({"message": f"Hello, {name}!"})


@rpc_app.post("/rpc/{operation}")
async def invoke_operation(operation: str, request: Request) -> JSONResponse:
    """Run one RPC operation for a caller on the service binding."""
    set_trace_id(request.headers.get(TRACE_HEADER) or str(uuid.uuid4()))

    if WORKER_RPC_TOKEN and request.headers.get(TOKEN_HEADER) != WORKER_RPC_TOKEN:
        logger.warning("Rejected RPC call with missing or invalid token", extra={"operation": operation})
        return JSONResponse({"detail": "Forbidden"}, status_code=403)

    body = await request.body()
    try:
        rpc_request = RpcRequest.model_validate_json(body) if body else RpcRequest()
    except ValidationError as exc:
        return JSONResponse({"detail": str(exc)}, status_code=400)

    logger.info(
        "Handling RPC call",
        extra={"operation": operation, "arg_count": len(rpc_request.args)},
    )

    try:
        result = await worker_rpc.invoke(operation, rpc_request.args, rpc_request.kwargs)
    except RpcError as exc:
        logger.info(
            "RPC call failed",
            extra={"operation": operation, "code": exc.code, "error": exc.message},
        )
        status_code = 404 if isinstance(exc, UnknownMethodError) else 400
        envelope = RpcResponse(ok=False, error=RpcErrorBody(code=exc.code, message=exc.message))
        return JSONResponse(envelope.model_dump(mode="json"), status_code=status_code)

    return JSONResponse(RpcResponse(ok=True, result=result).model_dump(mode="json"))


@rpc_app.get("/rpc")
async def list_operations() -> JSONResponse:
    return JSONResponse({"operations": sorted(OPERATIONS)})
