from __future__ import annotations

import logging
import os
import uuid
from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse

from worker_rpc.binding import WorkerBinding
from worker_rpc.deserializer import deserialize
from worker_rpc.errors import BindingError, RpcError
from worker_rpc.logging_config import set_trace_id, setup_logging
from worker_rpc.models.rpc import BatchTransformResult, GreetResult, LookupResult
from worker_rpc.render import render_html

# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
WORKER_RPC_URL = os.getenv("WORKER_RPC_URL", "http://localhost:8788")
WORKER_RPC_TOKEN = os.getenv("WORKER_RPC_TOKEN")

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)
logger = logging.getLogger(__name__)

_worker_binding: WorkerBinding | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    global _worker_binding
    yield
    if _worker_binding is not None:
        await _worker_binding.aclose()
        _worker_binding = None


app = FastAPI(title="Web", version="0.1.0", lifespan=lifespan)


def get_worker_binding() -> WorkerBinding:
    """Return the shared binding to the worker's RPC app."""
    global _worker_binding
    if _worker_binding is None:
        _worker_binding = WorkerBinding(base_url=WORKER_RPC_URL, token=WORKER_RPC_TOKEN)
    return _worker_binding


Binding = Annotated[WorkerBinding, Depends(get_worker_binding)]

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
<h1>{title}</h1>
<p>Returned as an element tree from the worker, rendered here.</p>
<main>{content}</main>
</body>
</html>
"""


@app.middleware("http")
async def assign_trace_id(request: Request, call_next):
    set_trace_id(str(uuid.uuid4()))
    return await call_next(request)


@app.exception_handler(BindingError)
async def binding_error_handler(request: Request, exc: BindingError) -> JSONResponse:
    logger.error("Worker binding failed", extra={"path": request.url.path, "error": exc.message})
    return JSONResponse({"detail": exc.message, "code": exc.code}, status_code=502)


@app.exception_handler(RpcError)
async def rpc_error_handler(request: Request, exc: RpcError) -> JSONResponse:
    return JSONResponse({"detail": exc.message, "code": exc.code}, status_code=400)


@app.get("/health")
async def healthcheck() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({"status": "ok"})


@app.get("/api/say-hello", response_model=GreetResult)
async def api_say_hello(binding: Binding, name: str = "World") -> GreetResult:
    return await binding.greet(name)


@app.get("/rpc")
async def rpc_index() -> JSONResponse:
    return JSONResponse(
        {
            "methods": {
                "say-hello": "/rpc/say-hello?name=World",
                "calculate": "/rpc/calculate?operation=add&a=2&b=3",
                "get-data": "/rpc/get-data?key=example",
                "process-batch": "/rpc/process-batch?items=apple&items=banana",
                "get-component": "/rpc/get-component",
            }
        }
    )


@app.get("/rpc/say-hello", response_model=GreetResult)
async def say_hello(binding: Binding, name: str = "World") -> GreetResult:
    return await binding.greet(name)


@app.get("/rpc/calculate")
async def calculate(
    binding: Binding,
    operation: str | None = None,
    a: float | None = None,
    b: float | None = None,
) -> JSONResponse:
    if operation is None or a is None or b is None:
        raise HTTPException(status_code=400, detail="Missing required parameters: operation, a, b")
    result = await binding.arithmetic(operation, a, b)
    return JSONResponse({"result": result})


@app.get("/rpc/get-data", response_model=LookupResult, response_model_exclude_none=True)
async def get_data(binding: Binding, key: str) -> LookupResult:
    return await binding.lookup(key)


@app.get("/rpc/process-batch", response_model=BatchTransformResult)
async def process_batch(
    binding: Binding,
    items: Annotated[list[str], Query()] = [],
) -> BatchTransformResult:
    return await binding.batch_transform(items)


@app.get("/rpc/get-component", response_class=HTMLResponse)
async def get_component(binding: Binding) -> HTMLResponse:
    payload = await binding.render_element()
    component = deserialize(payload)
    return HTMLResponse(PAGE_TEMPLATE.format(title="Get Component RPC Method", content=render_html(component)))
