import httpx
import pytest

from services.worker import main as worker_main
from worker_rpc.address_lookup import PublicAddressLookup
from worker_rpc.binding import WorkerBinding
from worker_rpc.rpc import WorkerRpc

WORKER_IP = "198.51.100.1"


@pytest.fixture(autouse=True)
def offline_worker(monkeypatch):
    """Point the worker service at a stubbed address lookup and no token."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"ip": WORKER_IP})

    lookup = PublicAddressLookup(transport=httpx.MockTransport(handler))
    monkeypatch.setattr(worker_main, "worker_rpc", WorkerRpc(worker_vars={"REGION": "eu-west"}, address_lookup=lookup))
    monkeypatch.setattr(worker_main, "WORKER_RPC_TOKEN", None)


@pytest.fixture
def worker_binding() -> WorkerBinding:
    """A binding wired straight into the worker RPC app, no network involved."""
    client = httpx.AsyncClient(transport=httpx.ASGITransport(app=worker_main.rpc_app), base_url="http://worker")
    return WorkerBinding(base_url="http://worker", client=client)
