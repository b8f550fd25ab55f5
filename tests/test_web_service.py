import httpx
import pytest
from fastapi.testclient import TestClient

from services.web import main as web_main
from worker_rpc.binding import WorkerBinding


@pytest.fixture
def client(worker_binding: WorkerBinding):
    web_main.app.dependency_overrides[web_main.get_worker_binding] = lambda: worker_binding
    yield TestClient(web_main.app)
    web_main.app.dependency_overrides.clear()


def test_health(client: TestClient):
    assert client.get("/health").json() == {"status": "ok"}


def test_say_hello_routes(client: TestClient):
    assert client.get("/api/say-hello", params={"name": "Ada"}).json()["message"] == "Hello, Ada!"
    assert client.get("/rpc/say-hello").json()["message"] == "Hello, World!"


def test_rpc_index_lists_methods(client: TestClient):
    assert set(client.get("/rpc").json()["methods"]) == {
        "say-hello",
        "calculate",
        "get-data",
        "process-batch",
        "get-component",
    }


def test_calculate(client: TestClient):
    response = client.get("/rpc/calculate", params={"operation": "multiply", "a": 4, "b": 5})

    assert response.status_code == 200
    assert response.json() == {"result": 20}


def test_calculate_requires_all_parameters(client: TestClient):
    response = client.get("/rpc/calculate", params={"operation": "add", "a": 1})

    assert response.status_code == 400
    assert "Missing required parameters" in response.json()["detail"]


@pytest.mark.parametrize(
    ("operation", "b", "code"),
    [("divide", 0, "division_by_zero"), ("mod", 1, "unknown_operation")],
)
def test_calculate_surfaces_contract_errors(client: TestClient, operation, b, code):
    response = client.get("/rpc/calculate", params={"operation": operation, "a": 1, "b": b})

    assert response.status_code == 400
    assert response.json()["code"] == code


def test_get_data_omits_value_on_miss(client: TestClient):
    assert client.get("/rpc/get-data", params={"key": "anything"}).json() == {"key": "anything", "found": False}


def test_process_batch(client: TestClient):
    response = client.get("/rpc/process-batch", params=[("items", "apple"), ("items", "banana")])

    assert response.json() == {"processed": 2, "items": ["APPLE", "BANANA"]}


def test_get_component_renders_worker_panel(client: TestClient):
    response = client.get("/rpc/get-component")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "198.51.100.1" in response.text
    assert "REGION" in response.text
    assert "eu-west" in response.text
    assert 'style="padding: 24px;' in response.text


def test_unreachable_worker_is_502():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    binding = WorkerBinding(
        base_url="http://worker",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://worker"),
    )
    web_main.app.dependency_overrides[web_main.get_worker_binding] = lambda: binding
    try:
        response = TestClient(web_main.app).get("/rpc/say-hello")
    finally:
        web_main.app.dependency_overrides.clear()

    assert response.status_code == 502
    assert response.json()["code"] == "binding_error"


def test_shared_binding_is_closed_on_shutdown(monkeypatch):
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True})),
        base_url="http://worker",
    )
    monkeypatch.setattr(web_main, "_worker_binding", WorkerBinding(base_url="http://worker", client=http_client))

    with TestClient(web_main.app) as client:
        assert client.get("/health").status_code == 200
        assert not http_client.is_closed

    assert http_client.is_closed
    assert web_main._worker_binding is None
