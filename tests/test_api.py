from __future__ import annotations

import re

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from todolist.exceptions import StorageError
from todolist.main import create_app
from todolist.todo.store import get_todo_store


def _titles(html: str) -> list[str]:
    return re.findall(r"<li>(.*?) <a href=", html)


def test_full_scenario(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert _titles(response.text) == []

    response = client.post("/create", data={"title": "Test"}, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/"

    response = client.get("/")
    assert _titles(response.text) == ["Test"]
    assert 'href="/delete?id=1"' in response.text

    response = client.get("/delete", params={"id": "1"}, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/"

    assert _titles(client.get("/").text) == []


def test_create_follows_redirect_to_listing(client: TestClient) -> None:
    response = client.post("/create", data={"title": "<script>x</script>"})

    assert response.status_code == 200
    assert "&lt;script&gt;x&lt;/script&gt;" in response.text
    assert "<script>x</script>" not in response.text


def test_create_without_title_stores_empty_title(client: TestClient) -> None:
    response = client.post("/create", data={}, follow_redirects=False)

    assert response.status_code == 303
    assert _titles(client.get("/").text) == [""]


def test_create_rejects_non_post_methods(client: TestClient) -> None:
    assert client.get("/create").status_code == 405
    assert client.put("/create").status_code == 405
    assert _titles(client.get("/").text) == []


def test_delete_accepts_post_and_tolerates_bad_ids(client: TestClient) -> None:
    client.post("/create", data={"title": "keep"})

    for params in ({"id": "abc"}, {"id": "999"}, {}):
        response = client.get("/delete", params=params, follow_redirects=False)
        assert response.status_code == 303

    response = client.options("/delete?id=999", follow_redirects=False)
    assert response.status_code == 303

    response = client.post("/delete?id=1", follow_redirects=False)
    assert response.status_code == 303
    assert _titles(client.get("/").text) == []


def test_index_tolerates_other_methods(client: TestClient) -> None:
    assert client.post("/").status_code == 200
    assert client.options("/").status_code == 200
    assert client.request("TRACE", "/").status_code == 200


class _BrokenStore:
    async def list_all(self):
        raise StorageError("disk I/O error")

    async def create(self, title: str):
        raise StorageError("database is locked")

    async def delete(self, todo_id):
        raise StorageError("database is locked")


def test_storage_errors_become_plain_text_500(settings) -> None:
    app = create_app(settings)
    app.dependency_overrides[get_todo_store] = lambda: _BrokenStore()

    with TestClient(app) as client:
        response = client.get("/")
        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "disk I/O error"

        response = client.post("/create", data={"title": "x"}, follow_redirects=False)
        assert response.status_code == 500
        assert response.text == "database is locked"

        response = client.get("/delete?id=1", follow_redirects=False)
        assert response.status_code == 500


def test_health_reports_sqlite_ok(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "sqlite": "ok"}


def test_trace_id_is_echoed_or_generated(client: TestClient) -> None:
    echoed = client.get("/", headers={"X-Trace-ID": "trace-123"})
    generated = client.get("/")

    assert echoed.headers["X-Trace-ID"] == "trace-123"
    assert generated.headers["X-Trace-ID"]
    assert "X-Duration-Ms" in generated.headers


def test_metrics_count_todo_operations(client: TestClient) -> None:
    before = REGISTRY.get_sample_value(
        "todolist_todo_operation_total", {"operation": "create", "status": "success"}
    ) or 0.0

    client.post("/create", data={"title": "counted"}, follow_redirects=False)

    after = REGISTRY.get_sample_value(
        "todolist_todo_operation_total", {"operation": "create", "status": "success"}
    )
    assert after == before + 1

    response = client.get("/metrics/")
    assert response.status_code == 200
    assert 'todolist_todo_operation_total{operation="create",status="success"}' in response.text
    assert "todolist_request_total" in response.text


def test_storage_error_is_counted(settings) -> None:
    app = create_app(settings)
    app.dependency_overrides[get_todo_store] = lambda: _BrokenStore()
    before = REGISTRY.get_sample_value("todolist_error_total", {"error_type": "storage_error"}) or 0.0

    with TestClient(app) as client:
        assert client.get("/").status_code == 500

    after = REGISTRY.get_sample_value("todolist_error_total", {"error_type": "storage_error"})
    assert after == before + 1
