"""
End-to-end tests for the FastAPI surface over an in-memory storage.
"""
from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from resource_tracker.config import Settings
from resource_tracker.main import create_app
from resource_tracker.storage import MemoryStorage

from conftest import SCENARIO_RECORDS


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(data_file=tmp_path / "resources.json", storage_key="testKey", log_level="WARNING")


@pytest.fixture()
def client(settings):
    storage = MemoryStorage({"testKey": json.dumps(SCENARIO_RECORDS)})
    with TestClient(create_app(settings=settings, storage=storage)) as c:
        yield c


def test_health_check(client):
    assert client.get("/").json() == {"status": "ok", "resources": 2}


def test_list_with_query_parameters(client):
    resp = client.get("/api/resources", params={"sort": "priority"})
    assert resp.status_code == 200
    body = resp.json()
    assert [r["id"] for r in body["items"]] == [2, 1]
    assert body["state"] == "ok"
    assert body["items"][0]["createdAt"].startswith("2024-06-01T00:00:00")

    resp = client.get("/api/resources", params={"q": "RUST"})
    assert [r["id"] for r in resp.json()["items"]] == [2]

    resp = client.get("/api/resources", params={"status": "completed"})
    assert [r["id"] for r in resp.json()["items"]] == [1]


def test_list_rejects_unknown_sort(client):
    assert client.get("/api/resources", params={"sort": "title"}).status_code == 422


def test_create_get_and_delete(client):
    resp = client.post("/api/resources", json={"title": " New ", "type": "course"})
    assert resp.status_code == 201
    created = resp.json()
    assert created["id"] == 3
    assert created["title"] == "New"
    assert created["status"] == "planned"
    assert created["priority"] == "medium"

    assert client.get("/api/resources/3").json()["title"] == "New"

    assert client.delete("/api/resources/3").json() == {"status": "ok", "deleted": True}
    assert client.get("/api/resources/3").status_code == 404
    assert client.delete("/api/resources/3").json() == {"status": "ok", "deleted": False}


def test_create_validation_error_is_400(client):
    resp = client.post("/api/resources", json={"title": "   ", "type": "book"})
    assert resp.status_code == 400
    assert "Title and Type" in resp.json()["detail"]
    assert client.get("/").json()["resources"] == 2


def test_html_view(client):
    resp = client.get("/api/resources/html", params={"q": "rust"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "Rust Book" in resp.text
    assert "Go Tour" not in resp.text

    resp = client.get("/api/resources/html", params={"q": "nothing here"})
    assert "No resources match your current search/filter." in resp.text


def test_app_uses_json_file_by_default(settings):
    with TestClient(create_app(settings=settings)) as c:
        c.post("/api/resources", json={"title": "a", "type": "book"})

    stored = json.loads(settings.data_file.read_text(encoding="utf-8"))
    records = json.loads(stored["testKey"])
    assert [r["title"] for r in records] == ["a"]
