from __future__ import annotations

from datetime import datetime

from fastapi.testclient import TestClient


def test_health_reports_status_and_cache_stats(client: TestClient):
    resp = client.get("/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["environment"] == "testing"
    assert data["cache"] == {"size": 0, "max": 1000}
    assert datetime.fromisoformat(data["timestamp"]).tzinfo is not None


def test_api_health_alias(client: TestClient):
    assert client.get("/api/health").json()["status"] == "ok"


def test_health_cache_size_tracks_usage(client: TestClient):
    client.get("/api/dashboard")

    assert client.get("/health").json()["cache"]["size"] == 1


def test_health_reports_configured_capacity(make_app):
    client = TestClient(make_app("production", cache_max_entries=25))
    data = client.get("/health").json()

    assert data["environment"] == "production"
    assert data["cache"]["max"] == 25
