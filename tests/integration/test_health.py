"""Integration tests: health endpoints and response headers."""
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health_ok(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_health_live(client: TestClient):
    r = client.get("/health/live")
    assert r.status_code == 200
    data = r.json()
    assert data.get("status") == "ok" and data.get("check") == "live"


def test_health_ready_reports_database_down(client: TestClient):
    with patch("app.db.db_available", False):
        r = client.get("/health/ready")
    assert r.status_code == 200
    data = r.json()
    assert data["check"] == "ready"
    assert data["database"] == "down"
    assert data["status"] == "degraded"


def test_request_id_echoed(client: TestClient):
    r = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"


def test_security_headers(client: TestClient):
    r = client.get("/health")
    assert r.headers["x-content-type-options"] == "nosniff"
    assert r.headers["x-frame-options"] == "DENY"


def test_error_response_has_request_id(client: TestClient):
    r = client.get("/api/user", headers={"X-Request-ID": "req-401"})
    assert r.status_code == 401
    assert r.headers["x-request-id"] == "req-401"
