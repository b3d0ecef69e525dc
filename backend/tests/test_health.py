"""Tests for the unversioned endpoints, middleware and the error envelope."""

from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from api.dependencies import get_db
from api.main import app


def test_root(client):
    body = client.get("/").json()
    assert body["service"] == "University Sports API"
    assert body["live"] == "/ws/results"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["version"] == "1.0.0"
    assert isinstance(body["live_subscribers"], int)


def test_health_db_connected(client):
    resp = client.get("/health/db")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "db": "connected"}


def test_health_db_unreachable_is_503(client):
    broken = MagicMock()
    broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    app.dependency_overrides[get_db] = lambda: broken

    resp = client.get("/health/db")

    assert resp.status_code == 503
    assert resp.json()["status"] == "error"


def test_request_id_generated(client):
    resp = client.get("/health")
    assert resp.headers["X-Request-ID"]


def test_request_id_echoed_in_header_and_error_body(client):
    resp = client.get("/api/v1/universities/missing", headers={"X-Request-ID": "req-123"})
    assert resp.status_code == 404
    assert resp.headers["X-Request-ID"] == "req-123"
    assert resp.json() == {
        "error": "University not found",
        "status_code": 404,
        "request_id": "req-123",
    }


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/v1/teams")
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"] == "Not Found"
    assert body["status_code"] == 404
    assert "request_id" in body


def test_wrong_method_is_405(client):
    resp = client.patch("/api/v1/universities")
    assert resp.status_code == 405
    assert resp.json()["status_code"] == 405


def test_error_envelope_documented_in_openapi(client):
    schema = client.get("/openapi.json").json()
    assert "ErrorResponse" in schema["components"]["schemas"]

    responses = schema["paths"]["/api/v1/users/{user_id}"]["get"]["responses"]
    for status in ("404", "422", "500"):
        ref = responses[status]["content"]["application/json"]["schema"]["$ref"]
        assert ref == "#/components/schemas/ErrorResponse"
