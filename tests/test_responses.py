# tests/test_responses.py
"""Tests for the response envelope applied to every failure."""

from fastapi import APIRouter, status
from fastapi.testclient import TestClient


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/api/v1/nothing-here")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    body = r.json()
    assert body["response"] == "Error"
    assert body["error"]["type"] == "NotFoundError"
    assert body["error"]["path"] == "/api/v1/nothing-here"
    assert body["error"]["statusCode"] == 404


def test_wrong_method_keeps_status(client):
    r = client.patch("/api/v1/courses")
    assert r.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
    assert r.json()["error"]["statusCode"] == 405


def test_validation_error_names_the_field(client):
    r = client.post("/api/v1/users", json={"name": "x", "email": "x@ufpr.br"})
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    error = r.json()["error"]
    assert error["type"] == "ValidationError"
    assert error["message"].startswith("password:")


def test_unexpected_error_is_masked(app):
    router = APIRouter()

    @router.get("/boom")
    def boom() -> None:
        raise RuntimeError("database password is hunter2")

    app.include_router(router, prefix="/test-only")
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            r = client.get("/test-only/boom")
    finally:
        app.router.routes = [
            route for route in app.router.routes if getattr(route, "path", "") != "/test-only/boom"
        ]

    assert r.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    error = r.json()["error"]
    assert error["type"] == "InternalError"
    assert error["message"] == "Internal server error"
    assert "hunter2" not in r.text
