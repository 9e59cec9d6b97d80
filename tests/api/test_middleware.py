"""Tests for request correlation and the error envelope."""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from storefront.infrastructure.database import get_database
from storefront.main import app


class TestRequestId:
    """Tests for X-Request-ID handling."""

    def test_generated(self, client: TestClient) -> None:
        response = client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 36

    def test_propagated(self, client: TestClient) -> None:
        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"


class TestErrorEnvelope:
    """Errors share one response shape."""

    def test_domain_error_carries_request_id(self, client: TestClient) -> None:
        response = client.get("/carts/nobody@example.com", headers={"X-Request-ID": "req-404"})
        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "NOT_FOUND"
        assert data["request_id"] == "req-404"
        assert set(data) == {"error_code", "message", "details", "request_id"}

    def test_unknown_route(self, client: TestClient) -> None:
        response = client.get("/no-such-route")
        assert response.status_code == 404
        data = response.json()
        assert data["message"] == "Not Found"
        assert data["request_id"] == response.headers["X-Request-ID"]

    def test_validation_details(self, client: TestClient) -> None:
        response = client.post("/banners", json={})
        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        fields = {detail["field"] for detail in data["details"]}
        assert "body.heading" in fields


def unavailable_database() -> None:
    raise RuntimeError("database offline")


class TestUnhandledErrors:
    """Unexpected exceptions are rendered by the application handler."""

    @pytest.fixture
    def failing_client(self) -> Iterator[TestClient]:
        app.dependency_overrides[get_database] = unavailable_database
        yield TestClient(app, raise_server_exceptions=False)
        app.dependency_overrides.clear()

    def test_internal_error_envelope(self, failing_client: TestClient) -> None:
        response = failing_client.get("/banners", headers={"X-Request-ID": "req-500"})
        assert response.status_code == 500
        assert response.json() == {
            "error_code": "INTERNAL_ERROR",
            "message": "An internal error occurred",
            "details": {},
            "request_id": "req-500",
        }
