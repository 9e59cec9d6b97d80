"""Tests for health check endpoints."""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from storefront.infrastructure.database import get_database
from storefront.main import app


class PingDatabase:
    """Database stand-in that answers ping with a fixed result."""

    def __init__(self, reachable: bool) -> None:
        self.reachable = reachable

    def ping(self) -> bool:
        return self.reachable


@pytest.fixture
def health_client() -> Iterator[TestClient]:
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(health_client: TestClient) -> None:
    response = health_client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "storefront-api"
    assert "version" in data


def test_ready(health_client: TestClient) -> None:
    app.dependency_overrides[get_database] = lambda: PingDatabase(True)
    response = health_client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "database": "connected"}


def test_not_ready(health_client: TestClient) -> None:
    app.dependency_overrides[get_database] = lambda: PingDatabase(False)
    response = health_client.get("/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "not_ready", "database": "unavailable"}
