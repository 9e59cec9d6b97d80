"""Tests for review API endpoints."""

from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def product(
    client: TestClient,
    product_payload: Callable[..., dict[str, Any]],
) -> dict[str, Any]:
    return client.post("/products", json=product_payload()).json()


@pytest.fixture
def purchase(
    client: TestClient,
    product: dict[str, Any],
    order_payload: Callable[..., dict[str, Any]],
    cart_line: Callable[..., dict[str, Any]],
) -> dict[str, Any]:
    return client.post(
        "/orders",
        json=order_payload([cart_line(product)], user="user-1"),
    ).json()


class TestReviewsApi:
    """Tests for /reviews."""

    def test_review_after_purchase(
        self,
        client: TestClient,
        product: dict[str, Any],
        purchase: dict[str, Any],
    ) -> None:
        response = client.post(
            "/reviews",
            json={"user_id": "user-1", "product_id": product["id"], "rating": 5},
        )
        assert response.status_code == 201
        review = response.json()
        assert review["product_id"] == product["id"]
        assert review["order_id"] == purchase["id"]

        stored = client.get(f"/products/{product['id']}").json()
        assert stored["reviews"] == [review["id"]]

        top = client.get("/products/top-rated").json()
        assert top[0]["rating"] == 5

    def test_review_without_purchase(self, client: TestClient, product: dict[str, Any]) -> None:
        response = client.post(
            "/reviews",
            json={"user_id": "user-1", "product_id": product["id"], "rating": 5},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "REVIEW_NOT_ALLOWED"

    def test_rating_range(self, client: TestClient, product: dict[str, Any]) -> None:
        response = client.post(
            "/reviews",
            json={"user_id": "user-1", "product_id": product["id"], "rating": 6},
        )
        assert response.status_code == 422

    def test_list_and_delete(
        self,
        client: TestClient,
        product: dict[str, Any],
        purchase: dict[str, Any],
    ) -> None:
        client.post(
            "/reviews",
            json={"user_id": "user-1", "product_id": product["id"], "rating": 4},
        )

        reviews = client.get(f"/reviews/product/{product['id']}").json()
        assert [r["rating"] for r in reviews] == [4]

        response = client.delete(f"/reviews/product/{product['id']}")
        assert response.json() == {"product_id": product["id"], "deleted_count": 1}
        assert client.delete(f"/reviews/product/{product['id']}").status_code == 404
