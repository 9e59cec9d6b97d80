"""Shared fixtures.

Tests run against an in-memory mongomock database injected through the
``get_database`` dependency, so no MongoDB server is needed.
"""

from typing import Any, Callable, Iterator

import mongomock
import pytest
from fastapi.testclient import TestClient

from storefront.application.category_service import CategoryService
from storefront.infrastructure.database import MongoDatabase, get_database
from storefront.main import app


@pytest.fixture
def database() -> MongoDatabase:
    """Create an empty in-memory database with indexes applied."""
    database = MongoDatabase(mongomock.MongoClient(), "storefront_test")
    database.ensure_indexes()
    return database


@pytest.fixture
def client(database: MongoDatabase) -> Iterator[TestClient]:
    """Create test client bound to the in-memory database."""
    app.dependency_overrides[get_database] = lambda: database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def category(database: MongoDatabase) -> dict[str, Any]:
    """A stored "Hardware" category."""
    return CategoryService(database).create_category(
        {
            "parent": "Hardware",
            "children": ['1 1/4" Rod End Parts', "1-14 Rod End Parts", "Nuts & Bolts"],
            "img": "https://cdn.example.com/hardware.png",
        }
    )


@pytest.fixture
def product_payload(category: dict[str, Any]) -> Callable[..., dict[str, Any]]:
    """Factory for product create payloads filed under ``category``."""

    def make(**overrides: Any) -> dict[str, Any]:
        payload = {
            "sku": "RE-114",
            "title": "Rod End Bearing",
            "slug": "rod-end-bearing",
            "img": "https://cdn.example.com/rod-end.png",
            "parent": "Hardware",
            "children": '1 1/4" Rod End Parts',
            "price": 19.5,
            "quantity": 10,
            "category": {"id": str(category["_id"]), "name": "Hardware"},
            "description": "Heavy duty rod end bearing.",
        }
        payload.update(overrides)
        return payload

    return make


@pytest.fixture
def order_payload() -> Callable[..., dict[str, Any]]:
    """Factory for order create payloads."""

    def make(cart: list[dict[str, Any]], **overrides: Any) -> dict[str, Any]:
        payload = {
            "cart": cart,
            "name": "Jane Doe",
            "address": "1 Main Street",
            "email": "jane@example.com",
            "contact": "5551234567",
            "city": "Springfield",
            "country": "US",
            "zip_code": "12345",
            "sub_total": 39.0,
            "shipping_cost": 5.0,
            "total_amount": 44.0,
            "payment_method": "card",
        }
        payload.update(overrides)
        return payload

    return make


@pytest.fixture
def cart_line() -> Callable[..., dict[str, Any]]:
    """Factory for cart lines of a stored or serialized product."""

    def make(product: dict[str, Any], quantity: int = 1) -> dict[str, Any]:
        product_id = product.get("_id", product.get("id"))
        return {
            "product_id": str(product_id),
            "title": product["title"],
            "img": product["img"],
            "price": product["price"],
            "order_quantity": quantity,
            "sku": product.get("sku"),
        }

    return make
