"""Tests for the guest cart service."""

from datetime import timedelta

import pytest

from storefront.application.cart_service import CartService
from storefront.domain.exceptions import NotFoundError, ValidationError
from storefront.infrastructure.database import MongoDatabase, utcnow

ITEM = {
    "product_id": "64b7f0c2a1b2c3d4e5f60718",
    "title": "Rod End Bearing",
    "img": "https://cdn.example.com/rod-end.png",
    "price": 19.5,
    "order_quantity": 2,
    "sku": "RE-114",
}


@pytest.fixture
def service(database: MongoDatabase) -> CartService:
    return CartService(database, ttl_days=7)


class TestSaveCart:
    """Tests for saving guest carts."""

    def test_creates_cart(self, service: CartService) -> None:
        result = service.save_cart("Shopper@Example.com", [ITEM])
        assert result.created
        assert result.cart["email"] == "shopper@example.com"
        assert result.cart["is_active"]
        assert result.cart["items"] == [ITEM]

    def test_expiry_uses_ttl(self, service: CartService) -> None:
        before = utcnow()
        cart = service.save_cart("shopper@example.com", [ITEM]).cart
        assert cart["expires_at"] >= before + timedelta(days=7)
        assert cart["expires_at"] <= utcnow() + timedelta(days=7)

    def test_updates_active_cart(self, service: CartService, database: MongoDatabase) -> None:
        service.save_cart("shopper@example.com", [ITEM])
        result = service.save_cart("SHOPPER@example.com", [{**ITEM, "order_quantity": 5}])

        assert not result.created
        assert result.cart["items"][0]["order_quantity"] == 5
        assert database.collection("carts").count_documents({}) == 1

    def test_empty_cart_rejected(self, service: CartService) -> None:
        with pytest.raises(ValidationError, match="Cart cannot be empty"):
            service.save_cart("shopper@example.com", [])


class TestGetAndDelete:
    """Tests for reading and deactivating carts."""

    def test_get_cart(self, service: CartService) -> None:
        service.save_cart("shopper@example.com", [ITEM])
        assert service.get_cart(" Shopper@example.com ")["items"] == [ITEM]

    def test_get_missing(self, service: CartService) -> None:
        with pytest.raises(NotFoundError):
            service.get_cart("nobody@example.com")

    def test_delete_deactivates(self, service: CartService) -> None:
        service.save_cart("shopper@example.com", [ITEM])
        cart = service.delete_cart("shopper@example.com")

        assert cart["is_active"] is False
        with pytest.raises(NotFoundError):
            service.get_cart("shopper@example.com")
        with pytest.raises(NotFoundError):
            service.delete_cart("shopper@example.com")

    def test_save_after_delete_creates_new_cart(self, service: CartService) -> None:
        service.save_cart("shopper@example.com", [ITEM])
        service.delete_cart("shopper@example.com")
        assert service.save_cart("shopper@example.com", [ITEM]).created


class TestUpdateItems:
    """Tests for replacing cart items."""

    def test_upserts(self, service: CartService) -> None:
        cart = service.update_items("new@example.com", [ITEM])
        assert cart["email"] == "new@example.com"
        assert cart["is_active"] is True
        assert cart["created_at"] is not None

    def test_replaces_items(self, service: CartService) -> None:
        service.save_cart("shopper@example.com", [ITEM])
        cart = service.update_items("shopper@example.com", [])
        assert cart["items"] == []
        assert service.get_cart("shopper@example.com")["items"] == []
