"""Guest cart application service.

Guest carts are saved by email so a shopper can resume checkout from
another device. Each email has at most one active cart; carts expire
after the configured TTL (enforced by a MongoDB TTL index on
``expires_at``).
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import structlog
from pymongo import ReturnDocument

from storefront.domain.exceptions import NotFoundError, ValidationError
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import BaseRepository, MongoDatabase, utcnow

logger = structlog.get_logger()


class CartRepository(BaseRepository):
    """Repository for guest carts."""

    collection_name = "carts"
    entity_type = "Cart"

    def find_active(self, email: str) -> dict[str, Any] | None:
        """Most recent active cart for an email."""
        carts = self.find(
            {"email": email, "is_active": True},
            sort=[("created_at", -1)],
            limit=1,
        )
        return carts[0] if carts else None


@dataclass
class SaveCartResult:
    """Result of saving a cart."""

    cart: dict[str, Any]
    created: bool


class CartService:
    """Service for guest cart operations."""

    def __init__(self, database: MongoDatabase, ttl_days: int | None = None) -> None:
        self.repository = CartRepository(database)
        self.ttl = timedelta(days=ttl_days if ttl_days is not None else settings.cart_ttl_days)

    def save_cart(self, email: str, items: list[dict[str, Any]]) -> SaveCartResult:
        """Save a guest cart, replacing the items of the active cart if any.

        Raises:
            ValidationError: If the cart is empty.
        """
        if not items:
            raise ValidationError("Cart cannot be empty")

        email = _normalise_email(email)
        existing = self.repository.find_active(email)

        if existing is not None:
            cart = self.repository.update_by_id(
                existing["_id"],
                {"items": items, "expires_at": self._expiry()},
            )
            logger.info("Guest cart updated", email=email, item_count=len(items))
            return SaveCartResult(cart=cart, created=False)

        cart = self.repository.insert(
            {
                "email": email,
                "items": items,
                "is_active": True,
                "expires_at": self._expiry(),
            }
        )
        logger.info("Guest cart saved", email=email, item_count=len(items))
        return SaveCartResult(cart=cart, created=True)

    def get_cart(self, email: str) -> dict[str, Any]:
        """Get the active cart for an email.

        Raises:
            NotFoundError: If the email has no active cart.
        """
        email = _normalise_email(email)
        cart = self.repository.find_active(email)
        if cart is None:
            raise NotFoundError("Cart", email)
        return cart

    def update_items(self, email: str, items: list[dict[str, Any]]) -> dict[str, Any]:
        """Replace the items of the active cart, creating it if needed."""
        email = _normalise_email(email)
        now = utcnow()
        return self.repository.collection.find_one_and_update(
            {"email": email, "is_active": True},
            {
                "$set": {"items": items, "expires_at": self._expiry(), "updated_at": now},
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )

    def delete_cart(self, email: str) -> dict[str, Any]:
        """Deactivate the active cart for an email.

        Raises:
            NotFoundError: If the email has no active cart.
        """
        email = _normalise_email(email)
        cart = self.repository.collection.find_one_and_update(
            {"email": email, "is_active": True},
            {"$set": {"is_active": False, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        if cart is None:
            raise NotFoundError("Cart", email)
        logger.info("Guest cart deactivated", email=email)
        return cart

    def _expiry(self):
        return utcnow() + self.ttl


def _normalise_email(email: str) -> str:
    return email.strip().lower()
