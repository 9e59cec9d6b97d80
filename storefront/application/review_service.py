"""Review application service.

Customers may review a product once, and only after ordering it. Review
ids are mirrored onto the product so listings can tell reviewed products
apart without a join.
"""

from typing import Any

import structlog

from storefront.catalog.repository import ProductRepository
from storefront.domain.exceptions import NotFoundError, ReviewNotAllowedError
from storefront.infrastructure.database import (
    BaseRepository,
    MongoDatabase,
    parse_object_id,
)

logger = structlog.get_logger()


class ReviewRepository(BaseRepository):
    """Repository for product reviews."""

    collection_name = "reviews"
    entity_type = "Review"

    def find_for_product(self, product_id: Any) -> list[dict[str, Any]]:
        return self.find(
            {"product_id": parse_object_id(product_id)},
            sort=[("created_at", -1)],
        )


class ReviewService:
    """Service for review operations."""

    def __init__(self, database: MongoDatabase) -> None:
        self.repository = ReviewRepository(database)
        self.products = ProductRepository(database)
        self.orders = database.collection("orders")

    def add_review(self, data: dict[str, Any]) -> dict[str, Any]:
        """Add a review for a purchased product.

        Args:
            data: Validated review fields (``user_id``, ``product_id``,
                ``rating``, optional ``comment``).

        Raises:
            NotFoundError: If the product does not exist.
            ReviewNotAllowedError: If the user already reviewed the product
                or never ordered it.
        """
        user_id = data["user_id"]
        product_id = data["product_id"]
        product = self.products.get_by_id(product_id)

        existing = self.repository.find_one(
            {"user_id": user_id, "product_id": product["_id"]}
        )
        if existing is not None:
            raise ReviewNotAllowedError(
                user_id, product_id, "You have already left a review for this product."
            )

        purchase = self.orders.find_one(
            {"user": user_id, "cart.product_id": str(product["_id"])}
        )
        if purchase is None:
            raise ReviewNotAllowedError(
                user_id, product_id, "Without purchase you can not give here review!"
            )

        review = self.repository.insert(
            {
                **data,
                "product_id": product["_id"],
                "order_id": purchase["_id"],
                "is_from_feedback_email": data.get("is_from_feedback_email", False),
            }
        )
        self.products.push_review(product["_id"], review["_id"])

        logger.info(
            "Review added",
            review_id=str(review["_id"]),
            product_id=product_id,
            rating=review["rating"],
        )
        return review

    def list_for_product(self, product_id: str) -> list[dict[str, Any]]:
        """Reviews of a product, newest first."""
        return self.repository.find_for_product(product_id)

    def delete_for_product(self, product_id: str) -> int:
        """Delete every review of a product.

        Returns:
            Number of deleted reviews.

        Raises:
            NotFoundError: If the product has no reviews.
        """
        oid = parse_object_id(product_id)
        deleted = self.repository.delete_many({"product_id": oid})
        if deleted == 0:
            raise NotFoundError("Product reviews", product_id)

        self.products.clear_reviews(oid)
        logger.info("Product reviews deleted", product_id=product_id, deleted=deleted)
        return deleted
