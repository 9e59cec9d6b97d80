"""Catalog repositories for database operations.

Provides CRUD operations for products, categories and brands, with the
filtering, sorting and pagination used by the storefront listings.
"""

import re
from typing import Any

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from storefront.catalog.models import PRODUCT_SORT_FIELDS, ProductStatus
from storefront.catalog.slug_matcher import (
    build_category_pattern,
    build_subcategory_pattern,
)
from storefront.infrastructure.database import (
    BaseRepository,
    is_object_id,
    parse_object_id,
    utcnow,
)

IN_STOCK_STATUS = re.compile(r"^in-stock", re.IGNORECASE)


class ProductRepository(BaseRepository):
    """Repository for product documents.

    Example usage:
        repo = ProductRepository(database)
        query = repo.build_query(
            category="hardware",
            subcategory="1-14-rod-end-parts",
            in_stock=True,
        )
        products = repo.find_all(query, limit=12)
    """

    collection_name = "products"
    entity_type = "Product"
    unique_field = "slug"

    def find_by_slug(self, slug: str) -> dict[str, Any] | None:
        """Get product by slug."""
        return self.find_one({"slug": slug.lower()})

    def find_by_id_or_slug(self, id_or_slug: str) -> dict[str, Any] | None:
        """Get product by ObjectId when the value parses as one, else by slug."""
        if is_object_id(id_or_slug):
            product = self.find_by_id(id_or_slug)
            if product is not None:
                return product
        return self.find_by_slug(id_or_slug)

    def build_query(
        self,
        category: str | None = None,
        subcategory: str | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
        status: str | None = None,
        in_stock: bool | None = None,
        featured: bool | None = None,
        search: str | None = None,
    ) -> dict[str, Any]:
        """Build a MongoDB filter from listing parameters.

        Args:
            category: Category slug, matched against ``parent``.
            subcategory: Subcategory slug, matched against ``children``.
            min_price: Minimum price.
            max_price: Maximum price.
            status: Exact product status.
            in_stock: Only sellable products (overrides ``status``).
            featured: Filter by featured flag.
            search: Case-insensitive text search in title, SKU and category name.

        Returns:
            Filter document.
        """
        query: dict[str, Any] = {}

        category_pattern = build_category_pattern(category)
        if category_pattern is not None:
            query["parent"] = category_pattern

        subcategory_pattern = build_subcategory_pattern(subcategory)
        if subcategory_pattern is not None:
            query["children"] = subcategory_pattern

        if min_price is not None or max_price is not None:
            query["price"] = {}
            if min_price is not None:
                query["price"]["$gte"] = min_price
            if max_price is not None:
                query["price"]["$lte"] = max_price

        if status:
            query["status"] = status

        if in_stock:
            query["status"] = IN_STOCK_STATUS
            query["quantity"] = {"$gt": 0}

        if featured is not None:
            query["featured"] = featured

        if search:
            search_pattern = re.compile(re.escape(search.strip()), re.IGNORECASE)
            query["$or"] = [
                {"title": search_pattern},
                {"sku": search_pattern},
                {"category.name": search_pattern},
            ]

        return query

    def find_all(
        self,
        query: dict[str, Any],
        sort_by: str = "created_at",
        sort_order: str = "desc",
        limit: int = 50,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """Find products with sorting and pagination.

        Args:
            query: Filter document from :meth:`build_query`.
            sort_by: Sort field; unknown fields fall back to created_at.
            sort_order: Sort order (asc, desc).
            limit: Maximum results.
            offset: Result offset for pagination.

        Returns:
            Matching products.
        """
        return self.find(
            query,
            sort=self._get_sort(sort_by, sort_order),
            skip=offset,
            limit=limit,
        )

    def find_related(self, product: dict[str, Any]) -> list[dict[str, Any]]:
        """Products sharing the category name, excluding the product itself."""
        category_name = (product.get("category") or {}).get("name")
        if category_name is None:
            return []
        return self.find(
            {
                "category.name": category_name,
                "_id": {"$ne": product["_id"]},
            }
        )

    def push_review(self, product_id: Any, review_id: ObjectId) -> None:
        """Append a review id to the product's reviews."""
        self.collection.update_one(
            {"_id": parse_object_id(product_id)},
            {"$push": {"reviews": review_id}, "$set": {"updated_at": utcnow()}},
        )

    def clear_reviews(self, product_id: Any) -> None:
        """Drop all review ids from the product."""
        self.collection.update_one(
            {"_id": parse_object_id(product_id)},
            {"$set": {"reviews": [], "updated_at": utcnow()}},
        )

    def record_sale(self, product_id: Any, quantity: int) -> dict[str, Any] | None:
        """Decrement stock and increment the sell count.

        Products whose quantity reaches zero are marked out of stock.

        Returns:
            Updated product, or None if the product does not exist.
        """
        oid = parse_object_id(product_id)
        self.collection.update_one(
            {"_id": oid},
            {
                "$inc": {"quantity": -quantity, "sell_count": quantity},
                "$set": {"updated_at": utcnow()},
            },
        )
        self.collection.update_many(
            {"_id": oid, "quantity": {"$lte": 0}},
            {"$set": {"quantity": 0, "status": ProductStatus.OUT_OF_STOCK.value}},
        )
        return self.collection.find_one({"_id": oid})

    def rename_category(self, category_id: ObjectId, name: str) -> int:
        """Rewrite the category label on every product of a category.

        Returns:
            Number of updated products.
        """
        result = self.collection.update_many(
            {"category.id": category_id},
            {"$set": {"category.name": name, "parent": name, "updated_at": utcnow()}},
        )
        return result.modified_count

    def average_ratings(self, product_ids: list[ObjectId]) -> dict[ObjectId, float]:
        """Average review rating per product.

        Args:
            product_ids: Products to compute ratings for.

        Returns:
            Mapping of product id to average rating (products without
            reviews are absent).
        """
        pipeline = [
            {"$match": {"product_id": {"$in": product_ids}}},
            {"$group": {"_id": "$product_id", "rating": {"$avg": "$rating"}}},
        ]
        reviews = self.database.collection("reviews")
        return {row["_id"]: row["rating"] for row in reviews.aggregate(pipeline)}

    def _get_sort(self, sort_by: str, sort_order: str) -> list[tuple[str, int]]:
        """Get sort specification.

        Args:
            sort_by: Sort field name.
            sort_order: asc or desc.

        Returns:
            pymongo sort list, with ``_id`` as a stable tie-breaker.
        """
        field = sort_by if sort_by in PRODUCT_SORT_FIELDS else "created_at"
        direction = ASCENDING if sort_order.lower() == "asc" else DESCENDING
        return [(field, direction), ("_id", direction)]


class CategoryRepository(BaseRepository):
    """Repository for category documents."""

    collection_name = "categories"
    entity_type = "Category"
    unique_field = "parent"

    def find_by_parent(self, parent: str) -> dict[str, Any] | None:
        """Find a category by its label, case-insensitively."""
        pattern = re.compile(f"^{re.escape(parent.strip())}$", re.IGNORECASE)
        return self.find_one({"parent": pattern})

    def add_product(self, category_id: Any, product_id: ObjectId) -> None:
        """Append a product id to the category."""
        self.collection.update_one(
            {"_id": parse_object_id(category_id)},
            {"$push": {"products": product_id}},
        )

    def remove_product(self, category_id: Any, product_id: ObjectId) -> None:
        """Remove a product id from the category."""
        self.collection.update_one(
            {"_id": parse_object_id(category_id)},
            {"$pull": {"products": product_id}},
        )


class BrandRepository(BaseRepository):
    """Repository for brand documents."""

    collection_name = "brands"
    entity_type = "Brand"
    unique_field = "name"
