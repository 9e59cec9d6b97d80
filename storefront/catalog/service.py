"""Catalog service for product operations.

High-level service that combines repository operations with
business logic for catalog management.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, TypeVar

import structlog

from storefront.catalog.models import (
    ProductStatus,
    build_product_changes,
    build_product_document,
)
from storefront.catalog.repository import CategoryRepository, ProductRepository
from storefront.domain.exceptions import NotFoundError, ValidationError
from storefront.infrastructure.database import MongoDatabase, to_storage_datetime, utcnow

T = TypeVar("T")

logger = structlog.get_logger()


@dataclass
class ProductFilter:
    """Filter parameters for product listings.

    Attributes:
        category: Category slug (matched against the parent label).
        subcategory: Subcategory slug (matched against the children label).
        min_price: Minimum price.
        max_price: Maximum price.
        status: Exact product status.
        in_stock: Only products that can be bought.
        featured: Filter by featured flag.
        search: Text search in title, SKU and category name.
    """

    category: str | None = None
    subcategory: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    status: str | None = None
    in_stock: bool | None = None
    featured: bool | None = None
    search: str | None = None


@dataclass
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        page_size: Items per page.
        sort_by: Sort field.
        sort_order: Sort order (asc/desc).
    """

    page: int = 1
    page_size: int = 12
    sort_by: str = "created_at"
    sort_order: str = "desc"

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Get limit (alias for page_size)."""
        return self.page_size


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count.
        page: Current page.
        page_size: Items per page.
        total_pages: Total number of pages.
    """

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1


class CatalogService:
    """Service for catalog operations.

    Provides product listing with slug-based category filtering, product
    CRUD that keeps category membership in sync, and the derived listings
    used by the storefront (related, stock-out, offers, top rated).

    Example usage:
        service = CatalogService(database)
        results = service.list_products(
            ProductFilter(category="hardware", subcategory="1-14-rod-end-parts"),
            PaginationParams(page=1, sort_by="price", sort_order="asc"),
        )
    """

    def __init__(self, database: MongoDatabase) -> None:
        """Initialize service with database handle.

        Args:
            database: Storefront database.
        """
        self.database = database
        self.repository = ProductRepository(database)
        self.categories = CategoryRepository(database)

    def list_products(
        self,
        filters: ProductFilter,
        pagination: PaginationParams,
    ) -> PaginatedResult[dict[str, Any]]:
        """List products with filters and pagination.

        Args:
            filters: Filter parameters.
            pagination: Pagination parameters.

        Returns:
            Paginated product results.
        """
        query = self._build_query(filters)

        products = self.repository.find_all(
            query,
            sort_by=pagination.sort_by,
            sort_order=pagination.sort_order,
            limit=pagination.limit,
            offset=pagination.offset,
        )
        total = self.repository.count(query)

        return PaginatedResult(
            items=products,
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
        )

    def count_products(self, filters: ProductFilter) -> int:
        """Count products matching filters."""
        return self.repository.count(self._build_query(filters))

    def list_by_category(
        self,
        category: str | None,
        subcategory: str | None = None,
    ) -> list[dict[str, Any]]:
        """List all products of a category, newest first.

        Args:
            category: Category slug (required).
            subcategory: Optional subcategory slug.

        Raises:
            ValidationError: If no category is given.
        """
        if not category:
            raise ValidationError("Category parameter is required")

        query = self._build_query(ProductFilter(category=category, subcategory=subcategory))
        return self.repository.find_all(query, limit=0)

    def get_product(self, id_or_slug: str) -> dict[str, Any]:
        """Get product by ID or slug.

        Raises:
            NotFoundError: If no product matches.
        """
        product = self.repository.find_by_id_or_slug(id_or_slug)
        if product is None:
            raise NotFoundError("Product", id_or_slug)
        return product

    def create_product(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create a product and register it with its category.

        Args:
            data: Validated product fields.

        Returns:
            The stored product.
        """
        product = self.repository.insert(build_product_document(data))
        self.categories.add_product(product["category"]["id"], product["_id"])

        logger.info(
            "Product created",
            product_id=str(product["_id"]),
            slug=product["slug"],
            category=product["category"]["name"],
        )
        return product

    def update_product(self, product_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Update a product.

        When the category changes the product is moved from the old
        category's product list to the new one.

        Raises:
            NotFoundError: If the product does not exist.
        """
        current = self.repository.get_by_id(product_id)
        changes = build_product_changes(data)
        product = self.repository.update_by_id(product_id, changes)

        old_category_id = (current.get("category") or {}).get("id")
        new_category_id = (product.get("category") or {}).get("id")
        if old_category_id != new_category_id:
            if old_category_id is not None:
                self.categories.remove_product(old_category_id, product["_id"])
            if new_category_id is not None:
                self.categories.add_product(new_category_id, product["_id"])
            logger.info(
                "Product moved between categories",
                product_id=product_id,
                old_category_id=str(old_category_id),
                new_category_id=str(new_category_id),
            )

        return product

    def delete_product(self, product_id: str) -> dict[str, Any]:
        """Delete a product and detach it from its category."""
        product = self.repository.delete_by_id(product_id)
        category_id = (product.get("category") or {}).get("id")
        if category_id is not None:
            self.categories.remove_product(category_id, product["_id"])
        logger.info("Product deleted", product_id=product_id)
        return product

    def related_products(self, product_id: str) -> list[dict[str, Any]]:
        """Products in the same category as the given product."""
        product = self.repository.get_by_id(product_id)
        return self.repository.find_related(product)

    def stock_out_products(self) -> list[dict[str, Any]]:
        """Out-of-stock products, newest first."""
        return self.repository.find_all(
            {"status": ProductStatus.OUT_OF_STOCK.value},
            limit=0,
        )

    def offer_products(self, now: datetime | None = None) -> list[dict[str, Any]]:
        """Products whose offer is still running.

        Args:
            now: Reference time (defaults to the current time).
        """
        reference = to_storage_datetime(now) if now else utcnow()
        return self.repository.find(
            {"offer_date.end_date": {"$gt": reference}},
            sort=[("offer_date.end_date", 1)],
        )

    def top_rated_products(self) -> list[dict[str, Any]]:
        """Reviewed products ordered by average rating, highest first."""
        products = self.repository.find({"reviews": {"$exists": True, "$ne": []}})
        ratings = self.repository.average_ratings([p["_id"] for p in products])

        rated = [
            {**product, "rating": ratings[product["_id"]]}
            for product in products
            if product["_id"] in ratings
        ]
        rated.sort(key=lambda p: p["rating"], reverse=True)
        return rated

    def _build_query(self, filters: ProductFilter) -> dict[str, Any]:
        return self.repository.build_query(
            category=filters.category,
            subcategory=filters.subcategory,
            min_price=filters.min_price,
            max_price=filters.max_price,
            status=filters.status,
            in_stock=filters.in_stock,
            featured=filters.featured,
            search=filters.search,
        )
