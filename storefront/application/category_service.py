"""Category application service.

Manages the storefront category tree: parent labels with their
subcategory (children) labels and the products filed under them.
"""

from typing import Any

import structlog

from storefront.catalog.models import CategoryStatus, build_category_document
from storefront.catalog.repository import CategoryRepository, ProductRepository
from storefront.domain.exceptions import DuplicateError
from storefront.infrastructure.database import MongoDatabase

logger = structlog.get_logger()


class CategoryService:
    """Service for category operations."""

    def __init__(self, database: MongoDatabase) -> None:
        self.repository = CategoryRepository(database)
        self.products = ProductRepository(database)

    def create_category(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create a category.

        Raises:
            DuplicateError: If a category with the same label exists.
        """
        document = build_category_document(data)
        if self.repository.find_by_parent(document["parent"]) is not None:
            raise DuplicateError("Category", "parent", document["parent"])

        category = self.repository.insert(document)
        logger.info("Category created", category_id=str(category["_id"]), parent=category["parent"])
        return category

    def replace_all(self, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Replace every category with the given list."""
        deleted = self.repository.delete_many({})
        categories = self.repository.insert_many([build_category_document(d) for d in items])
        logger.info("Categories replaced", deleted=deleted, created=len(categories))
        return categories

    def list_shown(self) -> list[dict[str, Any]]:
        """Categories visible in the storefront, most recently updated first."""
        return self.repository.find(
            {"status": CategoryStatus.SHOW.value},
            sort=[("updated_at", -1)],
        )

    def list_all(self) -> list[dict[str, Any]]:
        """All categories."""
        return self.repository.find()

    def get_category(self, category_id: str) -> dict[str, Any]:
        """Get category by ID."""
        return self.repository.get_by_id(category_id)

    def update_category(self, category_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Update a category.

        Renaming the parent label rewrites the label on all of the
        category's products so listings keep matching.
        """
        current = self.repository.get_by_id(category_id)
        if data.get("parent") is not None:
            data = {**data, "parent": data["parent"].strip()}

        category = self.repository.update_by_id(category_id, data)

        new_parent = data.get("parent")
        if new_parent and new_parent.lower() != current["parent"].lower():
            renamed = self.products.rename_category(category["_id"], new_parent)
            logger.info(
                "Category renamed",
                category_id=category_id,
                old_parent=current["parent"],
                new_parent=new_parent,
                products_updated=renamed,
            )

        return category

    def delete_category(self, category_id: str) -> dict[str, Any]:
        """Delete a category."""
        category = self.repository.delete_by_id(category_id)
        logger.info("Category deleted", category_id=category_id)
        return category
