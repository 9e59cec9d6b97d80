"""Brand application service."""

from typing import Any

import structlog

from storefront.catalog.models import BrandStatus, build_brand_document
from storefront.catalog.repository import BrandRepository
from storefront.infrastructure.database import MongoDatabase

logger = structlog.get_logger()


class BrandService:
    """Service for brand operations."""

    def __init__(self, database: MongoDatabase) -> None:
        self.repository = BrandRepository(database)

    def create_brand(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create a brand. Duplicate names raise DuplicateError."""
        brand = self.repository.insert(build_brand_document(data))
        logger.info("Brand created", brand_id=str(brand["_id"]), name=brand["name"])
        return brand

    def replace_all(self, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Replace every brand with the given list."""
        self.repository.delete_many({})
        return self.repository.insert_many([build_brand_document(d) for d in items])

    def list_active(self) -> list[dict[str, Any]]:
        """Active brands sorted by name."""
        return self.repository.find(
            {"status": BrandStatus.ACTIVE.value},
            sort=[("name", 1)],
        )

    def get_brand(self, brand_id: str) -> dict[str, Any]:
        return self.repository.get_by_id(brand_id)

    def update_brand(self, brand_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self.repository.update_by_id(brand_id, data)

    def delete_brand(self, brand_id: str) -> dict[str, Any]:
        brand = self.repository.delete_by_id(brand_id)
        logger.info("Brand deleted", brand_id=brand_id)
        return brand
