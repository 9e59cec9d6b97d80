"""Homepage banner application service."""

from enum import Enum
from typing import Any

import structlog

from storefront.infrastructure.database import BaseRepository, MongoDatabase

logger = structlog.get_logger()

# Display order: explicit position first, newest first within a position
BANNER_SORT = [("order", 1), ("created_at", -1)]


class BannerStatus(str, Enum):
    """Banner visibility."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class BannerRepository(BaseRepository):
    collection_name = "banners"
    entity_type = "Banner"


class BannerService:
    """Service for banner operations."""

    def __init__(self, database: MongoDatabase) -> None:
        self.repository = BannerRepository(database)

    def create_banner(self, data: dict[str, Any]) -> dict[str, Any]:
        banner = self.repository.insert(data)
        logger.info("Banner created", banner_id=str(banner["_id"]), heading=banner["heading"])
        return banner

    def list_banners(self) -> list[dict[str, Any]]:
        return self.repository.find(sort=BANNER_SORT)

    def list_active(self) -> list[dict[str, Any]]:
        return self.repository.find({"status": BannerStatus.ACTIVE.value}, sort=BANNER_SORT)

    def get_banner(self, banner_id: str) -> dict[str, Any]:
        return self.repository.get_by_id(banner_id)

    def update_banner(self, banner_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self.repository.update_by_id(banner_id, data)

    def delete_banner(self, banner_id: str) -> dict[str, Any]:
        banner = self.repository.delete_by_id(banner_id)
        logger.info("Banner deleted", banner_id=banner_id)
        return banner
