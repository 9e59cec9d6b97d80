"""Announcement bar application service.

Announcements are shown in a strip above the storefront header while they
are active and inside their optional date window.
"""

from datetime import datetime
from enum import Enum
from typing import Any

import structlog

from storefront.infrastructure.database import (
    BaseRepository,
    MongoDatabase,
    to_storage_datetime,
    utcnow,
)

logger = structlog.get_logger()


class AnnouncementType(str, Enum):
    """Visual style of an announcement."""

    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    PROMOTION = "promotion"


class AnnouncementRepository(BaseRepository):
    collection_name = "announcements"
    entity_type = "Announcement"


class AnnouncementService:
    """Service for announcement operations."""

    def __init__(self, database: MongoDatabase) -> None:
        self.repository = AnnouncementRepository(database)

    def create_announcement(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create an announcement; ``start_date`` defaults to now."""
        document = _normalise_dates(data)
        if document.get("start_date") is None:
            document["start_date"] = utcnow()
        document.setdefault("end_date", None)

        announcement = self.repository.insert(document)
        logger.info(
            "Announcement created",
            announcement_id=str(announcement["_id"]),
            type=announcement.get("type"),
        )
        return announcement

    def list_announcements(self) -> list[dict[str, Any]]:
        """All announcements for the admin dashboard."""
        return self.repository.find(sort=[("display_order", 1), ("created_at", -1)])

    def list_active(self, now: datetime | None = None) -> list[dict[str, Any]]:
        """Announcements to display at ``now``.

        Active announcements whose start date has passed and whose end
        date, if any, has not.
        """
        reference = to_storage_datetime(now) if now else utcnow()
        return self.repository.find(
            {
                "is_active": True,
                "start_date": {"$lte": reference},
                "$or": [{"end_date": None}, {"end_date": {"$gte": reference}}],
            },
            sort=[("display_order", 1), ("priority", -1), ("created_at", -1)],
        )

    def get_announcement(self, announcement_id: str) -> dict[str, Any]:
        return self.repository.get_by_id(announcement_id)

    def update_announcement(self, announcement_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self.repository.update_by_id(announcement_id, _normalise_dates(data))

    def toggle_status(self, announcement_id: str) -> dict[str, Any]:
        """Flip ``is_active``."""
        current = self.repository.get_by_id(announcement_id)
        announcement = self.repository.update_by_id(
            announcement_id,
            {"is_active": not current.get("is_active", True)},
        )
        logger.info(
            "Announcement toggled",
            announcement_id=announcement_id,
            is_active=announcement["is_active"],
        )
        return announcement

    def delete_announcement(self, announcement_id: str) -> dict[str, Any]:
        announcement = self.repository.delete_by_id(announcement_id)
        logger.info("Announcement deleted", announcement_id=announcement_id)
        return announcement


def _normalise_dates(data: dict[str, Any]) -> dict[str, Any]:
    document = dict(data)
    for key in ("start_date", "end_date"):
        if key in document:
            document[key] = to_storage_datetime(document[key])
    return document
