"""Contact form application service.

Stores messages sent through the storefront contact form and supports
the admin inbox: filtering, search, read tracking, triage and stats.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from storefront.catalog.service import PaginatedResult, PaginationParams
from storefront.infrastructure.database import BaseRepository, MongoDatabase, utcnow

logger = structlog.get_logger()

URGENT_KEYWORDS = ("urgent", "emergency", "asap", "immediately")

CONTACT_SORT_FIELDS = (
    "created_at",
    "updated_at",
    "name",
    "email",
    "subject",
    "status",
    "priority",
)


class ContactStatus(str, Enum):
    """Triage status of a contact message."""

    NEW = "new"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class ContactPriority(str, Enum):
    """Priority of a contact message."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class ContactFilter:
    """Filter parameters for the contact inbox."""

    status: str | None = None
    priority: str | None = None
    is_read: bool | None = None
    search: str | None = None


class ContactRepository(BaseRepository):
    collection_name = "contacts"
    entity_type = "Contact"


def detect_priority(subject: str, message: str) -> ContactPriority:
    """High priority when the subject or message sounds urgent."""
    content = f"{subject} {message}".lower()
    if any(keyword in content for keyword in URGENT_KEYWORDS):
        return ContactPriority.HIGH
    return ContactPriority.MEDIUM


class ContactService:
    """Service for contact form operations."""

    def __init__(self, database: MongoDatabase) -> None:
        self.repository = ContactRepository(database)

    def create_contact(
        self,
        data: dict[str, Any],
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> dict[str, Any]:
        """Store a contact message.

        Args:
            data: Validated contact fields.
            ip_address: Client address, if known.
            user_agent: Client user agent, if known.
        """
        document = {
            **data,
            "email": data["email"].strip().lower(),
            "status": ContactStatus.NEW.value,
            "priority": detect_priority(data["subject"], data["message"]).value,
            "is_read": False,
            "ip_address": ip_address,
            "user_agent": user_agent,
        }
        contact = self.repository.insert(document)
        logger.info(
            "Contact message received",
            contact_id=str(contact["_id"]),
            priority=contact["priority"],
        )
        return contact

    def list_contacts(
        self,
        filters: ContactFilter,
        pagination: PaginationParams,
    ) -> PaginatedResult[dict[str, Any]]:
        """List contact messages with filters and pagination."""
        query: dict[str, Any] = {}
        if filters.status:
            query["status"] = filters.status
        if filters.priority:
            query["priority"] = filters.priority
        if filters.is_read is not None:
            query["is_read"] = filters.is_read
        if filters.search:
            pattern = re.compile(re.escape(filters.search.strip()), re.IGNORECASE)
            query["$or"] = [
                {"name": pattern},
                {"email": pattern},
                {"subject": pattern},
                {"message": pattern},
            ]

        sort_field = pagination.sort_by if pagination.sort_by in CONTACT_SORT_FIELDS else "created_at"
        direction = 1 if pagination.sort_order.lower() == "asc" else -1

        contacts = self.repository.find(
            query,
            sort=[(sort_field, direction), ("_id", direction)],
            skip=pagination.offset,
            limit=pagination.limit,
        )
        return PaginatedResult(
            items=contacts,
            total=self.repository.count(query),
            page=pagination.page,
            page_size=pagination.page_size,
        )

    def get_contact(self, contact_id: str) -> dict[str, Any]:
        """Get a contact message, marking it as read."""
        contact = self.repository.get_by_id(contact_id)
        if not contact.get("is_read"):
            contact = self.repository.update_by_id(contact_id, {"is_read": True})
        return contact

    def update_contact(self, contact_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Update triage fields.

        Setting ``responded_by`` also records ``responded_at``.
        """
        changes = {key: value for key, value in data.items() if value is not None}
        if changes.get("responded_by"):
            changes["responded_at"] = utcnow()
        if not changes:
            return self.repository.get_by_id(contact_id)
        return self.repository.update_by_id(contact_id, changes)

    def delete_contact(self, contact_id: str) -> dict[str, Any]:
        contact = self.repository.delete_by_id(contact_id)
        logger.info("Contact message deleted", contact_id=contact_id)
        return contact

    def stats(self) -> dict[str, int]:
        """Inbox counters for the admin dashboard."""
        count = self.repository.count
        return {
            "total": count(),
            "new": count({"status": ContactStatus.NEW.value}),
            "in_progress": count({"status": ContactStatus.IN_PROGRESS.value}),
            "resolved": count({"status": ContactStatus.RESOLVED.value}),
            "closed": count({"status": ContactStatus.CLOSED.value}),
            "unread": count({"is_read": False}),
            "high_priority": count({"priority": ContactPriority.HIGH.value}),
        }
