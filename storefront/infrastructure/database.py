"""MongoDB access.

Provides an explicitly constructed database handle with a defined
lifecycle (created at startup, shared through FastAPI dependencies,
closed at shutdown) and a base repository with the CRUD helpers every
collection needs.
"""

from datetime import datetime, timezone
from typing import Any

import structlog
from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Request
from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import BulkWriteError, DuplicateKeyError, PyMongoError

from storefront.domain.exceptions import (
    DuplicateError,
    InvalidIdentifierError,
    NotFoundError,
)
from storefront.infrastructure.config import Settings

logger = structlog.get_logger()


# ============================================================================
# Time and identifier helpers
# ============================================================================


def utcnow() -> datetime:
    """Current UTC time as stored by MongoDB (naive, UTC)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_storage_datetime(value: datetime | None) -> datetime | None:
    """Normalise a datetime to naive UTC for storage and queries."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_object_id(value: Any) -> ObjectId:
    """Convert a string to an ObjectId.

    Args:
        value: Candidate identifier.

    Returns:
        Parsed ObjectId.

    Raises:
        InvalidIdentifierError: If the value is not a valid ObjectId.
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError) as e:
        raise InvalidIdentifierError(str(value)) from e


def is_object_id(value: Any) -> bool:
    """Check whether a value can be parsed as an ObjectId."""
    return ObjectId.is_valid(value)


# ============================================================================
# Database handle
# ============================================================================


# (collection, keys, options) declared once and applied at startup
INDEXES: list[tuple[str, list[tuple[str, int]], dict[str, Any]]] = [
    ("products", [("slug", ASCENDING)], {"unique": True}),
    ("products", [("parent", ASCENDING), ("children", ASCENDING)], {}),
    ("products", [("category.id", ASCENDING)], {}),
    ("products", [("created_at", DESCENDING)], {}),
    ("categories", [("parent", ASCENDING)], {"unique": True}),
    ("categories", [("status", ASCENDING), ("created_at", DESCENDING)], {}),
    ("brands", [("name", ASCENDING)], {"unique": True}),
    ("carts", [("email", ASCENDING)], {}),
    ("carts", [("is_active", ASCENDING)], {}),
    ("carts", [("expires_at", ASCENDING)], {"expireAfterSeconds": 0}),
    ("orders", [("order_id", ASCENDING)], {"unique": True}),
    ("orders", [("invoice", ASCENDING)], {"unique": True}),
    ("reviews", [("product_id", ASCENDING)], {}),
    ("banners", [("order", ASCENDING), ("created_at", DESCENDING)], {}),
    (
        "announcements",
        [("is_active", ASCENDING), ("display_order", ASCENDING), ("start_date", ASCENDING)],
        {},
    ),
    ("contacts", [("status", ASCENDING), ("created_at", DESCENDING)], {}),
    ("contacts", [("email", ASCENDING)], {}),
    ("contacts", [("is_read", ASCENDING)], {}),
]


class MongoDatabase:
    """Handle on the storefront database.

    Example usage:
        database = MongoDatabase.from_settings(settings)
        database.ensure_indexes()
        products = database.collection("products")
        ...
        database.close()
    """

    def __init__(self, client: MongoClient, name: str) -> None:
        """Initialize with an existing client.

        Args:
            client: pymongo (or compatible) client.
            name: Database name.
        """
        self.client = client
        self.name = name

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoDatabase":
        """Create a handle from application settings.

        The client connects lazily on first operation.
        """
        client: MongoClient = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        )
        return cls(client, settings.mongodb_database)

    @property
    def db(self) -> Database:
        """Underlying pymongo database."""
        return self.client[self.name]

    def collection(self, name: str) -> Collection:
        """Get a collection by name."""
        return self.db[name]

    def ping(self) -> bool:
        """Check connectivity.

        Returns:
            True if the server answered the ping command.
        """
        try:
            self.client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("Database ping failed", error=str(e))
            return False
        return True

    def ensure_indexes(self) -> None:
        """Create the indexes declared in INDEXES."""
        for collection_name, keys, options in INDEXES:
            self.collection(collection_name).create_index(keys, **options)
        logger.info("Database indexes ensured", index_count=len(INDEXES))

    def close(self) -> None:
        """Close the underlying client."""
        self.client.close()


def get_database(request: Request) -> MongoDatabase:
    """FastAPI dependency returning the database created at startup."""
    return request.app.state.database


# ============================================================================
# Base Repository
# ============================================================================


class BaseRepository:
    """CRUD helpers over a single collection.

    Subclasses set ``collection_name`` and ``entity_type``. Documents are
    plain dicts; every insert and update maintains ``created_at`` and
    ``updated_at`` timestamps.
    """

    collection_name: str = ""
    entity_type: str = "Document"
    unique_field: str | None = None

    def __init__(self, database: MongoDatabase) -> None:
        """Initialize repository with database handle.

        Args:
            database: Storefront database.
        """
        self.database = database
        self.collection = database.collection(self.collection_name)

    def insert(self, document: dict[str, Any]) -> dict[str, Any]:
        """Insert a document, stamping timestamps.

        Returns:
            The inserted document including ``_id``.

        Raises:
            DuplicateError: If a unique index rejects the document.
        """
        now = utcnow()
        document = {**document, "created_at": now, "updated_at": now}
        try:
            result = self.collection.insert_one(document)
        except DuplicateKeyError as e:
            raise self._duplicate_error(document) from e
        document["_id"] = result.inserted_id
        return document

    def insert_many(self, documents: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Insert several documents at once."""
        if not documents:
            return []
        now = utcnow()
        stamped = [{**d, "created_at": now, "updated_at": now} for d in documents]
        try:
            result = self.collection.insert_many(stamped)
        except (BulkWriteError, DuplicateKeyError) as e:
            raise self._duplicate_error({}) from e
        for document, inserted_id in zip(stamped, result.inserted_ids):
            document["_id"] = inserted_id
        return stamped

    def find_by_id(self, document_id: Any) -> dict[str, Any] | None:
        """Find a document by id, or None."""
        return self.collection.find_one({"_id": parse_object_id(document_id)})

    def get_by_id(self, document_id: Any) -> dict[str, Any]:
        """Find a document by id.

        Raises:
            NotFoundError: If no document has this id.
        """
        document = self.find_by_id(document_id)
        if document is None:
            raise NotFoundError(self.entity_type, str(document_id))
        return document

    def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        """Find the first document matching a query."""
        return self.collection.find_one(query)

    def find(
        self,
        query: dict[str, Any] | None = None,
        sort: list[tuple[str, int]] | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[dict[str, Any]]:
        """Find documents with optional sorting and pagination.

        Args:
            query: Filter document.
            sort: List of (field, direction) pairs.
            skip: Number of documents to skip.
            limit: Maximum number of documents (0 = no limit).

        Returns:
            Matching documents.
        """
        cursor = self.collection.find(query or {})
        if sort:
            cursor = cursor.sort(sort)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    def count(self, query: dict[str, Any] | None = None) -> int:
        """Count documents matching a query."""
        return self.collection.count_documents(query or {})

    def update_by_id(
        self,
        document_id: Any,
        changes: dict[str, Any],
        extra: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Apply ``$set`` changes and return the updated document.

        Args:
            document_id: Document id.
            changes: Fields to set.
            extra: Additional update operators (e.g. ``$push``).

        Raises:
            NotFoundError: If no document has this id.
            DuplicateError: If the update violates a unique index.
        """
        update: dict[str, Any] = {"$set": {**changes, "updated_at": utcnow()}}
        if extra:
            update.update(extra)
        try:
            document = self.collection.find_one_and_update(
                {"_id": parse_object_id(document_id)},
                update,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise self._duplicate_error(changes) from e
        if document is None:
            raise NotFoundError(self.entity_type, str(document_id))
        return document

    def delete_by_id(self, document_id: Any) -> dict[str, Any]:
        """Delete a document and return it.

        Raises:
            NotFoundError: If no document has this id.
        """
        document = self.collection.find_one_and_delete(
            {"_id": parse_object_id(document_id)}
        )
        if document is None:
            raise NotFoundError(self.entity_type, str(document_id))
        return document

    def delete_many(self, query: dict[str, Any]) -> int:
        """Delete documents matching a query.

        Returns:
            Number of deleted documents.
        """
        return self.collection.delete_many(query).deleted_count

    def _duplicate_error(self, document: dict[str, Any]) -> DuplicateError:
        field = self.unique_field or "key"
        return DuplicateError(self.entity_type, field, document.get(field))
