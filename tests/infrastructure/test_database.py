"""Tests for the database handle and base repository."""

from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from storefront.domain.exceptions import (
    DuplicateError,
    InvalidIdentifierError,
    NotFoundError,
)
from storefront.infrastructure.database import (
    BaseRepository,
    MongoDatabase,
    is_object_id,
    parse_object_id,
    to_storage_datetime,
)


class WidgetRepository(BaseRepository):
    collection_name = "widgets"
    entity_type = "Widget"
    unique_field = "code"


@pytest.fixture
def repository(database: MongoDatabase) -> WidgetRepository:
    database.collection("widgets").create_index("code", unique=True)
    return WidgetRepository(database)


class TestHelpers:
    """Tests for identifier and time helpers."""

    def test_parse_object_id(self) -> None:
        oid = ObjectId()
        assert parse_object_id(str(oid)) == oid
        assert parse_object_id(oid) is oid

    @pytest.mark.parametrize("value", ["not-an-id", "", None, 12])
    def test_parse_invalid_object_id(self, value: object) -> None:
        with pytest.raises(InvalidIdentifierError):
            parse_object_id(value)

    def test_is_object_id(self) -> None:
        assert is_object_id(str(ObjectId()))
        assert not is_object_id("rod-end-bearing")

    def test_to_storage_datetime_converts_to_naive_utc(self) -> None:
        aware = datetime(2030, 1, 1, 12, tzinfo=timezone(timedelta(hours=2)))
        assert to_storage_datetime(aware) == datetime(2030, 1, 1, 10)

    def test_to_storage_datetime_keeps_naive(self) -> None:
        naive = datetime(2030, 1, 1)
        assert to_storage_datetime(naive) is naive
        assert to_storage_datetime(None) is None


class TestMongoDatabase:
    """Tests for MongoDatabase."""

    def test_collection(self, database: MongoDatabase) -> None:
        assert database.collection("products").name == "products"

    def test_ensure_indexes_enforces_unique_slug(self, database: MongoDatabase) -> None:
        products = database.collection("products")
        products.insert_one({"slug": "a"})
        with pytest.raises(DuplicateKeyError):
            products.insert_one({"slug": "a"})

    def test_ping_failure_returns_false(self) -> None:
        class UnreachableAdmin:
            def command(self, name: str) -> None:
                raise ServerSelectionTimeoutError("no servers")

        class UnreachableClient:
            admin = UnreachableAdmin()

        assert MongoDatabase(UnreachableClient(), "test").ping() is False


class TestBaseRepository:
    """Tests for BaseRepository."""

    def test_insert_stamps_timestamps(self, repository: WidgetRepository) -> None:
        widget = repository.insert({"code": "w1"})
        assert isinstance(widget["_id"], ObjectId)
        assert widget["created_at"] == widget["updated_at"]

    def test_insert_duplicate(self, repository: WidgetRepository) -> None:
        repository.insert({"code": "w1"})
        with pytest.raises(DuplicateError) as exc_info:
            repository.insert({"code": "w1"})
        assert exc_info.value.details["field"] == "code"
        assert exc_info.value.status_code == 409

    def test_insert_many(self, repository: WidgetRepository) -> None:
        widgets = repository.insert_many([{"code": "a"}, {"code": "b"}])
        assert [w["code"] for w in widgets] == ["a", "b"]
        assert all("_id" in w for w in widgets)
        assert repository.insert_many([]) == []

    def test_get_by_id_missing(self, repository: WidgetRepository) -> None:
        with pytest.raises(NotFoundError):
            repository.get_by_id(str(ObjectId()))

    def test_get_by_invalid_id(self, repository: WidgetRepository) -> None:
        with pytest.raises(InvalidIdentifierError):
            repository.get_by_id("nope")

    def test_find_sort_skip_limit(self, repository: WidgetRepository) -> None:
        for code in ("c", "a", "b", "d"):
            repository.insert({"code": code})
        found = repository.find(sort=[("code", 1)], skip=1, limit=2)
        assert [w["code"] for w in found] == ["b", "c"]
        assert repository.count({"code": {"$in": ["a", "b"]}}) == 2

    def test_update_by_id(self, repository: WidgetRepository) -> None:
        widget = repository.insert({"code": "w1", "size": 1})
        updated = repository.update_by_id(widget["_id"], {"size": 2})
        assert updated["size"] == 2
        assert updated["updated_at"] >= updated["created_at"]

    def test_update_missing(self, repository: WidgetRepository) -> None:
        with pytest.raises(NotFoundError):
            repository.update_by_id(ObjectId(), {"size": 2})

    def test_delete_by_id(self, repository: WidgetRepository) -> None:
        widget = repository.insert({"code": "w1"})
        deleted = repository.delete_by_id(str(widget["_id"]))
        assert deleted["code"] == "w1"
        with pytest.raises(NotFoundError):
            repository.delete_by_id(str(widget["_id"]))

    def test_delete_many(self, repository: WidgetRepository) -> None:
        repository.insert_many([{"code": "a"}, {"code": "b"}])
        assert repository.delete_many({}) == 2
