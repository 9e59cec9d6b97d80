"""Document models for the product catalog.

Products, categories and brands are stored as MongoDB documents. This
module defines their enumerations and the functions that turn validated
request payloads into stored documents, applying defaults and converting
references to ObjectIds.
"""

from enum import Enum
from typing import Any

from storefront.infrastructure.database import parse_object_id, to_storage_datetime


class ProductStatus(str, Enum):
    """Product availability."""

    IN_STOCK = "in-stock"
    OUT_OF_STOCK = "out-of-stock"
    DISCONTINUED = "discontinued"


class CategoryStatus(str, Enum):
    """Category visibility in the storefront navigation."""

    SHOW = "Show"
    HIDE = "Hide"


class BrandStatus(str, Enum):
    """Brand visibility."""

    ACTIVE = "active"
    INACTIVE = "inactive"


# Fields a product listing may be sorted by
PRODUCT_SORT_FIELDS = (
    "created_at",
    "price",
    "title",
    "updated_at",
    "sku_arrangement_order_no",
)


def build_product_document(data: dict[str, Any]) -> dict[str, Any]:
    """Build a product document from a create payload.

    Args:
        data: Validated product fields.

    Returns:
        Document ready for insertion.
    """
    document = {
        "status": ProductStatus.IN_STOCK.value,
        "discount": 0,
        "shipping": {"price": 0, "description": ""},
        "image_urls": [],
        "tags": [],
        "additional_information": [],
        "options": [],
        "featured": False,
        "sell_count": 0,
        **data,
    }
    document["slug"] = document["slug"].lower()
    document["reviews"] = []
    return _normalise_product_references(document)


def build_product_changes(data: dict[str, Any]) -> dict[str, Any]:
    """Build the ``$set`` changes for a product update payload."""
    changes = dict(data)
    if "slug" in changes and changes["slug"] is not None:
        changes["slug"] = changes["slug"].lower()
    return _normalise_product_references(changes)


def _normalise_product_references(document: dict[str, Any]) -> dict[str, Any]:
    category = document.get("category")
    if category and category.get("id") is not None:
        document["category"] = {**category, "id": parse_object_id(category["id"])}

    offer_date = document.get("offer_date")
    if offer_date:
        document["offer_date"] = {
            key: to_storage_datetime(value) for key, value in offer_date.items()
        }
    return document


def build_category_document(data: dict[str, Any]) -> dict[str, Any]:
    """Build a category document from a create payload."""
    document = {
        "children": [],
        "status": CategoryStatus.SHOW.value,
        **data,
    }
    document["parent"] = document["parent"].strip()
    document["products"] = [parse_object_id(p) for p in document.get("products", [])]
    return document


def build_brand_document(data: dict[str, Any]) -> dict[str, Any]:
    """Build a brand document from a create payload."""
    document = {"status": BrandStatus.ACTIVE.value, **data}
    document["name"] = document["name"].strip()
    return document
