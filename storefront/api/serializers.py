"""Conversion of stored documents into response payloads."""

from typing import Any

from bson import ObjectId


def serialize_document(value: Any) -> Any:
    """Make a MongoDB document JSON friendly.

    ObjectIds become strings and ``_id`` keys are renamed to ``id``, at
    any nesting depth.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {
            ("id" if key == "_id" else key): serialize_document(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    return value
