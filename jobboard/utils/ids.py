from typing import Optional

from bson import ObjectId


def parse_object_id(value) -> Optional[ObjectId]:
    """Return the ObjectId for ``value`` or None when it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def stringify_id(value) -> Optional[str]:
    return str(value) if value is not None else None
