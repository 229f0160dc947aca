"""
Mflix API: Entity Reference Validation
======================================

What:  Converts path/body identifiers into bson ObjectIds.
Why:   Every id must pass a format check before it reaches the store; a
       malformed id is a client error (400), never a query.
"""

from typing import Any

from bson import ObjectId

from mflix_api.exceptions import ValidationError


def is_valid_object_id(value: Any) -> bool:
    """True only for 24-character hex strings (or ObjectId instances)."""
    if isinstance(value, ObjectId):
        return True
    # bson also accepts 12-byte values; ids arrive as text, so only hex counts
    return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)


def parse_object_id(value: Any, resource: str = "resource") -> ObjectId:
    """
    Validate and convert an identifier.

    Raises:
        ValidationError: "Invalid <resource> ID" / "ID format is incorrect"
    """
    if not is_valid_object_id(value):
        raise ValidationError(
            message=f"Invalid {resource} ID",
            detail="ID format is incorrect",
            field=f"{resource}_id",
            context={"value": str(value)[:64]},
        )
    return ObjectId(value)
