from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, status


def to_object_id(value: str, label: str = "Record") -> ObjectId:
    """Parse a path id; a malformed id is reported as not found."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found"
        )
