from typing import Optional
from bson import ObjectId  # Required to handle MongoDB IDs
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class DocumentResponse(BaseModel):
    """
    Base for responses built from Beanie documents.
    FastAPI dumps documents by alias, so the id may arrive as '_id'.
    """
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))

    # Validator to convert MongoDB ObjectId to string automatically
    @field_validator("id", mode="before")
    @classmethod
    def convert_objectid_to_str(cls, v):
        if isinstance(v, ObjectId):
            return str(v)
        return v


class MessageResponse(BaseModel):
    detail: str
