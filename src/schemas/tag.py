"""Pydantic schemas for tag endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from schemas.validators import validate_and_normalize_name


class TagResponse(BaseModel):
    """Schema for a single tag."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    name: str
    created_at: datetime


class TagUsage(BaseModel):
    """Schema for a tag with the number of bookmarks it is attached to."""

    tag: TagResponse
    count: int


class TagCreate(BaseModel):
    """Schema for creating a tag."""

    name: str

    @field_validator("name", mode="before")
    @classmethod
    def normalize_and_validate(cls, v: str) -> str:
        """Trim and validate the tag name."""
        return validate_and_normalize_name(v)


class TagUpdate(BaseModel):
    """Schema for renaming a tag."""

    name: str

    @field_validator("name", mode="before")
    @classmethod
    def normalize_and_validate(cls, v: str) -> str:
        """Trim and validate the new tag name."""
        return validate_and_normalize_name(v)
