"""Pydantic schemas for the legacy category endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from schemas.validators import validate_and_normalize_name


class CategoryResponse(BaseModel):
    """Schema for a single category."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    name: str
    created_at: datetime


class CategoryCreate(BaseModel):
    """Schema for creating a category."""

    name: str

    @field_validator("name", mode="before")
    @classmethod
    def normalize_and_validate(cls, v: str) -> str:
        """Trim and validate the category name."""
        return validate_and_normalize_name(v, kind="Category")
