"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from schemas.validators import validate_and_normalize_name, validate_and_normalize_tags

TITLE_MAX_LENGTH = 500


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    # HttpUrl normalizes root domains with trailing slash (example.com -> example.com/)
    # but preserves paths as-is (example.com/page stays example.com/page)
    url: HttpUrl
    title: str = Field(..., max_length=TITLE_MAX_LENGTH)
    summary: str | None = None
    category: str | None = None  # Legacy single-valued label
    tags: list[str] | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        """Require a non-blank title."""
        if not v.strip():
            raise ValueError("Title is required")
        return v.strip()

    @field_validator("summary")
    @classmethod
    def blank_summary_is_none(cls, v: str | None) -> str | None:
        """Treat a blank summary as absent."""
        if v is None or not v.strip():
            return None
        return v

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v: str | None) -> str | None:
        """Trim the legacy category; blank means absent."""
        if v is None or not v.strip():
            return None
        return validate_and_normalize_name(v, kind="Category")

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str] | None:
        """Trim, drop blanks and de-duplicate tag names."""
        if v is None:
            return None
        return validate_and_normalize_tags(v)


class BookmarkTagsUpdate(BaseModel):
    """Schema for replacing (or extending) a bookmark's tag set."""

    tags: list[str]

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        """Trim, drop blanks and de-duplicate tag names."""
        return validate_and_normalize_tags(v)


class BookmarkResponse(BaseModel):
    """
    Schema for bookmark responses.

    Built from rows of the bookmarks_with_tags view, so `tags` is always the
    alphabetically ordered list of names joined through bookmark_tags.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    url: str
    title: str
    summary: str | None
    category: str | None
    tags: list[str]
    created_at: datetime


class BookmarkFilters(BaseModel):
    """Filters accepted by the bookmark list query."""

    search: str | None = None
    category: str | None = None
    tags: list[str] = []
    start_date: str | None = None
    end_date: str | None = None
    limit: int = Field(default=20, ge=1)
    offset: int = Field(default=0, ge=0)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        """Trim, drop blanks and de-duplicate tag names."""
        return validate_and_normalize_tags(v)
