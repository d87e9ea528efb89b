"""Tag model and the bookmark-tag junction table."""
from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column
from uuid6 import uuid7

from models.base import Base, CreatedAtMixin, UUIDv7Mixin

TAG_NAME_MAX_LENGTH = 100


# Junction table for many-to-many relationship between bookmarks and tags.
# Both foreign keys cascade, so deleting a tag (or a bookmark) never leaves dangling links.
bookmark_tags = Table(
    "bookmark_tags",
    Base.metadata,
    Column("id", PG_UUID(as_uuid=True), primary_key=True, default=uuid7),
    Column(
        "bookmark_id",
        PG_UUID(as_uuid=True),
        ForeignKey("bookmarks.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "tag_id",
        PG_UUID(as_uuid=True),
        ForeignKey("tags.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at",
        DateTime(timezone=True),
        server_default=func.clock_timestamp(),
        nullable=False,
    ),
    UniqueConstraint("bookmark_id", "tag_id", name="uq_bookmark_tags_bookmark_id_tag_id"),
    # The unique constraint indexes bookmark_id first; this covers lookups by tag
    Index("ix_bookmark_tags_tag_id", "tag_id"),
)


class Tag(Base, UUIDv7Mixin, CreatedAtMixin):
    """Tag model - a user-scoped label attachable to any number of bookmarks."""

    __tablename__ = "tags"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_tags_user_id_name"),
    )

    user_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(TAG_NAME_MAX_LENGTH), nullable=False)
