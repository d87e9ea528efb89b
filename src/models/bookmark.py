"""Bookmark model for storing user bookmarks."""
from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, CreatedAtMixin, UUIDv7Mixin


class Bookmark(Base, UUIDv7Mixin, CreatedAtMixin):
    """
    Bookmark model - stores a captured URL with its title and notes.

    Tags live in the bookmark_tags junction table, never on this row. The `category`
    column is the single-valued predecessor of tags and is only written for clients
    that still send a category without tags.
    """

    __tablename__ = "bookmarks"

    user_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)  # legacy
