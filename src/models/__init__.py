"""SQLAlchemy models."""
from models.base import Base, CreatedAtMixin, UUIDv7Mixin
from models.tag import Tag, bookmark_tags
from models.bookmark import Bookmark
from models.bookmark_view import bookmarks_with_tags
from models.category import Category

__all__ = [
    "Base",
    "Bookmark",
    "Category",
    "CreatedAtMixin",
    "Tag",
    "UUIDv7Mixin",
    "bookmark_tags",
    "bookmarks_with_tags",
]
