"""Service layer for bookmark operations."""
import logging
from uuid import UUID

from sqlalchemy import Row, delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from models.bookmark_view import bookmarks_with_tags
from models.tag import Tag, bookmark_tags
from schemas.bookmark import BookmarkCreate, BookmarkFilters
from schemas.validators import validate_and_normalize_tags
from services.category_compat import (
    category_filter,
    effective_tag_names,
    legacy_category_value,
)
from services.exceptions import InputValidationError, NotFoundError
from services.tag_service import get_or_create_tags
from services.utils import escape_ilike, resolve_date_range, store_errors

logger = logging.getLogger(__name__)


class BookmarkNotFoundError(NotFoundError):
    """Raised when a bookmark is not found for the user."""

    def __init__(self, bookmark_id: UUID) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("Bookmark not found")


def _normalize_tags(tag_names: list[str]) -> list[str]:
    try:
        return validate_and_normalize_tags(tag_names)
    except ValueError as e:
        raise InputValidationError(str(e)) from e


async def _ensure_bookmark_exists(
    db: AsyncSession,
    bookmark_id: UUID,
    user_id: str,
) -> None:
    with store_errors("fetch bookmark"):
        result = await db.execute(
            select(Bookmark.id).where(
                Bookmark.id == bookmark_id,
                Bookmark.user_id == user_id,
            ),
        )
    if result.scalar_one_or_none() is None:
        raise BookmarkNotFoundError(bookmark_id)


async def _attach_tags(
    db: AsyncSession,
    bookmark_id: UUID,
    user_id: str,
    tag_names: list[str],
) -> None:
    """Find-or-create each tag and link it to the bookmark, one round trip per tag."""
    tags = await get_or_create_tags(db, user_id, tag_names)
    with store_errors("attach tags to bookmark"):
        for tag in tags:
            # Already-linked pairs are skipped rather than treated as errors
            await db.execute(
                pg_insert(bookmark_tags)
                .values(bookmark_id=bookmark_id, tag_id=tag.id)
                .on_conflict_do_nothing(constraint="uq_bookmark_tags_bookmark_id_tag_id"),
            )


async def create_bookmark(
    db: AsyncSession,
    user_id: str,
    data: BookmarkCreate,
) -> Row:
    """
    Create a new bookmark for a user, attaching its tags.

    A legacy `category` sent without tags becomes the bookmark's single tag and is
    also stored in the legacy column.

    Args:
        db: Database session.
        user_id: User ID to create the bookmark for.
        data: Bookmark creation data.

    Returns:
        The bookmark re-read from the aggregated view, with tags populated.

    Note:
        Does not commit. The bookmark insert and every tag attachment share the
        request's transaction, so a failure anywhere persists nothing.
    """
    bookmark = Bookmark(
        user_id=user_id,
        url=str(data.url),
        title=data.title,
        summary=data.summary,
        category=legacy_category_value(data.tags, data.category),
    )
    with store_errors("create bookmark"):
        db.add(bookmark)
        await db.flush()

    tag_names = effective_tag_names(data.tags, data.category)
    if tag_names:
        await _attach_tags(db, bookmark.id, user_id, tag_names)

    logger.debug(
        "Created bookmark %s for user %s with %d tags", bookmark.id, user_id, len(tag_names),
    )
    return await get_bookmark_with_tags(db, bookmark.id, user_id)


async def list_bookmarks(
    db: AsyncSession,
    user_id: str,
    filters: BookmarkFilters,
) -> list[Row]:
    """
    List a user's bookmarks from the aggregated view.

    Args:
        db: Database session.
        user_id: User ID to scope bookmarks.
        filters:
            - search: case-insensitive substring match on title.
            - category: legacy category, matched against the column or the tag set.
            - tags: bookmark must carry ALL of these tags.
            - start_date / end_date: inclusive created_at bounds
              (see services.utils.resolve_date_range).
            - offset / limit: pagination over created_at DESC (id DESC as tiebreaker).

    Raises:
        InputValidationError: If a date bound cannot be parsed.
    """
    view = bookmarks_with_tags
    start, end = resolve_date_range(filters.start_date, filters.end_date)

    query = select(view).where(view.c.user_id == user_id)

    if filters.search and filters.search.strip():
        pattern = f"%{escape_ilike(filters.search.strip())}%"
        query = query.where(view.c.title.ilike(pattern))

    if filters.category:
        query = query.where(category_filter(view, filters.category.strip()))

    if filters.tags:
        # Array containment: the bookmark's tag set must be a superset of the filter
        query = query.where(view.c.tags.contains(filters.tags))

    if start is not None:
        query = query.where(view.c.created_at >= start)
    if end is not None:
        query = query.where(view.c.created_at <= end)

    query = (
        query.order_by(view.c.created_at.desc(), view.c.id.desc())
        .offset(filters.offset)
        .limit(filters.limit)
    )

    with store_errors("fetch bookmarks"):
        result = await db.execute(query)
    return list(result.all())


async def get_bookmark_with_tags(
    db: AsyncSession,
    bookmark_id: UUID,
    user_id: str,
) -> Row:
    """
    Get a single bookmark with its tags, scoped to user.

    Raises:
        BookmarkNotFoundError: If no such bookmark belongs to the user.
    """
    view = bookmarks_with_tags
    with store_errors("fetch bookmark"):
        result = await db.execute(
            select(view).where(view.c.id == bookmark_id, view.c.user_id == user_id),
        )
    row = result.one_or_none()
    if row is None:
        raise BookmarkNotFoundError(bookmark_id)
    return row


async def update_bookmark_tags(
    db: AsyncSession,
    bookmark_id: UUID,
    tag_names: list[str],
    user_id: str,
) -> Row:
    """
    Replace a bookmark's entire tag set.

    All existing links are removed, then each name is found-or-created and linked.
    An empty list leaves the bookmark untagged.

    Raises:
        BookmarkNotFoundError: If no such bookmark belongs to the user.

    Note:
        Does not commit. The delete and the re-attachment share the request's
        transaction, so a failure keeps the previous tag set.
    """
    tag_names = _normalize_tags(tag_names)
    await _ensure_bookmark_exists(db, bookmark_id, user_id)

    with store_errors("clear bookmark tags"):
        await db.execute(
            delete(bookmark_tags).where(bookmark_tags.c.bookmark_id == bookmark_id),
        )
    if tag_names:
        await _attach_tags(db, bookmark_id, user_id, tag_names)

    logger.debug("Replaced tags of bookmark %s: %s", bookmark_id, tag_names)
    return await get_bookmark_with_tags(db, bookmark_id, user_id)


async def add_tags_to_bookmark(
    db: AsyncSession,
    bookmark_id: UUID,
    tag_names: list[str],
    user_id: str,
) -> Row:
    """
    Attach tags to a bookmark, keeping the ones it already has.

    Raises:
        BookmarkNotFoundError: If no such bookmark belongs to the user.
    """
    tag_names = _normalize_tags(tag_names)
    await _ensure_bookmark_exists(db, bookmark_id, user_id)
    if tag_names:
        await _attach_tags(db, bookmark_id, user_id, tag_names)
    return await get_bookmark_with_tags(db, bookmark_id, user_id)


async def remove_tags_from_bookmark(
    db: AsyncSession,
    bookmark_id: UUID,
    tag_names: list[str],
    user_id: str,
) -> Row:
    """
    Detach the named tags from a bookmark. The tags themselves are kept.

    Names the user has no tag for are skipped.

    Raises:
        BookmarkNotFoundError: If no such bookmark belongs to the user.
    """
    normalized = _normalize_tags(tag_names)
    await _ensure_bookmark_exists(db, bookmark_id, user_id)

    if normalized:
        tag_ids = select(Tag.id).where(Tag.user_id == user_id, Tag.name.in_(normalized))
        with store_errors("remove tags from bookmark"):
            await db.execute(
                delete(bookmark_tags).where(
                    bookmark_tags.c.bookmark_id == bookmark_id,
                    bookmark_tags.c.tag_id.in_(tag_ids),
                ),
            )
    return await get_bookmark_with_tags(db, bookmark_id, user_id)
