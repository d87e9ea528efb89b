"""Service layer for tag operations."""
import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.tag import Tag, bookmark_tags
from schemas.tag import TagResponse, TagUsage
from schemas.validators import validate_and_normalize_name, validate_and_normalize_tags
from services.exceptions import AppError, InputValidationError, NotFoundError
from services.utils import escape_ilike, find_by_name, find_or_create_by_name, store_errors

logger = logging.getLogger(__name__)


class TagNotFoundError(NotFoundError):
    """Raised when a tag is not found for the user."""

    def __init__(self, tag_id: UUID) -> None:
        self.tag_id = tag_id
        super().__init__("Tag not found")


class TagAlreadyExistsError(AppError):
    """Raised when trying to rename a tag to a name that already exists."""

    status_code = 400

    def __init__(self, tag_name: str) -> None:
        self.tag_name = tag_name
        super().__init__(f"Tag '{tag_name}' already exists")


def _normalize_name(name: str) -> str:
    try:
        return validate_and_normalize_name(name)
    except ValueError as e:
        raise InputValidationError(str(e)) from e


async def create_tag(db: AsyncSession, user_id: str, name: str) -> Tag:
    """
    Create a tag, or return the existing one with the same name.

    Idempotent: creating the same name twice for a user yields one row. Names are
    trimmed before lookup.

    Args:
        db: Database session.
        user_id: User ID to scope the tag.
        name: Tag name.

    Returns:
        The existing or newly created Tag.
    """
    tag_name = _normalize_name(name)
    with store_errors("create tag"):
        tag, created = await find_or_create_by_name(db, Tag, user_id, tag_name)
    if created:
        logger.debug("Created tag '%s' for user %s", tag_name, user_id)
    return tag


async def get_or_create_tags(
    db: AsyncSession,
    user_id: str,
    tag_names: list[str],
) -> list[Tag]:
    """
    Get existing tags or create new ones.

    Args:
        db: Database session.
        user_id: User ID to scope tags.
        tag_names: Tag names to get or create (trimmed and de-duplicated first).

    Returns:
        Tag objects in the order the names were given.
    """
    try:
        normalized = validate_and_normalize_tags(tag_names)
    except ValueError as e:
        raise InputValidationError(str(e)) from e
    return [await create_tag(db, user_id, name) for name in normalized]


async def list_tags(
    db: AsyncSession,
    user_id: str,
    search: str | None = None,
    limit: int | None = None,
) -> list[Tag]:
    """
    List a user's tags alphabetically.

    Args:
        db: Database session.
        user_id: User ID to scope tags.
        search: Optional case-insensitive substring the name must contain.
        limit: Optional maximum number of tags to return.
    """
    query = select(Tag).where(Tag.user_id == user_id)
    if search:
        query = query.where(Tag.name.ilike(f"%{escape_ilike(search.strip())}%"))
    query = query.order_by(Tag.name.asc())
    if limit is not None:
        query = query.limit(limit)

    with store_errors("fetch tags"):
        result = await db.execute(query)
    return list(result.scalars().all())


async def get_tag(db: AsyncSession, tag_id: UUID, user_id: str) -> Tag | None:
    """Get a tag by ID, scoped to user."""
    with store_errors("fetch tag"):
        result = await db.execute(
            select(Tag).where(Tag.id == tag_id, Tag.user_id == user_id),
        )
    return result.scalar_one_or_none()


async def update_tag(
    db: AsyncSession,
    tag_id: UUID,
    user_id: str,
    name: str,
) -> Tag:
    """
    Rename a tag.

    Every bookmark carrying the tag reflects the new name, since tag sets are
    derived through the junction table.

    Raises:
        TagNotFoundError: If the tag doesn't exist for this user.
        TagAlreadyExistsError: If another tag of the user already has the new name.
    """
    new_name = _normalize_name(name)

    tag = await get_tag(db, tag_id, user_id)
    if tag is None:
        raise TagNotFoundError(tag_id)

    if tag.name == new_name:
        return tag

    with store_errors("update tag"):
        # Early check for a clear error message; the constraint below covers races
        if await find_by_name(db, Tag, user_id, new_name) is not None:
            raise TagAlreadyExistsError(new_name)
        try:
            async with db.begin_nested():
                tag.name = new_name
        except IntegrityError as e:
            if "uq_tags_user_id_name" in str(e):
                raise TagAlreadyExistsError(new_name) from e
            raise
        await db.refresh(tag)
    return tag


async def delete_tag(db: AsyncSession, tag_id: UUID, user_id: str) -> None:
    """
    Delete a tag. Junction rows cascade, so it disappears from every bookmark.

    Raises:
        TagNotFoundError: If the tag doesn't exist for this user.
    """
    tag = await get_tag(db, tag_id, user_id)
    if tag is None:
        raise TagNotFoundError(tag_id)

    with store_errors("delete tag"):
        await db.delete(tag)
        await db.flush()


async def get_tag_usage_stats(db: AsyncSession, user_id: str) -> list[TagUsage]:
    """
    Get all tags for a user with the number of bookmarks using each.

    Tags attached to nothing are included with a count of 0. Sorted by count desc,
    then name asc.
    """
    usage_count = func.count(bookmark_tags.c.id)
    with store_errors("fetch tag usage stats"):
        result = await db.execute(
            select(Tag, usage_count.label("count"))
            .outerjoin(bookmark_tags, Tag.id == bookmark_tags.c.tag_id)
            .where(Tag.user_id == user_id)
            .group_by(Tag.id)
            .order_by(usage_count.desc(), Tag.name.asc()),
        )
    return [
        TagUsage(tag=TagResponse.model_validate(tag), count=count)
        for tag, count in result.all()
    ]


async def get_popular_tags(
    db: AsyncSession,
    user_id: str,
    limit: int = 10,
) -> list[TagUsage]:
    """
    Get a user's most used tags.

    Only tags attached to at least one bookmark are returned, sorted by count desc,
    then name asc.
    """
    usage_count = func.count(bookmark_tags.c.id)
    with store_errors("fetch popular tags"):
        result = await db.execute(
            select(Tag, usage_count.label("count"))
            .join(bookmark_tags, Tag.id == bookmark_tags.c.tag_id)
            .where(Tag.user_id == user_id)
            .group_by(Tag.id)
            .order_by(usage_count.desc(), Tag.name.asc())
            .limit(limit),
        )
    return [
        TagUsage(tag=TagResponse.model_validate(tag), count=count)
        for tag, count in result.all()
    ]
