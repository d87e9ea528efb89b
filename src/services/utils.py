"""Shared utility functions for service layer."""
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, date, datetime, time
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from services.exceptions import InputValidationError, StoreError

logger = logging.getLogger(__name__)

N = TypeVar("N")

_DAY_START = time(0, 0, 0, 0, tzinfo=UTC)
_DAY_END = time(23, 59, 59, 999_000, tzinfo=UTC)


def escape_ilike(value: str) -> str:
    r"""
    Escape special ILIKE characters for safe use in LIKE/ILIKE patterns.

    PostgreSQL LIKE/ILIKE treats these characters specially:
    - % matches any sequence of characters
    - _ matches any single character
    - \\ is the escape character

    This function escapes them so they match literally.
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_bound(value: str, end_of_day: bool) -> datetime:
    """Parse one date-range bound; date-only values snap to the start or end of the UTC day."""
    if "T" in value:
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as e:
            raise InputValidationError(f"Invalid date: '{value}'") from e
        return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)
    try:
        day = date.fromisoformat(value)
    except ValueError as e:
        raise InputValidationError(f"Invalid date: '{value}'") from e
    return datetime.combine(day, _DAY_END if end_of_day else _DAY_START)


def resolve_date_range(
    start_date: str | None,
    end_date: str | None,
) -> tuple[datetime | None, datetime | None]:
    """
    Turn the startDate/endDate query strings into inclusive created_at bounds.

    - Equal start and end select that whole UTC calendar day
      (00:00:00.000 through 23:59:59.999).
    - Otherwise each bound applies on its own. A date-only start becomes
      00:00:00.000Z and a date-only end becomes 23:59:59.999Z; values containing
      'T' are ISO 8601 datetimes (naive ones are read as UTC).

    Raises:
        InputValidationError: If either value cannot be parsed.
    """
    start_date = start_date.strip() if start_date else None
    end_date = end_date.strip() if end_date else None

    if start_date and end_date and start_date == end_date:
        day = _parse_bound(start_date, end_of_day=False).astimezone(UTC).date()
        return datetime.combine(day, _DAY_START), datetime.combine(day, _DAY_END)

    start = _parse_bound(start_date, end_of_day=False) if start_date else None
    end = _parse_bound(end_date, end_of_day=True) if end_date else None
    return start, end


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """
    Re-raise database failures inside the block as StoreError.

    Constraint and data errors are attributed to the caller's input (400); any other
    SQLAlchemy error is a server fault (500).
    """
    try:
        yield
    except (IntegrityError, DataError) as e:
        logger.warning("Database rejected %s: %s", action, e.orig)
        raise StoreError(f"Failed to {action}", status_code=400) from e
    except SQLAlchemyError as e:
        logger.error("Database error during %s", action, exc_info=True)
        raise StoreError(f"Failed to {action}") from e


async def find_by_name(
    db: AsyncSession,
    model: type[N],
    user_id: str,
    name: str,
) -> N | None:
    """Look up a user-scoped named row (tag or category) by exact name."""
    result = await db.execute(
        select(model).where(
            model.user_id == user_id,
            model.name == name,
        ),
    )
    return result.scalar_one_or_none()


async def find_or_create_by_name(
    db: AsyncSession,
    model: type[N],
    user_id: str,
    name: str,
) -> tuple[N, bool]:
    """
    Return the row named `name` for the user, inserting it if missing.

    The insert runs in a savepoint. If a concurrent request inserted the same name
    between our lookup and insert, the unique constraint fires, the savepoint rolls
    back, and the row the other request created is returned instead. Duplicate
    creates resolve to one row rather than an error.

    Returns:
        Tuple of (row, created).
    """
    existing = await find_by_name(db, model, user_id, name)
    if existing is not None:
        return existing, False

    entity = model(user_id=user_id, name=name)
    try:
        async with db.begin_nested():
            db.add(entity)
    except IntegrityError:
        existing = await find_by_name(db, model, user_id, name)
        if existing is None:
            raise
        logger.info(
            "Concurrent create of %s '%s' for user %s resolved to existing row",
            model.__tablename__, name, user_id,
        )
        return existing, False

    await db.refresh(entity)
    return entity, True
