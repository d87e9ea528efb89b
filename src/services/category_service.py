"""Service layer for legacy category operations."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.category import Category
from schemas.validators import validate_and_normalize_name
from services.exceptions import InputValidationError
from services.utils import find_or_create_by_name, store_errors


async def list_categories(db: AsyncSession, user_id: str) -> list[Category]:
    """List a user's categories alphabetically."""
    with store_errors("fetch categories"):
        result = await db.execute(
            select(Category)
            .where(Category.user_id == user_id)
            .order_by(Category.name.asc()),
        )
    return list(result.scalars().all())


async def create_category(db: AsyncSession, user_id: str, name: str) -> Category:
    """Create a category, or return the existing one with the same (trimmed) name."""
    try:
        category_name = validate_and_normalize_name(name, kind="Category")
    except ValueError as e:
        raise InputValidationError(str(e)) from e

    with store_errors("create category"):
        category, _ = await find_or_create_by_name(db, Category, user_id, category_name)
    return category
