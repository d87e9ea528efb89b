"""
One-off migration from legacy categories to tags.

Usage:
    python -m tasks.migrate_categories

The task:
1. Copies every row of `categories` into `tags` for the same user
2. Links every bookmark with a legacy `category` value to the tag of that name

Both steps are idempotent; running the task again creates nothing new.
"""
import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import async_session_factory
from models.bookmark import Bookmark
from models.category import Category
from models.tag import Tag, bookmark_tags
from services.utils import find_or_create_by_name

logger = logging.getLogger(__name__)


@dataclass
class MigrationStats:
    """Statistics from a migration run."""

    tags_created: int = 0
    links_created: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to simple dict for logging/return."""
        return {
            "tags_created": self.tags_created,
            "links_created": self.links_created,
        }


async def copy_categories_to_tags(db: AsyncSession) -> MigrationStats:
    """Create a tag for every category that has no same-named tag yet."""
    stats = MigrationStats()
    result = await db.execute(
        select(Category.user_id, Category.name).order_by(Category.user_id, Category.name),
    )
    for user_id, name in result.all():
        _, created = await find_or_create_by_name(db, Tag, user_id, name.strip())
        if created:
            stats.tags_created += 1

    if stats.tags_created:
        logger.info("Copied %d categories into tags", stats.tags_created)
    return stats


async def link_categorized_bookmarks(db: AsyncSession) -> MigrationStats:
    """Attach each bookmark's legacy category as a tag, creating the tag if needed."""
    stats = MigrationStats()
    result = await db.execute(
        select(Bookmark.id, Bookmark.user_id, Bookmark.category)
        .where(Bookmark.category.is_not(None))
        .order_by(Bookmark.created_at),
    )
    for bookmark_id, user_id, category in result.all():
        name = category.strip()
        if not name:
            continue
        tag, created = await find_or_create_by_name(db, Tag, user_id, name)
        if created:
            stats.tags_created += 1

        inserted = await db.execute(
            pg_insert(bookmark_tags)
            .values(bookmark_id=bookmark_id, tag_id=tag.id)
            .on_conflict_do_nothing(constraint="uq_bookmark_tags_bookmark_id_tag_id")
            .returning(bookmark_tags.c.id),
        )
        if inserted.scalar_one_or_none() is not None:
            stats.links_created += 1

    if stats.links_created:
        logger.info(
            "Linked %d bookmarks to their category tag (%d tags created)",
            stats.links_created,
            stats.tags_created,
        )
    return stats


async def run_migration(db: AsyncSession | None = None) -> MigrationStats:
    """
    Run both migration steps and commit.

    Args:
        db: Database session. If None, creates one from async_session_factory.
    """
    logger.info("Starting category to tag migration")

    async def _run(session: AsyncSession) -> MigrationStats:
        copied = await copy_categories_to_tags(session)
        linked = await link_categorized_bookmarks(session)
        await session.commit()
        return MigrationStats(
            tags_created=copied.tags_created + linked.tags_created,
            links_created=linked.links_created,
        )

    if db is not None:
        stats = await _run(db)
    else:
        async with async_session_factory() as session:
            stats = await _run(session)

    logger.info("Migration complete: %s", stats.to_dict())
    return stats


def main() -> None:
    """Entry point for running the migration as a script."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_migration())


if __name__ == "__main__":
    main()
