"""
Aggregated read model: each bookmark with the sorted names of its tags.

The view is the only place a bookmark's tag set is assembled, always by joining
through bookmark_tags. It is declared on a separate MetaData so create_all() never
tries to create it as a table; a DDL listener on the main metadata creates it after
the tables exist (databases built from migrations get it from the migration instead).
"""
from sqlalchemy import DDL, Column, DateTime, MetaData, Table, Text, event
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.dialects.postgresql import UUID as PG_UUID

from models.base import Base

BOOKMARKS_WITH_TAGS_VIEW = "bookmarks_with_tags"

BOOKMARKS_WITH_TAGS_SELECT = """
SELECT
  b.id,
  b.user_id,
  b.url,
  b.title,
  b.summary,
  b.category,
  b.created_at,
  COALESCE(
    array_agg(t.name ORDER BY t.name) FILTER (WHERE t.name IS NOT NULL),
    '{}'::text[]
  ) AS tags
FROM bookmarks b
LEFT JOIN bookmark_tags bt ON b.id = bt.bookmark_id
LEFT JOIN tags t ON bt.tag_id = t.id
GROUP BY b.id
"""

view_metadata = MetaData()

bookmarks_with_tags = Table(
    BOOKMARKS_WITH_TAGS_VIEW,
    view_metadata,
    Column("id", PG_UUID(as_uuid=True), primary_key=True),
    Column("user_id", Text),
    Column("url", Text),
    Column("title", Text),
    Column("summary", Text),
    Column("category", Text),
    Column("created_at", DateTime(timezone=True)),
    Column("tags", ARRAY(Text)),
)

event.listen(
    Base.metadata,
    "after_create",
    DDL(f"CREATE OR REPLACE VIEW {BOOKMARKS_WITH_TAGS_VIEW} AS {BOOKMARKS_WITH_TAGS_SELECT}"),
)
event.listen(
    Base.metadata,
    "before_drop",
    DDL(f"DROP VIEW IF EXISTS {BOOKMARKS_WITH_TAGS_VIEW}"),
)
