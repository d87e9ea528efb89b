"""
Boundary adapter between the legacy single-category field and tags.

Internally a bookmark is described only by its tag set. Clients written before tags
existed still send (and filter by) a `category`; these helpers translate at the edge:
a category sent without tags becomes the bookmark's one tag and is also written to
the legacy column, and a category filter matches either representation.
"""
from sqlalchemy import Table, or_
from sqlalchemy.sql.elements import ColumnElement


def effective_tag_names(tags: list[str] | None, category: str | None) -> list[str]:
    """Tag names to attach: the tags when given, else the legacy category as a single tag."""
    if tags:
        return list(tags)
    if category:
        return [category]
    return []


def legacy_category_value(tags: list[str] | None, category: str | None) -> str | None:
    """Value for the legacy column, written only when the client sent no tags."""
    if tags:
        return None
    return category


def category_filter(view: Table, category: str) -> ColumnElement[bool]:
    """Match bookmarks filed under `category` in either the legacy column or the tag set."""
    return or_(
        view.c.category == category,
        view.c.tags.contains([category]),
    )
