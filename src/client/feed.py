"""Incrementally paged bookmark feed, as driven by an infinite-scroll list."""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any

from client.api_client import BookmarksApiClient

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


@dataclass
class FeedFilters:
    """Filters applied to every page of the feed."""

    search: str | None = None
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    start_date: str | None = None
    end_date: str | None = None

    def to_params(self) -> dict[str, Any]:
        """Query parameters for GET /api/bookmarks; empty filters are omitted."""
        params: dict[str, Any] = {}
        if self.search:
            params["search"] = self.search
        if self.category:
            params["category"] = self.category
        if self.tags:
            params["tags"] = ",".join(self.tags)
        if self.start_date:
            params["startDate"] = self.start_date
        if self.end_date:
            params["endDate"] = self.end_date
        return params


class BookmarkFeed:
    """
    Accumulates bookmark pages for one filter set.

    `load_more()` fetches the page after the ones already loaded. While a request
    is outstanding, further calls return immediately without issuing another, so
    pages never overlap. A page shorter than the page size ends the feed.

    Each `reset()` starts a new generation. A page requested under an earlier
    generation is discarded when it arrives, and does not block loading under the
    new one.
    """

    def __init__(
        self,
        api: BookmarksApiClient,
        filters: FeedFilters | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.api = api
        self.filters = filters or FeedFilters()
        self.page_size = page_size
        self.items: list[dict[str, Any]] = []
        self.has_more = True
        self._generation = 0
        self._loading_generation: int | None = None

    @property
    def offset(self) -> int:
        return len(self.items)

    @property
    def loading(self) -> bool:
        """True while a page for the current generation is being fetched."""
        return self._loading_generation == self._generation

    def reset(self) -> None:
        """Drop loaded pages so the next load starts from the first page."""
        self._generation += 1
        self.items = []
        self.has_more = True

    def set_filters(self, filters: FeedFilters) -> None:
        """Switch filters; pagination restarts from the beginning."""
        self.filters = filters
        self.reset()

    async def load_more(self) -> list[dict[str, Any]]:
        """
        Load the next page and append it to `items`.

        Returns:
            The newly loaded bookmarks; empty when a load is already in flight, the
            feed is exhausted, or the feed was reset while the page was loading.
        """
        if self.loading or not self.has_more:
            return []

        generation = self._generation
        self._loading_generation = generation
        try:
            params = {
                **self.filters.to_params(),
                "limit": self.page_size,
                "offset": self.offset,
            }
            page = await self.api.list_bookmarks(params)
        finally:
            if self._loading_generation == generation:
                self._loading_generation = None

        if generation != self._generation:
            logger.debug("Discarding %d bookmarks loaded before a reset", len(page))
            return []

        self.items.extend(page)
        if len(page) < self.page_size:
            self.has_more = False
        logger.debug("Loaded %d bookmarks (total %d)", len(page), len(self.items))
        return page

    async def refresh(self) -> list[dict[str, Any]]:
        """Reload from the first page with the current filters."""
        self.reset()
        return await self.load_more()


def _created_day(bookmark: dict[str, Any]) -> date:
    created_at = bookmark["created_at"]
    if isinstance(created_at, datetime):
        return created_at.date()
    return datetime.fromisoformat(created_at).date()


def group_by_date(
    bookmarks: list[dict[str, Any]],
    today: date,
) -> list[tuple[str, list[dict[str, Any]]]]:
    """
    Group bookmarks by creation day, newest day first.

    Labels are "Today", "Yesterday", or the ISO date. Bookmarks keep their
    relative order inside each group.
    """
    groups: dict[date, list[dict[str, Any]]] = {}
    for bookmark in bookmarks:
        groups.setdefault(_created_day(bookmark), []).append(bookmark)

    def label(day: date) -> str:
        if day == today:
            return "Today"
        if day == today - timedelta(days=1):
            return "Yesterday"
        return day.isoformat()

    return [(label(day), groups[day]) for day in sorted(groups, reverse=True)]
