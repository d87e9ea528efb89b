"""Capture-side helpers: turning a page plus user input into a saved bookmark."""
import logging
from dataclasses import dataclass, field
from typing import Any

from client.api_client import ApiClientError, BookmarksApiClient

logger = logging.getLogger(__name__)


def parse_tag_input(text: str) -> list[str]:
    """Split a comma-separated tag field into trimmed, distinct, non-empty names."""
    names: list[str] = []
    for part in text.split(","):
        name = part.strip()
        if name and name not in names:
            names.append(name)
    return names


def build_capture_payload(
    url: str,
    title: str,
    summary: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Body for POST /api/bookmarks. Empty optional fields are left out."""
    payload: dict[str, Any] = {"url": url.strip(), "title": title.strip()}
    if summary and summary.strip():
        payload["summary"] = summary.strip()
    if tags:
        payload["tags"] = tags
    return payload


def _names(entries: list[dict[str, Any]]) -> list[str]:
    return [entry["name"] for entry in entries]


@dataclass
class TagSuggestions:
    """Autocomplete result for the tag field."""

    matches: list[str] = field(default_factory=list)
    # Offered as "Create ..." when the typed text is not an existing or selected tag
    new_tag: str | None = None


class CapturePopup:
    """
    State behind the capture popup.

    `setup()` loads tag suggestions, retrying on later calls until a load succeeds.
    `save()` refuses to submit while a previous submission is still outstanding.
    """

    def __init__(self, api: BookmarksApiClient) -> None:
        self.api = api
        self.available_tags: list[str] = []
        self.saving = False
        self._is_setup = False

    async def setup(self) -> list[str]:
        """
        Load the names offered as suggestions.

        Reads /api/tags, falling back to /api/categories when that call fails or
        returns entries without a name. Once either source loads, later calls return
        those names; when both fail, the next call tries again.
        """
        if self._is_setup:
            return self.available_tags

        try:
            self.available_tags = _names(await self.api.list_tags())
        except (ApiClientError, KeyError, TypeError) as e:
            logger.warning("Failed to load tags, falling back to categories: %s", e)
            try:
                self.available_tags = _names(await self.api.list_categories())
            except (ApiClientError, KeyError, TypeError):
                logger.exception("Failed to load categories as fallback")
                self.available_tags = []
                return self.available_tags
        self._is_setup = True
        return self.available_tags

    def suggest(self, text: str, selected: list[str] | None = None) -> TagSuggestions:
        """Case-insensitive substring matches for `text`, excluding selected tags."""
        selected = selected or []
        value = text.strip()
        if not value:
            return TagSuggestions()

        needle = value.lower()
        matches = [
            tag for tag in self.available_tags
            if needle in tag.lower() and tag not in selected
        ]
        known = {tag.lower() for tag in [*self.available_tags, *selected]}
        return TagSuggestions(
            matches=matches,
            new_tag=value if needle not in known else None,
        )

    async def save(
        self,
        url: str,
        title: str,
        summary: str | None = None,
        tags: list[str] | None = None,
    ) -> dict[str, Any] | None:
        """
        Submit the bookmark.

        Returns:
            The created bookmark, or None when a save is already in progress.

        Raises:
            ApiClientError: If the API rejects the bookmark.
        """
        if self.saving:
            return None

        self.saving = True
        try:
            return await self.api.create_bookmark(
                build_capture_payload(url, title, summary, tags),
            )
        finally:
            self.saving = False
