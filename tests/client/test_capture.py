"""Tests for capture-side helpers."""
import asyncio

import pytest

from client.api_client import ApiClientError
from client.capture import CapturePopup, build_capture_payload, parse_tag_input


class FakeApi:
    """Stand-in for BookmarksApiClient recording calls."""

    def __init__(self, tags_error: bool = False, categories_error: bool = False) -> None:
        self.tags_error = tags_error
        self.categories_error = categories_error
        self.calls: list[str] = []
        self.created: list[dict] = []
        self.gate: asyncio.Event | None = None

    async def list_tags(self) -> list[dict]:
        self.calls.append("tags")
        if self.tags_error:
            raise ApiClientError(500, "boom")
        return [{"name": "python"}, {"name": "PyTest"}, {"name": "rust"}]

    async def list_categories(self) -> list[dict]:
        self.calls.append("categories")
        if self.categories_error:
            raise ApiClientError(0, "Request failed")
        return [{"name": "news"}]

    async def create_bookmark(self, payload: dict) -> dict:
        self.calls.append("create")
        if self.gate is not None:
            await self.gate.wait()
        self.created.append(payload)
        return {"id": "1", **payload}


def test__parse_tag_input__splits_and_dedupes() -> None:
    """Test splitting a comma-separated tag field."""
    assert parse_tag_input(" a, b ,,a, c ") == ["a", "b", "c"]
    assert parse_tag_input("   ") == []


def test__build_capture_payload__omits_empty_optionals() -> None:
    """Test that empty summary and tags are left out."""
    assert build_capture_payload(" https://x.com ", " Title ", "  ", []) == {
        "url": "https://x.com",
        "title": "Title",
    }
    assert build_capture_payload("https://x.com", "T", "note", ["a"]) == {
        "url": "https://x.com",
        "title": "T",
        "summary": "note",
        "tags": ["a"],
    }


async def test__setup__loads_tags_once() -> None:
    """Test that setup loads tag names and a second call reuses them."""
    api = FakeApi()
    popup = CapturePopup(api)

    first = await popup.setup()
    second = await popup.setup()

    assert first == ["python", "PyTest", "rust"]
    assert second == first
    assert api.calls == ["tags"]


async def test__setup__falls_back_to_categories() -> None:
    """Test that a failing tags call falls back to categories."""
    api = FakeApi(tags_error=True)
    popup = CapturePopup(api)

    assert await popup.setup() == ["news"]
    assert api.calls == ["tags", "categories"]


async def test__setup__both_failing_leaves_no_suggestions() -> None:
    """Test that setup survives both calls failing."""
    popup = CapturePopup(FakeApi(tags_error=True, categories_error=True))

    assert await popup.setup() == []


async def test__setup__malformed_tags_fall_back_to_categories() -> None:
    """Test that tag entries without a name are treated like a failed call."""
    class MalformedApi(FakeApi):
        async def list_tags(self) -> list[dict]:
            self.calls.append("tags")
            return [{"label": "python"}]

    api = MalformedApi()
    popup = CapturePopup(api)

    assert await popup.setup() == ["news"]
    assert await popup.setup() == ["news"]
    assert api.calls == ["tags", "categories"]


async def test__setup__retries_after_both_sources_fail() -> None:
    """Test that a failed setup does not stop the next call from loading."""
    api = FakeApi(tags_error=True, categories_error=True)
    popup = CapturePopup(api)
    assert await popup.setup() == []

    api.tags_error = False

    assert await popup.setup() == ["python", "PyTest", "rust"]
    assert api.calls == ["tags", "categories", "tags"]


async def test__suggest__matches_and_offers_new_tag() -> None:
    """Test case-insensitive matching, exclusion of selected tags, and create offer."""
    popup = CapturePopup(FakeApi())
    await popup.setup()

    suggestions = popup.suggest("py", selected=["python"])
    assert suggestions.matches == ["PyTest"]
    assert suggestions.new_tag == "py"

    exact = popup.suggest("RUST")
    assert exact.matches == ["rust"]
    assert exact.new_tag is None

    assert popup.suggest("  ").matches == []


async def test__save__blocks_duplicate_submission() -> None:
    """Test that a second save while the first is outstanding is ignored."""
    api = FakeApi()
    api.gate = asyncio.Event()
    popup = CapturePopup(api)

    first = asyncio.create_task(popup.save("https://x.com", "T", tags=["a"]))
    await asyncio.sleep(0)

    assert await popup.save("https://x.com", "T") is None
    api.gate.set()
    created = await first

    assert created["tags"] == ["a"]
    assert api.calls.count("create") == 1
    assert popup.saving is False


async def test__save__propagates_api_errors() -> None:
    """Test that API failures reach the caller and release the guard."""
    class FailingApi(FakeApi):
        async def create_bookmark(self, payload: dict) -> dict:
            raise ApiClientError(400, "url: invalid")

    popup = CapturePopup(FailingApi())

    with pytest.raises(ApiClientError):
        await popup.save("bad", "T")
    assert popup.saving is False
