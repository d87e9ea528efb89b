"""Tests for bookmark endpoints."""
from uuid import uuid4

from httpx import AsyncClient


async def _create(client: AsyncClient, **overrides) -> dict:
    payload = {"url": "https://example.com", "title": "Example", **overrides}
    response = await client.post("/api/bookmarks", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# =============================================================================
# Create Tests
# =============================================================================


async def test__create_bookmark__returns_envelope(client: AsyncClient) -> None:
    """Test that creating a bookmark returns 201 and the success envelope."""
    response = await client.post(
        "/api/bookmarks",
        json={
            "url": "https://example.com/page",
            "title": "  Example page  ",
            "summary": "A summary",
            "tags": ["web", "python"],
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["error"] is None
    data = body["data"]
    assert data["url"] == "https://example.com/page"
    assert data["title"] == "Example page"
    assert data["summary"] == "A summary"
    assert data["tags"] == ["python", "web"]
    assert data["category"] is None
    assert data["user_id"] == "test-user-123"
    assert "id" in data
    assert "created_at" in data


async def test__create_bookmark__legacy_category(client: AsyncClient) -> None:
    """Test that a category without tags becomes the single tag."""
    data = await _create(client, category="reading")

    assert data["tags"] == ["reading"]
    assert data["category"] == "reading"


async def test__create_bookmark__missing_title_is_400(client: AsyncClient) -> None:
    """Test that a missing title fails validation with 400."""
    response = await client.post("/api/bookmarks", json={"url": "https://example.com"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["data"] is None
    assert "title" in body["error"]


async def test__create_bookmark__missing_url_is_400(client: AsyncClient) -> None:
    """Test that a missing url fails validation with 400."""
    response = await client.post("/api/bookmarks", json={"title": "No url"})

    assert response.status_code == 400
    assert "url" in response.json()["error"]


async def test__create_bookmark__invalid_url_is_400(client: AsyncClient) -> None:
    """Test that a malformed url fails validation."""
    response = await client.post("/api/bookmarks", json={"url": "not a url", "title": "x"})

    assert response.status_code == 400
    assert response.json()["success"] is False


async def test__create_bookmark__overlong_tag_is_400(client: AsyncClient) -> None:
    """Test that a tag over 100 characters is rejected."""
    response = await client.post(
        "/api/bookmarks",
        json={"url": "https://example.com", "title": "x", "tags": ["x" * 101]},
    )

    assert response.status_code == 400
    assert "maximum length" in response.json()["error"]


# =============================================================================
# List / Get Tests
# =============================================================================


async def test__list_bookmarks__newest_first(client: AsyncClient) -> None:
    """Test that bookmarks are listed newest first."""
    await _create(client, title="first")
    await _create(client, title="second")

    response = await client.get("/api/bookmarks")

    assert response.status_code == 200
    assert [b["title"] for b in response.json()["data"]] == ["second", "first"]


async def test__list_bookmarks__tags_comma_separated_and_repeated(client: AsyncClient) -> None:
    """Test that the tags filter accepts both forms with AND semantics."""
    await _create(client, title="both", tags=["a", "b"])
    await _create(client, title="only a", tags=["a"])

    comma = await client.get("/api/bookmarks", params={"tags": "a,b"})
    repeated = await client.get("/api/bookmarks", params=[("tags", "a"), ("tags", "b")])

    assert [b["title"] for b in comma.json()["data"]] == ["both"]
    assert [b["title"] for b in repeated.json()["data"]] == ["both"]


async def test__list_bookmarks__search_and_category(client: AsyncClient) -> None:
    """Test search and legacy category filters."""
    await _create(client, title="Python tips", category="dev")
    await _create(client, title="Python news", tags=["news"])
    await _create(client, title="Cooking", category="dev")

    response = await client.get("/api/bookmarks", params={"search": "python", "category": "dev"})

    assert [b["title"] for b in response.json()["data"]] == ["Python tips"]


async def test__list_bookmarks__pagination(client: AsyncClient) -> None:
    """Test limit and offset."""
    for i in range(4):
        await _create(client, title=f"b{i}")

    first = await client.get("/api/bookmarks", params={"limit": 2, "offset": 0})
    second = await client.get("/api/bookmarks", params={"limit": 2, "offset": 2})

    assert [b["title"] for b in first.json()["data"]] == ["b3", "b2"]
    assert [b["title"] for b in second.json()["data"]] == ["b1", "b0"]


async def test__list_bookmarks__limit_is_capped(client: AsyncClient) -> None:
    """Test that an oversized limit is accepted and capped rather than rejected."""
    await _create(client)

    response = await client.get("/api/bookmarks", params={"limit": 1000})

    assert response.status_code == 200
    assert len(response.json()["data"]) == 1


async def test__list_bookmarks__invalid_pagination_is_400(client: AsyncClient) -> None:
    """Test that non-positive limits and negative offsets are rejected."""
    assert (await client.get("/api/bookmarks", params={"limit": 0})).status_code == 400
    assert (await client.get("/api/bookmarks", params={"offset": -1})).status_code == 400


async def test__list_bookmarks__date_range_today(client: AsyncClient) -> None:
    """Test that a same-day range includes bookmarks created today."""
    created = await _create(client, title="today")
    day = created["created_at"][:10]

    response = await client.get("/api/bookmarks", params={"startDate": day, "endDate": day})

    assert [b["title"] for b in response.json()["data"]] == ["today"]


async def test__list_bookmarks__invalid_date_is_400(client: AsyncClient) -> None:
    """Test that an unparseable date returns the error envelope."""
    response = await client.get("/api/bookmarks", params={"startDate": "yesterday-ish"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "Invalid date" in body["error"]


async def test__list_bookmarks__user_isolation(
    client: AsyncClient,
    other_client: AsyncClient,
) -> None:
    """Test that users only see their own bookmarks."""
    await _create(client, title="mine")

    response = await other_client.get("/api/bookmarks")

    assert response.json()["data"] == []


async def test__get_bookmark__by_id(client: AsyncClient) -> None:
    """Test fetching a single bookmark."""
    created = await _create(client, tags=["x"])

    response = await client.get(f"/api/bookmarks/{created['id']}")

    assert response.status_code == 200
    assert response.json()["data"] == created


async def test__get_bookmark__not_found(client: AsyncClient) -> None:
    """Test that an unknown id returns 404 with the error envelope."""
    response = await client.get(f"/api/bookmarks/{uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"success": False, "data": None, "error": "Bookmark not found"}


async def test__get_bookmark__other_user_is_404(
    client: AsyncClient,
    other_client: AsyncClient,
) -> None:
    """Test that another user's bookmark is reported as missing."""
    created = await _create(client)

    response = await other_client.get(f"/api/bookmarks/{created['id']}")

    assert response.status_code == 404


async def test__get_bookmark__malformed_id_is_400(client: AsyncClient) -> None:
    """Test that a non-UUID id fails validation."""
    response = await client.get("/api/bookmarks/not-a-uuid")

    assert response.status_code == 400


# =============================================================================
# Tag set Tests
# =============================================================================


async def test__replace_tags__replaces_and_dedupes(client: AsyncClient) -> None:
    """Test that PUT replaces the whole tag set, storing duplicates once."""
    created = await _create(client, tags=["old"])

    response = await client.put(
        f"/api/bookmarks/{created['id']}/tags",
        json={"tags": ["new", "new", "other"]},
    )

    assert response.status_code == 200
    assert response.json()["data"]["tags"] == ["new", "other"]


async def test__replace_tags__non_array_is_400(client: AsyncClient) -> None:
    """Test that tags must be a list."""
    created = await _create(client)

    response = await client.put(f"/api/bookmarks/{created['id']}/tags", json={"tags": "a,b"})

    assert response.status_code == 400
    assert "tags" in response.json()["error"]


async def test__replace_tags__missing_tags_is_400(client: AsyncClient) -> None:
    """Test that the tags field is required."""
    created = await _create(client)

    response = await client.put(f"/api/bookmarks/{created['id']}/tags", json={})

    assert response.status_code == 400


async def test__replace_tags__unknown_bookmark_is_404(client: AsyncClient) -> None:
    """Test replacing tags on a missing bookmark."""
    response = await client.put(f"/api/bookmarks/{uuid4()}/tags", json={"tags": ["a"]})

    assert response.status_code == 404


async def test__add_tags__keeps_existing(client: AsyncClient) -> None:
    """Test that POST adds tags without removing existing ones."""
    created = await _create(client, tags=["a"])

    response = await client.post(f"/api/bookmarks/{created['id']}/tags", json={"tags": ["b"]})

    assert response.status_code == 200
    assert response.json()["data"]["tags"] == ["a", "b"]


async def test__remove_tag__detaches_one(client: AsyncClient) -> None:
    """Test that DELETE detaches a single tag by name."""
    created = await _create(client, tags=["a", "b c"])

    response = await client.delete(f"/api/bookmarks/{created['id']}/tags/b c")

    assert response.status_code == 200
    assert response.json()["data"]["tags"] == ["a"]
