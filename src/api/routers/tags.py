"""Tag management endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user_id, get_settings
from core.config import Settings
from schemas.common import ApiResponse
from schemas.tag import TagCreate, TagResponse, TagUpdate, TagUsage
from services import tag_service

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=ApiResponse[list[TagResponse]])
async def list_tags(
    search: str | None = Query(default=None, description="Case-insensitive name substring"),
    user_id: str = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[list[TagResponse]]:
    """
    List the current user's tags alphabetically.

    With `search`, only matching names are returned, capped for autocomplete.
    """
    limit = settings.tag_search_limit if search else None
    tags = await tag_service.list_tags(db, user_id, search=search, limit=limit)
    return ApiResponse(data=[TagResponse.model_validate(tag) for tag in tags])


@router.post("", response_model=ApiResponse[TagResponse], status_code=201)
async def create_tag(
    data: TagCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[TagResponse]:
    """Create a tag. Creating an existing name returns the existing tag."""
    tag = await tag_service.create_tag(db, user_id, data.name)
    return ApiResponse(data=TagResponse.model_validate(tag))


@router.get("/stats", response_model=ApiResponse[list[TagUsage]])
async def tag_usage_stats(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[list[TagUsage]]:
    """Every tag with the number of bookmarks carrying it, most used first."""
    return ApiResponse(data=await tag_service.get_tag_usage_stats(db, user_id))


@router.get("/popular", response_model=ApiResponse[list[TagUsage]])
async def popular_tags(
    limit: int | None = Query(default=None, ge=1, description="Maximum number of tags"),
    user_id: str = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[list[TagUsage]]:
    """The most used tags (at least one bookmark each)."""
    usage = await tag_service.get_popular_tags(
        db, user_id, limit=limit or settings.popular_tags_limit,
    )
    return ApiResponse(data=usage)


@router.put("/{tag_id}", response_model=ApiResponse[TagResponse])
async def update_tag(
    tag_id: UUID,
    data: TagUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[TagResponse]:
    """
    Rename a tag.

    Bookmarks carrying the tag reflect the new name. Returns 404 if the tag
    doesn't exist and 400 if another tag already has the name.
    """
    tag = await tag_service.update_tag(db, tag_id, user_id, data.name)
    return ApiResponse(data=TagResponse.model_validate(tag))


@router.delete("/{tag_id}", response_model=ApiResponse[None])
async def delete_tag(
    tag_id: UUID,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[None]:
    """Delete a tag and detach it from every bookmark. Bookmarks are kept."""
    await tag_service.delete_tag(db, tag_id, user_id)
    return ApiResponse(data=None)
