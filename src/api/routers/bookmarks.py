"""Bookmark endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user_id, get_settings
from api.helpers import format_validation_errors
from core.config import Settings
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkFilters,
    BookmarkResponse,
    BookmarkTagsUpdate,
)
from schemas.common import ApiResponse
from schemas.validators import split_tag_param
from services import bookmark_service
from services.exceptions import InputValidationError

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.post("", response_model=ApiResponse[BookmarkResponse], status_code=201)
async def create_bookmark(
    data: BookmarkCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[BookmarkResponse]:
    """
    Create a new bookmark.

    `tags` are found-or-created and attached. A legacy `category` sent without
    `tags` becomes the bookmark's single tag.
    """
    row = await bookmark_service.create_bookmark(db, user_id, data)
    return ApiResponse(data=BookmarkResponse.model_validate(row))


@router.get("", response_model=ApiResponse[list[BookmarkResponse]])
async def list_bookmarks(
    search: str | None = Query(default=None, description="Case-insensitive title substring"),
    category: str | None = Query(default=None, description="Legacy category filter"),
    tags: list[str] = Query(default=[], description="Required tags (comma-separated or repeated)"),
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    limit: int | None = Query(default=None, ge=1, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Pagination offset"),
    user_id: str = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[list[BookmarkResponse]]:
    """
    List bookmarks for the current user, newest first.

    - **search**: substring match on title
    - **category**: matches the legacy category column or a tag of that name
    - **tags**: bookmark must carry ALL given tags
    - **startDate / endDate**: inclusive creation-date bounds; equal values select that whole UTC day
    - **limit / offset**: page size (default 20, capped at 100) and offset
    """
    page_size = min(limit or settings.default_page_limit, settings.max_page_limit)
    try:
        filters = BookmarkFilters(
            search=search,
            category=category,
            tags=split_tag_param(tags),
            start_date=start_date,
            end_date=end_date,
            limit=page_size,
            offset=offset,
        )
    except ValidationError as e:
        raise InputValidationError(format_validation_errors(e.errors())) from e

    rows = await bookmark_service.list_bookmarks(db, user_id, filters)
    return ApiResponse(data=[BookmarkResponse.model_validate(row) for row in rows])


@router.get("/{bookmark_id}", response_model=ApiResponse[BookmarkResponse])
async def get_bookmark(
    bookmark_id: UUID,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[BookmarkResponse]:
    """Get a single bookmark with its tags."""
    row = await bookmark_service.get_bookmark_with_tags(db, bookmark_id, user_id)
    return ApiResponse(data=BookmarkResponse.model_validate(row))


@router.put("/{bookmark_id}/tags", response_model=ApiResponse[BookmarkResponse])
async def replace_bookmark_tags(
    bookmark_id: UUID,
    data: BookmarkTagsUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[BookmarkResponse]:
    """Replace the bookmark's whole tag set. An empty list removes every tag."""
    row = await bookmark_service.update_bookmark_tags(db, bookmark_id, data.tags, user_id)
    return ApiResponse(data=BookmarkResponse.model_validate(row))


@router.post("/{bookmark_id}/tags", response_model=ApiResponse[BookmarkResponse])
async def add_bookmark_tags(
    bookmark_id: UUID,
    data: BookmarkTagsUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[BookmarkResponse]:
    """Attach tags, keeping the ones the bookmark already has."""
    row = await bookmark_service.add_tags_to_bookmark(db, bookmark_id, data.tags, user_id)
    return ApiResponse(data=BookmarkResponse.model_validate(row))


@router.delete(
    "/{bookmark_id}/tags/{tag_name}",
    response_model=ApiResponse[BookmarkResponse],
)
async def remove_bookmark_tag(
    bookmark_id: UUID,
    tag_name: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[BookmarkResponse]:
    """Detach one tag from the bookmark. The tag itself is kept."""
    row = await bookmark_service.remove_tags_from_bookmark(
        db, bookmark_id, [tag_name], user_id,
    )
    return ApiResponse(data=BookmarkResponse.model_validate(row))
