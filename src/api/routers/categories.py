"""Legacy category endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user_id
from schemas.category import CategoryCreate, CategoryResponse
from schemas.common import ApiResponse
from services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=ApiResponse[list[CategoryResponse]])
async def list_categories(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[list[CategoryResponse]]:
    """List the current user's categories alphabetically."""
    categories = await category_service.list_categories(db, user_id)
    return ApiResponse(data=[CategoryResponse.model_validate(c) for c in categories])


@router.post("", response_model=ApiResponse[CategoryResponse], status_code=201)
async def create_category(
    data: CategoryCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
) -> ApiResponse[CategoryResponse]:
    """Create a category, or return the existing one with that name."""
    category = await category_service.create_category(db, user_id, data.name)
    return ApiResponse(data=CategoryResponse.model_validate(category))
