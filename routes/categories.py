"""
Category API routes.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
import structlog

from models.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryReorderRequest,
    ReorderResult,
)
from services.category_service import get_category_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/categories", tags=["Categories"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    active_only: bool = Query(False, description="Only active categories, by name")
):
    """List categories."""
    try:
        service = get_category_service()
        return service.get_all(active_only=active_only)

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(data: CategoryCreate):
    """Create a category."""
    try:
        service = get_category_service()
        return service.create(data)

    except Exception as e:
        return handle_error(e)


@router.put("/reorder", response_model=ReorderResult)
async def reorder_categories(data: CategoryReorderRequest):
    """
    Persist category display order.

    Each category's position in the list becomes its display_order.

    Raises:
        422: Empty list, duplicates or too many ids
        500: A row failed to update (earlier rows stay updated)
    """
    try:
        service = get_category_service()
        return service.reorder(data.categories)

    except Exception as e:
        return handle_error(e)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str):
    """
    Get a category.

    Raises:
        404: Category not found
    """
    try:
        service = get_category_service()
        return service.get_by_id(category_id)

    except Exception as e:
        return handle_error(e)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(category_id: str, data: CategoryUpdate):
    """
    Update a category.

    Raises:
        404: Category not found
    """
    try:
        service = get_category_service()
        return service.update(category_id, data)

    except Exception as e:
        return handle_error(e)


@router.post("/{category_id}/toggle-active", response_model=CategoryResponse)
async def toggle_category_active(category_id: str):
    """Flip a category between active and inactive."""
    try:
        service = get_category_service()
        return service.toggle_active(category_id)

    except Exception as e:
        return handle_error(e)


@router.delete("/{category_id}", status_code=204)
async def delete_category(category_id: str):
    """
    Delete a category.

    Raises:
        404: Category not found
    """
    try:
        service = get_category_service()
        service.delete(category_id)
        return None

    except Exception as e:
        return handle_error(e)
