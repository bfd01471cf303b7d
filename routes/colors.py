"""
Color and size API routes.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.color import ColorCreate, ColorUpdate, ColorResponse, SizeResponse
from services.color_service import get_color_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Colors"])


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

@router.get("/colors", response_model=list[ColorResponse])
async def list_colors():
    """List colors, newest first."""
    try:
        return get_color_service().get_all()

    except Exception as e:
        return handle_error(e)


@router.post("/colors", response_model=ColorResponse, status_code=201)
async def create_color(data: ColorCreate):
    """
    Create a color.

    Raises:
        422: hex_code is not #RRGGBB
    """
    try:
        return get_color_service().create(data)

    except Exception as e:
        return handle_error(e)


@router.patch("/colors/{color_id}", response_model=ColorResponse)
async def update_color(color_id: str, data: ColorUpdate):
    """
    Update a color.

    Raises:
        404: Color not found
    """
    try:
        return get_color_service().update(color_id, data)

    except Exception as e:
        return handle_error(e)


@router.delete("/colors/{color_id}", status_code=204)
async def delete_color(color_id: str):
    """
    Delete a color.

    Raises:
        404: Color not found
    """
    try:
        get_color_service().delete(color_id)
        return None

    except Exception as e:
        return handle_error(e)


@router.get("/sizes", response_model=list[SizeResponse])
async def list_sizes(
    category_id: Optional[str] = Query(None, description="Only sizes of this category")
):
    """List sizes."""
    try:
        return get_color_service().get_sizes(category_id)

    except Exception as e:
        return handle_error(e)
