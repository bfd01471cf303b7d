"""
User and vendor administration routes.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.user import UserRole, UserUpdate, UserResponse
from models.vendor import VendorUpdate, VendorResponse
from services.user_service import get_user_service
from services.vendor_service import get_vendor_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])


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
# USER ROUTES
# ===================

@router.get("/users", response_model=list[UserResponse])
async def list_users(
    role: Optional[UserRole] = Query(None, description="Filter by role"),
    is_active: Optional[bool] = Query(None, description="Filter by active flag"),
    search: Optional[str] = Query(None, description="Search name, email, location, phone")
):
    """List users, newest first."""
    try:
        return get_user_service().get_all(role=role, is_active=is_active, search=search)

    except Exception as e:
        return handle_error(e)


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(user_id: str):
    """
    Get a user.

    Raises:
        404: User not found
    """
    try:
        return get_user_service().get_by_id(user_id)

    except Exception as e:
        return handle_error(e)


@router.patch("/users/{user_id}", response_model=UserResponse)
async def update_user(user_id: str, data: UserUpdate):
    """
    Update a user's profile.

    Raises:
        404: User not found
    """
    try:
        return get_user_service().update(user_id, data)

    except Exception as e:
        return handle_error(e)


@router.delete("/users/{user_id}", status_code=204)
async def delete_user(user_id: str):
    """
    Delete a user's profile row.

    Raises:
        404: User not found
    """
    try:
        get_user_service().delete(user_id)
        return None

    except Exception as e:
        return handle_error(e)


# ===================
# VENDOR ROUTES
# ===================

@router.get("/vendors", response_model=list[VendorResponse])
async def list_vendors(
    is_verified: Optional[bool] = Query(None, description="Filter by verification"),
    search: Optional[str] = Query(None, description="Search business name and location")
):
    """List vendors, newest first."""
    try:
        return get_vendor_service().get_all(is_verified=is_verified, search=search)

    except Exception as e:
        return handle_error(e)


@router.patch("/vendors/{vendor_id}", response_model=VendorResponse)
async def update_vendor(vendor_id: str, data: VendorUpdate):
    """
    Update a vendor profile.

    Raises:
        404: Vendor not found
    """
    try:
        return get_vendor_service().update(vendor_id, data)

    except Exception as e:
        return handle_error(e)


@router.delete("/vendors/{vendor_id}", status_code=204)
async def delete_vendor(vendor_id: str):
    """
    Delete a vendor profile.

    Raises:
        404: Vendor not found
    """
    try:
        get_vendor_service().delete(vendor_id)
        return None

    except Exception as e:
        return handle_error(e)
