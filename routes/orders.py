"""
Order and draft order API routes.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.order import (
    OrderResponse,
    OrderStatus,
    DraftOrderCreate,
    DraftOrderResponse,
    DraftOrderStatus,
    DraftOrderApprove,
    DraftOrderReject,
    DraftOrderApproval,
)
from services.order_service import get_order_service
from services.draft_order_service import get_draft_order_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


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
# DRAFT ORDERS
# ===================

@router.get("/drafts", response_model=list[DraftOrderResponse])
async def list_draft_orders(
    status: Optional[DraftOrderStatus] = Query(None, description="Filter by status")
):
    """List draft orders with their items, newest first."""
    try:
        return get_draft_order_service().get_all(status=status)

    except Exception as e:
        return handle_error(e)


@router.post("/drafts", response_model=DraftOrderResponse, status_code=201)
async def create_draft_order(data: DraftOrderCreate):
    """
    Create a draft order for out-of-stock items.

    Raises:
        422: Missing user_id or items
        500: Order number, draft or items could not be written
    """
    try:
        return get_draft_order_service().create(data)

    except Exception as e:
        return handle_error(e)


@router.get("/drafts/{draft_order_id}", response_model=DraftOrderResponse)
async def get_draft_order(draft_order_id: str):
    """
    Get a draft order.

    Raises:
        404: Draft order not found
    """
    try:
        return get_draft_order_service().get_by_id(draft_order_id)

    except Exception as e:
        return handle_error(e)


@router.post("/drafts/{draft_order_id}/approve", response_model=DraftOrderApproval)
async def approve_draft_order(draft_order_id: str, data: DraftOrderApprove):
    """
    Convert a draft into a regular pending order.

    Raises:
        404: Draft order not found
        422: Draft was already approved or rejected
    """
    try:
        return get_draft_order_service().approve(draft_order_id, approved_by=data.approved_by)

    except Exception as e:
        return handle_error(e)


@router.post("/drafts/{draft_order_id}/reject", response_model=DraftOrderResponse)
async def reject_draft_order(draft_order_id: str, data: DraftOrderReject):
    """
    Reject a draft order.

    Raises:
        404: Draft order not found
        422: Draft was already approved or rejected
    """
    try:
        return get_draft_order_service().reject(
            draft_order_id,
            rejection_reason=data.rejection_reason
        )

    except Exception as e:
        return handle_error(e)


# ===================
# ORDERS
# ===================

@router.get("", response_model=list[OrderResponse])
async def list_orders(
    status: Optional[OrderStatus] = Query(None, description="Filter by status")
):
    """List orders with their items, newest first."""
    try:
        return get_order_service().get_all(status=status)

    except Exception as e:
        return handle_error(e)


@router.post("/{order_id}/approve", response_model=OrderResponse)
async def approve_order(order_id: str):
    """Mark an order approved."""
    try:
        return get_order_service().approve(order_id)

    except Exception as e:
        return handle_error(e)


@router.post("/{order_id}/reject", response_model=OrderResponse)
async def reject_order(order_id: str):
    """Mark an order rejected."""
    try:
        return get_order_service().reject(order_id)

    except Exception as e:
        return handle_error(e)


@router.delete("/{order_id}", status_code=204)
async def delete_order(order_id: str):
    """
    Delete an order and its items.

    Raises:
        404: Order not found
    """
    try:
        get_order_service().delete(order_id)
        return None

    except Exception as e:
        return handle_error(e)
