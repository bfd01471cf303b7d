"""
Purchase order API routes.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.purchase_order import PurchaseOrderCreate, PurchaseOrderResponse
from services.purchase_order_service import get_purchase_order_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/purchase-orders", tags=["Purchase Orders"])


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

@router.get("", response_model=list[PurchaseOrderResponse])
async def list_purchase_orders():
    """List purchase orders with vendor and product, newest first."""
    try:
        return get_purchase_order_service().get_all()

    except Exception as e:
        return handle_error(e)


@router.get("/{purchase_order_id}", response_model=PurchaseOrderResponse)
async def get_purchase_order(purchase_order_id: str):
    """
    Get a purchase order.

    Raises:
        404: Purchase order not found
    """
    try:
        return get_purchase_order_service().get_by_id(purchase_order_id)

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=PurchaseOrderResponse, status_code=201)
async def create_purchase_order(data: PurchaseOrderCreate):
    """
    Create a pending purchase order; total_price = quantity * unit_price.

    Raises:
        422: quantity below 1 or unit_price not positive
    """
    try:
        return get_purchase_order_service().create(data)

    except Exception as e:
        return handle_error(e)


@router.delete("/{purchase_order_id}", status_code=204)
async def delete_purchase_order(purchase_order_id: str):
    """
    Delete a purchase order.

    Raises:
        404: Purchase order not found
    """
    try:
        get_purchase_order_service().delete(purchase_order_id)
        return None

    except Exception as e:
        return handle_error(e)
