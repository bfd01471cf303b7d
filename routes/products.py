"""
Product API routes.

Editor load/save, the per-category product list and the featured shelf
ordering.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
import structlog

from models.product import (
    ProductSave,
    ProductEditorState,
    ProductSaveResult,
    ProductSummary,
)
from models.category import FeaturedReorderRequest, ReorderResult
from services.product_service import get_product_service
from services.category_service import get_category_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])


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

@router.get("", response_model=list[ProductSummary])
async def list_products(
    category_id: str = Query(..., description="Category UUID")
):
    """List a category's products, newest first."""
    try:
        service = get_product_service()
        return service.list_by_category(category_id)

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=ProductSaveResult, status_code=201)
async def create_product(data: ProductSave):
    """
    Create a product with its variants and reviews.

    Variant rows that fail to save are listed in variants.failed.

    Raises:
        422: Missing name, category, sizes or variants
    """
    try:
        service = get_product_service()
        return service.save(data)

    except Exception as e:
        return handle_error(e)


@router.put("/featured/reorder", response_model=ReorderResult)
async def reorder_featured_products(data: FeaturedReorderRequest):
    """
    Persist product order within the featured shelf.

    Each product's position in the list becomes its
    display_order_within_feature.
    """
    try:
        service = get_category_service()
        return service.reorder_featured(data.products)

    except Exception as e:
        return handle_error(e)


@router.get("/{product_id}", response_model=ProductEditorState)
async def get_product(product_id: str):
    """
    Load a product into the editor.

    Raises:
        404: Product not found
    """
    try:
        service = get_product_service()
        return service.get_editor_state(product_id)

    except Exception as e:
        return handle_error(e)


@router.put("/{product_id}", response_model=ProductSaveResult)
async def update_product(product_id: str, data: ProductSave):
    """
    Save the editor state over an existing product.

    Raises:
        404: Product not found
        422: Missing name, category, sizes or variants
    """
    try:
        service = get_product_service()
        return service.save(data, product_id=product_id)

    except Exception as e:
        return handle_error(e)


@router.patch("/{product_id}/active", response_model=ProductSummary)
async def set_product_active(
    product_id: str,
    is_active: bool = Query(..., description="Show on the storefront")
):
    """Show or hide a product."""
    try:
        service = get_product_service()
        return service.set_active(product_id, is_active)

    except Exception as e:
        return handle_error(e)


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str):
    """
    Delete a product and its variants.

    Raises:
        404: Product not found
    """
    try:
        service = get_product_service()
        service.delete(product_id)
        return None

    except Exception as e:
        return handle_error(e)
