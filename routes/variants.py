"""
Variant matrix API routes.

The product editor keeps its variant matrix client-side and calls these
endpoints to reshape it; nothing here touches the database. Saving the
matrix goes through the product routes.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
import structlog

from models.variant import (
    VariantRecord,
    VariantMatrixState,
    VariantRemoveRequest,
    VariantPricingRequest,
    MediaAssignRequest,
    MediaLinkRequest,
    MediaLinkResponse,
    MediaIndexRemoveRequest,
    MediaRemoveEverywhereRequest,
)
from services import variant_matrix
from services.media_service import get_media_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/variants", tags=["Variants"])


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
# MATRIX
# ===================

@router.post("/sync", response_model=VariantMatrixState)
async def sync_variants(data: VariantMatrixState):
    """
    Reconcile the variants with the selected colors and sizes.

    Existing keys keep their data; new keys get default records; keys no
    longer selected are dropped.
    """
    try:
        variants = variant_matrix.sync_variants(
            data.variants,
            data.selected_colors,
            data.selected_sizes
        )
        return VariantMatrixState(
            variants=variants,
            selected_colors=data.selected_colors,
            selected_sizes=data.selected_sizes
        )

    except Exception as e:
        return handle_error(e)


@router.post("/remove", response_model=VariantMatrixState)
async def remove_variant(data: VariantRemoveRequest):
    """
    Remove one variant card.

    Colors and sizes left without any variant are deselected.

    Raises:
        404: No variant with that color/size
    """
    try:
        variants, colors, sizes = variant_matrix.remove_variant(
            data.variants,
            data.color_id,
            data.size_id
        )
        return VariantMatrixState(
            variants=variants,
            selected_colors=colors,
            selected_sizes=sizes
        )

    except Exception as e:
        return handle_error(e)


# ===================
# PRICING
# ===================

@router.post("/pricing", response_model=VariantRecord)
async def update_pricing(data: VariantPricingRequest):
    """Apply price edits to one variant and recompute its discount."""
    try:
        return variant_matrix.update_variant_pricing(
            data.variant,
            mrp_price=data.mrp_price,
            rsp_price=data.rsp_price,
            cost_price=data.cost_price
        )

    except Exception as e:
        return handle_error(e)


@router.get("/discount")
async def get_discount(
    mrp: float = Query(..., description="Maximum retail price"),
    rsp: float = Query(..., description="Retail selling price")
):
    """Discount percentage of rsp against mrp."""
    try:
        return {
            "mrp": mrp,
            "rsp": rsp,
            "discount_percentage": variant_matrix.calculate_discount(mrp, rsp)
        }

    except Exception as e:
        return handle_error(e)


# ===================
# MEDIA
# ===================

@router.post("/media/apply", response_model=VariantMatrixState)
async def apply_media(data: MediaAssignRequest):
    """
    Add uploaded media to every variant of the chosen sizes.

    Raises:
        422: No target size given
    """
    try:
        variants, sizes = variant_matrix.apply_media_to_sizes(
            data.variants,
            data.selected_colors,
            data.selected_sizes,
            data.urls,
            data.media_type,
            data.target_size_ids
        )
        return VariantMatrixState(
            variants=variants,
            selected_colors=data.selected_colors,
            selected_sizes=sizes
        )

    except Exception as e:
        return handle_error(e)


@router.post("/media/link", response_model=MediaLinkResponse)
async def add_media_link(data: MediaLinkRequest):
    """
    Attach a pasted link to one variant.

    Image links are verified first; a link that does not load comes back
    with accepted=false and the matrix unchanged.
    """
    try:
        service = get_media_service()
        return service.add_media_link(data)

    except Exception as e:
        return handle_error(e)


@router.post("/media/remove", response_model=VariantMatrixState)
async def remove_media(data: MediaIndexRemoveRequest):
    """Remove the media at one position of one variant."""
    try:
        variants = variant_matrix.remove_variant_media(
            data.variants,
            data.color_id,
            data.size_id,
            data.media_type,
            data.index
        )
        return VariantMatrixState(
            variants=variants,
            selected_colors=data.selected_colors,
            selected_sizes=data.selected_sizes
        )

    except Exception as e:
        return handle_error(e)


@router.post("/media/remove-everywhere", response_model=VariantMatrixState)
async def remove_media_everywhere(data: MediaRemoveEverywhereRequest):
    """Remove one URL from every variant that has it."""
    try:
        variants = variant_matrix.remove_media_everywhere(
            data.variants,
            data.url,
            data.media_type
        )
        return VariantMatrixState(
            variants=variants,
            selected_colors=data.selected_colors,
            selected_sizes=data.selected_sizes
        )

    except Exception as e:
        return handle_error(e)
