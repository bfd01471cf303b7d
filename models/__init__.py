"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, dedupe_ids
from models.variant import (
    VariantKey,
    MediaType,
    VariantRecord,
    VariantMatrixState,
    VariantTargetRequest,
    VariantRemoveRequest,
    VariantPricingRequest,
    MediaAssignRequest,
    MediaLinkRequest,
    MediaLinkResponse,
    MediaIndexRemoveRequest,
    MediaRemoveEverywhereRequest,
)
from models.product import (
    FeaturedType,
    ProductForm,
    ReviewInput,
    ReviewResponse,
    ProductSave,
    ProductEditorState,
    FailedVariantWrite,
    VariantSyncSummary,
    ProductSaveResult,
    ProductSummary,
)
from models.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    ReorderItem,
    CategoryReorderRequest,
    FeaturedReorderRequest,
    ReorderResult,
)
from models.color import (
    ColorCreate,
    ColorUpdate,
    ColorResponse,
    SizeResponse,
)
from models.order import (
    OrderStatus,
    DraftOrderStatus,
    OrderItemResponse,
    OrderResponse,
    DraftOrderItemCreate,
    DraftOrderCreate,
    DraftOrderItemResponse,
    DraftOrderResponse,
    DraftOrderApprove,
    DraftOrderReject,
    DraftOrderApproval,
)
from models.question import (
    AnsweredFilter,
    VisibilityFilter,
    QuestionCreate,
    AnswerResponse,
    QuestionResponse,
)
from models.user import (
    UserRole,
    UserUpdate,
    UserResponse,
)
from models.vendor import (
    VendorUpdate,
    VendorResponse,
)
from models.purchase_order import (
    PurchaseOrderStatus,
    PurchaseOrderCreate,
    PurchaseOrderVendor,
    PurchaseOrderProduct,
    PurchaseOrderResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "dedupe_ids",
    # Variant
    "VariantKey",
    "MediaType",
    "VariantRecord",
    "VariantMatrixState",
    "VariantTargetRequest",
    "VariantRemoveRequest",
    "VariantPricingRequest",
    "MediaAssignRequest",
    "MediaLinkRequest",
    "MediaLinkResponse",
    "MediaIndexRemoveRequest",
    "MediaRemoveEverywhereRequest",
    # Product
    "FeaturedType",
    "ProductForm",
    "ReviewInput",
    "ReviewResponse",
    "ProductSave",
    "ProductEditorState",
    "FailedVariantWrite",
    "VariantSyncSummary",
    "ProductSaveResult",
    "ProductSummary",
    # Category
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "ReorderItem",
    "CategoryReorderRequest",
    "FeaturedReorderRequest",
    "ReorderResult",
    # Color / size
    "ColorCreate",
    "ColorUpdate",
    "ColorResponse",
    "SizeResponse",
    # Order
    "OrderStatus",
    "DraftOrderStatus",
    "OrderItemResponse",
    "OrderResponse",
    "DraftOrderItemCreate",
    "DraftOrderCreate",
    "DraftOrderItemResponse",
    "DraftOrderResponse",
    "DraftOrderApprove",
    "DraftOrderReject",
    "DraftOrderApproval",
    # Q&A
    "AnsweredFilter",
    "VisibilityFilter",
    "QuestionCreate",
    "AnswerResponse",
    "QuestionResponse",
    # Accounts
    "UserRole",
    "UserUpdate",
    "UserResponse",
    "VendorUpdate",
    "VendorResponse",
    # Purchase orders
    "PurchaseOrderStatus",
    "PurchaseOrderCreate",
    "PurchaseOrderVendor",
    "PurchaseOrderProduct",
    "PurchaseOrderResponse",
]
