"""
Business logic services.

Each service handles one domain area. variant_matrix holds the pure
matrix operations the product editor runs between saves.
"""

from services.product_service import ProductService, get_product_service
from services.media_service import MediaService, get_media_service
from services.category_service import CategoryService, get_category_service
from services.color_service import ColorService, get_color_service
from services.order_service import OrderService, get_order_service
from services.draft_order_service import DraftOrderService, get_draft_order_service
from services.question_service import QuestionService, get_question_service
from services.user_service import UserService, get_user_service
from services.vendor_service import VendorService, get_vendor_service
from services.purchase_order_service import PurchaseOrderService, get_purchase_order_service

__all__ = [
    "ProductService",
    "get_product_service",
    "MediaService",
    "get_media_service",
    "CategoryService",
    "get_category_service",
    "ColorService",
    "get_color_service",
    "OrderService",
    "get_order_service",
    "DraftOrderService",
    "get_draft_order_service",
    "QuestionService",
    "get_question_service",
    "UserService",
    "get_user_service",
    "VendorService",
    "get_vendor_service",
    "PurchaseOrderService",
    "get_purchase_order_service",
]
