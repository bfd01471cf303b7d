"""
Custom exception classes for the application.

Every error carries a stable code, an HTTP status and a details dict so
routes can render it without knowing the concrete type.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PRODUCT_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# CATALOG ERRORS
# ===================

class ProductNotFoundError(NotFoundError):
    """Product not found."""

    def __init__(self, product_id: str):
        super().__init__(
            resource="Product",
            identifier=product_id,
            code="PRODUCT_NOT_FOUND"
        )


class ProductValidationError(ValidationError):
    """Product form is incomplete."""

    def __init__(self, message: str, field: str):
        super().__init__(
            code="PRODUCT_INVALID",
            message=message,
            details={"field": field}
        )


class VariantNotFoundError(NotFoundError):
    """No variant with the given color/size key."""

    def __init__(self, color_id: Optional[str], size_id: str):
        super().__init__(
            resource="Variant",
            identifier=f"{color_id}/{size_id}",
            code="VARIANT_NOT_FOUND"
        )
        self.details = {"color_id": color_id, "size_id": size_id}


class MediaTargetRequiredError(ValidationError):
    """Bulk media assignment needs at least one size."""

    def __init__(self):
        super().__init__(
            code="MEDIA_TARGET_REQUIRED",
            message="Please select at least one size",
            details={"field": "target_size_ids"}
        )


class MediaUrlsRequiredError(ValidationError):
    """Bulk media assignment needs at least one usable URL."""

    def __init__(self):
        super().__init__(
            code="MEDIA_URLS_REQUIRED",
            message="No media to assign",
            details={"field": "urls"}
        )


class MediaIndexError(ValidationError):
    """Media position outside the variant's list."""

    def __init__(self, index: int, length: int):
        super().__init__(
            code="MEDIA_INDEX_OUT_OF_RANGE",
            message=f"No media at position {index}",
            details={"index": index, "length": length}
        )


class CategoryNotFoundError(NotFoundError):
    """Category not found."""

    def __init__(self, category_id: str):
        super().__init__(
            resource="Category",
            identifier=category_id,
            code="CATEGORY_NOT_FOUND"
        )


class ColorNotFoundError(NotFoundError):
    """Color not found."""

    def __init__(self, color_id: str):
        super().__init__(
            resource="Color",
            identifier=color_id,
            code="COLOR_NOT_FOUND"
        )


class ReorderPayloadError(ValidationError):
    """Reorder request is empty, too long or has duplicate ids."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="REORDER_INVALID",
            message=message,
            details=details
        )


# ===================
# ORDER ERRORS
# ===================

class OrderNotFoundError(NotFoundError):
    """Order not found."""

    def __init__(self, order_id: str):
        super().__init__(
            resource="Order",
            identifier=order_id,
            code="ORDER_NOT_FOUND"
        )


class DraftOrderNotFoundError(NotFoundError):
    """Draft order not found."""

    def __init__(self, draft_order_id: str):
        super().__init__(
            resource="Draft order",
            identifier=draft_order_id,
            code="DRAFT_ORDER_NOT_FOUND"
        )


class PurchaseOrderNotFoundError(NotFoundError):
    """Purchase order not found."""

    def __init__(self, purchase_order_id: str):
        super().__init__(
            resource="Purchase order",
            identifier=purchase_order_id,
            code="PURCHASE_ORDER_NOT_FOUND"
        )


class InvalidStatusTransitionError(ValidationError):
    """Invalid status transition."""

    def __init__(self, current_status: str, new_status: str, allowed_from: str):
        super().__init__(
            code="INVALID_STATUS_TRANSITION",
            message=f"Cannot transition from {current_status} to {new_status}",
            details={
                "current_status": current_status,
                "new_status": new_status,
                "reason": f"Only {allowed_from} orders can move to {new_status}"
            }
        )


# ===================
# Q&A ERRORS
# ===================

class QuestionNotFoundError(NotFoundError):
    """Vendor question not found."""

    def __init__(self, question_id: str):
        super().__init__(
            resource="Question",
            identifier=question_id,
            code="QUESTION_NOT_FOUND"
        )


class AnswerNotFoundError(NotFoundError):
    """Vendor answer not found."""

    def __init__(self, answer_id: str):
        super().__init__(
            resource="Answer",
            identifier=answer_id,
            code="ANSWER_NOT_FOUND"
        )


# ===================
# ACCOUNT ERRORS
# ===================

class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: str):
        super().__init__(
            resource="User",
            identifier=user_id,
            code="USER_NOT_FOUND"
        )


class VendorNotFoundError(NotFoundError):
    """Vendor not found."""

    def __init__(self, vendor_id: str):
        super().__init__(
            resource="Vendor",
            identifier=vendor_id,
            code="VENDOR_NOT_FOUND"
        )
