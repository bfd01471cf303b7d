"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,
    DatabaseError,

    # Catalog
    ProductNotFoundError,
    ProductValidationError,
    VariantNotFoundError,
    MediaTargetRequiredError,
    MediaUrlsRequiredError,
    MediaIndexError,
    CategoryNotFoundError,
    ColorNotFoundError,
    ReorderPayloadError,

    # Orders
    OrderNotFoundError,
    DraftOrderNotFoundError,
    PurchaseOrderNotFoundError,
    InvalidStatusTransitionError,

    # Q&A
    QuestionNotFoundError,
    AnswerNotFoundError,

    # Accounts
    UserNotFoundError,
    VendorNotFoundError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",
    "DatabaseError",

    # Catalog
    "ProductNotFoundError",
    "ProductValidationError",
    "VariantNotFoundError",
    "MediaTargetRequiredError",
    "MediaUrlsRequiredError",
    "MediaIndexError",
    "CategoryNotFoundError",
    "ColorNotFoundError",
    "ReorderPayloadError",

    # Orders
    "OrderNotFoundError",
    "DraftOrderNotFoundError",
    "PurchaseOrderNotFoundError",
    "InvalidStatusTransitionError",

    # Q&A
    "QuestionNotFoundError",
    "AnswerNotFoundError",

    # Accounts
    "UserNotFoundError",
    "VendorNotFoundError",
]
