"""
Order and draft order schemas.

Draft orders are placed by customers for out-of-stock items; an admin
approves them into regular orders or rejects them.
"""

from pydantic import Field, field_validator
from typing import Any, Optional
from enum import Enum
from datetime import datetime

from models.base import BaseSchema


class OrderStatus(str, Enum):
    """Regular order lifecycle as managed from the admin."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DraftOrderStatus(str, Enum):
    """Draft order lifecycle."""
    DRAFT = "draft"
    APPROVED = "approved"
    REJECTED = "rejected"


class OrderItemResponse(BaseSchema):
    """Line of a regular order."""

    id: Optional[str] = None
    order_id: Optional[str] = None
    product_id: Optional[str] = None
    product_name: Optional[str] = None
    product_sku: Optional[str] = None
    product_image: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    quantity: int = 0
    unit_price: float = 0
    total_price: float = 0


class OrderResponse(BaseSchema):
    """Regular order with its lines."""

    id: str
    user_id: Optional[str] = None
    order_number: Optional[str] = None
    status: str
    total_amount: float = 0
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    shipping_address: Optional[Any] = None
    billing_address: Optional[Any] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    items: list[OrderItemResponse] = Field(default_factory=list)


class DraftOrderItemCreate(BaseSchema):
    """Line of a new draft order."""

    product_id: str = Field(..., min_length=1)
    product_variant_id: Optional[str] = None
    product_name: Optional[str] = None
    product_sku: Optional[str] = None
    product_image: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0)

    @property
    def total_price(self) -> float:
        return self.quantity * self.unit_price


class DraftOrderCreate(BaseSchema):
    """
    Create a draft order.

    Required: user_id and at least one item.
    """

    user_id: str = Field(..., min_length=1)
    items: list[DraftOrderItemCreate] = Field(..., min_length=1)
    shipping_address: Optional[Any] = None
    billing_address: Optional[Any] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("notes", mode="before")
    @classmethod
    def blank_notes_is_none(cls, v):
        return v or None


class DraftOrderItemResponse(BaseSchema):
    """Stored draft order line."""

    id: Optional[str] = None
    draft_order_id: Optional[str] = None
    product_id: Optional[str] = None
    product_variant_id: Optional[str] = None
    product_name: Optional[str] = None
    product_sku: Optional[str] = None
    product_image: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    quantity: int = 0
    unit_price: float = 0
    total_price: float = 0


class DraftOrderResponse(BaseSchema):
    """Draft order with its lines."""

    id: str
    user_id: Optional[str] = None
    order_number: str
    status: DraftOrderStatus
    total_amount: float = 0
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    shipping_address: Optional[Any] = None
    billing_address: Optional[Any] = None
    notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: list[DraftOrderItemResponse] = Field(default_factory=list)


class DraftOrderApprove(BaseSchema):
    """Approve a draft order."""

    approved_by: Optional[str] = None


class DraftOrderReject(BaseSchema):
    """Reject a draft order."""

    rejection_reason: Optional[str] = None


class DraftOrderApproval(BaseSchema):
    """Result of approving a draft order."""

    success: bool = True
    order: OrderResponse
    message: str = "Draft order approved and converted to regular order"
