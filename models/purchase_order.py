"""
Purchase order schemas.

A purchase order buys a quantity of one product from one vendor user.
"""

from pydantic import Field
from typing import Optional
from enum import Enum
from datetime import datetime

from models.base import BaseSchema


class PurchaseOrderStatus(str, Enum):
    """Purchase order lifecycle."""
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PurchaseOrderCreate(BaseSchema):
    """Create a purchase order. total_price is computed, never submitted."""

    vendor_id: str = Field(..., min_length=1, description="Vendor user UUID")
    product_id: str = Field(..., min_length=1, description="Product UUID")
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., gt=0)

    @property
    def total_price(self) -> float:
        return round(self.quantity * self.unit_price, 2)


class PurchaseOrderVendor(BaseSchema):
    """Vendor user embedded in a purchase order."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None


class PurchaseOrderProduct(BaseSchema):
    """Product embedded in a purchase order."""

    id: str
    name: Optional[str] = None
    description: Optional[str] = None


class PurchaseOrderResponse(BaseSchema):
    """Purchase order with its vendor and product."""

    id: str
    vendor_id: str
    product_id: str
    quantity: int
    unit_price: float
    total_price: float
    status: str = PurchaseOrderStatus.PENDING.value
    created_at: Optional[datetime] = None
    vendor: Optional[PurchaseOrderVendor] = None
    product: Optional[PurchaseOrderProduct] = None
