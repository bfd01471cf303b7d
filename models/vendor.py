"""
Vendor schemas.

A vendor row is the business profile attached to a vendor user account.
"""

from pydantic import Field
from typing import Optional
from datetime import datetime

from models.base import BaseSchema


class VendorUpdate(BaseSchema):
    """Update a vendor profile. Only provided fields are updated."""

    business_name: Optional[str] = Field(None, min_length=1, max_length=120)
    location: Optional[str] = None
    is_verified: Optional[bool] = None
    profile_image_url: Optional[str] = None


class VendorResponse(BaseSchema):
    """Vendor row."""

    id: str
    user_id: Optional[str] = None
    business_name: str
    location: Optional[str] = None
    is_verified: bool = False
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
