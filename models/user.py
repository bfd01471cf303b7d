"""
Storefront user schemas.

The users table keeps the mobile app's camelCase column names
(profilePhoto, skinTone, waistSize, ...); fields carry them as aliases.
Accounts themselves are created through the auth provider, so there is
no create schema here.
"""

from pydantic import ConfigDict, Field
from typing import Optional
from enum import Enum
from datetime import datetime

from models.base import BaseSchema


class UserRole(str, Enum):
    """Roles an admin can assign."""
    ADMIN = "admin"
    EDITOR = "editor"
    USER = "user"
    VENDOR = "vendor"


class UserUpdate(BaseSchema):
    """Update a user profile. Only provided fields are updated."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1, max_length=120)
    email: Optional[str] = Field(None, min_length=3, max_length=254)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    profile_photo: Optional[str] = Field(None, alias="profilePhoto")
    skin_tone: Optional[str] = Field(None, alias="skinTone")
    waist_size: Optional[float] = Field(None, ge=0, alias="waistSize")
    bust_size: Optional[float] = Field(None, ge=0, alias="bustSize")
    hip_size: Optional[float] = Field(None, ge=0, alias="hipSize")
    size: Optional[str] = None
    height: Optional[float] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0)
    coin_balance: Optional[int] = Field(None, ge=0)


class UserResponse(BaseSchema):
    """User row as listed in the admin."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: str = UserRole.USER.value
    is_active: bool = True
    location: Optional[str] = None
    phone: Optional[str] = None
    profile_photo: Optional[str] = Field(None, alias="profilePhoto")
    skin_tone: Optional[str] = Field(None, alias="skinTone")
    waist_size: Optional[float] = Field(None, alias="waistSize")
    bust_size: Optional[float] = Field(None, alias="bustSize")
    hip_size: Optional[float] = Field(None, alias="hipSize")
    size: Optional[str] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    coin_balance: Optional[int] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
