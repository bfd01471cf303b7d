"""
Vendor Q&A schemas.

Customers ask questions on product pages, vendors answer; admins moderate
both from the Q&A panel.
"""

from pydantic import Field
from typing import Any, Optional
from enum import Enum
from datetime import datetime

from models.base import BaseSchema


class AnsweredFilter(str, Enum):
    """Answered-status filter of the moderation list."""
    ALL = "all"
    ANSWERED = "answered"
    UNANSWERED = "unanswered"


class VisibilityFilter(str, Enum):
    """Visibility filter of the moderation list."""
    ALL = "all"
    VISIBLE = "visible"
    HIDDEN = "hidden"


class QuestionCreate(BaseSchema):
    """
    Create a question on behalf of a customer.

    Required: customer_id, question_text
    """

    product_id: Optional[str] = None
    vendor_id: Optional[str] = None
    customer_id: str = Field(..., min_length=1)
    question_text: str = Field(..., min_length=1, max_length=2000)


class AnswerResponse(BaseSchema):
    """Vendor answer."""

    id: str
    question_id: str
    vendor_id: Optional[str] = None
    answer_text: str = ""
    is_approved: bool = True
    is_visible: bool = True
    created_at: Optional[datetime] = None
    vendor: Optional[dict[str, Any]] = None


class QuestionResponse(BaseSchema):
    """Question with its answers attached."""

    id: str
    product_id: Optional[str] = None
    vendor_id: Optional[str] = None
    customer_id: Optional[str] = None
    question_text: str
    is_answered: bool = False
    is_approved: bool = True
    is_visible: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    product: Optional[dict[str, Any]] = None
    vendor: Optional[dict[str, Any]] = None
    customer: Optional[dict[str, Any]] = None
    answers: list[AnswerResponse] = Field(default_factory=list)
