"""
Draft order service.

Customers place draft orders for out-of-stock items. An admin either
approves a draft, which copies it into a regular order, or rejects it.
Only drafts still in the draft state can move.
"""

from datetime import datetime, timezone
from typing import Optional
import structlog

from config import get_admin_client, settings
from models.order import (
    DraftOrderCreate,
    DraftOrderResponse,
    DraftOrderStatus,
    DraftOrderApproval,
    OrderResponse,
    OrderStatus,
)
from exceptions import (
    DraftOrderNotFoundError,
    InvalidStatusTransitionError,
    DatabaseError,
)

logger = structlog.get_logger(__name__)

DRAFT_PREFIX = "DRAFT-"
ORDER_PREFIX = "ORD-"

# Columns copied from a draft line onto a regular order line
ITEM_COPY_FIELDS = (
    "product_id",
    "product_name",
    "product_sku",
    "product_image",
    "size",
    "color",
    "quantity",
    "unit_price",
    "total_price",
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def regular_order_number(draft_number: str) -> str:
    """DRAFT-0001 -> ORD-0001; other numbers are kept as they are."""
    return draft_number.replace(DRAFT_PREFIX, ORDER_PREFIX, 1)


class DraftOrderService:
    """
    Draft order business logic.

    Handles creation, listing and the approve/reject transitions.
    """

    def __init__(self):
        self.db = get_admin_client()
        self.table = "customer_draft_orders"
        self.items_table = "customer_draft_order_items"
        self.orders_table = "orders"
        self.order_items_table = "order_items"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self, status: Optional[DraftOrderStatus] = None) -> list[DraftOrderResponse]:
        """
        Draft orders with items, newest first.

        Args:
            status: Only drafts with this status

        Returns:
            List of DraftOrderResponse
        """
        logger.info("getting_draft_orders", status=status.value if status else None)

        try:
            query = self.db.table(self.table).select(f"*, items:{self.items_table}(*)")
            if status:
                query = query.eq("status", status.value)
            result = query.order("created_at", desc=True).execute()

            drafts = [DraftOrderResponse(**row) for row in result.data]

            logger.info("draft_orders_retrieved", count=len(drafts))
            return drafts

        except Exception as e:
            logger.error("get_draft_orders_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, draft_order_id: str) -> DraftOrderResponse:
        """
        Get a draft order with its items.

        Raises:
            DraftOrderNotFoundError: If draft doesn't exist
        """
        try:
            result = (
                self.db.table(self.table)
                .select(f"*, items:{self.items_table}(*)")
                .eq("id", draft_order_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_draft_order_failed", draft_order_id=draft_order_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise DraftOrderNotFoundError(draft_order_id)
        return DraftOrderResponse(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def _next_order_number(self) -> str:
        try:
            result = self.db.rpc("generate_draft_order_number").execute()
        except Exception as e:
            logger.error("generate_draft_order_number_failed", error=str(e))
            raise DatabaseError("rpc", "Failed to generate order number")

        if not result.data:
            raise DatabaseError("rpc", "Failed to generate order number")
        return result.data

    def create(self, data: DraftOrderCreate) -> DraftOrderResponse:
        """
        Create a draft order with its items.

        If the items cannot be written the draft row is deleted again.

        Args:
            data: Draft order with at least one item

        Returns:
            Created DraftOrderResponse

        Raises:
            DatabaseError: If the number, draft or items cannot be written
        """
        order_number = self._next_order_number()
        total_amount = sum(item.total_price for item in data.items)

        logger.info(
            "creating_draft_order",
            order_number=order_number,
            user_id=data.user_id,
            item_count=len(data.items),
            total_amount=total_amount
        )

        try:
            result = (
                self.db.table(self.table)
                .insert({
                    "user_id": data.user_id,
                    "order_number": order_number,
                    "total_amount": total_amount,
                    "shipping_address": data.shipping_address,
                    "billing_address": data.billing_address,
                    "payment_method": data.payment_method,
                    "payment_status": "pending",
                    "status": DraftOrderStatus.DRAFT.value,
                    "notes": data.notes or settings.draft_order_default_note,
                })
                .execute()
            )
            draft = result.data[0]
        except Exception as e:
            logger.error("create_draft_order_failed", order_number=order_number, error=str(e))
            raise DatabaseError("insert", "Failed to create draft order")

        items_data = [
            {
                "draft_order_id": draft["id"],
                **item.model_dump(),
                "total_price": item.total_price,
            }
            for item in data.items
        ]

        try:
            items_result = self.db.table(self.items_table).insert(items_data).execute()
        except Exception as e:
            logger.error(
                "create_draft_order_items_failed",
                draft_order_id=draft["id"],
                error=str(e)
            )
            self.db.table(self.table).delete().eq("id", draft["id"]).execute()
            raise DatabaseError("insert", "Failed to create draft order items")

        logger.info("draft_order_created", draft_order_id=draft["id"], order_number=order_number)

        return DraftOrderResponse(**draft, items=items_result.data or items_data)

    def _require_draft(self, draft: DraftOrderResponse, new_status: DraftOrderStatus) -> None:
        if draft.status != DraftOrderStatus.DRAFT:
            raise InvalidStatusTransitionError(
                current_status=draft.status.value,
                new_status=new_status.value,
                allowed_from=DraftOrderStatus.DRAFT.value
            )

    def approve(self, draft_order_id: str, approved_by: Optional[str] = None) -> DraftOrderApproval:
        """
        Convert a draft into a regular pending order.

        The order gets the draft's number with DRAFT- swapped for ORD- and
        a copy of its lines. If the lines cannot be written the new order
        is deleted and the draft stays untouched.

        Raises:
            DraftOrderNotFoundError: If draft doesn't exist
            InvalidStatusTransitionError: If draft was already decided
            DatabaseError: If the order or its items cannot be written
        """
        draft = self.get_by_id(draft_order_id)
        self._require_draft(draft, DraftOrderStatus.APPROVED)

        order_number = regular_order_number(draft.order_number)
        logger.info(
            "approving_draft_order",
            draft_order_id=draft_order_id,
            order_number=order_number
        )

        try:
            result = (
                self.db.table(self.orders_table)
                .insert({
                    "user_id": draft.user_id,
                    "order_number": order_number,
                    "total_amount": draft.total_amount,
                    "shipping_address": draft.shipping_address,
                    "billing_address": draft.billing_address,
                    "payment_method": draft.payment_method,
                    "payment_status": draft.payment_status,
                    "status": OrderStatus.PENDING.value,
                    "notes": draft.notes,
                })
                .execute()
            )
            order = result.data[0]
        except Exception as e:
            logger.error("create_order_from_draft_failed", draft_order_id=draft_order_id, error=str(e))
            raise DatabaseError("insert", "Failed to create order from draft")

        items_data = [
            {"order_id": order["id"], **item.model_dump(include=set(ITEM_COPY_FIELDS))}
            for item in draft.items
        ]

        try:
            items_result = self.db.table(self.order_items_table).insert(items_data).execute()
        except Exception as e:
            logger.error(
                "create_order_items_from_draft_failed",
                draft_order_id=draft_order_id,
                order_id=order["id"],
                error=str(e)
            )
            self.db.table(self.orders_table).delete().eq("id", order["id"]).execute()
            raise DatabaseError("insert", "Failed to create order items")

        try:
            (
                self.db.table(self.table)
                .update({
                    "status": DraftOrderStatus.APPROVED.value,
                    "approved_at": _now_iso(),
                    "approved_by": approved_by,
                })
                .eq("id", draft_order_id)
                .execute()
            )
        except Exception as e:
            # The order already exists; the draft keeps its old status.
            logger.error("mark_draft_approved_failed", draft_order_id=draft_order_id, error=str(e))

        logger.info(
            "draft_order_approved",
            draft_order_id=draft_order_id,
            order_id=order["id"],
            order_number=order_number
        )

        return DraftOrderApproval(
            order=OrderResponse(**order, items=items_result.data or items_data)
        )

    def reject(self, draft_order_id: str, rejection_reason: Optional[str] = None) -> DraftOrderResponse:
        """
        Reject a draft order.

        Raises:
            DraftOrderNotFoundError: If draft doesn't exist
            InvalidStatusTransitionError: If draft was already decided
        """
        draft = self.get_by_id(draft_order_id)
        self._require_draft(draft, DraftOrderStatus.REJECTED)

        reason = rejection_reason or settings.draft_order_default_rejection
        logger.info("rejecting_draft_order", draft_order_id=draft_order_id, reason=reason)

        try:
            result = (
                self.db.table(self.table)
                .update({
                    "status": DraftOrderStatus.REJECTED.value,
                    "rejection_reason": reason,
                    "updated_at": _now_iso(),
                })
                .eq("id", draft_order_id)
                .execute()
            )
        except Exception as e:
            logger.error("reject_draft_order_failed", draft_order_id=draft_order_id, error=str(e))
            raise DatabaseError("update", "Failed to reject draft order")

        logger.info("draft_order_rejected", draft_order_id=draft_order_id)

        if result.data:
            return DraftOrderResponse(**{**result.data[0], "items": draft.items})
        return draft.model_copy(update={
            "status": DraftOrderStatus.REJECTED,
            "rejection_reason": reason,
        })


# Singleton instance for convenience
_draft_order_service: Optional[DraftOrderService] = None

def get_draft_order_service() -> DraftOrderService:
    """Get or create DraftOrderService instance."""
    global _draft_order_service
    if _draft_order_service is None:
        _draft_order_service = DraftOrderService()
    return _draft_order_service
