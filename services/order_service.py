"""
Order service for the admin orders page.

Lists customer orders with their lines and lets an admin approve, reject
or delete them.
"""

from typing import Optional
import structlog

from config import get_admin_client
from models.order import OrderResponse, OrderStatus
from exceptions import OrderNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)


class OrderService:
    """
    Order business logic.

    Handles listing, status changes and deletion.
    """

    def __init__(self):
        self.db = get_admin_client()
        self.table = "orders"
        self.items_table = "order_items"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self, status: Optional[OrderStatus] = None) -> list[OrderResponse]:
        """
        Orders with their items, newest first.

        Args:
            status: Only orders with this status

        Returns:
            List of OrderResponse
        """
        logger.info("getting_orders", status=status.value if status else None)

        try:
            query = self.db.table(self.table).select("*, items:order_items(*)")
            if status:
                query = query.eq("status", status.value)
            result = query.order("created_at", desc=True).execute()

            orders = [OrderResponse(**row) for row in result.data]

            logger.info("orders_retrieved", count=len(orders))
            return orders

        except Exception as e:
            logger.error("get_orders_failed", error=str(e))
            raise DatabaseError("select", str(e))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def set_status(self, order_id: str, status: OrderStatus) -> OrderResponse:
        """
        Set an order's status.

        Raises:
            OrderNotFoundError: If order doesn't exist
        """
        logger.info("updating_order_status", order_id=order_id, new_status=status.value)

        try:
            result = (
                self.db.table(self.table)
                .update({"status": status.value})
                .eq("id", order_id)
                .execute()
            )
        except Exception as e:
            logger.error("update_order_status_failed", order_id=order_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise OrderNotFoundError(order_id)

        logger.info("order_status_updated", order_id=order_id, status=status.value)
        return OrderResponse(**result.data[0])

    def approve(self, order_id: str) -> OrderResponse:
        return self.set_status(order_id, OrderStatus.APPROVED)

    def reject(self, order_id: str) -> OrderResponse:
        return self.set_status(order_id, OrderStatus.REJECTED)

    def delete(self, order_id: str) -> bool:
        """
        Delete an order, its items first.

        Raises:
            OrderNotFoundError: If order doesn't exist
        """
        logger.info("deleting_order", order_id=order_id)

        try:
            self.db.table(self.items_table).delete().eq("order_id", order_id).execute()
            result = self.db.table(self.table).delete().eq("id", order_id).execute()
        except Exception as e:
            logger.error("delete_order_failed", order_id=order_id, error=str(e))
            raise DatabaseError("delete", str(e))

        if not result.data:
            raise OrderNotFoundError(order_id)

        logger.info("order_deleted", order_id=order_id)
        return True


# Singleton instance for convenience
_order_service: Optional[OrderService] = None

def get_order_service() -> OrderService:
    """Get or create OrderService instance."""
    global _order_service
    if _order_service is None:
        _order_service = OrderService()
    return _order_service
