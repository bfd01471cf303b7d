"""
Purchase order service.

Purchase orders restock a product from a vendor user. Rows are read with
the vendor and product embedded.
"""

from typing import Optional
import structlog

from config import get_admin_client
from models.purchase_order import (
    PurchaseOrderCreate,
    PurchaseOrderResponse,
    PurchaseOrderStatus,
)
from exceptions import PurchaseOrderNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)

# vendor_id references users, not vendors
EMBED_SELECT = (
    "*, vendor:users(id, name, email, phone, location), "
    "product:products(id, name, description)"
)


class PurchaseOrderService:
    """
    Purchase order business logic.

    Handles listing, creation and deletion.
    """

    def __init__(self):
        self.db = get_admin_client()
        self.table = "purchase_orders"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self) -> list[PurchaseOrderResponse]:
        """Purchase orders with vendor and product, newest first."""
        logger.info("getting_purchase_orders")

        try:
            result = (
                self.db.table(self.table)
                .select(EMBED_SELECT)
                .order("created_at", desc=True)
                .execute()
            )
            orders = [PurchaseOrderResponse(**row) for row in result.data]

            logger.info("purchase_orders_retrieved", count=len(orders))
            return orders

        except Exception as e:
            logger.error("get_purchase_orders_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, purchase_order_id: str) -> PurchaseOrderResponse:
        """
        Get a single purchase order with vendor and product.

        Raises:
            PurchaseOrderNotFoundError: If purchase order doesn't exist
        """
        try:
            result = (
                self.db.table(self.table)
                .select(EMBED_SELECT)
                .eq("id", purchase_order_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_purchase_order_failed",
                purchase_order_id=purchase_order_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        if not result.data:
            raise PurchaseOrderNotFoundError(purchase_order_id)
        return PurchaseOrderResponse(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: PurchaseOrderCreate) -> PurchaseOrderResponse:
        """
        Create a pending purchase order.

        total_price is quantity * unit_price.

        Returns:
            Created purchase order with vendor and product
        """
        logger.info(
            "creating_purchase_order",
            vendor_id=data.vendor_id,
            product_id=data.product_id,
            quantity=data.quantity
        )

        row = {
            "vendor_id": data.vendor_id,
            "product_id": data.product_id,
            "quantity": data.quantity,
            "unit_price": data.unit_price,
            "total_price": data.total_price,
            "status": PurchaseOrderStatus.PENDING.value,
        }

        try:
            result = self.db.table(self.table).insert(row).execute()
        except Exception as e:
            logger.error("create_purchase_order_failed", vendor_id=data.vendor_id, error=str(e))
            raise DatabaseError("insert", str(e))

        purchase_order_id = result.data[0]["id"]
        logger.info(
            "purchase_order_created",
            purchase_order_id=purchase_order_id,
            total_price=data.total_price
        )
        return self.get_by_id(purchase_order_id)

    def delete(self, purchase_order_id: str) -> bool:
        """
        Delete a purchase order.

        Raises:
            PurchaseOrderNotFoundError: If purchase order doesn't exist
        """
        logger.info("deleting_purchase_order", purchase_order_id=purchase_order_id)

        try:
            result = (
                self.db.table(self.table)
                .delete()
                .eq("id", purchase_order_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "delete_purchase_order_failed",
                purchase_order_id=purchase_order_id,
                error=str(e)
            )
            raise DatabaseError("delete", str(e))

        if not result.data:
            raise PurchaseOrderNotFoundError(purchase_order_id)
        return True


# Singleton instance for convenience
_purchase_order_service: Optional[PurchaseOrderService] = None

def get_purchase_order_service() -> PurchaseOrderService:
    """Get or create PurchaseOrderService instance."""
    global _purchase_order_service
    if _purchase_order_service is None:
        _purchase_order_service = PurchaseOrderService()
    return _purchase_order_service
