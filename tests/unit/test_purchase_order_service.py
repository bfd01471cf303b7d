"""
Unit tests for PurchaseOrderService.

Run: pytest tests/unit/test_purchase_order_service.py -v
"""

import pytest

from services.purchase_order_service import PurchaseOrderService
from models.purchase_order import PurchaseOrderCreate
from exceptions import PurchaseOrderNotFoundError, DatabaseError
from tests.factories import PurchaseOrderFactory


class TestPurchaseOrderServiceGetAll:
    """Tests for PurchaseOrderService.get_all()"""

    def test_newest_first_with_vendor_and_product(self, mock_db, mock_supabase):
        # Arrange
        mock_supabase.set_table_data("purchase_orders", [
            PurchaseOrderFactory.create(id="po-old", days_ago=10),
            PurchaseOrderFactory.create(id="po-new", days_ago=1),
        ])

        # Act
        orders = PurchaseOrderService().get_all()

        # Assert
        assert [o.id for o in orders] == ["po-new", "po-old"]
        assert orders[0].vendor.name == "Asha Textiles"
        assert orders[0].product.name == "Linen Shirt"

    def test_select_failure_is_database_error(self, mock_db, mock_supabase):
        mock_supabase.fail_on("purchase_orders", "select")

        with pytest.raises(DatabaseError):
            PurchaseOrderService().get_all()


class TestPurchaseOrderServiceCreate:
    """Tests for PurchaseOrderService.create()"""

    def test_pending_with_computed_total(self, mock_db, mock_supabase):
        # Arrange
        data = PurchaseOrderCreate(
            vendor_id="vendor-user-1", product_id="prod-1", quantity=12, unit_price=249.5
        )

        # Act
        order = PurchaseOrderService().create(data)

        # Assert
        assert order.status == "pending"
        assert order.total_price == 2994
        row = mock_supabase.rows("purchase_orders")[0]
        assert row["total_price"] == 2994
        assert row["status"] == "pending"

    def test_submitted_total_is_ignored(self, mock_db, mock_supabase):
        data = PurchaseOrderCreate(
            vendor_id="vendor-user-1",
            product_id="prod-1",
            quantity=2,
            unit_price=100,
            total_price=1,
        )

        order = PurchaseOrderService().create(data)

        assert order.total_price == 200

    @pytest.mark.parametrize("quantity,unit_price", [(0, 100), (3, 0), (3, -5)])
    def test_invalid_amounts_rejected(self, quantity, unit_price):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            PurchaseOrderCreate(
                vendor_id="vendor-user-1",
                product_id="prod-1",
                quantity=quantity,
                unit_price=unit_price,
            )

    def test_insert_failure_is_database_error(self, mock_db, mock_supabase):
        mock_supabase.fail_on("purchase_orders", "insert")
        data = PurchaseOrderCreate(
            vendor_id="vendor-user-1", product_id="prod-1", quantity=1, unit_price=10
        )

        with pytest.raises(DatabaseError):
            PurchaseOrderService().create(data)

        assert mock_supabase.rows("purchase_orders") == []


class TestPurchaseOrderServiceDelete:
    """Tests for PurchaseOrderService.delete()"""

    def test_delete(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("purchase_orders", [PurchaseOrderFactory.create(id="po-1")])

        assert PurchaseOrderService().delete("po-1") is True
        assert mock_supabase.rows("purchase_orders") == []

    def test_delete_missing(self, mock_db, mock_supabase):
        with pytest.raises(PurchaseOrderNotFoundError):
            PurchaseOrderService().delete("missing")
