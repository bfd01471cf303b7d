"""
Unit tests for DraftOrderService.

Run: pytest tests/unit/test_draft_order_service.py -v
"""

import pytest

from config import settings
from services.draft_order_service import DraftOrderService, regular_order_number
from models.order import DraftOrderCreate, DraftOrderStatus
from exceptions import (
    DraftOrderNotFoundError,
    InvalidStatusTransitionError,
    DatabaseError,
)

from tests.factories import DraftOrderFactory


def new_draft(**overrides) -> DraftOrderCreate:
    data = {
        "user_id": "user-1",
        "items": [
            {"product_id": "prod-1", "product_name": "Linen Shirt", "quantity": 2, "unit_price": 800},
            {"product_id": "prod-2", "product_name": "Denim Jacket", "quantity": 1, "unit_price": 450},
        ],
        "payment_method": "cod",
    }
    data.update(overrides)
    return DraftOrderCreate(**data)


class TestRegularOrderNumber:
    """Tests for regular_order_number()"""

    def test_prefix_swapped(self):
        assert regular_order_number("DRAFT-0042") == "ORD-0042"

    def test_only_first_prefix(self):
        assert regular_order_number("DRAFT-DRAFT-1") == "ORD-DRAFT-1"

    def test_other_number_kept(self):
        assert regular_order_number("X-1") == "X-1"


class TestDraftOrderServiceRead:
    """Tests for DraftOrderService.get_all() and get_by_id()"""

    def test_status_filter(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("customer_draft_orders", [
            DraftOrderFactory.create(id="d1"),
            DraftOrderFactory.create(id="d2", status="rejected"),
        ])

        drafts = DraftOrderService().get_all(status=DraftOrderStatus.DRAFT)

        assert [d.id for d in drafts] == ["d1"]
        assert drafts[0].items[0].product_name == "Linen Shirt"

    def test_missing(self, mock_db, mock_supabase):
        with pytest.raises(DraftOrderNotFoundError):
            DraftOrderService().get_by_id("missing")


class TestDraftOrderServiceCreate:
    """Tests for DraftOrderService.create()"""

    def test_creates_draft_and_items(self, mock_db, mock_supabase):
        # Arrange
        mock_supabase.set_rpc_result("generate_draft_order_number", "DRAFT-0007")

        # Act
        draft = DraftOrderService().create(new_draft())

        # Assert
        assert draft.order_number == "DRAFT-0007"
        assert draft.status == DraftOrderStatus.DRAFT
        assert draft.total_amount == 2050
        assert draft.notes == settings.draft_order_default_note
        assert len(draft.items) == 2

        stored = mock_supabase.rows("customer_draft_orders")[0]
        assert stored["payment_status"] == "pending"
        lines = mock_supabase.rows("customer_draft_order_items")
        assert {line["draft_order_id"] for line in lines} == {stored["id"]}
        assert [line["total_price"] for line in lines] == [1600, 450]

    def test_given_notes_kept(self, mock_db, mock_supabase):
        mock_supabase.set_rpc_result("generate_draft_order_number", "DRAFT-0008")

        draft = DraftOrderService().create(new_draft(notes="Call before delivery"))

        assert draft.notes == "Call before delivery"

    def test_number_unavailable(self, mock_db, mock_supabase):
        with pytest.raises(DatabaseError):
            DraftOrderService().create(new_draft())

        assert mock_supabase.rows("customer_draft_orders") == []

    def test_item_failure_removes_draft(self, mock_db, mock_supabase):
        mock_supabase.set_rpc_result("generate_draft_order_number", "DRAFT-0009")
        mock_supabase.fail_on("customer_draft_order_items", "insert")

        with pytest.raises(DatabaseError) as exc:
            DraftOrderService().create(new_draft())

        assert "items" in exc.value.message
        assert mock_supabase.rows("customer_draft_orders") == []

    def test_items_required(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            DraftOrderCreate(user_id="user-1", items=[])


class TestDraftOrderServiceApprove:
    """Tests for DraftOrderService.approve()"""

    def test_converts_to_pending_order(self, mock_db, mock_supabase):
        # Arrange
        mock_supabase.set_table_data("customer_draft_orders", [
            DraftOrderFactory.create(id="d1", order_number="DRAFT-0042")
        ])

        # Act
        approval = DraftOrderService().approve("d1", approved_by="admin-1")

        # Assert
        assert approval.success is True
        assert approval.order.order_number == "ORD-0042"
        assert approval.order.status == "pending"
        assert approval.order.total_amount == 1600
        assert len(approval.order.items) == 1

        lines = mock_supabase.rows("order_items")
        assert lines[0]["order_id"] == approval.order.id
        assert lines[0]["product_name"] == "Linen Shirt"
        assert "product_variant_id" not in lines[0]

        draft = mock_supabase.rows("customer_draft_orders")[0]
        assert draft["status"] == "approved"
        assert draft["approved_by"] == "admin-1"
        assert draft["approved_at"] is not None

    def test_item_failure_removes_order(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("customer_draft_orders", [DraftOrderFactory.create(id="d1")])
        mock_supabase.fail_on("order_items", "insert")

        with pytest.raises(DatabaseError):
            DraftOrderService().approve("d1")

        assert mock_supabase.rows("orders") == []
        assert mock_supabase.rows("customer_draft_orders")[0]["status"] == "draft"

    def test_draft_status_failure_keeps_order(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("customer_draft_orders", [DraftOrderFactory.create(id="d1")])
        mock_supabase.fail_on("customer_draft_orders", "update")

        approval = DraftOrderService().approve("d1")

        assert len(mock_supabase.rows("orders")) == 1
        assert approval.order.status == "pending"

    def test_already_decided(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("customer_draft_orders", [
            DraftOrderFactory.create(id="d1", status="rejected")
        ])

        with pytest.raises(InvalidStatusTransitionError):
            DraftOrderService().approve("d1")

        assert mock_supabase.calls_for("orders") == []


class TestDraftOrderServiceReject:
    """Tests for DraftOrderService.reject()"""

    def test_default_reason(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("customer_draft_orders", [DraftOrderFactory.create(id="d1")])

        draft = DraftOrderService().reject("d1")

        assert draft.status == DraftOrderStatus.REJECTED
        assert draft.rejection_reason == settings.draft_order_default_rejection
        assert len(draft.items) == 1

    def test_given_reason(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("customer_draft_orders", [DraftOrderFactory.create(id="d1")])

        draft = DraftOrderService().reject("d1", rejection_reason="Discontinued")

        assert draft.rejection_reason == "Discontinued"
        assert mock_supabase.rows("customer_draft_orders")[0]["rejection_reason"] == "Discontinued"

    def test_already_approved(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("customer_draft_orders", [
            DraftOrderFactory.create(id="d1", status="approved")
        ])

        with pytest.raises(InvalidStatusTransitionError) as exc:
            DraftOrderService().reject("d1")

        assert exc.value.details["current_status"] == "approved"
