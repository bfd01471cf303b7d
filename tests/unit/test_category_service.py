"""
Unit tests for CategoryService.

Run: pytest tests/unit/test_category_service.py -v
"""

import pytest

from services.category_service import CategoryService, validate_reorder
from models.category import CategoryCreate, CategoryUpdate, ReorderItem
from exceptions import CategoryNotFoundError, ReorderPayloadError, DatabaseError

from tests.factories import ProductFactory


def category_row(id, name, display_order=None, is_active=True, created_at="2025-06-01T00:00:00+00:00"):
    return {
        "id": id,
        "name": name,
        "description": "",
        "image_url": None,
        "is_active": is_active,
        "display_order": display_order,
        "created_at": created_at,
        "updated_at": None,
    }


def items(*ids):
    return [ReorderItem(id=i) for i in ids]


class TestCategoryServiceGetAll:
    """Tests for CategoryService.get_all()"""

    def test_active_only_sorted_by_name(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("categories", [
            category_row("c1", "Shirts"),
            category_row("c2", "Dresses"),
            category_row("c3", "Archive", is_active=False),
        ])

        categories = CategoryService().get_all(active_only=True)

        assert [c.name for c in categories] == ["Dresses", "Shirts"]

    def test_all_sorted_by_display_order(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("categories", [
            category_row("c1", "Shirts", display_order=2),
            category_row("c2", "Dresses", display_order=0),
            category_row("c3", "Archive", display_order=1, is_active=False),
        ])

        categories = CategoryService().get_all()

        assert [c.id for c in categories] == ["c2", "c3", "c1"]


class TestCategoryServiceWrite:
    """Tests for create/update/toggle/delete"""

    def test_create(self, mock_db, mock_supabase):
        category = CategoryService().create(CategoryCreate(name="  Kurtas  "))

        assert category.name == "Kurtas"
        assert mock_supabase.rows("categories")[0]["is_active"] is True

    def test_update_sets_updated_at(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("categories", [category_row("c1", "Shirts")])

        category = CategoryService().update("c1", CategoryUpdate(name="Tops"))

        assert category.name == "Tops"
        payload = mock_supabase.calls_for("categories", "update")[0]["payload"]
        assert set(payload) == {"name", "updated_at"}

    def test_update_missing(self, mock_db, mock_supabase):
        with pytest.raises(CategoryNotFoundError):
            CategoryService().update("missing", CategoryUpdate(name="Tops"))

    def test_toggle_active(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("categories", [category_row("c1", "Shirts", is_active=True)])
        service = CategoryService()

        assert service.toggle_active("c1").is_active is False
        assert service.toggle_active("c1").is_active is True

    def test_delete(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("categories", [category_row("c1", "Shirts")])

        assert CategoryService().delete("c1") is True
        assert mock_supabase.rows("categories") == []

    def test_delete_missing(self, mock_db, mock_supabase):
        with pytest.raises(CategoryNotFoundError):
            CategoryService().delete("missing")


class TestValidateReorder:
    """Tests for validate_reorder()"""

    def test_returns_ids_in_order(self):
        assert validate_reorder(items("b", "a", "c")) == ["b", "a", "c"]

    def test_empty_rejected(self):
        with pytest.raises(ReorderPayloadError):
            validate_reorder([])

    def test_duplicates_rejected(self):
        with pytest.raises(ReorderPayloadError) as exc:
            validate_reorder(items("a", "b", "a"))

        assert exc.value.details == {"ids": ["a"]}

    def test_too_many_rejected(self):
        from config import settings

        with pytest.raises(ReorderPayloadError):
            validate_reorder(items(*[f"id-{i}" for i in range(settings.reorder_max_items + 1)]))


class TestCategoryServiceReorder:
    """Tests for CategoryService.reorder() and reorder_featured()"""

    def test_positions_become_display_order(self, mock_db, mock_supabase):
        # Arrange
        mock_supabase.set_table_data("categories", [
            category_row("c1", "Shirts", display_order=0),
            category_row("c2", "Dresses", display_order=1),
            category_row("c3", "Kurtas", display_order=2),
        ])

        # Act
        result = CategoryService().reorder(items("c3", "c1", "c2"))

        # Assert
        assert result.success is True
        assert result.updated == 3
        orders = {row["id"]: row["display_order"] for row in mock_supabase.rows("categories")}
        assert orders == {"c3": 0, "c1": 1, "c2": 2}

    def test_first_failure_stops_and_keeps_earlier_updates(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("categories", [
            category_row("c1", "Shirts", display_order=5),
            category_row("c2", "Dresses", display_order=5),
            category_row("c3", "Kurtas", display_order=5),
        ])
        mock_supabase.fail_on(
            "categories",
            "update",
            when=lambda payload, filters: ("eq", "id", "c2") in filters
        )

        with pytest.raises(DatabaseError) as exc:
            CategoryService().reorder(items("c1", "c2", "c3"))

        assert exc.value.details["id"] == "c2"
        orders = {row["id"]: row["display_order"] for row in mock_supabase.rows("categories")}
        assert orders == {"c1": 0, "c2": 5, "c3": 5}
        assert len(mock_supabase.calls_for("categories", "update")) == 2

    def test_featured_positions(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("products", [
            ProductFactory.create(id="p1", featured_type="trending"),
            ProductFactory.create(id="p2", featured_type="trending"),
        ])

        result = CategoryService().reorder_featured(items("p2", "p1"))

        assert result.updated == 2
        rows = {row["id"]: row for row in mock_supabase.rows("products")}
        assert rows["p2"]["display_order_within_feature"] == 0
        assert rows["p1"]["display_order_within_feature"] == 1
        assert rows["p1"]["updated_at"] == rows["p2"]["updated_at"]

    def test_invalid_payload_makes_no_writes(self, mock_db, mock_supabase):
        with pytest.raises(ReorderPayloadError):
            CategoryService().reorder_featured(items("p1", "p1"))

        assert mock_supabase.calls == []
