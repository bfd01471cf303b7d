"""
Category service.

CRUD for categories plus the two drag-and-drop orderings the storefront
uses: category display order and product order within a feature shelf.
"""

from datetime import datetime, timezone
from typing import Optional
import structlog

from config import get_supabase_client, settings
from models.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    ReorderItem,
    ReorderResult,
)
from exceptions import (
    CategoryNotFoundError,
    ReorderPayloadError,
    DatabaseError,
)

logger = structlog.get_logger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def validate_reorder(items: list[ReorderItem]) -> list[str]:
    """
    Ids of a reorder request, in order.

    Raises:
        ReorderPayloadError: If empty, too long, or an id repeats
    """
    ids = [item.id for item in items]

    if not ids:
        raise ReorderPayloadError("Nothing to reorder")
    if len(ids) > settings.reorder_max_items:
        raise ReorderPayloadError(
            f"At most {settings.reorder_max_items} items can be reordered at once",
            details={"count": len(ids)}
        )
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ReorderPayloadError("Duplicate ids in reorder request", details={"ids": duplicates})

    return ids


class CategoryService:
    """
    Category business logic.

    Handles CRUD and display ordering.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "categories"
        self.products_table = "products"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self, active_only: bool = False) -> list[CategoryResponse]:
        """
        List categories.

        Active-only lists (the product form dropdown) are ordered by name;
        the management list follows display order, newest first on ties.
        """
        logger.info("getting_categories", active_only=active_only)

        try:
            query = self.db.table(self.table).select("*")
            if active_only:
                query = query.eq("is_active", True).order("name")
            else:
                query = query.order("display_order").order("created_at", desc=True)

            result = query.execute()
            categories = [CategoryResponse(**row) for row in result.data]

            logger.info("categories_retrieved", count=len(categories))
            return categories

        except Exception as e:
            logger.error("get_categories_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, category_id: str) -> CategoryResponse:
        """
        Get a category.

        Raises:
            CategoryNotFoundError: If category doesn't exist
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", category_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_category_failed", category_id=category_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise CategoryNotFoundError(category_id)
        return CategoryResponse(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: CategoryCreate) -> CategoryResponse:
        """Create a category."""
        logger.info("creating_category", name=data.name)

        try:
            result = (
                self.db.table(self.table)
                .insert({
                    "name": data.name,
                    "description": data.description,
                    "image_url": data.image_url,
                    "is_active": data.is_active,
                })
                .execute()
            )
            category = CategoryResponse(**result.data[0])

            logger.info("category_created", category_id=category.id)
            return category

        except Exception as e:
            logger.error("create_category_failed", name=data.name, error=str(e))
            raise DatabaseError("insert", str(e))

    def update(self, category_id: str, data: CategoryUpdate) -> CategoryResponse:
        """
        Update a category.

        Raises:
            CategoryNotFoundError: If category doesn't exist
        """
        update_data = data.model_dump(exclude_none=True)
        if not update_data:
            return self.get_by_id(category_id)

        update_data["updated_at"] = _now_iso()
        logger.info("updating_category", category_id=category_id, fields=list(update_data))

        try:
            result = (
                self.db.table(self.table)
                .update(update_data)
                .eq("id", category_id)
                .execute()
            )
        except Exception as e:
            logger.error("update_category_failed", category_id=category_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise CategoryNotFoundError(category_id)
        return CategoryResponse(**result.data[0])

    def toggle_active(self, category_id: str) -> CategoryResponse:
        """Flip a category's is_active flag."""
        category = self.get_by_id(category_id)
        return self.update(category_id, CategoryUpdate(is_active=not category.is_active))

    def delete(self, category_id: str) -> bool:
        """
        Delete a category.

        Raises:
            CategoryNotFoundError: If category doesn't exist
        """
        logger.info("deleting_category", category_id=category_id)

        try:
            result = self.db.table(self.table).delete().eq("id", category_id).execute()
        except Exception as e:
            logger.error("delete_category_failed", category_id=category_id, error=str(e))
            raise DatabaseError("delete", str(e))

        if not result.data:
            raise CategoryNotFoundError(category_id)

        logger.info("category_deleted", category_id=category_id)
        return True

    # ===================
    # ORDERING
    # ===================

    def reorder(self, items: list[ReorderItem]) -> ReorderResult:
        """
        Persist category display order (0-based list position).

        Rows are updated one by one; the first failure stops the run and
        earlier rows stay updated.

        Raises:
            ReorderPayloadError: If the request is invalid
            DatabaseError: On the first failed update
        """
        ids = validate_reorder(items)
        logger.info("reordering_categories", count=len(ids))

        for position, category_id in enumerate(ids):
            try:
                (
                    self.db.table(self.table)
                    .update({"display_order": position})
                    .eq("id", category_id)
                    .execute()
                )
            except Exception as e:
                logger.error(
                    "reorder_category_failed",
                    category_id=category_id,
                    position=position,
                    error=str(e)
                )
                raise DatabaseError(
                    "update",
                    "Failed to update category order",
                    details={"id": category_id, "updated": position}
                )

        logger.info("categories_reordered", count=len(ids))
        return ReorderResult(updated=len(ids))

    def reorder_featured(self, items: list[ReorderItem]) -> ReorderResult:
        """
        Persist product order within a feature shelf (0-based).

        Same failure behaviour as reorder().
        """
        ids = validate_reorder(items)
        logger.info("reordering_featured_products", count=len(ids))

        now = _now_iso()
        for position, product_id in enumerate(ids):
            try:
                (
                    self.db.table(self.products_table)
                    .update({"display_order_within_feature": position, "updated_at": now})
                    .eq("id", product_id)
                    .execute()
                )
            except Exception as e:
                logger.error(
                    "reorder_featured_product_failed",
                    product_id=product_id,
                    position=position,
                    error=str(e)
                )
                raise DatabaseError(
                    "update",
                    "Failed to update product order",
                    details={"id": product_id, "updated": position}
                )

        logger.info("featured_products_reordered", count=len(ids))
        return ReorderResult(updated=len(ids))


# Singleton instance for convenience
_category_service: Optional[CategoryService] = None

def get_category_service() -> CategoryService:
    """Get or create CategoryService instance."""
    global _category_service
    if _category_service is None:
        _category_service = CategoryService()
    return _category_service
