"""
Product service for the product editor.

Loads a product with its variant matrix, and saves the editor state back:
product row, variant rows keyed by (color_id, size_id), and reviews.
"""

from datetime import datetime, timezone
from typing import Optional
import structlog

from config import get_supabase_client
from models.product import (
    ProductForm,
    ProductSave,
    ProductEditorState,
    ProductSaveResult,
    ProductSummary,
    ReviewInput,
    ReviewResponse,
    VariantSyncSummary,
    FailedVariantWrite,
)
from models.variant import VariantRecord, VariantKey
from services import variant_matrix
from exceptions import (
    ProductNotFoundError,
    ProductValidationError,
    DatabaseError,
)

logger = structlog.get_logger(__name__)

VARIANT_COLUMNS = (
    "id, product_id, color_id, size_id, quantity, created_at, updated_at, "
    "price, sku, mrp_price, rsp_price, cost_price, discount_percentage, "
    "image_urls, video_urls"
)
REVIEW_COLUMNS = "id, reviewer_name, rating, comment, date, is_verified, profile_image_url"
PRODUCT_COLUMNS = (
    "id, created_at, updated_at, name, description, category_id, is_active, "
    "featured_type, like_count, return_policy, vendor_name, alias_vendor"
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def row_key(row: dict) -> VariantKey:
    """Matrix key of a product_variants row."""
    return variant_matrix.variant_key(row.get("color_id"), row["size_id"])


def variant_row(variant: VariantRecord, product_id: str, now: str) -> dict:
    """
    Build the product_variants payload for a record.

    Amounts are already rounded by the model.
    """
    return {
        "product_id": product_id,
        "color_id": variant.color_id,
        "size_id": variant.size_id,
        "quantity": variant.quantity,
        "price": variant.price,
        "sku": variant.sku,
        "mrp_price": variant.mrp_price,
        "rsp_price": variant.rsp_price,
        "cost_price": variant.cost_price,
        "discount_percentage": variant.discount_percentage,
        "image_urls": list(variant.image_urls),
        "video_urls": list(variant.video_urls),
        "updated_at": now,
    }


class ProductService:
    """
    Product editor business logic.

    Handles editor load/save and the per-category product list.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "products"
        self.variants_table = "product_variants"
        self.reviews_table = "product_reviews"

    # ===================
    # READ OPERATIONS
    # ===================

    def list_by_category(self, category_id: str) -> list[ProductSummary]:
        """
        Products of a category, newest first.

        Args:
            category_id: Category UUID

        Returns:
            List of ProductSummary
        """
        logger.info("getting_category_products", category_id=category_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("category_id", category_id)
                .order("created_at", desc=True)
                .execute()
            )

            products = [ProductSummary(**row) for row in result.data]

            logger.info(
                "category_products_retrieved",
                category_id=category_id,
                count=len(products)
            )

            return products

        except Exception as e:
            logger.error(
                "get_category_products_failed",
                category_id=category_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    def get_editor_state(self, product_id: str) -> ProductEditorState:
        """
        Load a product into editor state.

        The selected axes are derived from the stored variants: every
        non-null color id and every size id in use.

        Args:
            product_id: Product UUID

        Returns:
            ProductEditorState

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        logger.debug("getting_product_editor_state", product_id=product_id)

        try:
            result = (
                self.db.table(self.table)
                .select(
                    f"{PRODUCT_COLUMNS}, "
                    f"variants:product_variants({VARIANT_COLUMNS}), "
                    f"reviews:product_reviews({REVIEW_COLUMNS})"
                )
                .eq("id", product_id)
                .single()
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_product_failed",
                product_id=product_id,
                error=str(e)
            )
            if "0 rows" in str(e) or "no rows" in str(e).lower():
                raise ProductNotFoundError(product_id)
            raise DatabaseError("select", str(e))

        row = result.data
        if not row:
            raise ProductNotFoundError(product_id)

        variants = [VariantRecord(**v) for v in row.get("variants") or []]
        colors, sizes = variant_matrix.derive_axes(variants)
        reviews = [ReviewResponse(**r) for r in row.get("reviews") or []]

        logger.info(
            "product_editor_state_loaded",
            product_id=product_id,
            variants=len(variants),
            colors=len(colors),
            sizes=len(sizes),
            reviews=len(reviews)
        )

        return ProductEditorState(
            id=row["id"],
            product=ProductForm(**row),
            variants=variants,
            selected_colors=colors,
            selected_sizes=sizes,
            reviews=reviews,
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    # ===================
    # WRITE OPERATIONS
    # ===================

    @staticmethod
    def validate(data: ProductSave) -> None:
        """
        Check the form before any backend call.

        Raises:
            ProductValidationError: On the first missing requirement
        """
        if not data.product.name.strip() or not data.product.category_id:
            raise ProductValidationError("Please fill all required fields", field="name")
        if not data.selected_sizes:
            raise ProductValidationError("Select at least one size", field="selected_sizes")
        if not data.variants:
            raise ProductValidationError("Please configure at least one variant", field="variants")

    def save(self, data: ProductSave, product_id: Optional[str] = None) -> ProductSaveResult:
        """
        Create or update a product with its variants and reviews.

        The product row is written first; a failure there aborts the save.
        Variant rows are then written one at a time and failures are
        collected rather than raised (see sync_variant_rows).

        Args:
            data: Editor state to save
            product_id: Existing product UUID, None to create

        Returns:
            ProductSaveResult

        Raises:
            ProductValidationError: If the form is incomplete
            ProductNotFoundError: If product_id does not exist
            DatabaseError: If the product row or variant lookup fails
        """
        self.validate(data)

        created = product_id is None
        logger.info(
            "saving_product",
            product_id=product_id,
            created=created,
            variants=len(data.variants)
        )

        saved_id = self._write_product(data.product, product_id)
        summary = self.sync_variant_rows(saved_id, data.variants, existing=not created)

        warnings = []
        reviews_saved = 0
        if data.reviews is not None:
            try:
                reviews_saved = self.replace_reviews(saved_id, data.reviews)
            except DatabaseError as e:
                warnings.append(e.message)

        if summary.failed:
            warnings.append(f"{len(summary.failed)} variant(s) could not be saved")

        logger.info(
            "product_saved",
            product_id=saved_id,
            created=created,
            updated=summary.updated,
            inserted=summary.inserted,
            deleted=summary.deleted,
            failed=len(summary.failed)
        )

        return ProductSaveResult(
            product_id=saved_id,
            created=created,
            variants=summary,
            reviews_saved=reviews_saved,
            warnings=warnings
        )

    def _write_product(self, form: ProductForm, product_id: Optional[str]) -> str:
        """Insert or update the product row and return its id."""
        product_data = {
            "name": form.name.strip(),
            "description": form.description.strip(),
            "category_id": form.category_id,
            "return_policy": form.return_policy,
            "vendor_name": form.vendor_name,
            "alias_vendor": form.alias_vendor,
            "is_active": form.is_active,
            "featured_type": form.featured_type.value if form.featured_type else None,
            "updated_at": _now_iso(),
        }

        if product_id:
            try:
                result = (
                    self.db.table(self.table)
                    .update(product_data)
                    .eq("id", product_id)
                    .execute()
                )
            except Exception as e:
                logger.error("update_product_failed", product_id=product_id, error=str(e))
                raise DatabaseError("update", str(e))

            if not result.data:
                raise ProductNotFoundError(product_id)
            return product_id

        try:
            product_data["like_count"] = 0
            result = (
                self.db.table(self.table)
                .insert(product_data)
                .execute()
            )
            return result.data[0]["id"]

        except Exception as e:
            logger.error("create_product_failed", name=form.name, error=str(e))
            raise DatabaseError("insert", str(e))

    def sync_variant_rows(
        self,
        product_id: str,
        variants: list[VariantRecord],
        existing: bool = True
    ) -> VariantSyncSummary:
        """
        Write the variant matrix to product_variants.

        Stored rows are matched by (color_id, size_id): matched rows are
        updated, new keys inserted, and rows whose key is gone deleted in
        one batch. Each write is attempted independently; a failed row is
        logged and reported but does not stop the others or undo earlier
        writes.

        Args:
            product_id: Product UUID
            variants: Variant matrix to persist
            existing: False for a just-created product (skips the lookup)

        Returns:
            VariantSyncSummary

        Raises:
            DatabaseError: If the stored variants cannot be read
        """
        summary = VariantSyncSummary()
        stored: dict[VariantKey, str] = {}

        if existing:
            try:
                result = (
                    self.db.table(self.variants_table)
                    .select("id, color_id, size_id")
                    .eq("product_id", product_id)
                    .execute()
                )
            except Exception as e:
                logger.error("get_stored_variants_failed", product_id=product_id, error=str(e))
                raise DatabaseError("select", str(e))

            stored_rows = result.data or []
            stored = {row_key(row): row["id"] for row in stored_rows}
        else:
            stored_rows = []

        now = _now_iso()
        current_keys = set()

        for variant in variants:
            current_keys.add(variant.key)
            payload = variant_row(variant, product_id, now)
            variant_id = stored.get(variant.key)

            try:
                if variant_id:
                    (
                        self.db.table(self.variants_table)
                        .update(payload)
                        .eq("id", variant_id)
                        .execute()
                    )
                    summary.updated += 1
                else:
                    payload["created_at"] = now
                    self.db.table(self.variants_table).insert(payload).execute()
                    summary.inserted += 1

            except Exception as e:
                operation = "update" if variant_id else "insert"
                logger.error(
                    "variant_write_failed",
                    product_id=product_id,
                    color_id=variant.color_id,
                    size_id=variant.size_id,
                    operation=operation,
                    error=str(e)
                )
                summary.failed.append(FailedVariantWrite(
                    color_id=variant.color_id,
                    size_id=variant.size_id,
                    operation=operation,
                    error=str(e)
                ))

        removed = [row for row in stored_rows if row_key(row) not in current_keys]
        if removed:
            try:
                (
                    self.db.table(self.variants_table)
                    .delete()
                    .in_("id", [row["id"] for row in removed])
                    .execute()
                )
                summary.deleted = len(removed)

            except Exception as e:
                logger.error(
                    "variant_delete_failed",
                    product_id=product_id,
                    count=len(removed),
                    error=str(e)
                )
                for row in removed:
                    summary.failed.append(FailedVariantWrite(
                        color_id=row.get("color_id"),
                        size_id=row["size_id"],
                        operation="delete",
                        error=str(e)
                    ))

        logger.info(
            "variant_rows_synced",
            product_id=product_id,
            updated=summary.updated,
            inserted=summary.inserted,
            deleted=summary.deleted,
            failed=len(summary.failed)
        )

        return summary

    def replace_reviews(self, product_id: str, reviews: list[ReviewInput]) -> int:
        """
        Replace a product's reviews.

        Returns:
            Number of reviews written

        Raises:
            DatabaseError: If delete or insert fails
        """
        try:
            self.db.table(self.reviews_table).delete().eq("product_id", product_id).execute()

            rows = [
                {
                    "product_id": product_id,
                    "reviewer_name": review.reviewer_name,
                    "rating": review.rating,
                    "comment": review.comment,
                    "date": review.date.isoformat(),
                    "is_verified": review.is_verified,
                    "profile_image_url": review.profile_image_url,
                }
                for review in reviews
            ]
            if rows:
                self.db.table(self.reviews_table).insert(rows).execute()

            logger.info("reviews_replaced", product_id=product_id, count=len(rows))
            return len(rows)

        except Exception as e:
            logger.error("replace_reviews_failed", product_id=product_id, error=str(e))
            raise DatabaseError("insert", str(e), details={"table": self.reviews_table})

    def set_active(self, product_id: str, is_active: bool) -> ProductSummary:
        """
        Show or hide a product on the storefront.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        logger.info("setting_product_active", product_id=product_id, is_active=is_active)

        try:
            result = (
                self.db.table(self.table)
                .update({"is_active": is_active, "updated_at": _now_iso()})
                .eq("id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error("set_product_active_failed", product_id=product_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise ProductNotFoundError(product_id)
        return ProductSummary(**result.data[0])

    def delete(self, product_id: str) -> bool:
        """
        Delete a product, then its variants.

        Variant rows are only touched once the product row is gone, so a
        failed or missing product keeps its matrix. Leftover variant rows
        after that point are logged, not raised.

        Returns:
            True if deleted

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        logger.info("deleting_product", product_id=product_id)

        try:
            result = self.db.table(self.table).delete().eq("id", product_id).execute()
        except Exception as e:
            logger.error("delete_product_failed", product_id=product_id, error=str(e))
            raise DatabaseError("delete", str(e))

        if not result.data:
            raise ProductNotFoundError(product_id)

        try:
            self.db.table(self.variants_table).delete().eq("product_id", product_id).execute()
        except Exception as e:
            logger.warning("delete_product_variants_failed", product_id=product_id, error=str(e))

        logger.info("product_deleted", product_id=product_id)
        return True


# Singleton instance for convenience
_product_service: Optional[ProductService] = None

def get_product_service() -> ProductService:
    """Get or create ProductService instance."""
    global _product_service
    if _product_service is None:
        _product_service = ProductService()
    return _product_service
