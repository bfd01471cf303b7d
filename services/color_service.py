"""
Color and size reference data.

Colors are managed from the admin; sizes are read-only here.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.color import ColorCreate, ColorUpdate, ColorResponse, SizeResponse
from exceptions import ColorNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)


class ColorService:
    """Color CRUD and size lookup."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "colors"
        self.sizes_table = "sizes"

    def get_all(self) -> list[ColorResponse]:
        """All colors, newest first."""
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            return [ColorResponse(**row) for row in result.data]

        except Exception as e:
            logger.error("get_colors_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_sizes(self, category_id: Optional[str] = None) -> list[SizeResponse]:
        """Sizes, optionally only those of one category."""
        try:
            query = self.db.table(self.sizes_table).select("id, name, category_id")
            if category_id:
                query = query.eq("category_id", category_id)
            result = query.execute()
            return [SizeResponse(**row) for row in result.data]

        except Exception as e:
            logger.error("get_sizes_failed", category_id=category_id, error=str(e))
            raise DatabaseError("select", str(e))

    def create(self, data: ColorCreate) -> ColorResponse:
        """Create a color."""
        logger.info("creating_color", name=data.name, hex_code=data.hex_code)

        try:
            result = (
                self.db.table(self.table)
                .insert({"name": data.name, "hex_code": data.hex_code})
                .execute()
            )
            color = ColorResponse(**result.data[0])
            logger.info("color_created", color_id=color.id)
            return color

        except Exception as e:
            logger.error("create_color_failed", name=data.name, error=str(e))
            raise DatabaseError("insert", str(e))

    def update(self, color_id: str, data: ColorUpdate) -> ColorResponse:
        """
        Update a color.

        Raises:
            ColorNotFoundError: If color doesn't exist
        """
        update_data = data.model_dump(exclude_none=True)
        logger.info("updating_color", color_id=color_id, fields=list(update_data))

        try:
            if update_data:
                query = self.db.table(self.table).update(update_data)
            else:
                query = self.db.table(self.table).select("*")
            result = query.eq("id", color_id).execute()
        except Exception as e:
            logger.error("update_color_failed", color_id=color_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise ColorNotFoundError(color_id)
        return ColorResponse(**result.data[0])

    def delete(self, color_id: str) -> bool:
        """
        Delete a color.

        Raises:
            ColorNotFoundError: If color doesn't exist
        """
        logger.info("deleting_color", color_id=color_id)

        try:
            result = self.db.table(self.table).delete().eq("id", color_id).execute()
        except Exception as e:
            logger.error("delete_color_failed", color_id=color_id, error=str(e))
            raise DatabaseError("delete", str(e))

        if not result.data:
            raise ColorNotFoundError(color_id)
        return True


# Singleton instance for convenience
_color_service: Optional[ColorService] = None

def get_color_service() -> ColorService:
    """Get or create ColorService instance."""
    global _color_service
    if _color_service is None:
        _color_service = ColorService()
    return _color_service
