"""
Vendor administration.

Vendor business profiles: listing, verification and profile edits,
deletion. Vendor sign-up goes through the auth provider.
"""

from typing import Optional
import structlog

from config import get_admin_client
from models.vendor import VendorUpdate, VendorResponse
from exceptions import VendorNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)


class VendorService:
    """Vendor profile listing, updates and deletion."""

    def __init__(self):
        self.db = get_admin_client()
        self.table = "vendors"

    def get_all(
        self,
        is_verified: Optional[bool] = None,
        search: Optional[str] = None
    ) -> list[VendorResponse]:
        """
        Vendors newest first.

        Args:
            is_verified: Only verified (True) or unverified (False) vendors
            search: Case-insensitive text matched on business name and location
        """
        logger.info("getting_vendors", is_verified=is_verified, search=search)

        try:
            query = self.db.table(self.table).select(
                "id, user_id, business_name, location, is_verified, profile_image_url, created_at"
            )
            if is_verified is not None:
                query = query.eq("is_verified", is_verified)
            result = query.order("created_at", desc=True).execute()
        except Exception as e:
            logger.error("get_vendors_failed", error=str(e))
            raise DatabaseError("select", str(e))

        vendors = [VendorResponse(**row) for row in result.data]
        if search:
            term = search.lower()
            vendors = [
                v for v in vendors
                if term in v.business_name.lower() or term in (v.location or "").lower()
            ]
        return vendors

    def update(self, vendor_id: str, data: VendorUpdate) -> VendorResponse:
        """
        Update a vendor profile.

        Raises:
            VendorNotFoundError: If vendor doesn't exist
        """
        update_data = data.model_dump(exclude_none=True)
        logger.info("updating_vendor", vendor_id=vendor_id, fields=list(update_data))

        try:
            if update_data:
                query = self.db.table(self.table).update(update_data)
            else:
                query = self.db.table(self.table).select("*")
            result = query.eq("id", vendor_id).execute()
        except Exception as e:
            logger.error("update_vendor_failed", vendor_id=vendor_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise VendorNotFoundError(vendor_id)
        return VendorResponse(**result.data[0])

    def delete(self, vendor_id: str) -> bool:
        """
        Delete a vendor profile.

        Raises:
            VendorNotFoundError: If vendor doesn't exist
        """
        logger.info("deleting_vendor", vendor_id=vendor_id)

        try:
            result = self.db.table(self.table).delete().eq("id", vendor_id).execute()
        except Exception as e:
            logger.error("delete_vendor_failed", vendor_id=vendor_id, error=str(e))
            raise DatabaseError("delete", str(e))

        if not result.data:
            raise VendorNotFoundError(vendor_id)
        return True


# Singleton instance for convenience
_vendor_service: Optional[VendorService] = None

def get_vendor_service() -> VendorService:
    """Get or create VendorService instance."""
    global _vendor_service
    if _vendor_service is None:
        _vendor_service = VendorService()
    return _vendor_service
