"""
User administration.

Lists storefront users and edits or deletes their profile rows. New
accounts go through the auth provider and are not created here.
"""

from typing import Optional
import structlog

from config import get_admin_client
from models.user import UserRole, UserUpdate, UserResponse
from exceptions import UserNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)


def matches_search(user: UserResponse, term: str) -> bool:
    """Case-insensitive match on name, email, location and phone."""
    term = term.lower()
    fields = (user.name, user.email, user.location, user.phone)
    return any(term in value.lower() for value in fields if value)


class UserService:
    """User profile listing, updates and deletion."""

    def __init__(self):
        self.db = get_admin_client()
        self.table = "users"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(
        self,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None
    ) -> list[UserResponse]:
        """
        Users newest first.

        Args:
            role: Only users with this role
            is_active: Only active (True) or inactive (False) users
            search: Case-insensitive text to look for

        Returns:
            List of UserResponse
        """
        logger.info(
            "getting_users",
            role=role.value if role else None,
            is_active=is_active,
            search=search
        )

        try:
            query = self.db.table(self.table).select("*")
            if role:
                query = query.eq("role", role.value)
            if is_active is not None:
                query = query.eq("is_active", is_active)
            result = query.order("created_at", desc=True).execute()
        except Exception as e:
            logger.error("get_users_failed", error=str(e))
            raise DatabaseError("select", str(e))

        users = [UserResponse(**row) for row in result.data]
        if search:
            users = [u for u in users if matches_search(u, search)]

        logger.info("users_retrieved", count=len(users))
        return users

    def get_by_id(self, user_id: str) -> UserResponse:
        """
        Get a single user.

        Raises:
            UserNotFoundError: If user doesn't exist
        """
        try:
            result = self.db.table(self.table).select("*").eq("id", user_id).execute()
        except Exception as e:
            logger.error("get_user_failed", user_id=user_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise UserNotFoundError(user_id)
        return UserResponse(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def update(self, user_id: str, data: UserUpdate) -> UserResponse:
        """
        Update a user's profile row.

        Raises:
            UserNotFoundError: If user doesn't exist
        """
        update_data = data.model_dump(mode="json", by_alias=True, exclude_none=True)
        logger.info("updating_user", user_id=user_id, fields=list(update_data))

        if not update_data:
            return self.get_by_id(user_id)

        try:
            result = (
                self.db.table(self.table)
                .update(update_data)
                .eq("id", user_id)
                .execute()
            )
        except Exception as e:
            logger.error("update_user_failed", user_id=user_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise UserNotFoundError(user_id)

        logger.info("user_updated", user_id=user_id)
        return UserResponse(**result.data[0])

    def delete(self, user_id: str) -> bool:
        """
        Delete a user's profile row. The auth account is left alone.

        Raises:
            UserNotFoundError: If user doesn't exist
        """
        logger.info("deleting_user", user_id=user_id)

        try:
            result = self.db.table(self.table).delete().eq("id", user_id).execute()
        except Exception as e:
            logger.error("delete_user_failed", user_id=user_id, error=str(e))
            raise DatabaseError("delete", str(e))

        if not result.data:
            raise UserNotFoundError(user_id)

        logger.info("user_deleted", user_id=user_id)
        return True


# Singleton instance for convenience
_user_service: Optional[UserService] = None

def get_user_service() -> UserService:
    """Get or create UserService instance."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
