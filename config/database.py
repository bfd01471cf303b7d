"""
Supabase clients.

The anon client serves catalog reads and writes; order and Q&A
moderation go through the service-role client because those tables sit
behind row-level security.
"""

from supabase import create_client, Client
from functools import lru_cache
from typing import Optional
import structlog

from config.settings import settings
from exceptions import ExternalServiceError

logger = structlog.get_logger(__name__)

# Tables counted by the health check
HEALTH_TABLES = ("products", "categories")


def _connect(key: str, role: str, probe_table: Optional[str] = None) -> Client:
    logger.info(
        "connecting_to_supabase",
        url=settings.supabase_url[:30] + "...",  # Partial URL only
        role=role
    )

    try:
        client = create_client(settings.supabase_url, key)
        if probe_table:
            client.table(probe_table).select("id").limit(1).execute()
    except Exception as e:
        logger.error(
            "supabase_connection_failed",
            role=role,
            error=str(e),
            error_type=type(e).__name__
        )
        raise ExternalServiceError(
            "supabase",
            f"Failed to connect to Supabase: {e}",
            details={"role": role}
        ) from e

    logger.info("supabase_connected", role=role)
    return client


@lru_cache()
def get_supabase_client() -> Client:
    """
    Cached anon client.

    The first call runs a one-row query against categories so a bad URL
    or key fails at startup rather than on the first request. Call
    get_supabase_client.cache_clear() to reconnect.

    Raises:
        ExternalServiceError: If the client cannot connect
    """
    return _connect(settings.supabase_key, "anon", probe_table="categories")


@lru_cache()
def get_admin_client() -> Client:
    """
    Cached service-role client.

    Falls back to the anon client when no service key is configured.

    Raises:
        ExternalServiceError: If the client cannot be created
    """
    if not settings.supabase_service_key:
        logger.warning("admin_client_not_configured")
        return get_supabase_client()

    return _connect(settings.supabase_service_key, "service")


def check_connection() -> dict:
    """
    Database health for /health and startup.

    Returns:
        {"status": "healthy", "<table>_count": n, ...} or
        {"status": "unhealthy", "error": "..."}
    """
    try:
        client = get_supabase_client()
        status = {"status": "healthy"}
        for table in HEALTH_TABLES:
            result = client.table(table).select("id", count="exact").execute()
            status[f"{table}_count"] = result.count
        return status

    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e)
        }
