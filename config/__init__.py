"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Cached settings accessor
    get_supabase_client: Cached anon client
    get_admin_client: Service-role client (falls back to anon client)
    check_connection: Health check function
"""

from config.settings import settings, get_settings, Settings
from config.database import (
    get_supabase_client,
    get_admin_client,
    check_connection,
)

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Database
    "get_supabase_client",
    "get_admin_client",
    "check_connection",
]
