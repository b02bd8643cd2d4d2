"""Supabase access for the permit data source."""

import logging
from functools import lru_cache
from supabase import create_client, Client
from ..config import settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance, or None when credentials are missing.

    Creating the client does not open a connection; queries may still fail.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Supabase credentials not configured, permits will be read from the CSV export")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {e}")
        return None


def get_permits_table():
    """Query builder for the configured permits table, or None without Supabase."""
    client = get_supabase_client()
    if client is None:
        return None
    return client.table(settings.permits_table)
