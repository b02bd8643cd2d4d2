"""Database clients and utilities."""

from .supabase import get_permits_table, get_supabase_client

__all__ = ["get_permits_table", "get_supabase_client"]
