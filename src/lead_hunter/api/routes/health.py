"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check whether permits are served from Supabase or the CSV fallback."""
    from ...db.supabase import get_permits_table

    table = get_permits_table()
    if table is None:
        return {
            "configured": False,
            "fallback_file": str(settings.permits_file),
            "fallback_file_exists": settings.permits_file.exists(),
            "message": "Supabase not configured. Set LEADHUNTER_SUPABASE_URL and LEADHUNTER_SUPABASE_KEY environment variables.",
        }

    try:
        table.select("id", count="exact").limit(1).execute()
        return {"configured": True, "connected": True, "table": settings.permits_table}
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
