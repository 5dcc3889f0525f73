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
    """Check database connection and points table status."""
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set COURIER_SUPABASE_URL and COURIER_SUPABASE_KEY environment variables.",
            "points_count": 0,
        }

    try:
        response = supabase.table(settings.points_table).select("id", count="exact").execute()
        count = response.count if response.count is not None else len(response.data or [])
        return {
            "configured": True,
            "connected": True,
            "points_count": count,
            "message": f"Database connected. Found {count} points in '{settings.points_table}'.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
