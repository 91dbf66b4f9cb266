"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...errors import SnapshotUnavailableError
from ...services.coverage import branch_zones

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database configuration and how much of the branch snapshot is readable."""
    from ...data.branch_repository import SupabaseBranchRepository
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set COVERAGE_SUPABASE_URL and COVERAGE_SUPABASE_KEY environment variables.",
            "branches_count": 0,
            "zones_count": 0,
        }

    try:
        branches = SupabaseBranchRepository(client=supabase, max_retries=0).fetch_active_branches()
    except SnapshotUnavailableError:
        return {
            "configured": True,
            "connected": False,
            "message": "Database connection error. See server logs for details.",
        }

    zones_count = sum(len(branch_zones(branch)) for branch in branches)
    return {
        "configured": True,
        "connected": True,
        "branches_count": len(branches),
        "zones_count": zones_count,
        "delivery_disabled_branches": sum(1 for branch in branches if not branch.delivery_enabled),
        "message": f"Database connected. Found {len(branches)} active branches with {zones_count} zones.",
    }
