"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/storage", status_code=status.HTTP_200_OK)
def health_storage() -> dict:
    """Report the active storage backend and how much it holds."""
    from ...persistence import get_storage

    try:
        storage = get_storage()
        return {
            "backend": storage.name,
            "connected": True,
            "locations_count": len(storage.list_locations()),
            "categories_count": len(storage.list_categories()),
            "media_count": len(storage.list_media()),
        }
    except Exception as exc:
        return {
            "connected": False,
            "error": str(exc),
            "message": f"Storage error: {exc}",
        }
