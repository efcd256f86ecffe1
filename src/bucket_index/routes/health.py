"""Health check endpoint."""

from fastapi import APIRouter, Depends

from .. import __version__
from ..cache import ListingCache
from . import get_cache

router = APIRouter()


@router.get("/health")
async def health_check(cache: ListingCache = Depends(get_cache)) -> dict:
    """Health check endpoint.

    Reports ``stale`` when the latest refresh attempt failed and an older
    snapshot is being served.

    Returns:
        Service health status
    """
    status = cache.status()
    return {
        "status": "stale" if status["last_error"] else "healthy",
        "version": __version__,
        "cache": status,
    }
