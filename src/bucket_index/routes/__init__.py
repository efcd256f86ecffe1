"""HTTP routes."""

from fastapi import Request

from ..cache import ListingCache


def get_cache(request: Request) -> ListingCache:
    """Return the listing cache attached to the application."""
    return request.app.state.cache
