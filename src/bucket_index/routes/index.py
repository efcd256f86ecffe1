"""Bucket listing endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from ..cache import ListingCache
from ..storage.lister import ListingError
from . import get_cache

logger = logging.getLogger(__name__)
router = APIRouter()

JSON_TYPE = "application/json"
HTML_TYPES = ("text/html", "text/*", "*/*")


def prefers_json(accept: Optional[str]) -> bool:
    """Decide between JSON and HTML from an Accept header.

    Media ranges are ranked by quality (ties keep header order); the first
    one matching JSON or HTML wins. HTML is the default.

    Args:
        accept: Raw Accept header value

    Returns:
        True if JSON should be served
    """
    if not accept:
        return False

    ranked = []
    for position, part in enumerate(accept.split(",")):
        media_type, *params = [piece.strip() for piece in part.split(";")]
        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            ranked.append((-quality, position, media_type.lower()))

    for _, _, media_type in sorted(ranked):
        if media_type == JSON_TYPE:
            return True
        if media_type in HTML_TYPES:
            return False
    return False


@router.api_route("/", methods=["GET", "HEAD"])
async def index(
    accept: Optional[str] = Header(None),
    cache: ListingCache = Depends(get_cache),
) -> Response:
    """Serve the bucket listing as HTML, or JSON when preferred."""
    try:
        snapshot = await cache.get_fresh()
    except ListingError as e:
        logger.error(f"Error loading files: {e}")
        return PlainTextResponse("Internal Server Error", status_code=500)

    if prefers_json(accept):
        return Response(content=snapshot.json, media_type=JSON_TYPE)
    return HTMLResponse(content=snapshot.html)
