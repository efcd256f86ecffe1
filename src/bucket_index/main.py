"""FastAPI application entry point."""

import logging
import sys

from fastapi import FastAPI

from . import __version__
from .cache import ListingCache
from .config import ConfigError, load_settings
from .logging_config import setup_logging
from .routes import health, index
from .storage.lister import BucketLister, ListingError

logger = logging.getLogger(__name__)


def create_app(cache: ListingCache) -> FastAPI:
    """Create the application serving an already-built cache.

    Args:
        cache: Listing cache shared by all requests

    Returns:
        FastAPI application
    """
    app = FastAPI(
        title="Bucket Index",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.cache = cache
    app.include_router(index.router)
    app.include_router(health.router)
    return app


def main() -> None:
    """Entry point for running the service directly."""
    import uvicorn

    setup_logging()

    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    setup_logging(settings.LOG_LEVEL)

    try:
        cache = ListingCache.build(BucketLister.from_settings(settings), title=settings.BUCKET)
    except ListingError as e:
        logger.error(f"Could not build initial listing: {e}")
        sys.exit(1)

    logger.info(f"Server listening on http://{settings.HOST}:{settings.PORT}")
    uvicorn.run(create_app(cache), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
