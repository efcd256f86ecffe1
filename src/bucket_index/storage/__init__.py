"""Storage layer for the bucket listing."""

from .lister import BucketLister, ListingError

__all__ = ["BucketLister", "ListingError"]
