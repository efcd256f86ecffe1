"""In-memory listing cache with lazy, serialized refresh."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from string import Template
from typing import Callable, List, Optional, Protocol

from .formatting import group_entries
from .models import Entry, Snapshot
from .render import load_template, render_html, render_json

logger = logging.getLogger(__name__)

EXPIRATION = timedelta(hours=12)


class Lister(Protocol):
    def list_all(self) -> List[Entry]: ...


class CacheNotReadyError(RuntimeError):
    """Raised when the snapshot is read before the first successful build."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ListingCache:
    """Holds the current rendered snapshot of a bucket listing.

    The snapshot is replaced by a single reference assignment after a
    complete listing pass, so readers always see one whole snapshot. At most
    one refresh runs at a time; waiting requests reuse its result.
    """

    def __init__(
        self,
        lister: Lister,
        *,
        title: str = "",
        clock: Callable[[], datetime] = utc_now,
        template: Optional[Template] = None,
    ):
        """Initialize an empty cache.

        Args:
            lister: Source of entries, called once per refresh
            title: Page title for the HTML listing
            clock: Returns the current timezone-aware time
            template: Page template (defaults to the packaged one)
        """
        self._lister = lister
        self._title = title
        self._clock = clock
        self._template = template or load_template()
        self._snapshot: Optional[Snapshot] = None
        self._lock = asyncio.Lock()
        self.last_error: Optional[str] = None
        self.last_failure_at: Optional[datetime] = None

    @classmethod
    def build(cls, lister: Lister, **kwargs) -> "ListingCache":
        """Create a cache and perform the initial listing synchronously.

        Raises:
            ListingError: If the initial listing fails
        """
        cache = cls(lister, **kwargs)
        cache._snapshot = cache._build_snapshot()
        logger.info(
            f"Initial snapshot built: {cache._snapshot.entry_count} entries "
            f"in {len(cache._snapshot.groups)} groups"
        )
        return cache

    @property
    def snapshot(self) -> Snapshot:
        if self._snapshot is None:
            raise CacheNotReadyError("Listing cache has not been built yet")
        return self._snapshot

    def is_expired(self) -> bool:
        """Check whether the snapshot is older than EXPIRATION.

        An uninitialized cache counts as expired.
        """
        snapshot = self._snapshot
        if snapshot is None:
            return True
        return self._clock() - snapshot.created_at > EXPIRATION

    def _build_snapshot(self) -> Snapshot:
        entries = self._lister.list_all()
        groups = group_entries(entries)
        created_at = self._clock()
        return Snapshot(
            groups=tuple(groups),
            html=render_html(
                self._template, groups, title=self._title, generated_at=created_at
            ),
            json=render_json(groups),
            created_at=created_at,
            entry_count=len(entries),
        )

    async def _rebuild(self) -> Snapshot:
        loop = asyncio.get_running_loop()
        try:
            snapshot = await loop.run_in_executor(None, self._build_snapshot)
        except Exception as e:
            self.last_error = str(e)
            self.last_failure_at = self._clock()
            logger.error(f"Cache refresh failed, keeping previous snapshot: {e}")
            raise

        self._snapshot = snapshot
        self.last_error = None
        logger.info(
            f"Cache refreshed: {snapshot.entry_count} entries in {len(snapshot.groups)} groups"
        )
        return snapshot

    async def refresh(self) -> Snapshot:
        """Re-list the bucket and swap in a new snapshot.

        Returns:
            The new snapshot

        Raises:
            ListingError: If listing fails; the previous snapshot is kept
        """
        async with self._lock:
            return await self._rebuild()

    async def get_fresh(self) -> Snapshot:
        """Return the current snapshot, refreshing it first if expired.

        Raises:
            ListingError: If an expired snapshot could not be refreshed
        """
        snapshot = self._snapshot
        if snapshot is not None and not self.is_expired():
            return snapshot

        async with self._lock:
            # Another request may have refreshed while we waited
            if not self.is_expired():
                return self.snapshot
            return await self._rebuild()

    def status(self) -> dict:
        """Summarize cache state for health checks.

        Returns:
            Status dictionary
        """
        snapshot = self._snapshot
        return {
            "last_refreshed_at": snapshot.created_at.isoformat() if snapshot else None,
            "expires_at": (snapshot.created_at + EXPIRATION).isoformat() if snapshot else None,
            "expired": self.is_expired(),
            "entry_count": snapshot.entry_count if snapshot else 0,
            "group_count": len(snapshot.groups) if snapshot else 0,
            "last_error": self.last_error,
            "last_failure_at": self.last_failure_at.isoformat() if self.last_failure_at else None,
        }
