"""Data models for bucket listings and API responses."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Tuple

from pydantic import BaseModel


@dataclass(frozen=True)
class Entry:
    """One listed storage object."""

    url: str
    size: int
    key: str
    last_modified: datetime


@dataclass(frozen=True)
class Group:
    """Entries sharing the first path segment of their key."""

    name: str
    entries: Tuple[Entry, ...] = ()


@dataclass(frozen=True)
class Snapshot:
    """Fully rendered result of one listing pass.

    Replaced as a whole on every successful refresh, never mutated.
    """

    groups: Tuple[Group, ...]
    html: bytes
    json: bytes
    created_at: datetime
    entry_count: int = 0


class FileItem(BaseModel):
    """A single file in the JSON listing."""

    url: str
    size: int


class GroupItem(BaseModel):
    """A named group in the JSON listing."""

    name: str
    urls: List[FileItem]


class ListingResponse(BaseModel):
    """Response body for ``GET /`` with ``Accept: application/json``."""

    data: List[GroupItem]
