"""Grouping and display helpers for listed entries."""

from datetime import datetime
from typing import Dict, Iterable, List

from .models import Entry, Group

# Group for keys without any "/" separator
UNGROUPED_NAME = "Binários"

SIZE_UNIT = 1024
SIZE_PREFIXES = "KMGTPE"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def human_readable_size(size: int) -> str:
    """Format a byte count using base-1024 units.

    Args:
        size: Size in bytes

    Returns:
        ``"<n> B"`` below 1024, otherwise one decimal place with the largest
        unit not exceeding the size, e.g. ``"2.0 KB"``
    """
    if size < SIZE_UNIT:
        return f"{size} B"
    div, exp = SIZE_UNIT, 0
    n = size // SIZE_UNIT
    while n >= SIZE_UNIT and exp < len(SIZE_PREFIXES) - 1:
        div *= SIZE_UNIT
        exp += 1
        n //= SIZE_UNIT
    return f"{size / div:.1f} {SIZE_PREFIXES[exp]}B"


def short_name(key: str) -> str:
    """Return the last path segment of a key."""
    return key.rsplit("/", 1)[-1]


def group_name(key: str) -> str:
    """Return the first path segment of a key, or the ungrouped sentinel."""
    if "/" not in key:
        return UNGROUPED_NAME
    return key.split("/", 1)[0]


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def group_entries(entries: Iterable[Entry]) -> List[Group]:
    """Partition entries by first path segment.

    Listing order is preserved inside each group; groups are sorted by name
    in descending order.

    Args:
        entries: Flat entry list in listing order

    Returns:
        Groups covering every entry exactly once
    """
    buckets: Dict[str, List[Entry]] = {}
    for entry in entries:
        buckets.setdefault(group_name(entry.key), []).append(entry)
    return [
        Group(name=name, entries=tuple(buckets[name]))
        for name in sorted(buckets, reverse=True)
    ]
