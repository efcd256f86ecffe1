"""Pytest configuration for bucket-index tests."""

import sys
import threading
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add src to path
src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src))

from bucket_index.models import Entry  # noqa: E402

MODIFIED = datetime(2024, 3, 1, 12, 30, 45, tzinfo=timezone.utc)


def make_entry(key: str, size: int = 0, domain: str = "https://cdn.example.com/") -> Entry:
    return Entry(url=f"{domain}{key}", size=size, key=key, last_modified=MODIFIED)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime = MODIFIED):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeLister:
    """Lister returning canned results, one per call; exceptions are raised."""

    def __init__(self, *results, delay: float = 0.0):
        self.results = list(results)
        self.delay = delay
        self.calls = 0
        self.active = 0
        self.max_active = 0
        self._guard = threading.Lock()

    def list_all(self):
        with self._guard:
            self.calls += 1
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        try:
            if self.delay:
                time.sleep(self.delay)
            if isinstance(result, Exception):
                raise result
            return list(result)
        finally:
            with self._guard:
                self.active -= 1


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_entries():
    return [
        make_entry("a/x.txt", 10),
        make_entry("a/y.txt", 2048),
        make_entry("root.txt", 5),
    ]
