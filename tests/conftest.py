"""
Pytest configuration and shared fixtures for object store tests.
"""

from __future__ import annotations

from collections.abc import Generator
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from objectstore import ObjectStore


class FakeClock:
    """Manually advanced clock for deterministic expiry tests."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at 2026-01-01 12:00:00."""
    return FakeClock(datetime(2026, 1, 1, 12, 0, 0))


@pytest.fixture
def store(clock: FakeClock) -> Generator[ObjectStore, None, None]:
    """In-memory store driven by the fake clock."""
    object_store = ObjectStore(":memory:", clock=clock)
    yield object_store
    object_store.close()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a not yet created database file."""
    return tmp_path / "store.db"
