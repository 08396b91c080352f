"""Record and store info dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

__all__ = ["Record", "StoreInfo"]


@dataclass(frozen=True)
class Record:
    """One key/value/expiry triple in the store.

    Attributes:
        key: Unique record key
        value: Deserialized value
        expires_at: Absolute expiry, second precision, local time
    """

    key: str
    value: Any
    expires_at: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.key, str):
            msg = f"key must be str, got {type(self.key).__name__}"
            raise TypeError(msg)

    def is_expired(self, now: datetime) -> bool:
        """Return True if the record would be removed by a sweep at ``now``."""
        return self.expires_at < now


@dataclass(frozen=True)
class StoreInfo:
    """Store statistics.

    Attributes:
        location: Database location the store was opened with
        total_records: Number of stored records
        expired_records: Records whose expiry has passed but are not swept yet
    """

    location: str
    total_records: int
    expired_records: int

    @property
    def live_records(self) -> int:
        return self.total_records - self.expired_records
