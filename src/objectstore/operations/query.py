"""Query operations for the object store.

Reads never consult the expiry column: a record whose expiry has passed is
still returned until a sweep removes it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from objectstore.expiry import format_timestamp, parse_timestamp
from objectstore.models import Record
from objectstore.operations.base import BaseOperation
from objectstore.shared.constants import Schema
from objectstore.shared.errors import ErrorCode, ErrorContext, StoreError

logger = logging.getLogger(__name__)


class QueryOperations(BaseOperation):
    """Query operations for record retrieval."""

    def _fetch_row(self, key: str) -> tuple[Any, ...] | None:
        select_sql = f"""
        SELECT {Schema.DATA_COLUMN}, {Schema.EXPIRES_COLUMN}
        FROM {Schema.TABLE}
        WHERE {Schema.KEY_COLUMN} = ?
        """
        cursor = self._execute("get", select_sql, (key,), key, write=False)
        return cursor.fetchone()

    def _parse_expires(self, key: str, raw: str | None) -> datetime:
        try:
            return parse_timestamp(raw) if raw else datetime.min
        except (TypeError, ValueError) as e:
            raise StoreError(
                code=ErrorCode.STORE_READ_FAILED,
                message=f"Malformed expiry {raw!r} stored for key",
                context=ErrorContext(operation="get_expires", key=key),
                original_error=e,
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a value.

        Args:
            key: Record key
            default: Returned when the key is absent

        Returns:
            The stored value, or ``default``

        Raises:
            SerializationError: If the stored payload cannot be decoded
            StoreError: If the read fails
        """
        row = self._fetch_row(key)
        if row is None:
            logger.debug("Record miss: key=%s", self._preview(key))
            return default

        return self.serializer.loads(row[0])

    def get_record(self, key: str) -> Record | None:
        """Retrieve the full record, or None if the key is absent."""
        row = self._fetch_row(key)
        if row is None:
            return None

        data, expires_raw = row
        return Record(
            key=key,
            value=self.serializer.loads(data),
            expires_at=self._parse_expires(key, expires_raw),
        )

    def exists(self, key: str) -> bool:
        """Return True if a record with ``key`` is present."""
        exists_sql = f"SELECT 1 FROM {Schema.TABLE} WHERE {Schema.KEY_COLUMN} = ? LIMIT 1"
        cursor = self._execute("exists", exists_sql, (key,), key, write=False)
        return cursor.fetchone() is not None

    def get_expires(self, key: str) -> datetime | None:
        """Return the absolute expiry of a record, or None if absent.

        A row whose expiry column is NULL (written through the raw
        connection) reports ``datetime.min`` and is removed by the next sweep.
        """
        expires_sql = f"""
        SELECT {Schema.EXPIRES_COLUMN} FROM {Schema.TABLE}
        WHERE {Schema.KEY_COLUMN} = ?
        """
        cursor = self._execute("get_expires", expires_sql, (key,), key, write=False)
        row = cursor.fetchone()
        if row is None:
            return None
        return self._parse_expires(key, row[0])

    def count(self) -> int:
        """Return the number of stored records."""
        cursor = self._execute("count", f"SELECT COUNT(*) FROM {Schema.TABLE}", write=False)
        return int(cursor.fetchone()[0])

    def count_expired(self) -> int:
        """Return the number of records a sweep would remove now."""
        expired_sql = f"""
        SELECT COUNT(*) FROM {Schema.TABLE}
        WHERE {Schema.EXPIRES_COLUMN} IS NULL OR {Schema.EXPIRES_COLUMN} < ?
        """
        now = format_timestamp(self.clock())
        cursor = self._execute("count_expired", expired_sql, (now,), write=False)
        return int(cursor.fetchone()[0])
