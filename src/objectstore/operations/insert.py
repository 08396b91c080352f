"""Insert operations for the object store.

This module provides the upsert used by ``ObjectStore.set``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from objectstore.expiry import format_timestamp, to_datetime
from objectstore.operations.base import BaseOperation
from objectstore.shared.constants import Schema

if TYPE_CHECKING:
    from objectstore.expiry import ExpiryInput

logger = logging.getLogger(__name__)


class InsertOperations(BaseOperation):
    """Insert operations for record storage."""

    def insert(self, key: str, value: Any, expires: ExpiryInput) -> bool:
        """Insert or replace a record.

        Args:
            key: Record key
            value: Value to store
            expires: Expiry in any supported shape

        Returns:
            True once the row is written

        Raises:
            SerializationError: If the value cannot be serialized
            InvalidExpiryError: If the expiry is unsupported or unparseable
            StoreError: If the write fails
        """
        data = self.serializer.dumps(value)
        expires_at = to_datetime(expires, self.clock())

        insert_sql = f"""
        INSERT OR REPLACE INTO {Schema.TABLE}
            ({Schema.KEY_COLUMN}, {Schema.DATA_COLUMN}, {Schema.EXPIRES_COLUMN})
        VALUES (?, ?, ?)
        """
        self._execute("set", insert_sql, (key, data, format_timestamp(expires_at)), key)

        logger.debug(
            "Record stored: key=%s, size=%d chars, expires=%s",
            self._preview(key),
            len(data),
            expires_at,
        )
        return True
