"""Update operations for the object store.

This module provides expiry updates and delete/sweep operations.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from objectstore.expiry import format_timestamp, to_datetime
from objectstore.operations.base import BaseOperation
from objectstore.shared.constants import Schema

if TYPE_CHECKING:
    from objectstore.expiry import ExpiryInput

logger = logging.getLogger(__name__)


class UpdateOperations(BaseOperation):
    """Update/delete operations for record management."""

    def set_expires(self, key: str, expires: ExpiryInput) -> bool:
        """Update the expiry of an existing record.

        Args:
            key: Record key
            expires: New expiry in any supported shape

        Returns:
            True if a row was updated, False if the key is absent

        Raises:
            InvalidExpiryError: If the expiry is unsupported or unparseable
            StoreError: If the write fails
        """
        expires_at = to_datetime(expires, self.clock())

        update_sql = f"""
        UPDATE {Schema.TABLE}
        SET {Schema.EXPIRES_COLUMN} = ?
        WHERE {Schema.KEY_COLUMN} = ?
        """
        cursor = self._execute(
            "set_expires",
            update_sql,
            (format_timestamp(expires_at), key),
            key,
        )

        updated = cursor.rowcount > 0
        if updated:
            logger.debug(
                "Expiry updated: key=%s, expires=%s",
                self._preview(key),
                expires_at,
            )
        return updated

    def delete(self, key: str) -> bool:
        """Delete a record.

        Args:
            key: Record key

        Returns:
            True if deleted, False if not found
        """
        delete_sql = f"DELETE FROM {Schema.TABLE} WHERE {Schema.KEY_COLUMN} = ?"
        cursor = self._execute("delete", delete_sql, (key,), key)

        deleted = cursor.rowcount > 0
        if deleted:
            logger.debug("Record deleted: key=%s", self._preview(key))
        return deleted

    def delete_old(self) -> int:
        """Delete every record whose expiry is strictly before now or NULL.

        Returns:
            Number of removed records
        """
        now = format_timestamp(self.clock())

        purge_sql = f"""
        DELETE FROM {Schema.TABLE}
        WHERE {Schema.EXPIRES_COLUMN} IS NULL OR {Schema.EXPIRES_COLUMN} < ?
        """
        cursor = self._execute("delete_old", purge_sql, (now,))

        purged_count = max(cursor.rowcount, 0)
        if purged_count > 0:
            logger.info("Deleted %d expired records", purged_count)
        return purged_count

    def clear(self) -> int:
        """Delete all records.

        Returns:
            Number of removed records
        """
        cursor = self._execute("clear", f"DELETE FROM {Schema.TABLE}")
        cleared_count = max(cursor.rowcount, 0)
        logger.info("Cleared %d records", cleared_count)
        return cleared_count
