"""Schema manager for the object store.

Creates the single ``store`` table if it is missing and checks that an
existing database has the expected columns.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from objectstore.shared.constants import Schema

if TYPE_CHECKING:
    from objectstore.drivers import Driver

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = frozenset(
    {Schema.KEY_COLUMN, Schema.DATA_COLUMN, Schema.EXPIRES_COLUMN},
)


class SchemaManager:
    """Ensures and validates the store table."""

    def __init__(self, conn: Any, driver: Driver) -> None:
        """Initialize schema manager.

        Args:
            conn: Open database connection
            driver: Driver used to execute statements
        """
        self.conn = conn
        self.driver = driver

    def create_tables(self) -> None:
        """Create the store table and its expiry index if absent."""
        schema_sql = f"""
        CREATE TABLE IF NOT EXISTS {Schema.TABLE} (
            {Schema.KEY_COLUMN} TEXT NOT NULL UNIQUE,
            {Schema.DATA_COLUMN} TEXT,
            {Schema.EXPIRES_COLUMN} DATETIME
        );

        CREATE INDEX IF NOT EXISTS {Schema.EXPIRES_INDEX}
            ON {Schema.TABLE}({Schema.EXPIRES_COLUMN});
        """
        self.driver.executescript(self.conn, schema_sql)
        logger.debug("Ensured schema for table '%s'", Schema.TABLE)

    def get_columns(self) -> set[str]:
        """Return the column names of the store table (empty if absent)."""
        cursor = self.driver.execute(self.conn, f"PRAGMA table_info({Schema.TABLE})")
        return {row[1] for row in cursor.fetchall()}

    def validate_schema(self) -> bool:
        """Check the store table has every required column.

        Returns:
            True if the schema is usable, False otherwise
        """
        missing = REQUIRED_COLUMNS - self.get_columns()
        if missing:
            logger.error(
                "Table '%s' is missing columns: %s",
                Schema.TABLE,
                ", ".join(sorted(missing)),
            )
            return False
        return True
