"""SQLite object store facade.

This module provides the ``ObjectStore`` class, a key-value store with
per-record expiry built on modular operations.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from objectstore.config.settings import StoreSettings
from objectstore.drivers import Driver, SQLiteDriver
from objectstore.models import Record, StoreInfo
from objectstore.operations.insert import InsertOperations
from objectstore.operations.query import QueryOperations
from objectstore.operations.update import UpdateOperations
from objectstore.schema.manager import SchemaManager
from objectstore.serializers import PickleSerializer, Serializer
from objectstore.shared.constants import Connection
from objectstore.shared.errors import (
    ErrorCode,
    ErrorContext,
    StoreConnectionError,
    StoreError,
)
from objectstore.shared.logging import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
)

if TYPE_CHECKING:
    from types import TracebackType

    from objectstore.expiry import ExpiryInput

logger = logging.getLogger(__name__)


class ObjectStore:
    """Key-value store with per-record expiry, backed by SQLite.

    Values are serialized to text and kept in a single table together with
    an absolute expiry timestamp. Expiry is lazy: reads return a record
    until ``delete_old`` sweeps it, which by default happens once when the
    store is opened.

    Attributes:
        location: Database file path or ``":memory:"``
        driver: Driver owning the connection
        serializer: Value serializer
        clock: Source of the current local time

    Example:
        >>> with ObjectStore("data.db") as store:
        ...     store.set("user:1", {"name": "Alice"}, "2 days")
        ...     store.get("user:1")
        {'name': 'Alice'}
    """

    def __init__(
        self,
        location: str | Path | None = None,
        *,
        delete_old: bool | None = None,
        driver: Driver | None = None,
        serializer: Serializer | None = None,
        clock: Callable[[], datetime] | None = None,
        settings: StoreSettings | None = None,
    ) -> None:
        """Open the store.

        Args:
            location: Database file path or ":memory:" (default from settings)
            delete_old: Sweep expired records after opening (default from settings)
            driver: Connection driver (default: SQLiteDriver from settings)
            serializer: Value serializer (default: PickleSerializer)
            clock: Zero-argument callable returning the current local time
            settings: Defaults for unspecified arguments (code defaults when omitted;
                the environment is not consulted)

        Raises:
            StoreConnectionError: If the database cannot be opened or the
                schema cannot be ensured
        """
        # Environment and .env values are only read through from_settings()
        self.settings = settings if settings is not None else StoreSettings.model_construct()
        self.location = str(location if location is not None else self.settings.location)
        self.driver: Driver = driver or SQLiteDriver(
            timeout=self.settings.busy_timeout,
            journal_mode=self.settings.journal_mode,
        )
        self.serializer: Serializer = serializer or PickleSerializer()
        self.clock = clock or datetime.now
        self.default_expires = self.settings.default_expires
        self._conn: Any | None = None

        sweep = self.settings.delete_old_on_open if delete_old is None else delete_old
        self._initialize_db(sweep)

    @classmethod
    def from_settings(cls, settings: StoreSettings | None = None) -> ObjectStore:
        """Open a store configured entirely from settings.

        Args:
            settings: Store settings; read from the environment when omitted
        """
        return cls(settings=settings or StoreSettings())

    def _initialize_db(self, sweep: bool) -> None:
        """Open the connection, ensure the schema and optionally sweep.

        Raises:
            StoreConnectionError: If any step fails
        """
        started = time.perf_counter()
        context = ErrorContext(
            operation="initialize_db",
            additional_data={"location": self.location},
        )
        log_operation_start(logger, "initialize_db", {"location": self.location})

        try:
            if self.location != Connection.MEMORY:
                Path(self.location).parent.mkdir(parents=True, exist_ok=True)
            self._conn = self.driver.connect(self.location)
        except (OSError, self.driver.error) as e:
            error = StoreConnectionError(
                code=ErrorCode.CONNECTION_FAILED,
                message=f"Failed to open store at {self.location}: {e!s}",
                context=context,
                original_error=e,
            )
            log_operation_error(logger, error)
            raise error from e

        try:
            schema = SchemaManager(self._conn, self.driver)
            schema.create_tables()
            if not schema.validate_schema():
                msg = "existing store table has an incompatible layout"
                raise StoreConnectionError(
                    code=ErrorCode.SCHEMA_ERROR,
                    message=f"Failed to ensure schema at {self.location}: {msg}",
                    context=context,
                )
        except StoreConnectionError as error:
            self._abort_initialization()
            log_operation_error(logger, error)
            raise
        except self.driver.error as e:
            self._abort_initialization()
            error = StoreConnectionError(
                code=ErrorCode.SCHEMA_ERROR,
                message=f"Failed to ensure schema at {self.location}: {e!s}",
                context=context,
                original_error=e,
            )
            log_operation_error(logger, error)
            raise error from e

        self._query_ops = QueryOperations(self._conn, self.driver, self.serializer, self.clock)
        self._insert_ops = InsertOperations(self._conn, self.driver, self.serializer, self.clock)
        self._update_ops = UpdateOperations(self._conn, self.driver, self.serializer, self.clock)

        purged_count = 0
        if sweep:
            try:
                purged_count = self._update_ops.delete_old()
            except StoreError as e:
                self._abort_initialization()
                raise StoreConnectionError(
                    code=ErrorCode.CONNECTION_FAILED,
                    message=f"Failed to sweep expired records on open: {e.message}",
                    context=context,
                    original_error=e,
                ) from e

        log_operation_success(
            logger=logger,
            operation="initialize_db",
            duration_ms=(time.perf_counter() - started) * 1000,
            result_info={"purged": purged_count},
            context=context,
        )

    def _abort_initialization(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _require_open(self, operation: str) -> None:
        if self._conn is None:
            raise StoreError(
                code=ErrorCode.STORE_CLOSED,
                message=f"Cannot {operation}: store is closed",
                context=ErrorContext(operation=operation),
            )

    @property
    def connection(self) -> Any:
        """Raw database connection.

        Escape hatch for custom queries against the ``store`` table. Writes
        made through it bypass serialization and expiry handling.

        Raises:
            StoreError: If the store is closed
        """
        self._require_open("access connection")
        return self._conn

    @property
    def closed(self) -> bool:
        return self._conn is None

    def set(self, key: str, value: Any, expires: ExpiryInput | None = None) -> bool:
        """Store a value, replacing any record with the same key.

        Args:
            key: Record key
            value: Value to store
            expires: Text expression ("2 days", "2030-01-01"), Unix
                timestamp, datetime/date or expiry variant; relative
                expressions are anchored at the time of the call
                (default: settings.default_expires, "90 seconds")

        Returns:
            True if the record was written

        Raises:
            SerializationError: If the value cannot be serialized
            InvalidExpiryError: If the expiry is unsupported or unparseable
            StoreError: If the write fails or the store is closed
        """
        self._require_open("set")
        if expires is None:
            expires = self.default_expires
        return self._insert_ops.insert(key, value, expires)

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a value.

        Expired records that have not been swept are still returned. Use
        ``exists`` to tell an absent key from a stored value equal to
        ``default``.

        Args:
            key: Record key
            default: Returned when the key is absent

        Returns:
            The stored value, or ``default``

        Raises:
            SerializationError: If the stored payload cannot be decoded
            StoreError: If the read fails or the store is closed
        """
        self._require_open("get")
        return self._query_ops.get(key, default)

    def get_record(self, key: str) -> Record | None:
        """Retrieve the full record (key, value and expiry), or None."""
        self._require_open("get_record")
        return self._query_ops.get_record(key)

    def exists(self, key: str) -> bool:
        """Return True if a record with ``key`` is present, expired or not."""
        self._require_open("exists")
        return self._query_ops.exists(key)

    def set_expires(self, key: str, expires: ExpiryInput) -> bool:
        """Update only the expiry of an existing record.

        Returns:
            True if updated, False if the key is absent

        Raises:
            InvalidExpiryError: If the expiry is unsupported or unparseable
            StoreError: If the write fails or the store is closed
        """
        self._require_open("set_expires")
        return self._update_ops.set_expires(key, expires)

    def get_expires(self, key: str) -> datetime | None:
        """Return the absolute expiry (second precision), or None if absent."""
        self._require_open("get_expires")
        return self._query_ops.get_expires(key)

    def delete(self, key: str) -> bool:
        """Delete a record.

        Returns:
            True if a record was removed, False if not found
        """
        self._require_open("delete")
        return self._update_ops.delete(key)

    def delete_old(self) -> int:
        """Delete every record whose expiry is strictly before now.

        Returns:
            Number of removed records
        """
        self._require_open("delete_old")
        return self._update_ops.delete_old()

    def clear(self) -> int:
        """Delete all records.

        Returns:
            Number of removed records
        """
        self._require_open("clear")
        return self._update_ops.clear()

    def get_info(self) -> StoreInfo:
        """Return record counts for the store."""
        self._require_open("get_info")
        return StoreInfo(
            location=self.location,
            total_records=self._query_ops.count(),
            expired_records=self._query_ops.count_expired(),
        )

    def close(self) -> None:
        """Close the database connection. Safe to call more than once."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Closed object store: %s", self.location)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.exists(key)

    def __len__(self) -> int:
        self._require_open("count")
        return self._query_ops.count()

    def __enter__(self) -> ObjectStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<ObjectStore location={self.location!r} {state}>"
