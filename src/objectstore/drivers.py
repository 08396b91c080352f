"""Database drivers.

A driver opens the connection the store owns and executes statements on
it. ``SQLiteDriver`` covers the standard library ``sqlite3`` module;
subclasses can swap in another DB-API 2.0 compatible SQLite binding by
overriding ``connect``.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Protocol, Sequence, runtime_checkable

from objectstore.shared.constants import Connection

logger = logging.getLogger(__name__)


@runtime_checkable
class Driver(Protocol):
    """Capability interface for opening and using a connection."""

    #: Exception base class raised by this driver's connections
    error: type[Exception]

    def connect(self, location: str) -> Any:
        """Open a connection to ``location``."""
        ...

    def execute(self, conn: Any, sql: str, params: Sequence[Any] = ()) -> Any:
        """Execute one statement and return its cursor."""
        ...

    def executescript(self, conn: Any, script: str) -> None:
        """Execute several statements separated by semicolons."""
        ...


class SQLiteDriver:
    """Driver for the built-in ``sqlite3`` module.

    Connections run in autocommit mode; each statement is its own
    transaction. File databases use WAL journaling so readers in other
    processes are not blocked by a writer.

    Attributes:
        timeout: Seconds to wait on a locked database before failing
        journal_mode: Journal mode applied to file databases
    """

    error: type[Exception] = sqlite3.Error

    def __init__(
        self,
        timeout: float = Connection.BUSY_TIMEOUT,
        journal_mode: str = Connection.JOURNAL_MODE,
    ) -> None:
        self.timeout = timeout
        self.journal_mode = journal_mode

    def connect(self, location: str) -> sqlite3.Connection:
        """Open a connection and apply pragmas.

        Raises:
            sqlite3.Error: If the database cannot be opened
        """
        conn = sqlite3.connect(
            location,
            timeout=self.timeout,
            isolation_level=None,  # Auto-commit mode
            check_same_thread=False,
        )
        try:
            if location != Connection.MEMORY:
                conn.execute(f"PRAGMA journal_mode={self.journal_mode}")
                conn.execute(f"PRAGMA synchronous={Connection.SYNCHRONOUS}")
        except sqlite3.Error:
            conn.close()
            raise

        logger.debug(
            "Opened SQLite connection: %s (journal_mode=%s)",
            location,
            self.journal_mode,
        )
        return conn

    def execute(
        self,
        conn: sqlite3.Connection,
        sql: str,
        params: Sequence[Any] = (),
    ) -> sqlite3.Cursor:
        return conn.execute(sql, params)

    def executescript(self, conn: sqlite3.Connection, script: str) -> None:
        conn.executescript(script)


__all__ = ["Driver", "SQLiteDriver"]
