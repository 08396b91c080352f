"""Base operation class for store operations.

This module provides shared functionality for all store operations.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Sequence

from objectstore.shared.constants import Logging
from objectstore.shared.errors import create_store_error
from objectstore.shared.logging import log_operation_error

if TYPE_CHECKING:
    from objectstore.drivers import Driver
    from objectstore.serializers import Serializer

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class BaseOperation:
    """Base class for store operations with shared functionality."""

    def __init__(
        self,
        conn: Any,
        driver: Driver,
        serializer: Serializer,
        clock: Clock,
    ) -> None:
        """Initialize base operation.

        Args:
            conn: Open database connection
            driver: Driver used to execute statements
            serializer: Value serializer
            clock: Source of the current local time
        """
        self.conn = conn
        self.driver = driver
        self.serializer = serializer
        self.clock = clock

    def _execute(
        self,
        operation: str,
        sql: str,
        params: Sequence[Any] = (),
        key: str | None = None,
        *,
        write: bool = True,
    ) -> Any:
        """Execute a statement, wrapping driver failures in StoreError.

        Raises:
            StoreError: If the driver raises
        """
        try:
            return self.driver.execute(self.conn, sql, params)
        except self.driver.error as e:
            error = create_store_error(operation, e, key=key, write=write)
            log_operation_error(logger, error)
            raise error from e

    @staticmethod
    def _preview(key: str) -> str:
        return key[: Logging.KEY_PREVIEW_LENGTH]
