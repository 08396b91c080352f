"""ObjectStore Error Handling Module

This module defines the error handling system for the object store,
providing structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for the object store.

    This enum serves as the single source of truth for all error codes
    used throughout the package.
    """

    # Connection and schema errors
    CONNECTION_FAILED = "CONNECTION_FAILED"
    SCHEMA_ERROR = "SCHEMA_ERROR"

    # Store I/O errors
    STORE_READ_FAILED = "STORE_READ_FAILED"
    STORE_WRITE_FAILED = "STORE_WRITE_FAILED"
    STORE_CLOSED = "STORE_CLOSED"

    # Value errors
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"
    DESERIALIZATION_ERROR = "DESERIALIZATION_ERROR"
    INVALID_EXPIRY = "INVALID_EXPIRY"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data so the context can always be written to a log record.

    Attributes:
        operation: Optional operation name that caused the error
        key: Optional record key involved in the operation
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    key: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as a dict for logging.

        Keys are truncated to 50 characters; ``additional_data`` is always
        present.
        """
        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.key is not None:
            data["key"] = self.key[:50]
        data["additional_data"] = dict(self.additional_data or {})
        return data


class ObjectStoreError(Exception):
    """Base exception class for all object store errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize ObjectStoreError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(ObjectStoreError):
    """Errors caused by the values handed to the store.

    Examples:
    - A value that cannot be serialized
    - An expiry of an unsupported shape
    """


class InfrastructureError(ObjectStoreError):
    """Errors raised while talking to the embedded database.

    Examples:
    - Database file cannot be opened
    - Disk full, lock contention, corruption
    """


class SerializationError(DomainError):
    """Value cannot be converted to or from its stored text form."""


class InvalidExpiryError(DomainError):
    """Expiry argument has an unsupported shape or cannot be parsed."""


class StoreConnectionError(InfrastructureError):
    """Storage location cannot be opened or the schema cannot be ensured."""


class StoreError(InfrastructureError):
    """Underlying read or write failure, or use of a closed store."""


def create_serialization_error(
    message: str,
    key: str | None = None,
    original_error: Exception | None = None,
    *,
    decode: bool = False,
) -> SerializationError:
    """Create a SerializationError for a failed encode or decode."""
    return SerializationError(
        code=ErrorCode.DESERIALIZATION_ERROR if decode else ErrorCode.SERIALIZATION_ERROR,
        message=message,
        context=ErrorContext(
            operation="deserialize" if decode else "serialize",
            key=key,
        ),
        original_error=original_error,
    )


def create_expiry_error(
    value: Any,
    reason: str,
    original_error: Exception | None = None,
) -> InvalidExpiryError:
    """Create an InvalidExpiryError describing the rejected expiry value."""
    return InvalidExpiryError(
        code=ErrorCode.INVALID_EXPIRY,
        message=f"Invalid expiry {value!r}: {reason}",
        context=ErrorContext(
            operation="resolve_expiry",
            additional_data={"expiry_type": type(value).__name__},
        ),
        original_error=original_error,
    )


def create_store_error(
    operation: str,
    original_error: Exception,
    key: str | None = None,
    *,
    write: bool = True,
) -> StoreError:
    """Create a StoreError wrapping a database failure."""
    return StoreError(
        code=ErrorCode.STORE_WRITE_FAILED if write else ErrorCode.STORE_READ_FAILED,
        message=f"Store {operation} failed: {original_error!s}",
        context=ErrorContext(operation=operation, key=key),
        original_error=original_error,
    )
