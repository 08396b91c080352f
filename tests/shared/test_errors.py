"""Tests for the structured error hierarchy."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from objectstore.shared.errors import (
    DomainError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    InvalidExpiryError,
    ObjectStoreError,
    SerializationError,
    StoreConnectionError,
    StoreError,
    create_expiry_error,
    create_serialization_error,
    create_store_error,
)


class TestErrorContext:
    """Test ErrorContext coercion and export."""

    def test_additional_data_coerced_to_primitives(self) -> None:
        context = ErrorContext(
            operation="set",
            additional_data={
                "path": Path("/tmp/store.db"),
                "code": ErrorCode.STORE_CLOSED,
                "ratio": Decimal("0.5"),
                "count": 3,
            },
        )

        assert context.additional_data == {
            "path": str(Path("/tmp/store.db")),
            "code": "STORE_CLOSED",
            "ratio": 0.5,
            "count": 3,
        }

    def test_unsupported_additional_data_rejected(self) -> None:
        with pytest.raises(TypeError):
            ErrorContext(additional_data={"obj": object()})

    def test_additional_data_must_be_dict(self) -> None:
        with pytest.raises(TypeError):
            ErrorContext(additional_data=[("a", 1)])  # type: ignore[arg-type]

    def test_safe_dict_truncates_key(self) -> None:
        context = ErrorContext(operation="get", key="k" * 80)

        data = context.safe_dict()

        assert data == {"operation": "get", "key": "k" * 50, "additional_data": {}}


class TestErrorHierarchy:
    """Test exception classes and helpers."""

    @pytest.mark.parametrize(
        ("error_cls", "parent"),
        [
            (SerializationError, DomainError),
            (InvalidExpiryError, DomainError),
            (StoreConnectionError, InfrastructureError),
            (StoreError, InfrastructureError),
        ],
    )
    def test_subclassing(self, error_cls, parent) -> None:
        assert issubclass(error_cls, parent)
        assert issubclass(error_cls, ObjectStoreError)

    def test_str_and_to_dict(self) -> None:
        original = RuntimeError("boom")
        error = StoreError(
            code=ErrorCode.STORE_WRITE_FAILED,
            message="write failed",
            context=ErrorContext(operation="set", key="a"),
            original_error=original,
        )

        assert str(error) == "STORE_WRITE_FAILED: write failed"
        assert error.to_dict() == {
            "code": "STORE_WRITE_FAILED",
            "message": "write failed",
            "context": {"operation": "set", "key": "a", "additional_data": {}},
            "original_error": "boom",
        }

    def test_create_serialization_error(self) -> None:
        error = create_serialization_error("bad", key="k", decode=True)

        assert isinstance(error, SerializationError)
        assert error.code == ErrorCode.DESERIALIZATION_ERROR
        assert error.context.operation == "deserialize"
        assert error.context.key == "k"

    def test_create_expiry_error(self) -> None:
        error = create_expiry_error(1.5, "unsupported type float")

        assert isinstance(error, InvalidExpiryError)
        assert "1.5" in error.message
        assert error.context.additional_data == {"expiry_type": "float"}

    def test_create_store_error_read(self) -> None:
        error = create_store_error("get", OSError("disk"), key="k", write=False)

        assert error.code == ErrorCode.STORE_READ_FAILED
        assert error.context.operation == "get"
        assert "disk" in error.message
