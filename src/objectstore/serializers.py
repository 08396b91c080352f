"""Value serializers.

A serializer turns application values into the text stored in the
``data`` column and back. The store accepts any object implementing the
``Serializer`` protocol.
"""

from __future__ import annotations

import base64
import pickle
from typing import Any, Protocol, runtime_checkable

import orjson

from objectstore.shared.errors import create_serialization_error


@runtime_checkable
class Serializer(Protocol):
    """Capability interface for value encoding."""

    def dumps(self, value: Any) -> str:
        """Encode a value to text.

        Raises:
            SerializationError: If the value cannot be encoded
        """
        ...

    def loads(self, text: str) -> Any:
        """Decode text produced by ``dumps``.

        Raises:
            SerializationError: If the text cannot be decoded
        """
        ...


class PickleSerializer:
    """Pickle based serializer storing base64 text.

    Round-trips scalars, containers and plain data objects (dataclasses and
    other module-level classes). Live runtime handles such as open files,
    sockets, lambdas and generators are rejected.

    Note:
        Unpickling runs code. Only open databases written by trusted
        processes with this serializer.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self.protocol = protocol

    def dumps(self, value: Any) -> str:
        try:
            payload = pickle.dumps(value, protocol=self.protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise create_serialization_error(
                f"Cannot serialize value of type {type(value).__name__}: {e!s}",
                original_error=e,
            ) from e
        return base64.b64encode(payload).decode("ascii")

    def loads(self, text: str) -> Any:
        try:
            payload = base64.b64decode(text.encode("ascii"), validate=True)
            return pickle.loads(payload)  # noqa: S301
        except Exception as e:  # noqa: BLE001
            # Arbitrary bytes can fail inside the unpickler in many ways
            raise create_serialization_error(
                f"Cannot deserialize stored payload: {e!s}",
                original_error=e,
                decode=True,
            ) from e


class JsonSerializer:
    """JSON serializer using orjson.

    Stored data stays readable from other tools. Supports scalars, lists,
    dicts, dataclasses and datetimes; dataclasses come back as dicts, tuples
    as lists and datetimes as ISO text.
    """

    def __init__(self, *, sort_keys: bool = False) -> None:
        self.option = orjson.OPT_SORT_KEYS if sort_keys else 0

    def dumps(self, value: Any) -> str:
        try:
            return orjson.dumps(value, option=self.option).decode("utf-8")
        except orjson.JSONEncodeError as e:
            raise create_serialization_error(
                f"Cannot serialize value of type {type(value).__name__}: {e!s}",
                original_error=e,
            ) from e

    def loads(self, text: str) -> Any:
        try:
            return orjson.loads(text)
        except orjson.JSONDecodeError as e:
            raise create_serialization_error(
                f"Cannot deserialize stored payload: {e!s}",
                original_error=e,
                decode=True,
            ) from e


__all__ = ["JsonSerializer", "PickleSerializer", "Serializer"]
