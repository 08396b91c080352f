"""
sqlite-objectstore - key-value object store on SQLite with per-record expiry.
"""

from objectstore.config import StoreSettings, configure_logging
from objectstore.drivers import Driver, SQLiteDriver
from objectstore.expiry import (
    AbsoluteTimestamp,
    RelativeExpression,
    UnixInteger,
    to_datetime,
)
from objectstore.models import Record, StoreInfo
from objectstore.serializers import JsonSerializer, PickleSerializer, Serializer
from objectstore.shared.errors import (
    ErrorCode,
    InvalidExpiryError,
    ObjectStoreError,
    SerializationError,
    StoreConnectionError,
    StoreError,
)
from objectstore.store import ObjectStore

__version__ = "1.1.0"

__all__ = [
    "AbsoluteTimestamp",
    "Driver",
    "ErrorCode",
    "InvalidExpiryError",
    "JsonSerializer",
    "ObjectStore",
    "ObjectStoreError",
    "PickleSerializer",
    "Record",
    "RelativeExpression",
    "SQLiteDriver",
    "SerializationError",
    "Serializer",
    "StoreConnectionError",
    "StoreError",
    "StoreInfo",
    "StoreSettings",
    "UnixInteger",
    "__version__",
    "configure_logging",
    "to_datetime",
]
