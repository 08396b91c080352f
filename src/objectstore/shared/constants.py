"""
Store Constants

Centralized constants for the object store: schema names, expiry defaults
and the timestamp format shared by the write path and the sweep.
"""


class Schema:
    """Table and column names of the persisted store."""

    TABLE = "store"
    KEY_COLUMN = "datakey"
    DATA_COLUMN = "data"
    EXPIRES_COLUMN = "expires"
    EXPIRES_INDEX = "idx_store_expires"


class Expiry:
    """Expiry defaults and formats."""

    DEFAULT = "90 seconds"
    # Second precision with a zero-padded year; lexical order equals
    # chronological order. strftime("%Y") does not pad years below 1000.
    TIMESTAMP_FORMAT = "{year:04d}-{value:%m-%d %H:%M:%S}"
    PARSER_LANGUAGES = ["en"]


class Connection:
    """Connection defaults."""

    MEMORY = ":memory:"
    BUSY_TIMEOUT = 5.0
    JOURNAL_MODE = "WAL"
    SYNCHRONOUS = "NORMAL"


class Logging:
    """Logging defaults."""

    LOGGER_NAME = "objectstore"
    DEFAULT_LEVEL = "INFO"
    KEY_PREVIEW_LENGTH = 50


__all__ = [
    "Connection",
    "Expiry",
    "Logging",
    "Schema",
]
