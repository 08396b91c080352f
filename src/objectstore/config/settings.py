"""Store configuration models.

Settings are read from ``OBJECTSTORE_*`` environment variables (nested
fields use ``__``, e.g. ``OBJECTSTORE_LOGGING__LEVEL=DEBUG``) and from an
optional ``.env`` file. ``ObjectStore.from_settings()`` loads them; a plain
``ObjectStore(...)`` uses the field defaults without reading the environment.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from objectstore.shared.constants import Connection, Expiry, Logging


class LoggingSettings(BaseModel):
    """Logging configuration.

    Used by ``configure_logging`` to set up the package logger.
    """

    level: str = Field(default=Logging.DEFAULT_LEVEL, description="Logging level")
    file: str | None = Field(default=None, description="JSON log file path")
    console_output: bool = Field(
        default=True,
        description="Use rich console output instead of JSON lines on stderr",
    )

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {value}"
            raise ValueError(msg)
        return level


class StoreSettings(BaseSettings):
    """Object store configuration.

    Explicit ``ObjectStore`` constructor arguments take precedence over
    these values.
    """

    model_config = SettingsConfigDict(
        env_prefix="OBJECTSTORE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    location: str = Field(
        default=Connection.MEMORY,
        description="SQLite database file path or ':memory:'",
    )
    delete_old_on_open: bool = Field(
        default=True,
        description="Sweep expired records when the store is opened",
    )
    default_expires: str = Field(
        default=Expiry.DEFAULT,
        min_length=1,
        description="Expiry used by set() when none is given",
    )
    busy_timeout: float = Field(
        default=Connection.BUSY_TIMEOUT,
        gt=0,
        description="Seconds to wait on a locked database",
    )
    journal_mode: str = Field(
        default=Connection.JOURNAL_MODE,
        description="SQLite journal mode for file databases",
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("journal_mode")
    @classmethod
    def _validate_journal_mode(cls, value: str) -> str:
        mode = value.upper()
        if mode not in {"DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"}:
            msg = f"Unknown journal mode: {value}"
            raise ValueError(msg)
        return mode


__all__ = ["LoggingSettings", "StoreSettings"]
