"""Configuration for the object store."""

from __future__ import annotations

import logging

from objectstore.config.settings import LoggingSettings, StoreSettings
from objectstore.shared.constants import Logging
from objectstore.shared.logging import setup_structured_logger


def configure_logging(settings: StoreSettings | None = None) -> logging.Logger:
    """Set up the package logger from settings.

    Args:
        settings: Store settings; read from the environment when omitted

    Returns:
        The configured ``objectstore`` logger
    """
    logging_settings = (settings or StoreSettings()).logging
    return setup_structured_logger(
        name=Logging.LOGGER_NAME,
        level=logging_settings.level,
        log_file=logging_settings.file,
        use_rich_console=logging_settings.console_output,
    )


__all__ = ["LoggingSettings", "StoreSettings", "configure_logging"]
