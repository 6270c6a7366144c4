"""Application logging utilities."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from . import config

_LOG_FILE_NAME = "mdnotes.log"


def configure_logging() -> logging.Logger:
    """Configure a rotating log file in the data directory plus stderr warnings."""
    logger = logging.getLogger(config.APP_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(config.log_level())

    handler = RotatingFileHandler(
        config.log_dir() / _LOG_FILE_NAME,
        maxBytes=1_048_576,
        backupCount=5,
        encoding="utf-8",
    )
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.WARNING)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    logger.debug("Logger initialised; logs available at %s", handler.baseFilename)
    if config.cloud_sync_requested() and not config.cloud_sync_enabled():
        logger.warning("MDNOTES_CLOUD_SYNC is set but cloud sync is not supported; ignoring")
    return logger
