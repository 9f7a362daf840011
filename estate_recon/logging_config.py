"""Logging configuration for the reconciliation back office."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from estate_recon.config import get_settings

ROOT_LOGGER = "estate_recon"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int | str | None = None,
    log_file: Path | str | None = None,
    log_format: str | None = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Level and log file fall back to LOG_LEVEL and LOG_FILE from
    the settings. Calling this twice replaces the handlers rather
    than stacking duplicates.
    """
    settings = get_settings()
    if level is None:
        level = settings.LOG_LEVEL
    if log_file is None and settings.LOG_FILE:
        log_file = settings.LOG_FILE
    if log_format is None:
        log_format = DEFAULT_FORMAT

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - "
            "%(filename)s:%(lineno)d - %(message)s"
        ))
        logger.addHandler(file_handler)

    return logger
