"""Logging utilities for hotspots commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "hotspots"

# Anything above CRITICAL silences the logger entirely.
LEVEL_OFF = logging.CRITICAL + 10

_LEVELS_BY_COUNT = (
    LEVEL_OFF,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the hotspots hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def level_for_count(count: int) -> int:
    """Translate the number of ``-V`` flags into a logging level."""
    if count < 0:
        count = 0
    if count >= len(_LEVELS_BY_COUNT):
        return logging.DEBUG
    return _LEVELS_BY_COUNT[count]


def configure_logging(level_count: int = 0, *, log_file: Path | None = None) -> logging.Logger:
    """Configure the hotspots logger with console output and optional file sink."""
    level = level_for_count(level_count)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[hotspots] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["LEVEL_OFF", "configure_logging", "get_logger", "level_for_count"]
