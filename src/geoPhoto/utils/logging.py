"""Logging helpers shared across the package."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "geoPhoto"
CONSOLE_HANDLER_NAME = "geophoto-console"

logger = logging.getLogger(LOGGER_NAME)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child logger when *name* is given."""

    if not name:
        return logger
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logger.getChild(name)


def setup_logging(level: int = logging.INFO) -> None:
    """Attach a stderr handler to the package logger once."""

    logger.setLevel(level)
    for handler in logger.handlers:
        if getattr(handler, "name", None) == CONSOLE_HANDLER_NAME:
            handler.setLevel(level)
            # Rebind so repeated CLI invocations follow a swapped sys.stderr.
            handler.setStream(sys.stderr)
            return
    handler = logging.StreamHandler(sys.stderr)
    handler.name = CONSOLE_HANDLER_NAME
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)


__all__ = ["LOGGER_NAME", "get_logger", "logger", "setup_logging"]
