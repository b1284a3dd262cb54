"""Logging utilities for reactscope commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "reactscope"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the reactscope hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the reactscope logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[reactscope] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def log_exception(logger: logging.Logger, message: str, exc: BaseException) -> None:
    """Log ``exc`` as a warning, including the traceback only in debug mode."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.warning("%s: %s", message, exc, exc_info=exc)
    else:
        logger.warning("%s: %s", message, exc)


__all__ = ["configure_logging", "get_logger", "log_exception"]
