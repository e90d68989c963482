"""Logging set-up for the cssident command line.

Library modules only ever call :func:`get_logger` or ``logging.getLogger``;
handlers are attached by :func:`configure_logging`, which the CLI runs. Host
applications that import ``cssident`` keep full control of their logging.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

__all__ = ["LOGGER_NAME", "configure_logging", "get_logger", "reset_logging"]

LOGGER_NAME = "cssident"
_DEFAULT_LEVEL = logging.WARNING
_CONSOLE_FORMAT = "%(levelname)s [%(name)s] %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Marks handlers owned by configure_logging so repeat calls replace them.
_OWNED_ATTR = "_cssident_owned"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the ``cssident`` logger.

    ``level`` falls back to ``CSSIDENT_LOG_LEVEL`` and then WARNING;
    ``log_file`` falls back to ``CSSIDENT_LOG_FILE``. Calling this again
    replaces the handlers from the previous call. Records do not propagate to
    the root logger once configured, so CLI output is not duplicated.
    """

    logger = logging.getLogger(LOGGER_NAME)
    reset_logging()

    logger.setLevel(_as_level(level if level not in (None, "") else os.getenv("CSSIDENT_LOG_LEVEL")))
    logger.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    _install(logger, console)

    target_path = log_file or os.getenv("CSSIDENT_LOG_FILE")
    if target_path:
        file_path = Path(target_path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(file_path, encoding="utf-8")
        except OSError as exc:
            logger.warning("Unable to open log file %s (%s); logging to stderr only", file_path, exc)
        else:
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, _DEFAULT_DATEFMT))
            _install(logger, file_handler)

    return logger


def reset_logging() -> None:
    """Remove handlers added by :func:`configure_logging` and restore propagation."""

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, _OWNED_ATTR, False):
            logger.removeHandler(handler)
            handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``cssident`` namespace without configuring it."""

    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def _install(logger: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _OWNED_ATTR, True)
    logger.addHandler(handler)


def _as_level(value: Optional[Union[str, int]]) -> int:
    if isinstance(value, int):
        return value
    if not value:
        return _DEFAULT_LEVEL
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    mapped = logging.getLevelName(text.upper())
    return mapped if isinstance(mapped, int) else _DEFAULT_LEVEL
