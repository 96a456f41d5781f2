"""Logging for the cmj_kinetics package.

Every module logs under the ``cmj_kinetics`` namespace. The CLI prints
results on stdout, so console log lines always go to a separate stream
(stderr unless told otherwise).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from cmj_kinetics.core.config import LoggingSettings

PACKAGE_LOGGER = "cmj_kinetics"

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: str | int) -> int:
    """Turn a level name or number into a logging level.

    Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    settings: LoggingSettings | None = None,
    level: str | int | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure the package logger.

    Calling this again replaces the handlers from the previous call.

    Args:
        settings: Level and optional log file (defaults to LOG_* env vars)
        level: Overrides ``settings.level``, e.g. from ``--log-level``
        stream: Console stream, stderr by default

    Returns:
        The package logger
    """
    settings = settings or LoggingSettings()
    log_level = resolve_level(level if level is not None else settings.level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream or sys.stderr)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if settings.file:
        log_path = Path(settings.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    # SQL echo is controlled by DB_ECHO, not the app log level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the package namespace.

    ``cmj_kinetics.store.database`` is used as is; a bare ``"batch"``
    becomes ``cmj_kinetics.batch``.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
