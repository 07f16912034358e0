"""Centralized logging configuration for the simulation server and CLI."""

from __future__ import annotations

import logging
import os
from typing import Iterable

from lifesim.exceptions import ConfigurationError

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_ENV = "LIFESIM_LOG_LEVEL"
_VALID_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def resolve_log_level(level: str | None = None) -> str:
    """Pick the explicit level, else ``LIFESIM_LOG_LEVEL``, else INFO."""
    raw_level = level if level is not None else os.getenv(LOG_LEVEL_ENV)
    resolved = (raw_level or "INFO").upper()
    if resolved not in _VALID_LEVELS:
        raise ConfigurationError(f"Unknown log level {raw_level!r}; expected one of {_VALID_LEVELS}")
    return resolved


def configure_logging(
    *,
    level: str | None = None,
    format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    include_uvicorn: bool = True,
    extra_loggers: Iterable[str] | None = None,
) -> logging.Logger:
    """Configure root logging and return the server logger.

    Safe to call more than once; ``basicConfig`` only installs a handler the
    first time, while levels are always re-applied.

    Args:
        level: Explicit log level (see ``resolve_log_level``).
        format: Log format string.
        datefmt: Date format string.
        include_uvicorn: Whether to align uvicorn loggers with the chosen level.
        extra_loggers: Additional logger names to align, e.g. ``("lifesim",)``.

    Returns:
        The ``lifesim.server`` logger.
    """
    resolved_level = resolve_log_level(level)
    logging.basicConfig(level=resolved_level, format=format, datefmt=datefmt)
    logging.getLogger().setLevel(resolved_level)

    aligned = ["lifesim.server", *(extra_loggers or ())]
    if include_uvicorn:
        aligned.extend(("uvicorn", "uvicorn.error", "uvicorn.access"))
    for logger_name in aligned:
        logging.getLogger(logger_name).setLevel(resolved_level)

    app_logger = logging.getLogger("lifesim.server")
    app_logger.debug("Logging configured at %s", resolved_level)
    return app_logger
