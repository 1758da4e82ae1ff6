"""Centralized logging configuration for the ``qbiif`` packages.

Library modules only call ``get_logger("qbiif.<module>")``; handlers are
attached once by the host application through ``configure_logging`` or
``configure_logging_from_settings``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

from qbiif_schemas import ExportSettings

_PKG_LOGGER_NAME = "qbiif"
_LEVEL_ENV_VAR = "QBIIF_LOG_LEVEL"
_CONFIGURED = False


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv(_LEVEL_ENV_VAR) or "WARNING"
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Attach a single ``StreamHandler`` to the ``qbiif`` logger, once.

    ``level`` falls back to the ``QBIIF_LOG_LEVEL`` environment variable and
    then to ``WARNING``.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    resolved = _resolve_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(
        logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s")
    )

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def configure_logging_from_settings(
    settings: ExportSettings, *, stream: IO[str] = sys.stderr
) -> None:
    """Configure logging at ``settings.log_level``."""
    configure_logging(settings.log_level, stream=stream)


def get_logger(name: str) -> logging.Logger:
    """Return a logger, keeping the package silent until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "configure_logging_from_settings", "get_logger"]
