"""Logging configuration for the ``ledger`` package.

Library modules only call ``logging.getLogger(__name__)``. Entry points (the
CLI and the desktop app) call ``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Union

_PKG_LOGGER_NAME = "ledger"
_CONFIGURED = False


def _parse_level(level: Union[int, str, None]) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = getattr(logging, name, None)
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def configure_logging(
    level: Union[int, str, None] = None,
    *,
    fmt: str = "%(asctime)s %(name)s %(levelname)s %(message)s",
    stream: IO[str] = sys.stderr,
) -> None:
    """Attach a single stream handler to the package logger, once."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))
    logger.setLevel(_parse_level(level))
    logger.addHandler(handler)
    # Avoid double emission via the root logger.
    logger.propagate = False

    _CONFIGURED = True


logging.getLogger(_PKG_LOGGER_NAME).addHandler(logging.NullHandler())
