"""Central logging configuration for the ``lineup`` package.

Two helpers:

- ``configure_logging(...)``: attach one ``StreamHandler`` to the package
  logger (``"lineup"``). Called by the CLI root callback before any command
  runs. Calling it again only adjusts the level and stream.
- ``get_logger(name)``: fetch ``"lineup.<module>"`` loggers; until the CLI
  configures output, the package logger carries a ``NullHandler`` so library
  use stays silent.

Diagnostics go to stderr so they never interleave with the month/static
tables written to stdout. The default level is WARNING for the same reason;
``LINEUP_LOG_LEVEL=DEBUG`` shows every store write.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "lineup"
_LEVEL_ENV = "LINEUP_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.StreamHandler | None = None


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str) and level.strip():
        text = level.strip().upper()
        if text.isdigit():
            return int(text)
        numeric = logging.getLevelName(text)
        if isinstance(numeric, int):
            return numeric
        raise ValueError(f"unknown log level: {level!r}")
    env_val = os.getenv(_LEVEL_ENV)
    if env_val:
        return _parse_level(env_val)
    return logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure the package logger.

    Parameters
    ----------
    level:
        ``int`` or level name. ``None`` falls back to ``LINEUP_LOG_LEVEL``, then
        ``logging.WARNING``.
    fmt:
        Optional format string; defaults to ``"%(asctime)s %(name)s %(levelname)s %(message)s"``.
    stream:
        Destination of the handler; the current ``sys.stderr`` when omitted.
    """

    global _handler
    resolved = _parse_level(level)
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    logger.setLevel(resolved)

    if _handler is not None:
        _handler.setLevel(resolved)
        # Each CLI run may hand us a different stderr (e.g. under a test runner).
        _handler.stream = stream if stream is not None else sys.stderr
        return

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    _handler = handler


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``, adding a ``NullHandler`` to the package if unconfigured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
