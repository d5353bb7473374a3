"""Logging helpers for the ``capflow`` logger hierarchy."""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any

__all__ = ["LOGGER_PREFIX", "get_logger", "configure_logging", "reset_logging"]

LOGGER_PREFIX = "capflow"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False
_lock = threading.Lock()


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``capflow`` namespace."""

    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Attach a single stream handler to the ``capflow`` logger (idempotent)."""

    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    root_logger = logging.getLogger(LOGGER_PREFIX)
    root_logger.setLevel(level.upper() if isinstance(level, str) else level)

    h = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Drop handlers installed by :func:`configure_logging`. For tests."""

    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
