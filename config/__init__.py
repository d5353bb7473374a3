"""Application configuration utilities."""

from .logging import configure_logging, get_logger, reset_logging
from .settings import DEFAULT_OPENING_BALANCE, Settings, get_settings

__all__ = [
    "DEFAULT_OPENING_BALANCE",
    "Settings",
    "configure_logging",
    "get_logger",
    "get_settings",
    "reset_logging",
]
