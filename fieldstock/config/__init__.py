"""Configuration module."""

from fieldstock.config.logging import configure_logging, get_logger
from fieldstock.config.settings import (
    HandoverSettings,
    Settings,
    StockSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "StockSettings",
    "HandoverSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
