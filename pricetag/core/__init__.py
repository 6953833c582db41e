"""Core module exports."""

from pricetag.core.config import Settings, get_settings
from pricetag.core.exceptions import (
    AppError,
    CacheWriteError,
    ErrorKind,
    FeedUnavailableError,
    RenderError,
)
from pricetag.core.logging import get_logger, setup_logging

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "get_logger",
    "setup_logging",
    # Exceptions
    "AppError",
    "CacheWriteError",
    "ErrorKind",
    "FeedUnavailableError",
    "RenderError",
]
