"""Logging configuration module.

This module configures logging for the Story Swap token service.
It provides a centralized logger configuration that can be used across the application.
"""

import logging
import sys
from typing import Dict, Any, Optional

from storyswap.config import Settings

ROOT_LOGGER_NAME = "storyswap"

def setup_logger(settings: Settings) -> logging.Logger:
    """Set up and configure the package logger.

    Safe to call more than once; the console handler is only attached the
    first time.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(settings.LOG_LEVEL)

    # Reduce third-party logging
    logging.getLogger('jose').setLevel(logging.WARNING)
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)

    if not any(getattr(h, "_storyswap_handler", False) for h in logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
        console_handler._storyswap_handler = True
        logger.addHandler(console_handler)

    for handler in logger.handlers:
        handler.setLevel(settings.LOG_LEVEL)

    return logger

def get_logger(name: str) -> logging.Logger:
    """Get a logger instance under the package logger."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None
) -> None:
    """Log an error with optional context."""
    error_data = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }
    if context:
        error_data.update(context)
    (logger or logging.getLogger(ROOT_LOGGER_NAME)).error(
        "Error occurred", extra=error_data, exc_info=error
    )

__all__ = ["setup_logger", "get_logger", "log_error"]
