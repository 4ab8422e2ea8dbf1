"""
sandbox_env logger module

Usage:
    from sandbox_env.logger import get_logger, create_logger

    logger = get_logger("sandbox-env")
    logger.debug("Resolved environment", keys=["GITHUB_TOKEN"])

Environment Variables:
    {PREFIX}_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    {PREFIX}_LOG_FILE: Optional file path for log output
    {PREFIX}_LOG_FORMAT: "json" for JSON output, "console" otherwise

    Where {PREFIX} is derived from the logger name (e.g., SANDBOX_ENV for "sandbox-env")
"""

import logging
import os
import threading
from typing import Dict, Optional

from .interface import Logger
from .structured_logger import (
    REDACTED,
    JsonFormatter,
    StructuredLogger,
    TextFormatter,
    is_secret_name,
)


# Loggers built by create_logger, by name
_loggers: Dict[str, Logger] = {}
_loggers_lock = threading.Lock()


def _get_env_prefix(name: str) -> str:
    """Convert logger name to environment variable prefix.

    Examples:
        "sandbox-env" -> "SANDBOX_ENV"
        "sandbox-env.resolver" -> "SANDBOX_ENV_RESOLVER"
    """
    return name.upper().replace("-", "_").replace(".", "_")


def create_logger(
    name: str = "sandbox-env",
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> Logger:
    """Create a new logger instance.

    Parameters left as None are read from {PREFIX}_LOG_LEVEL,
    {PREFIX}_LOG_FILE and {PREFIX}_LOG_FORMAT.

    Args:
        name: Logger name
        level: Logging level (defaults to WARNING or env var)
        log_file: Optional file path for log output
        json_format: If True, output logs as JSON

    Returns:
        A configured Logger instance
    """
    env_prefix = _get_env_prefix(name)

    if level is None:
        level_str = os.environ.get(f"{env_prefix}_LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, level_str, logging.WARNING)

    if log_file is None:
        log_file = os.environ.get(f"{env_prefix}_LOG_FILE")

    if json_format is None:
        json_format = os.environ.get(f"{env_prefix}_LOG_FORMAT", "console").lower() == "json"

    logger = StructuredLogger(
        name=name,
        level=level,
        log_file=log_file,
        json_format=json_format,
    )
    with _loggers_lock:
        _loggers[name] = logger
    return logger


def get_logger(name: str = "sandbox-env") -> Logger:
    """Get the logger for a name, creating it from environment variables once.

    A logger already built by :func:`create_logger` is returned as is, so
    its level and handlers are left alone.
    """
    with _loggers_lock:
        existing = _loggers.get(name)
    if existing is not None:
        return existing
    return create_logger(name=name)


def reset_loggers() -> None:
    """Forget cached loggers (primarily for testing)."""
    with _loggers_lock:
        _loggers.clear()


__all__ = [
    "Logger",
    "StructuredLogger",
    "JsonFormatter",
    "TextFormatter",
    "REDACTED",
    "is_secret_name",
    "create_logger",
    "get_logger",
    "reset_loggers",
]
