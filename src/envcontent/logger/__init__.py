"""
envcontent logger module

Usage:
    from envcontent.logger import get_logger, create_logger

    logger = get_logger()
    logger.info("Loaded env file", path=".env", pairs=4)

    logger = create_logger(level=logging.DEBUG, json_format=True, stream=sys.stderr)

Environment Variables:
    {PREFIX}_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    {PREFIX}_LOG_FILE: Optional file path for log output
    {PREFIX}_LOG_FORMAT: "json" or "console" (default)
    {PREFIX}_LOG_JSON: Set to "true" for JSON output format

    Where {PREFIX} is derived from the logger name ("envcontent" -> ENVCONTENT,
    "envcontent-cli" -> ENVCONTENT_CLI)
"""

import logging
import os
from typing import Optional, TextIO

from envcontent.config.settings import LogSettings

from .interface import Logger
from .structured_logger import JsonFormatter, StructuredLogger, TextFormatter

DEFAULT_LOGGER_NAME = "envcontent"
LIBRARY_LOGGER_NAME = "envcontent.library"

_library_logger: Optional[Logger] = None


def _get_env_prefix(name: str) -> str:
    return name.upper().replace("-", "_")


def create_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    json_format: Optional[bool] = None,
    stream: Optional[TextIO] = None,
) -> Logger:
    """Create a logger, filling unset options from environment variables.

    Args:
        name: Logger name; also selects the environment variable prefix
        level: Logging level (defaults to WARNING or {PREFIX}_LOG_LEVEL)
        log_file: Optional file path for log output
        json_format: If True, output logs as JSON
        stream: Console stream (default: stdout)

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
        json_format = (
            os.environ.get(f"{env_prefix}_LOG_JSON", "false").lower() == "true"
            or os.environ.get(f"{env_prefix}_LOG_FORMAT", "console").lower() == "json"
        )

    return StructuredLogger(
        name=name,
        level=level,
        log_file=log_file,
        json_format=json_format,
        stream=stream,
    )


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> Logger:
    """Get a logger configured purely from environment variables."""
    return create_logger(name=name)


def get_library_logger() -> Logger:
    """Return the logger shared by every EnvContent built without one.

    Built once, from ENVCONTENT_LOG_LEVEL, ENVCONTENT_LOG_FORMAT and
    ENVCONTENT_LOG_FILE. Invalid values fall back to the defaults. It has
    its own name, so building it never touches a logger made with
    create_logger().
    """
    global _library_logger
    if _library_logger is None:
        settings = LogSettings.from_env()
        _library_logger = StructuredLogger(
            name=LIBRARY_LOGGER_NAME,
            level=settings.level_number,
            log_file=settings.file,
            json_format=settings.json_format,
        )
    return _library_logger


def reset_library_logger() -> None:
    """Drop the shared library logger so the next use rebuilds it (for testing)."""
    global _library_logger
    _library_logger = None


__all__ = [
    "Logger",
    "StructuredLogger",
    "JsonFormatter",
    "TextFormatter",
    "DEFAULT_LOGGER_NAME",
    "LIBRARY_LOGGER_NAME",
    "create_logger",
    "get_logger",
    "get_library_logger",
    "reset_library_logger",
]
