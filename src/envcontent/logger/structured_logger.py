"""
Structured logger with text or JSON output.

Wraps a standard library ``logging.Logger``; extra keyword arguments travel
as ``extra`` fields and are rendered by the formatters below.
"""

import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from .interface import Logger

# Attributes every LogRecord already has; anything else came from kwargs.
_RECORD_ATTRS = frozenset({
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "levelname", "levelno", "lineno", "module",
    "msecs", "message", "msg", "name", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "thread",
    "threadName", "taskName",
})


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and key != "session_id"
    }


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        session_id = getattr(record, "session_id", None)
        if session_id:
            entry["session_id"] = str(session_id)
        entry.update(_extra_fields(record))
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines with structured fields appended as key=value."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra = _extra_fields(record)
        if extra:
            line += " " + " ".join(f"{k}={v}" for k, v in extra.items())
        return line


class StructuredLogger(Logger):
    """Logger implementation backed by the standard logging module.

    Example:
        logger = StructuredLogger(name="envcontent", level=logging.DEBUG)
        logger.info("Loaded env file", path=".env", pairs=3)

        # JSON lines on stderr, mirrored to a file
        logger = StructuredLogger(
            name="envcontent",
            json_format=True,
            log_file="/tmp/envcontent.log",
            stream=sys.stderr,
        )
    """

    def __init__(
        self,
        name: str = "envcontent",
        level: int = logging.WARNING,
        log_file: Optional[str] = None,
        json_format: bool = False,
        stream: Optional[TextIO] = None,
    ):
        """Initialize the structured logger.

        Args:
            name: Logger name, shown on every record
            level: Logging level (logging.DEBUG, logging.INFO, etc.)
            log_file: Optional file path that receives a copy of every record
            json_format: If True, output logs as JSON; otherwise use text format
            stream: Console stream (default: stdout)
        """
        self._name = name
        self._session_id = str(uuid.uuid4())[:8]
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)

        # Re-initializing a logger of the same name replaces its handlers
        if self._logger.hasHandlers():
            self._logger.handlers.clear()
        self._logger.propagate = False

        if json_format:
            formatter: logging.Formatter = JsonFormatter()
        else:
            formatter = TextFormatter(
                "%(asctime)s [%(levelname)s] [%(name)s] [session:%(session_id)s] %(message)s"
            )

        console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        console_handler.setFormatter(formatter)
        self._logger.addHandler(console_handler)

        if log_file:
            try:
                file_handler = logging.FileHandler(log_file)
            except OSError as e:
                print(f"Failed to setup log file {log_file}: {e}", file=sys.stderr)
            else:
                file_handler.setFormatter(formatter)
                self._logger.addHandler(file_handler)

    @property
    def name(self) -> str:
        return self._name

    def get_session_id(self) -> str:
        return self._session_id

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        extra: Dict[str, Any] = {"session_id": self._session_id}
        for key, value in kwargs.items():
            # LogRecord refuses to overwrite its own attributes
            extra[f"_{key}" if key in _RECORD_ATTRS else key] = value
        self._logger.log(level, message, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, **kwargs)
