"""Exception classes for envcontent.

Every error carries structured information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context (path, line number, key, ...)
"""

from typing import Any, Dict, Optional


class EnvContentError(Exception):
    """Base exception for all envcontent errors.

    Attributes:
        code: Machine-readable error code (e.g., "WRONG_FORMAT")
        message: Human-readable error message
        details: Optional additional context for debugging
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class _KindError(EnvContentError):
    """An error kind with a fixed code and a default message.

    Subclasses only set ``CODE`` and ``MESSAGE``; callers may still pass a
    more specific message as the first positional argument.
    """

    CODE = "ENVCONTENT_ERROR"
    MESSAGE = "envcontent error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(code=self.CODE, message=message or self.MESSAGE, details=details)


class ReadError(_KindError):
    """The underlying file could not be opened or decoded."""

    CODE = "READ_ERROR"
    MESSAGE = "can not read file"


class EmptyError(_KindError):
    """Parsed input yielded zero key/value pairs."""

    CODE = "EMPTY"
    MESSAGE = ".env is empty or does not have key value pairs"


class WrongFormatError(_KindError):
    """A line had no separator, or more than one occurrence of it."""

    CODE = "WRONG_FORMAT"
    MESSAGE = ".env is not in correct format"


class AlreadyExistsError(_KindError):
    """A key was declared twice while duplicate rejection is enabled."""

    CODE = "ALREADY_EXISTS"
    MESSAGE = "key value pair already exists"


class MissingValueError(_KindError):
    """The requested key is absent or maps to an empty string."""

    CODE = "MISSING_VALUE"
    MESSAGE = "value for the given key is not found"


class EmptyMapError(_KindError):
    """An accessor was used before anything was loaded or set."""

    CODE = "EMPTY_MAP"
    MESSAGE = "map has no key value pairs"


class ConfigurationError(_KindError):
    """Settings resolved from the environment are invalid."""

    CODE = "CONFIGURATION_ERROR"
    MESSAGE = "invalid envcontent configuration"
