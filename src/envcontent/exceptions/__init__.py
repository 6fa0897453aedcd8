"""Exceptions raised by envcontent.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging

Usage:
    from envcontent.exceptions import EnvContentError, WrongFormatError

    try:
        env.load_file(".env")
    except WrongFormatError as e:
        print(e.details["line"])
    except EnvContentError as e:
        print(e.to_dict())
"""

from envcontent.exceptions.base import (
    AlreadyExistsError,
    ConfigurationError,
    EmptyError,
    EmptyMapError,
    EnvContentError,
    MissingValueError,
    ReadError,
    WrongFormatError,
)

__all__ = [
    # Base exception
    "EnvContentError",
    # Error kinds
    "ReadError",
    "EmptyError",
    "WrongFormatError",
    "AlreadyExistsError",
    "MissingValueError",
    "EmptyMapError",
    "ConfigurationError",
]
