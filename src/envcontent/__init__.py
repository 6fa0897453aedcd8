"""envcontent - parse .env style key/value files.

This package provides:
- EnvContent: load from a string, one file or several files, read and
  write pairs, export them to the process environment
- EnvLoader: layered loading (.env file, OS environment, overrides)
- exceptions: typed errors with structured error info
- logger: structured logging with text or JSON output
- config: typed settings from ENVCONTENT_* environment variables
"""

__version__ = "1.0.0"

from envcontent.content import EnvContent, LoadResult
from envcontent.env_loader import EnvLoader
from envcontent.parser import Entry, iter_entries, split_line

from envcontent.exceptions import (
    EnvContentError,
    ReadError,
    EmptyError,
    WrongFormatError,
    AlreadyExistsError,
    MissingValueError,
    EmptyMapError,
    ConfigurationError,
)

__all__ = [
    "__version__",
    # Core
    "EnvContent",
    "LoadResult",
    "EnvLoader",
    # Parser
    "Entry",
    "iter_entries",
    "split_line",
    # Exceptions
    "EnvContentError",
    "ReadError",
    "EmptyError",
    "WrongFormatError",
    "AlreadyExistsError",
    "MissingValueError",
    "EmptyMapError",
    "ConfigurationError",
]
