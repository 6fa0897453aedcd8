"""Dataclass-based settings for envcontent.

Every setting can be overridden through an environment variable built from
a prefix (default ``ENVCONTENT``), e.g. ``ENVCONTENT_ENCODING=latin-1``.
"""

import codecs
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from envcontent.exceptions import ConfigurationError

DEFAULT_PREFIX = "ENVCONTENT"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("console", "json")
_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass
class ParserSettings:
    """Parsing behaviour

    Attributes:
        encoding: Text encoding used to read .env files
        reject_duplicates: Raise AlreadyExistsError on a repeated key instead
            of overwriting it
    """

    encoding: str = "utf-8"
    reject_duplicates: bool = False

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_PREFIX) -> "ParserSettings":
        """Load parser settings from environment variables

        Environment variables:
            {prefix}_ENCODING: File encoding
            {prefix}_REJECT_DUPLICATES: "true" to reject repeated keys
        """
        return cls(
            encoding=os.environ.get(f"{prefix}_ENCODING", "utf-8"),
            reject_duplicates=_env_flag(f"{prefix}_REJECT_DUPLICATES"),
        )

    def validate(self, prefix: str = DEFAULT_PREFIX) -> None:
        """Raise ConfigurationError if the encoding is not a known codec."""
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ConfigurationError(
                f"Unknown encoding {self.encoding!r}",
                details={"variable": f"{prefix}_ENCODING"},
            ) from None


@dataclass
class LogSettings:
    """Logging configuration

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Log format (console or json)
        file: Optional file receiving a copy of every record
    """

    level: str = "WARNING"
    format: str = "console"
    file: Optional[str] = None

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_PREFIX) -> "LogSettings":
        """Load logging settings from environment variables

        Environment variables:
            {prefix}_LOG_LEVEL: Logging level
            {prefix}_LOG_FORMAT: Log format
            {prefix}_LOG_FILE: Log file path
        """
        return cls(
            level=os.environ.get(f"{prefix}_LOG_LEVEL", "WARNING").upper(),
            format=os.environ.get(f"{prefix}_LOG_FORMAT", "console").lower(),
            file=os.environ.get(f"{prefix}_LOG_FILE") or None,
        )

    @property
    def json_format(self) -> bool:
        return self.format == "json"

    @property
    def level_number(self) -> int:
        """Numeric level; unknown names fall back to WARNING."""
        return getattr(logging, self.level) if self.level in _LOG_LEVELS else logging.WARNING

    def validate(self, prefix: str = DEFAULT_PREFIX) -> None:
        """Raise ConfigurationError for an unknown level or format."""
        if self.level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level {self.level!r}",
                details={"variable": f"{prefix}_LOG_LEVEL", "allowed": list(_LOG_LEVELS)},
            )
        if self.format not in _LOG_FORMATS:
            raise ConfigurationError(
                f"Unknown log format {self.format!r}",
                details={"variable": f"{prefix}_LOG_FORMAT", "allowed": list(_LOG_FORMATS)},
            )


@dataclass
class Settings:
    """Complete envcontent settings

    Attributes:
        parser: Parsing behaviour
        log: Logging settings
        prefix: Environment variable prefix used
    """

    parser: ParserSettings = field(default_factory=ParserSettings)
    log: LogSettings = field(default_factory=LogSettings)
    prefix: str = DEFAULT_PREFIX

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_PREFIX) -> "Settings":
        """Load all settings from environment variables"""
        return cls(
            parser=ParserSettings.from_env(prefix),
            log=LogSettings.from_env(prefix),
            prefix=prefix,
        )

    def validate(self) -> None:
        """Validate settings

        Raises:
            ConfigurationError: If a value is unknown or unusable
        """
        self.log.validate(self.prefix)
        self.parser.validate(self.prefix)


_global_settings: dict[str, Settings] = {}


def get_settings(prefix: str = DEFAULT_PREFIX, reload: bool = False) -> Settings:
    """Get or create the validated settings instance for a prefix

    Args:
        prefix: Environment variable prefix
        reload: If True, re-read the environment
    """
    if prefix not in _global_settings or reload:
        settings = Settings.from_env(prefix=prefix)
        settings.validate()
        _global_settings[prefix] = settings

    return _global_settings[prefix]


def reset_settings(prefix: Optional[str] = None) -> None:
    """Reset cached settings (primarily for testing)

    Args:
        prefix: Specific prefix to reset, or None to reset all
    """
    if prefix:
        _global_settings.pop(prefix, None)
    else:
        _global_settings.clear()
