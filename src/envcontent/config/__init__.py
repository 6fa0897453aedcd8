"""Configuration Module for envcontent

Typed settings resolved from environment variables. The prefix defaults to
ENVCONTENT, so ENVCONTENT_ENCODING, ENVCONTENT_REJECT_DUPLICATES,
ENVCONTENT_LOG_LEVEL and ENVCONTENT_LOG_FORMAT are recognised.

Example:
    from envcontent.config import get_settings

    settings = get_settings()
    settings.parser.encoding
"""

from envcontent.config.settings import (
    DEFAULT_PREFIX,
    LogSettings,
    ParserSettings,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "DEFAULT_PREFIX",
    # Dataclass settings
    "ParserSettings",
    "LogSettings",
    "Settings",
    # Singleton
    "get_settings",
    "reset_settings",
]
