"""
Logger interface for envcontent.

EnvContent and the CLI only depend on this contract, so callers can inject
their own implementation.
"""

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """Abstract logging interface.

    Keyword arguments passed to any level method are structured fields,
    rendered as ``key=value`` in text output or as JSON attributes.
    """

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def critical(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def get_session_id(self) -> str:
        """Return the identifier attached to every record of this logger."""
        pass
