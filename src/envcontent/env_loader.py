"""Layered environment loader on top of EnvContent.

Loads configuration values in deterministic order:
1) .env file (if provided and exists)
2) OS environment variables
3) Explicit overrides (highest precedence)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from envcontent.content import EnvContent
from envcontent.exceptions import EmptyError


class EnvLoader:
    """Load environment-style key/value pairs with .env support."""

    def __init__(self, env_file: Optional[Path | str] = None, content: Optional[EnvContent] = None) -> None:
        self.env_file = Path(env_file) if env_file else None
        self._content = content

    def _file_values(self, env_path: Path) -> Mapping[str, str]:
        if self._content is None:
            self._content = EnvContent()
        try:
            return self._content.load_file(env_path)
        except EmptyError:
            return {}

    def load(self, overrides: Optional[Mapping[str, object]] = None) -> MutableMapping[str, str]:
        """Load environment data with deterministic precedence.

        Precedence (low -> high): .env file, OS env vars, overrides

        Raises:
            WrongFormatError: The .env file is malformed
            ReadError: The .env file exists but cannot be read
        """
        data: MutableMapping[str, str] = {}

        env_path = self.env_file or Path.cwd() / ".env"
        if env_path.is_file():
            data.update(self._file_values(env_path))

        data.update(os.environ)

        if overrides:
            data.update({k: str(v) for k, v in overrides.items()})

        return data


__all__ = ["EnvLoader"]
