"""EnvContent: an owned key/value mapping loaded from .env style text.

Example:
    from envcontent import EnvContent

    env = EnvContent()
    env.load_file(".env")
    env.get("DATABASE_URL")

    result = env.load_files([".env", ".env.local"])
    if not result.ok:
        print(result.error)
    env.export_to_environment()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from envcontent.config.settings import ParserSettings
from envcontent.exceptions import (
    AlreadyExistsError,
    EmptyError,
    EmptyMapError,
    EnvContentError,
    MissingValueError,
    ReadError,
)
from envcontent.logger import Logger, get_library_logger
from envcontent.parser import iter_entries


@dataclass
class LoadResult:
    """Outcome of loading several files into one mapping.

    Attributes:
        pairs: Everything accumulated across all files
        error: Primary error: the outcome of the last file processed, or
            EmptyError when nothing was loaded at all
        errors: Every per-file error, in the order they happened
        files_loaded: Paths that were read and parsed without error
    """

    pairs: Dict[str, str] = field(default_factory=dict)
    error: Optional[EnvContentError] = None
    errors: List[EnvContentError] = field(default_factory=list)
    files_loaded: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the primary error, if there is one."""
        if self.error is not None:
            raise self.error


class EnvContent:
    """Parse .env style text into a mapping owned by this instance.

    The mapping starts uninitialized, which is different from initialized
    but empty: ``export_to_environment`` refuses the former and silently
    exports nothing for the latter.

    Each load call starts from a fresh mapping unless ``merge=True`` is
    passed. Not safe for concurrent use; callers must serialize access.
    """

    def __init__(
        self,
        encoding: Optional[str] = None,
        reject_duplicates: Optional[bool] = None,
        logger: Optional[Logger] = None,
    ):
        """Initialize an empty, uninitialized EnvContent.

        Args:
            encoding: Encoding for file reads. Falls back to ENVCONTENT_ENCODING
            reject_duplicates: Raise AlreadyExistsError when a load repeats a
                key. Falls back to ENVCONTENT_REJECT_DUPLICATES
            logger: Optional logger instance. Defaults to the shared library
                logger configured by ENVCONTENT_LOG_*

        Raises:
            ConfigurationError: ENVCONTENT_ENCODING names an unknown codec
        """
        if encoding is None or reject_duplicates is None:
            parser_settings = ParserSettings.from_env()
            parser_settings.validate()
            if encoding is None:
                encoding = parser_settings.encoding
            if reject_duplicates is None:
                reject_duplicates = parser_settings.reject_duplicates

        self.encoding = encoding
        self.reject_duplicates = reject_duplicates
        self.logger = logger if logger is not None else get_library_logger()
        self._pairs: Optional[Dict[str, str]] = None

    @property
    def is_initialized(self) -> bool:
        return self._pairs is not None

    def __len__(self) -> int:
        return len(self._pairs) if self._pairs else 0

    def __contains__(self, key: object) -> bool:
        return self._pairs is not None and key in self._pairs

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _start(self, merge: bool) -> Dict[str, str]:
        if not merge or self._pairs is None:
            self._pairs = {}
        return self._pairs

    def _accumulate(self, pairs: Dict[str, str], text: str, source: str) -> None:
        for entry in iter_entries(text):
            if self.reject_duplicates and entry.key in pairs:
                raise AlreadyExistsError(
                    details={"key": entry.key, "line": entry.lineno, "source": source}
                )
            pairs[entry.key] = entry.value

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(details={"path": str(path), "reason": str(e)}) from e

    def parse_text(self, text: str, merge: bool = False) -> Dict[str, str]:
        """Parse multi-line text into the owned mapping.

        Lines are stored as they are parsed; a malformed line stops the call
        but keeps the pairs before it.

        Args:
            text: Raw .env content
            merge: Keep the current mapping and add to it

        Returns:
            A copy of the mapping

        Raises:
            WrongFormatError: A line has zero or several separators
            AlreadyExistsError: A key repeats while reject_duplicates is on
            EmptyError: The mapping is empty after parsing
        """
        pairs = self._start(merge)
        self._accumulate(pairs, text, "<string>")
        if not pairs:
            raise EmptyError()

        self.logger.debug("Parsed env text", pairs=len(pairs))
        return dict(pairs)

    load_from_string = parse_text

    def load_file(self, path: str | Path, merge: bool = False) -> Dict[str, str]:
        """Read one file and parse it into the owned mapping.

        Raises:
            ReadError: The file could not be read or decoded
            WrongFormatError, AlreadyExistsError, EmptyError: As for parse_text
        """
        path = Path(path)
        pairs = self._start(merge)
        text = self._read(path)
        self._accumulate(pairs, text, str(path))
        if not pairs:
            raise EmptyError(details={"path": str(path)})

        self.logger.info("Loaded env file", path=str(path), pairs=len(pairs))
        return dict(pairs)

    load_from_file = load_file

    def load_files(self, paths: Iterable[str | Path], merge: bool = False) -> LoadResult:
        """Read and parse several files into one shared mapping.

        A failing file is recorded and skipped. Pairs it produced before a
        malformed line stay in the mapping.

        Returns:
            LoadResult; never raises for per-file problems
        """
        pairs = self._start(merge)
        result = LoadResult()

        for raw_path in paths:
            path = Path(raw_path)
            try:
                self._accumulate(pairs, self._read(path), str(path))
            except EnvContentError as e:
                e.details.setdefault("path", str(path))
                self.logger.warning("Skipping env file", path=str(path), error=e.code)
                result.errors.append(e)
                result.error = e
                continue
            result.files_loaded.append(str(path))
            result.error = None

        if not pairs:
            result.error = EmptyError()
        result.pairs = dict(pairs)

        self.logger.info(
            "Loaded env files",
            files=len(result.files_loaded),
            failed=len(result.errors),
            pairs=len(pairs),
        )
        return result

    load_from_files = load_files

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get(self, key: str) -> str:
        """Return the value for ``key``.

        Raises:
            MissingValueError: The key is absent or its value is empty
        """
        value = self._pairs.get(key, "") if self._pairs else ""
        if value == "":
            raise MissingValueError(details={"key": key})
        return value

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite one pair, initializing the mapping if needed."""
        if self._pairs is None:
            self._pairs = {}
        self._pairs[key] = value

    def get_all(self) -> Dict[str, str]:
        """Return a copy of the mapping.

        Raises:
            EmptyMapError: Nothing has been loaded or set, or the mapping is empty
        """
        if not self._pairs:
            raise EmptyMapError()
        return dict(self._pairs)

    get_env = get_all

    def export_to_environment(self, override: bool = True) -> int:
        """Copy every pair into ``os.environ``.

        Variables the OS refuses (e.g. an empty name) are logged and skipped.

        Args:
            override: Replace variables that are already set

        Returns:
            Number of variables written

        Raises:
            EmptyMapError: The mapping was never initialized
        """
        if self._pairs is None:
            raise EmptyMapError()

        written = 0
        for key, value in self._pairs.items():
            if not override and key in os.environ:
                continue
            try:
                os.environ[key] = value
            except (ValueError, OSError) as e:
                self.logger.warning("Could not export variable", key=key, reason=str(e))
                continue
            written += 1

        self.logger.debug("Exported env variables", exported=written, total=len(self._pairs))
        return written

    set_env = export_to_environment
