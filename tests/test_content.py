"""Tests for envcontent.content (EnvContent and LoadResult)."""

import io
import json
import logging
import os
from typing import Any, List, Tuple
from unittest.mock import patch

import pytest

from envcontent import EnvContent, EnvLoader, LoadResult
from envcontent.exceptions import (
    AlreadyExistsError,
    ConfigurationError,
    EmptyError,
    EmptyMapError,
    MissingValueError,
    ReadError,
    WrongFormatError,
)
from envcontent.logger import LIBRARY_LOGGER_NAME, Logger, create_logger


class RecordingLogger(Logger):
    """Logger that keeps every call for assertions."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str, dict]] = []

    def _record(self, level: str, message: str, **kwargs: Any) -> None:
        self.records.append((level, message, kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._record("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._record("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._record("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._record("ERROR", message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._record("CRITICAL", message, **kwargs)

    def get_session_id(self) -> str:
        return "recorder"

    def messages(self, level: str) -> List[str]:
        return [message for lvl, message, _ in self.records if lvl == level]


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def env(logger: RecordingLogger) -> EnvContent:
    return EnvContent(encoding="utf-8", reject_duplicates=False, logger=logger)


class TestParseText:
    """Tests for parsing literal strings."""

    def test_two_pairs(self, env):
        result = env.parse_text("key1 = value1\nkey2 = value2")
        assert result == {"key1": "value1", "key2": "value2"}

    def test_comment_blank_and_colon(self, env):
        assert env.parse_text("#comment\n\nkey:value") == {"key": "value"}

    def test_empty_string(self, env):
        with pytest.raises(EmptyError):
            env.parse_text("")
        assert env.is_initialized
        assert len(env) == 0

    def test_only_comments_is_empty_not_wrong_format(self, env):
        with pytest.raises(EmptyError):
            env.parse_text("# first\n\n# second\n")

    def test_no_separator(self, env):
        with pytest.raises(WrongFormatError):
            env.parse_text("keyvalue")

    def test_multiple_separators(self, env):
        with pytest.raises(WrongFormatError):
            env.parse_text("a=b=c")

    def test_no_rollback_on_wrong_format(self, env):
        with pytest.raises(WrongFormatError) as exc_info:
            env.parse_text("a=1\nb=2\nbroken\nc=3")
        assert exc_info.value.details["line"] == 3
        assert env.get_all() == {"a": "1", "b": "2"}

    def test_duplicate_key_overwrites(self, env):
        assert env.parse_text("a=1\na=2") == {"a": "2"}

    def test_each_call_starts_fresh(self, env):
        env.parse_text("a=1")
        assert env.parse_text("b=2") == {"b": "2"}

    def test_merge_keeps_existing_pairs(self, env):
        env.parse_text("a=1")
        assert env.parse_text("b=2", merge=True) == {"a": "1", "b": "2"}

    def test_returns_copy(self, env):
        result = env.parse_text("a=1")
        result["a"] = "changed"
        assert env.get("a") == "1"

    def test_load_from_string_alias(self, env):
        assert env.load_from_string("x=y") == {"x": "y"}

    def test_original_demo_text(self, env):
        text = """#This is a comment1
#This is a comment2

key1 = value1
key2 = value2
key3 = value3
key4 = value4

key5 = value5
key7 = value7"""
        result = env.parse_text(text)
        assert len(result) == 6
        assert env.get("key5") == "value5"
        with pytest.raises(MissingValueError):
            env.get("key0")


class TestRejectDuplicates:
    """Tests for the opt-in AlreadyExistsError behaviour."""

    def test_duplicate_in_one_text(self, logger):
        env = EnvContent(encoding="utf-8", reject_duplicates=True, logger=logger)
        with pytest.raises(AlreadyExistsError) as exc_info:
            env.parse_text("a=1\nb=2\na=3")
        assert exc_info.value.details["key"] == "a"
        assert exc_info.value.details["line"] == 3
        assert env.get("a") == "1"

    def test_duplicate_across_files(self, tmp_path, logger):
        first = tmp_path / "first.env"
        second = tmp_path / "second.env"
        first.write_text("a=1\n")
        second.write_text("a=2\n")

        env = EnvContent(encoding="utf-8", reject_duplicates=True, logger=logger)
        result = env.load_files([first, second])

        assert isinstance(result.error, AlreadyExistsError)
        assert result.pairs == {"a": "1"}

    def test_set_still_overwrites(self, logger):
        env = EnvContent(encoding="utf-8", reject_duplicates=True, logger=logger)
        env.set("a", "1")
        env.set("a", "2")
        assert env.get("a") == "2"

    def test_enabled_from_environment(self, logger):
        with patch.dict(os.environ, {"ENVCONTENT_REJECT_DUPLICATES": "true"}):
            env = EnvContent(logger=logger)
        assert env.reject_duplicates is True


class TestLoadFile:
    """Tests for loading a single file."""

    def test_valid_file(self, env, tmp_path):
        path = tmp_path / ".env"
        path.write_text("# settings\nHOST = localhost\nPORT: 8080\n")

        assert env.load_file(path) == {"HOST": "localhost", "PORT": "8080"}

    def test_accepts_string_path(self, env, tmp_path):
        path = tmp_path / ".env"
        path.write_text("a=1")
        assert env.load_file(str(path)) == {"a": "1"}

    def test_missing_file(self, env, tmp_path):
        with pytest.raises(ReadError) as exc_info:
            env.load_file(tmp_path / "missing.txt")

        assert exc_info.value.details["path"].endswith("missing.txt")
        assert env.is_initialized
        with pytest.raises(EmptyMapError):
            env.get_all()

    def test_missing_file_clears_previous_pairs(self, env, tmp_path):
        env.parse_text("a=1")
        with pytest.raises(ReadError):
            env.load_file(tmp_path / "missing.txt")
        assert len(env) == 0

    def test_directory_is_read_error(self, env, tmp_path):
        with pytest.raises(ReadError):
            env.load_file(tmp_path)

    def test_undecodable_file_is_read_error(self, env, tmp_path):
        path = tmp_path / ".env"
        path.write_bytes(b"key=\xff\xfe\xfa")
        with pytest.raises(ReadError):
            env.load_file(path)

    def test_custom_encoding(self, tmp_path, logger):
        path = tmp_path / ".env"
        path.write_bytes("name=café".encode("latin-1"))
        env = EnvContent(encoding="latin-1", reject_duplicates=False, logger=logger)
        assert env.load_file(path) == {"name": "café"}

    def test_empty_file(self, env, tmp_path):
        path = tmp_path / ".env"
        path.write_text("\n\n# nothing here\n")
        with pytest.raises(EmptyError):
            env.load_file(path)

    def test_malformed_file(self, env, tmp_path):
        path = tmp_path / ".env"
        path.write_text("a=1\njust text\n")
        with pytest.raises(WrongFormatError):
            env.load_file(path)

    def test_logs_load(self, env, logger, tmp_path):
        path = tmp_path / ".env"
        path.write_text("SECRET=hunter2\n")
        env.load_file(path)

        assert "Loaded env file" in logger.messages("INFO")
        # Values are never logged
        assert "hunter2" not in repr(logger.records)

    def test_load_from_file_alias(self, env, tmp_path):
        path = tmp_path / ".env"
        path.write_text("a=1")
        assert env.load_from_file(path) == {"a": "1"}


class TestLoadFiles:
    """Tests for loading several files into one mapping."""

    def test_accumulates_in_order(self, env, tmp_path):
        (tmp_path / "a.env").write_text("a=1\nshared=first\n")
        (tmp_path / "b.env").write_text("b=2\nshared=second\n")

        result = env.load_files([tmp_path / "a.env", tmp_path / "b.env"])

        assert result.ok
        assert result.pairs == {"a": "1", "b": "2", "shared": "second"}
        assert len(result.files_loaded) == 2
        assert result.errors == []

    def test_missing_then_valid(self, env, tmp_path):
        """A later success supersedes an earlier read error."""
        valid = tmp_path / "valid.txt"
        valid.write_text("a=1")

        result = env.load_files([tmp_path / "missing.txt", valid])

        assert result.pairs == {"a": "1"}
        assert result.error is None
        assert len(result.errors) == 1
        assert isinstance(result.errors[0], ReadError)

    def test_valid_then_missing(self, env, tmp_path):
        valid = tmp_path / "valid.txt"
        valid.write_text("a=1")

        result = env.load_files([valid, tmp_path / "missing.txt"])

        assert result.pairs == {"a": "1"}
        assert isinstance(result.error, ReadError)
        assert not result.ok

    def test_last_error_wins(self, env, tmp_path):
        bad = tmp_path / "bad.env"
        bad.write_text("ok=1\nnot valid\n")

        result = env.load_files([tmp_path / "missing.env", bad])

        assert isinstance(result.error, WrongFormatError)
        assert [type(e) for e in result.errors] == [ReadError, WrongFormatError]
        # Pairs before the malformed line are kept
        assert result.pairs == {"ok": "1"}

    def test_parse_error_does_not_stop_batch(self, env, tmp_path):
        bad = tmp_path / "bad.env"
        good = tmp_path / "good.env"
        bad.write_text("a=b=c\n")
        good.write_text("x=1\n")

        result = env.load_files([bad, good])

        assert result.pairs == {"x": "1"}
        assert result.error is None
        assert result.errors[0].details["path"] == str(bad)

    def test_empty_takes_priority(self, env, tmp_path):
        result = env.load_files([tmp_path / "missing1", tmp_path / "missing2"])

        assert isinstance(result.error, EmptyError)
        assert result.pairs == {}
        assert len(result.errors) == 2

    def test_no_paths(self, env):
        result = env.load_files([])
        assert isinstance(result.error, EmptyError)

    def test_owned_mapping_updated(self, env, tmp_path):
        (tmp_path / "a.env").write_text("a=1\n")
        env.load_files([tmp_path / "a.env"])
        assert env.get("a") == "1"

    def test_failed_file_logged_as_warning(self, env, logger, tmp_path):
        env.load_files([tmp_path / "missing.env"])
        assert "Skipping env file" in logger.messages("WARNING")

    def test_raise_for_error(self, env, tmp_path):
        result = env.load_files([tmp_path / "missing.env"])
        with pytest.raises(EmptyError):
            result.raise_for_error()

    def test_load_from_files_alias(self, env, tmp_path):
        (tmp_path / "a.env").write_text("a=1\n")
        assert env.load_from_files([tmp_path / "a.env"]).pairs == {"a": "1"}


class TestAccessors:
    """Tests for get, set and get_all."""

    def test_get_present(self, env):
        env.parse_text("a=1")
        assert env.get("a") == "1"

    def test_get_absent(self, env):
        env.parse_text("a=1")
        with pytest.raises(MissingValueError) as exc_info:
            env.get("b")
        assert exc_info.value.details["key"] == "b"

    def test_get_empty_value(self, env):
        env.parse_text("a=1\nempty=")
        with pytest.raises(MissingValueError):
            env.get("empty")

    def test_get_before_load(self, env):
        with pytest.raises(MissingValueError):
            env.get("anything")

    def test_set_initializes(self, env):
        assert not env.is_initialized
        env.set("a", "1")
        assert env.is_initialized
        assert env.get_all() == {"a": "1"}

    def test_set_overwrites(self, env):
        env.parse_text("a=1")
        env.set("a", "2")
        assert env.get("a") == "2"

    def test_get_all_uninitialized(self, env):
        with pytest.raises(EmptyMapError):
            env.get_all()

    def test_get_all_returns_copy(self, env):
        env.set("a", "1")
        env.get_all()["a"] = "changed"
        assert env.get("a") == "1"

    def test_get_env_alias(self, env):
        env.set("a", "1")
        assert env.get_env() == {"a": "1"}

    def test_contains_and_len(self, env):
        assert "a" not in env
        env.parse_text("a=1\nb=2")
        assert "a" in env
        assert len(env) == 2


class TestExportToEnvironment:
    """Tests for exporting pairs to os.environ."""

    def test_exports_pairs(self, env, monkeypatch):
        monkeypatch.delenv("ENVCONTENT_TEST_A", raising=False)
        env.parse_text("ENVCONTENT_TEST_A = alpha")

        with patch.dict(os.environ):
            assert env.export_to_environment() == 1
            assert os.environ["ENVCONTENT_TEST_A"] == "alpha"

    def test_uninitialized_raises(self, env):
        with pytest.raises(EmptyMapError):
            env.export_to_environment()

    def test_initialized_but_empty_exports_nothing(self, env):
        with pytest.raises(EmptyError):
            env.parse_text("")
        assert env.export_to_environment() == 0

    def test_override_false_keeps_existing(self, env, monkeypatch):
        monkeypatch.setenv("ENVCONTENT_TEST_B", "original")
        env.parse_text("ENVCONTENT_TEST_B=new\nENVCONTENT_TEST_C=added")

        with patch.dict(os.environ):
            assert env.export_to_environment(override=False) == 1
            assert os.environ["ENVCONTENT_TEST_B"] == "original"
            assert os.environ["ENVCONTENT_TEST_C"] == "added"

    def test_rejected_name_is_skipped(self, env, logger):
        env.parse_text("=orphan\nENVCONTENT_TEST_D=ok")

        with patch.dict(os.environ):
            assert env.export_to_environment() == 1
            assert os.environ["ENVCONTENT_TEST_D"] == "ok"

        assert "Could not export variable" in logger.messages("WARNING")

    def test_set_env_alias(self, env):
        env.set("ENVCONTENT_TEST_E", "e")
        with patch.dict(os.environ):
            env.set_env()
            assert os.environ["ENVCONTENT_TEST_E"] == "e"


class TestLoadResult:
    """Tests for the LoadResult value object."""

    def test_defaults(self):
        result = LoadResult()
        assert result.ok
        assert result.pairs == {}
        result.raise_for_error()

    def test_not_ok_with_error(self):
        result = LoadResult(error=EmptyError())
        assert not result.ok


class TestDefaults:
    """Tests for settings and logger defaults taken from the environment."""

    def test_parser_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("ENVCONTENT_ENCODING", "latin-1")

        env = EnvContent(logger=RecordingLogger())

        assert env.encoding == "latin-1"
        assert env.reject_duplicates is False

    def test_unknown_encoding_rejected(self, monkeypatch):
        monkeypatch.setenv("ENVCONTENT_ENCODING", "no-such-codec")
        with pytest.raises(ConfigurationError):
            EnvContent(logger=RecordingLogger())

    def test_invalid_log_format_does_not_block_parsing(self, monkeypatch):
        monkeypatch.setenv("ENVCONTENT_LOG_FORMAT", "yaml")
        monkeypatch.setenv("ENVCONTENT_LOG_LEVEL", "chatty")

        env = EnvContent()

        assert env.parse_text("a=1") == {"a": "1"}

    def test_library_logger_honours_log_format(self, monkeypatch, capsys):
        monkeypatch.setenv("ENVCONTENT_LOG_FORMAT", "json")
        monkeypatch.setenv("ENVCONTENT_LOG_LEVEL", "DEBUG")

        EnvContent().parse_text("a=1")

        entry = json.loads(capsys.readouterr().out.strip())
        assert entry["message"] == "Parsed env text"
        assert entry["level"] == "DEBUG"
        assert entry["logger"] == LIBRARY_LOGGER_NAME
        assert entry["pairs"] == 1

    def test_library_logger_is_shared(self):
        assert EnvContent().logger is EnvContent().logger

    def test_injected_logger_survives_other_instances(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("A=1\n")
        buf = io.StringIO()
        injected = EnvContent(logger=create_logger(level=logging.DEBUG, stream=buf))

        EnvContent()
        EnvLoader(env_file).load()
        injected.parse_text("x=1")

        assert "Parsed env text" in buf.getvalue()
