"""Shared pytest fixtures."""

import pytest

from envcontent.config import reset_settings
from envcontent.logger import reset_library_logger


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read ENVCONTENT_* variables in every test, class-based or not."""
    reset_settings()
    reset_library_logger()
    yield
    reset_settings()
    reset_library_logger()
