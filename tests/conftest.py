"""Shared fixtures for sandbox_env tests."""

from pathlib import Path
from typing import Callable

import pytest

from sandbox_env.config import reset_settings
from sandbox_env.logger import reset_loggers


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    reset_loggers()
    yield
    reset_settings()
    reset_loggers()


@pytest.fixture
def write_env(tmp_path: Path) -> Callable[[str], Path]:
    """Write content to a `.env` file in a temporary directory."""

    def _write(content: str, name: str = ".env") -> Path:
        env_file = tmp_path / name
        env_file.write_text(content, encoding="utf-8")
        return env_file

    return _write
