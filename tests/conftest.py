"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Generator, Mapping
from pathlib import Path

import pytest
from hypothesis import settings

from config_locale.utils.logging import resolution_identity_var
from tests.fixtures.config_dirs import ConfigDirFactory, write_config_files

FIXTURES_DIR = Path(__file__).parent / "fixtures"

settings.register_profile("thorough", max_examples=1000)


@pytest.fixture
def locale_fixture_dir() -> Path:
    """Directory holding the shared default/foo.* configuration fixtures."""
    return FIXTURES_DIR / "locale"


@pytest.fixture
def make_config_dir(tmp_path: Path) -> ConfigDirFactory:
    """Factory writing configuration files into a fresh directory."""

    def _make(files: Mapping[str, object]) -> Path:
        return write_config_files(tmp_path / "config", files)

    return _make


@pytest.fixture(autouse=True)
def reset_resolution_identity() -> Generator[None, None, None]:
    """Ensure no test leaks a resolution identity into the next one."""
    token = resolution_identity_var.set(None)
    try:
        yield
    finally:
        resolution_identity_var.reset(token)


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    """Restore root logger handlers and level after configure_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)
