"""Shared fixtures for asyncdoc tests.

- runner: Typer CLI test runner
- source: an empty DescriptorSource, so registrations don't leak between tests
- isolated config: every test starts with a cold config cache and no
  ASYNCDOC_* environment overrides
"""

import pytest
from typer.testing import CliRunner

from asyncdoc.core.config import clear_config_cache
from asyncdoc.core.descriptors import DescriptorSource

_ENV_VARS = (
    "ASYNCDOC_CONFIG_PATH",
    "ASYNCDOC_STRICT",
    "ASYNCDOC_LOG_LEVEL",
    "ASYNCDOC_LOG_FORMAT",
    "ASYNCDOC_LOG_FILE",
    "ASYNCDOC_LOG_COLOR",
    "ASYNCDOC_LOG_TIMESTAMP",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Clear cached config and ASYNCDOC_* variables around each test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def runner():
    """Fixture providing a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def source():
    """Fixture providing a DescriptorSource with no registrations."""
    return DescriptorSource()
