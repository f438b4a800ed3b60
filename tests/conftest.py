import os

import pytest
from typer.testing import CliRunner
from unittest.mock import MagicMock

from tiercache.domain.interfaces.user_interface import UserInterface
from tiercache.infrastructure.cache.multilevel_cache import MultilevelCache
from tiercache.infrastructure.config import settings


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def mock_ui():
    """A UserInterface double that records every display call."""
    return MagicMock(spec=UserInterface)


@pytest.fixture
def demo_cache():
    """The demo chain: [3, LRU] then [2, LFU]."""
    cache = MultilevelCache()
    cache.add_level(3, "LRU")
    cache.add_level(2, "LFU")
    return cache


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keeps tests independent of the user's config file and environment."""
    for key in list(os.environ):
        if key.startswith(settings.ENV_PREFIX):
            monkeypatch.delenv(key)
    monkeypatch.setattr(settings, "_config", {})
    settings.clear_test_config()
    yield
    settings.clear_test_config()
