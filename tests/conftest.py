"""
Pytest configuration and shared fixtures for StuddyBuddy tests.
"""

from pathlib import Path

import pytest

from studdybuddy.auth import MemorySessionStore
from studdybuddy.core.config import ClientConfig

from .helpers import BASE_URL, user_payload


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def stored_user():
    return user_payload()


@pytest.fixture
def memory_store(stored_user):
    return MemorySessionStore(stored_user)


@pytest.fixture
def config_file(tmp_path) -> Path:
    return tmp_path / "config.toml"


@pytest.fixture
def memory_config() -> ClientConfig:
    return ClientConfig(api={"base_url": BASE_URL}, session={"store": "memory"})


@pytest.fixture(autouse=True)
def clean_studdybuddy_env(monkeypatch):
    """Keep the developer's STUDDYBUDDY_* variables out of the tests."""
    for name in (
        "STUDDYBUDDY_BASE_URL",
        "STUDDYBUDDY_TIMEOUT",
        "STUDDYBUDDY_LOGIN_PATH",
        "STUDDYBUDDY_SESSION_FILE",
        "STUDDYBUDDY_LOG_LEVEL",
        "STUDDYBUDDY_LOG_FORMAT",
        "STUDDYBUDDY_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)
