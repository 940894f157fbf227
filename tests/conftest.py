"""Shared pytest fixtures for npm-semver tests."""

import pytest

from npm_semver.config import CACHE_SIZE_ENV_VAR, CONFIG_PATH_ENV_VAR
from npm_semver.engine import SemverEngine, set_default_engine


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep settings from the caller's environment out of the tests."""
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    monkeypatch.delenv(CACHE_SIZE_ENV_VAR, raising=False)


@pytest.fixture(autouse=True)
def engine():
    """Install a fresh engine with its own cache for every test."""
    fresh = SemverEngine()
    set_default_engine(fresh)
    yield fresh
    set_default_engine(None)


# Ascending by precedence; no two entries are equal.
ORDERED_VERSIONS = [
    "0.0.0-0",
    "0.0.0",
    "0.0.1",
    "0.1.0",
    "1.0.0-0",
    "1.0.0-1",
    "1.0.0-2",
    "1.0.0-10",
    "1.0.0-alpha",
    "1.0.0-alpha.1",
    "1.0.0-alpha.beta",
    "1.0.0-beta",
    "1.0.0-beta.2",
    "1.0.0-beta.11",
    "1.0.0-rc.1",
    "1.0.0",
    "1.0.1",
    "1.2.3-pr.1",
    "1.2.3",
    "1.10.0",
    "2.0.0-0",
    "2.0.0",
    "10.0.0",
]


@pytest.fixture
def ordered_versions():
    return list(ORDERED_VERSIONS)
