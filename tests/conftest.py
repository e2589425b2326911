"""
Pytest configuration and shared fixtures

Provides the bundled fixture store and copies of its domain roots.
"""

import shutil
from pathlib import Path

import pytest

from engmetrics.fixtures import DEFAULT_FIXTURES_DIR, FixtureStore


@pytest.fixture(scope="session")
def store() -> FixtureStore:
    """Provide a fully loaded store over the bundled fixtures"""
    return FixtureStore().load()


@pytest.fixture
def git_root(store):
    """Provide a private copy of the git metrics domain"""
    return store.get("git")


@pytest.fixture
def correlation_root(store):
    """Provide a private copy of the correlation domain"""
    return store.get("correlation")


@pytest.fixture
def fixtures_copy(tmp_path) -> Path:
    """Provide a writable copy of the bundled fixtures directory"""
    target = tmp_path / "fixtures"
    shutil.copytree(DEFAULT_FIXTURES_DIR, target)
    return target
