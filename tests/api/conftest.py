"""
API Test Configuration

Provides a test client bound to the bundled fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from engmetrics.api.app import create_app
from engmetrics.config import ApiConfig
from engmetrics.fixtures import FixtureStore


@pytest.fixture
def api_config():
    """Quiet configuration with a short metrics cache."""
    return ApiConfig(log_level="WARNING", cache_max_age=120)


@pytest.fixture
def client(api_config):
    """Create FastAPI test client (runs startup, so fixtures are loaded)."""
    app = create_app(config=api_config, store=FixtureStore())
    with TestClient(app) as test_client:
        yield test_client
