"""Test configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from awibi_api.core.config import Settings, get_settings
from awibi_api.main import app, create_app


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    """Create test client for the module-level app."""
    return TestClient(app)


@pytest.fixture
def make_client():
    """Build a test client around an app created with custom settings."""
    def _make(**overrides):
        return TestClient(create_app(Settings(**overrides)))
    return _make


@pytest.fixture
def json_headers():
    """Headers declaring a JSON request body."""
    return {"Content-Type": "application/json"}
