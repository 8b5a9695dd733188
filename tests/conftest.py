"""
Pytest configuration and fixtures for the validation API tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.config import Settings
from src.core.rules import build_default_registry
from src.core.schema import SchemaRegistry


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require the HTTP stack"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that exercise binding, rules and translation together"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests through the HTTP API"
    )


# =======================
# SCHEMA FIXTURES
# =======================

@pytest.fixture
def registry() -> SchemaRegistry:
    """Built-in request schemas"""
    return build_default_registry()


@pytest.fixture
def user_schema(registry):
    """Schema of the User body: Name (letters only), Age (minimum age)"""
    return registry.get("User")


# =======================
# API FIXTURES
# =======================

@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests: text logs, docs enabled"""
    return Settings(environment="test", log_level="WARNING", log_format="text", enable_docs=True)


@pytest.fixture
def app(test_settings, registry):
    """FastAPI application instance for testing"""
    return create_app(settings=test_settings, registry=registry)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Synchronous test client for the FastAPI application"""
    with TestClient(app) as test_client:
        yield test_client


# =======================
# SAMPLE PAYLOADS
# =======================

@pytest.fixture
def valid_user() -> dict:
    return {"name": "ArthurDent", "age": 42}
