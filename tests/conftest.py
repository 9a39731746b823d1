"""Shared test fixtures for all tests."""

import pytest


@pytest.fixture
def sample_station_id() -> str:
    """Sample Weather Underground station ID for testing."""
    return "KXATEST1"


@pytest.fixture
def sample_api_key() -> str:
    """Sample Weather Underground API key for testing."""
    return "0123456789abcdef"
