"""
Pytest configuration and shared fixtures.
"""

import random

import pytest
from fastapi.testclient import TestClient

from calculateshub.main import app


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def seeded_source():
    """Deterministic random source for generator tests."""
    return random.Random(20251225)
