"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from finsolve.config import get_settings


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "scenario: worked examples with known answers")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings for every test so environment overrides take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def rate_grid():
    """Periodic rates used by the round trip tests."""
    return [-0.35, -0.05, -0.001, 0.0, 0.0005, 0.012, 0.034, 0.08, 0.25, 0.9]


@pytest.fixture
def periods_grid():
    return [0, 1, 2, 5, 12, 36, 120]


@pytest.fixture
def value_grid():
    """Present values, all nonzero so every quantity can be solved back."""
    return [-1_000_000.0, -250_000.0, -13_000.0, -1.0, 0.5, 10_000.75, 750_000.0]
