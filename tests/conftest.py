"""Shared test configuration and pytest markers."""

import pytest

from skillmatch.services.matching_engine import MatchingEngine


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "scenario: worked end-to-end matching examples with hand-computed scores"
    )


@pytest.fixture
def engine():
    return MatchingEngine()
