"""
Pytest configuration for integration tests.
"""

import pytest


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that drive a full recorder run against a scripted engine"
    )


def pytest_collection_modifyitems(config, items):
    """
    Mark all tests in the integration directory as 'integration' tests.
    """
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
