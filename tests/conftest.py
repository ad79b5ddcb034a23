"""
Global test configuration and fixtures for the flagkit test suite.

This module provides:
- Pytest collection hooks for automatic test categorization based on file location
- Shared scopes, owners and adapters used across unit and integration tests
"""

import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from flagkit import Features, InMemoryAdapter, OwnerIdentity, Scope


# ============================================================================
# PYTEST CONFIGURATION AND HOOKS
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast, isolated)")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (moderate speed)"
    )
    config.addinivalue_line("markers", "fast: marks tests as fast-running tests")
    config.addinivalue_line("markers", "persistence: marks tests related to flag persistence")
    config.addinivalue_line("markers", "properties: marks Hypothesis property-based tests")


def pytest_collection_modifyitems(config, items):
    """Automatically add markers to tests based on path and file name."""
    tests_root = Path(__file__).parent

    for item in items:
        try:
            test_file = Path(item.fspath).relative_to(tests_root)
        except ValueError:
            test_file = Path(item.fspath)
        parts = test_file.parts

        if "unit" in parts:
            item.add_marker(pytest.mark.unit)
            item.add_marker(pytest.mark.fast)
        elif "integration" in parts:
            item.add_marker(pytest.mark.integration)
        if "persistence" in parts:
            item.add_marker(pytest.mark.persistence)
        if "properties" in test_file.name:
            item.add_marker(pytest.mark.properties)


# ============================================================================
# SHARED FIXTURES
# ============================================================================


@pytest.fixture
def shared_scope():
    """Module scope with one enabled and one argument-driven flag."""
    scope = Scope("SharedFlags")
    scope.declare("some_enabled_feature", True)
    scope.declare("matches_name", computation=lambda inv, value: inv.owner.name == value)
    return scope


@pytest.fixture
def owner():
    return SimpleNamespace(id=123, name="foo")


@pytest.fixture
def identity():
    return OwnerIdentity("Account", 123)


@pytest.fixture
def adapter():
    return InMemoryAdapter()


@pytest.fixture
def make_features(owner, identity):
    """Factory building persistent features over a scope."""

    def _make(scope, adapter, owner_obj=None):
        return Features(scope, owner=owner_obj or owner, adapter=adapter, identity=identity)

    return _make
