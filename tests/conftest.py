"""Conftest for all pytest configuration - fixtures, hooks, and doctest setup."""

import doctest

import pytest

from emitlite import settings
from emitlite.plugins import manager

# Doctest Configuration


def pytest_configure(config):
    """Configure pytest with custom doctest options."""
    doctest.ELLIPSIS_MARKER = "..."


def pytest_collection_modifyitems(items):
    """Automatically mark doctest items with the 'doctest' marker."""
    for item in items:
        if isinstance(item, pytest.DoctestItem):
            item.add_marker(pytest.mark.doctest)


# Isolation


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Restore global settings and the global plugin manager after each test."""
    original_settings = settings.get_global_settings()
    original_manager = manager._PLUGIN_MANAGER
    manager._PLUGIN_MANAGER = manager._create_plugin_manager()
    yield
    settings.set_global_settings(original_settings)
    manager._PLUGIN_MANAGER = original_manager
