"""Conftest for all pytest configuration - fixtures, hooks, and doctest setup."""

import doctest

import pytest

from tagjson import CodecRegistry
from tagjson import default_registry
from tagjson.settings import TagJsonSettings
from tagjson.settings import set_global_settings

# Doctest Configuration


def pytest_configure(config):
    """Configure pytest with custom doctest options."""
    doctest.ELLIPSIS_MARKER = "..."


def pytest_collection_modifyitems(items):
    """Automatically mark doctest items with the 'doctest' marker."""
    for item in items:
        if isinstance(item, pytest.DoctestItem):
            item.add_marker(pytest.mark.doctest)


# Fixtures


@pytest.fixture
def registry() -> CodecRegistry:
    """An empty registry."""
    return CodecRegistry()


@pytest.fixture
def standard_registry() -> CodecRegistry:
    """A registry with the standard codec set activated."""
    return CodecRegistry().activate_standard()


@pytest.fixture(autouse=True)
def _isolate_global_state():
    """Reset the shared registry and global settings around every test."""
    default_registry.clear()
    set_global_settings(TagJsonSettings())
    yield
    default_registry.clear()
    set_global_settings(TagJsonSettings())
