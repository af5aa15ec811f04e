"""Pytest fixtures for hookmgr tests."""

import pytest

from hookmgr.hooks import HookRegistry, default_registry


@pytest.fixture(autouse=True)
def clean_hook_registry():
    """Clear the default hook registry before and after each test."""
    default_registry.init()
    yield
    default_registry.init()


@pytest.fixture
def registry():
    """A fresh registry, closed after the test."""
    with HookRegistry(eager_resolve=False) as reg:
        yield reg
