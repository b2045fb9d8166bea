"""Shared pytest fixtures for stereoproc tests."""

import pytest

from stereoproc.loader import DryRunUnitLoader
from stereoproc.params import InMemoryParameterStore
from stereoproc.preflight import StaticNameResolver


@pytest.fixture
def resolver():
    """Resolver for an orchestrator started correctly in the /stereo namespace.

    Returns:
        StaticNameResolver whose resolved name is /stereo/stereo_image_proc.
    """
    return StaticNameResolver("stereo_image_proc", "/stereo")


@pytest.fixture
def store():
    """Empty in-memory parameter store."""
    return InMemoryParameterStore()


@pytest.fixture
def loader():
    """Dry-run loader that records every load call."""
    return DryRunUnitLoader()
