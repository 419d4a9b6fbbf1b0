"""Shared pytest fixtures."""

import pytest

from collector.core.settings import SimulationSettings, clear_settings_cache
from collector.services.item_parser import build_item_set


@pytest.fixture(autouse=True)
def clear_cache():
    """Keep cached settings from leaking between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def sample_weights():
    """Weights from the calculator's default input."""
    return [5, 10, 15, 20, 25]


@pytest.fixture
def all_targets_set(sample_weights):
    """Every item in the default pool is a target."""
    return build_item_set(sample_weights, [1, 2, 3, 4, 5])


@pytest.fixture
def no_targets_set(sample_weights):
    """Default pool with nothing to collect."""
    return build_item_set(sample_weights, [])


@pytest.fixture
def serial_settings():
    """Settings that run partitions in the calling thread."""
    return SimulationSettings(executor="serial")
