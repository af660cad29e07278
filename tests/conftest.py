"""Shared fixtures."""

import matplotlib

matplotlib.use("Agg")

import pytest

from iitsim.core.config import SimulatorConfig, set_config


@pytest.fixture(autouse=True)
def default_config():
    """Run every test against a fresh default configuration."""
    config = SimulatorConfig()
    set_config(config)
    yield config
    set_config(None)
