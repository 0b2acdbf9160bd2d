"""Pytest configuration for the shockwave test suite."""

import logging

import pytest

from shockwave.config import SimulationConfig
from shockwave.core.state import SimulationMode, SimulationState


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo setup_logging() calls made by CLI tests."""
    yield
    logger = logging.getLogger("shockwave")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config():
    """Default 900 × 500 scene."""
    return SimulationConfig()


@pytest.fixture
def wind_state(config):
    """Subsonic wind-mode state laid out like the interactive scene."""
    return SimulationState.create(config=config, mach=0.5, mode=SimulationMode.WIND)


@pytest.fixture
def moving_state(config):
    """Subsonic moving-source state."""
    return SimulationState.create(
        config=config, mach=0.5, mode=SimulationMode.MOVING_SOURCE
    )
