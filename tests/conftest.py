"""
Pytest configuration and shared fixtures.
"""

import pytest

from energy_monitor.anomaly.models import EngineConfig
from energy_monitor.simulator.models import AnomalyType, SimulatorConfig
from tests.factories import FakeClock


# Engine fixtures
@pytest.fixture
def engine_config():
    """Default engine configuration."""
    return EngineConfig()


@pytest.fixture
def linear_config():
    """Engine configuration with the fast OLS backend."""
    return EngineConfig(regressor_name="linear")


@pytest.fixture
def clock():
    """Clock frozen at BASE_TIME until advanced."""
    return FakeClock()


# Simulator fixtures
@pytest.fixture
def minimal_sim_config():
    """Small simulator configuration without anomalies."""
    return SimulatorConfig(
        num_devices=2,
        event_interval_seconds=0.01,
        anomaly_probability=0.0,
        seed=42,
    )


@pytest.fixture
def all_anomaly_types():
    """List of all anomaly types."""
    return list(AnomalyType)
