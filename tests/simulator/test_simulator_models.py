"""
Tests for simulator models (AnomalyType, SimulatorConfig) and presets.
"""

import pytest

from energy_monitor.simulator import (
    CHAOS_CONFIG,
    DEV_CONFIG,
    NORMAL_CONFIG,
    VOLTAGE_FOCUS_CONFIG,
    AnomalyType,
    SimulatorConfig,
)


class TestAnomalyType:
    """Tests for AnomalyType enum."""

    def test_all_anomaly_types_exist(self):
        """Verify all expected anomaly types are defined."""
        expected_types = {
            "voltage_sag",
            "voltage_surge",
            "current_spike",
            "power_surge",
            "power_factor_drop",
        }
        assert {anomaly.value for anomaly in AnomalyType} == expected_types


class TestSimulatorConfig:
    """Tests for SimulatorConfig dataclass."""

    def test_default_config(self, all_anomaly_types):
        """Test default configuration values."""
        config = SimulatorConfig()

        assert config.num_devices == 5
        assert config.nominal_voltage == 230.0
        assert config.event_interval_seconds == 1.0
        assert config.anomaly_probability == 0.02
        assert config.enabled_anomalies == all_anomaly_types
        assert config.seed is None

    def test_specific_anomalies(self):
        """Test configuration with a subset of anomaly types."""
        config = SimulatorConfig(enabled_anomalies=[AnomalyType.POWER_SURGE])

        assert config.enabled_anomalies == [AnomalyType.POWER_SURGE]

    @pytest.mark.parametrize("probability", [-0.1, 1.5])
    def test_invalid_probability(self, probability):
        """Test that probabilities outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            SimulatorConfig(anomaly_probability=probability)


class TestPresets:
    """Tests for predefined configurations."""

    def test_normal_is_quiet(self):
        assert NORMAL_CONFIG.anomaly_probability < DEV_CONFIG.anomaly_probability

    def test_chaos_is_largest(self):
        assert CHAOS_CONFIG.num_devices == 20
        assert CHAOS_CONFIG.anomaly_probability > NORMAL_CONFIG.anomaly_probability

    def test_voltage_focus_anomalies(self):
        """Test that the grid quality preset only injects voltage faults."""
        assert set(VOLTAGE_FOCUS_CONFIG.enabled_anomalies) == {
            AnomalyType.VOLTAGE_SAG,
            AnomalyType.VOLTAGE_SURGE,
        }
