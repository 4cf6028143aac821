"""
Tests for feature engineering.
"""

import pytest

from energy_monitor.anomaly.features import FEATURE_COLUMNS, engineer_features, query_features
from tests.factories import make_sample


class TestEngineerFeatures:
    """Tests for engineer_features."""

    def test_power_factor_and_efficiency(self):
        """Test that power factor is power over apparent power."""
        record = engineer_features(make_sample(voltage=230.0, current=5.0, power=1035.0))

        assert record.voltage == 230.0
        assert record.current == 5.0
        assert record.power == 1035.0
        assert record.power_factor == pytest.approx(0.9)
        assert record.efficiency == pytest.approx(90.0)

    @pytest.mark.parametrize("voltage,current", [(0.0, 5.0), (230.0, 0.0)])
    def test_zero_apparent_power(self, voltage, current):
        """Test that a degenerate sample yields zero derived features."""
        record = engineer_features(make_sample(voltage=voltage, current=current, power=12.0))

        assert record.power_factor == 0.0
        assert record.efficiency == 0.0


class TestQueryFeatures:
    """Tests for query_features."""

    def test_columns_match_model_inputs(self):
        """Test that query features cover exactly the model inputs."""
        assert list(query_features(230.0, 5.0)) == FEATURE_COLUMNS

    def test_assumes_unit_power_factor(self):
        """Test that a normal query assumes power equals apparent power."""
        features = query_features(230.0, 5.0)

        assert features["power_factor"] == 1.0
        assert features["efficiency"] == 100.0

    def test_small_apparent_power_is_floored(self):
        """Test that apparent power below 1 VA is floored at 1."""
        features = query_features(1.0, 0.5)

        assert features["power_factor"] == pytest.approx(0.5)

    def test_zero_current(self):
        """Test that zero current yields zero derived features."""
        features = query_features(230.0, 0.0)

        assert features["power_factor"] == 0.0
        assert features["efficiency"] == 0.0

    def test_query_assumes_more_than_measured_power_factor(self):
        """Test that queries sit above the training power factor of a lagging load."""
        record = engineer_features(make_sample(voltage=230.0, current=5.0, power=1035.0))
        query = query_features(230.0, 5.0)

        assert record.power_factor == pytest.approx(0.9)
        assert query["power_factor"] > record.power_factor
        assert query["efficiency"] - record.efficiency == pytest.approx(10.0)
