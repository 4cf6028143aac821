"""
Tests for the severity policy.
"""

import pytest

from energy_monitor.anomaly.models import DetectionMethod, EngineConfig, Severity
from energy_monitor.anomaly.severity import SeverityPolicy


class TestSeverityPolicy:
    """Tests for SeverityPolicy.classify."""

    @pytest.mark.parametrize(
        "score,expected",
        [(2.6, Severity.MEDIUM), (3.5, Severity.MEDIUM), (3.51, Severity.HIGH)],
    )
    def test_z_score(self, score, expected):
        """Test the z-score high boundary is exclusive."""
        assert SeverityPolicy().classify(DetectionMethod.Z_SCORE, score) == expected

    def test_iqr_relative_to_spread(self):
        """Test that IQR severity scales with the interquartile range."""
        policy = SeverityPolicy()

        assert policy.classify(DetectionMethod.IQR, 150.0, spread=100.0) == Severity.MEDIUM
        assert policy.classify(DetectionMethod.IQR, 250.0, spread=100.0) == Severity.HIGH

    def test_iqr_requires_spread(self):
        """Test that IQR classification without spread is rejected."""
        with pytest.raises(ValueError):
            SeverityPolicy().classify(DetectionMethod.IQR, 10.0)

    @pytest.mark.parametrize(
        "score,expected",
        [(0.2, Severity.MEDIUM), (0.30, Severity.MEDIUM), (0.31, Severity.HIGH)],
    )
    def test_predictive(self, score, expected):
        """Test the relative error high boundary."""
        assert SeverityPolicy().classify(DetectionMethod.PREDICTIVE, score) == expected

    def test_never_low(self):
        """Test that crossed thresholds are never classified low."""
        policy = SeverityPolicy()

        for method in (DetectionMethod.Z_SCORE, DetectionMethod.PREDICTIVE):
            assert policy.classify(method, 0.0) is not Severity.LOW

    def test_from_config(self):
        """Test building the policy from engine configuration."""
        policy = SeverityPolicy.from_config(
            EngineConfig(z_score_high=5.0, iqr_high_multiplier=3.0, prediction_error_high=0.5)
        )

        assert policy == SeverityPolicy(5.0, 3.0, 0.5)
        assert policy.classify(DetectionMethod.Z_SCORE, 4.0) == Severity.MEDIUM
