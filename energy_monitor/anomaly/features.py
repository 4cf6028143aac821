"""
Feature engineering shared by the history store and the power predictor.
"""

from .models import FeatureRecord, TelemetrySample

# Model inputs, in the order the regressors see them
FEATURE_COLUMNS = ["voltage", "current", "power_factor", "efficiency"]
TARGET_COLUMN = "power"


def engineer_features(sample: TelemetrySample) -> FeatureRecord:
    """Derive power factor and efficiency from a raw sample

    A zero apparent power (voltage * current == 0) is a degenerate sample:
    both derived features are 0 instead of a division fault.
    """
    apparent_power = sample.voltage * sample.current
    power_factor = sample.power / apparent_power if apparent_power != 0 else 0.0

    return FeatureRecord(
        voltage=sample.voltage,
        current=sample.current,
        power=sample.power,
        power_factor=power_factor,
        efficiency=power_factor * 100,
    )


def query_features(voltage: float, current: float) -> dict[str, float]:
    """Features for a prediction query, where measured power is unknown

    Power is assumed equal to apparent power, floored at 1 VA. Training
    records carry the measured power factor, so devices running well below
    a power factor of 1 sit outside the training distribution at query time
    and raise occasional predictive false positives on clean readings.
    """
    if current > 0:
        apparent_power = voltage * current
        power_factor = apparent_power / max(apparent_power, 1.0)
    else:
        power_factor = 0.0

    return {
        "voltage": voltage,
        "current": current,
        "power_factor": power_factor,
        "efficiency": power_factor * 100,
    }
