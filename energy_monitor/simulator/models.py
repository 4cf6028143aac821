"""
Data models and enums for the telemetry simulator.
"""

from dataclasses import dataclass
from enum import Enum


class AnomalyType(Enum):
    """Electrical faults that can be injected"""

    VOLTAGE_SAG = "voltage_sag"
    VOLTAGE_SURGE = "voltage_surge"
    CURRENT_SPIKE = "current_spike"
    POWER_SURGE = "power_surge"
    POWER_FACTOR_DROP = "power_factor_drop"


@dataclass
class SimulatorConfig:
    """Configuration for the telemetry simulator"""

    # Fleet
    num_devices: int = 5
    nominal_voltage: float = 230.0

    # Timing
    event_interval_seconds: float = 1.0

    # Anomaly settings
    anomaly_probability: float = 0.02  # 2% chance of anomaly per sample
    enabled_anomalies: list[AnomalyType] | None = None

    # Reproducible runs
    seed: int | None = None

    def __post_init__(self):
        if self.enabled_anomalies is None:
            self.enabled_anomalies = list(AnomalyType)
        if not 0.0 <= self.anomaly_probability <= 1.0:
            raise ValueError(
                f"anomaly_probability must be within [0, 1], got {self.anomaly_probability}"
            )
