"""
Predefined simulator configurations for different operating scenarios.
"""

from .models import AnomalyType, SimulatorConfig

# Normal operation (low fault rate)
NORMAL_CONFIG = SimulatorConfig(
    num_devices=10,
    anomaly_probability=0.005,
    event_interval_seconds=2.0,
)


# Chaos mode (frequent faults of every type)
CHAOS_CONFIG = SimulatorConfig(
    num_devices=20,
    anomaly_probability=0.08,
    event_interval_seconds=0.5,
)


# Grid quality issues only
VOLTAGE_FOCUS_CONFIG = SimulatorConfig(
    num_devices=8,
    anomaly_probability=0.03,
    enabled_anomalies=[AnomalyType.VOLTAGE_SAG, AnomalyType.VOLTAGE_SURGE],
    event_interval_seconds=1.0,
)


# Development/Testing (fast and small)
DEV_CONFIG = SimulatorConfig(
    num_devices=3, anomaly_probability=0.05, event_interval_seconds=0.1
)
