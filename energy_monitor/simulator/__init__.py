"""
Electrical Telemetry Simulator
Generates realistic device readings with configurable faults and feeds them
to the anomaly engine.
"""

from .config import CHAOS_CONFIG, DEV_CONFIG, NORMAL_CONFIG, VOLTAGE_FOCUS_CONFIG
from .device_state import DeviceState
from .models import AnomalyType, SimulatorConfig
from .simulator import TelemetrySimulator

__all__ = [
    "AnomalyType",
    "SimulatorConfig",
    "DeviceState",
    "TelemetrySimulator",
    "NORMAL_CONFIG",
    "CHAOS_CONFIG",
    "VOLTAGE_FOCUS_CONFIG",
    "DEV_CONFIG",
]
