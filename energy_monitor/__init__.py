"""
Energy Monitor

Streaming anomaly detection for electrical telemetry (voltage, current, power).
"""

__version__ = "1.0.0"
