"""
Builders for samples, records and clocks used across the test suite.
"""

from datetime import UTC, datetime, timedelta

from energy_monitor.anomaly.features import engineer_features
from energy_monitor.anomaly.models import TelemetrySample

BASE_TIME = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


class FakeClock:
    """Manually advanced clock for retraining tests"""

    def __init__(self, start: datetime = BASE_TIME):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_sample(voltage=230.0, current=5.0, power=None, device_id="dev-001", timestamp=None):
    """Build a TelemetrySample; power defaults to voltage * current"""
    return TelemetrySample(
        device_id=device_id,
        timestamp=timestamp or BASE_TIME,
        voltage=voltage,
        current=current,
        power=voltage * current if power is None else power,
    )


def make_record(voltage=230.0, current=5.0, power=None):
    return engineer_features(make_sample(voltage, current, power))


def grid_records():
    """50 records with power = V * I on a 5 x 10 voltage/current grid"""
    return [
        make_record(voltage, current)
        for voltage in (220.0, 225.0, 230.0, 235.0, 240.0)
        for current in range(1, 11)
    ]


def varied_sample(i, power=None, device_id="dev-001"):
    """Deterministic, mildly varying load profile"""
    voltage = 230.0 + (i % 5) - 2
    current = 3.0 + (i % 7) * 0.5
    return make_sample(voltage, current, power, device_id=device_id)
