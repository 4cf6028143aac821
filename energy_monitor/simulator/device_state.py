"""
Device state management and telemetry generation.
"""

import random
from datetime import UTC, datetime

from ..anomaly.models import TelemetrySample
from .models import AnomalyType


class DeviceState:
    """Tracks the electrical state of a metered device over time"""

    def __init__(
        self,
        device_id: str,
        nominal_voltage: float = 230.0,
        rng: random.Random | None = None,
    ):
        self.device_id = device_id
        self.rng = rng or random.Random()

        # Base values (the load profile of the device)
        self.base_voltage = self.rng.uniform(nominal_voltage - 3, nominal_voltage + 3)
        self.base_current = self.rng.uniform(2.0, 10.0)
        self.base_power_factor = self.rng.uniform(0.85, 0.98)

        # Cumulative energy in kWh
        self.energy_kwh = 0.0

        # Current anomaly state
        self.active_anomaly: AnomalyType | None = None
        self.anomaly_duration: int = 0

    def generate_sample(
        self,
        inject_anomaly: AnomalyType | None = None,
        timestamp: datetime | None = None,
        interval_seconds: float = 1.0,
    ) -> TelemetrySample:
        """Generate one telemetry sample with optional fault injection

        Args:
            inject_anomaly: Optional anomaly type to start
            timestamp: Optional custom timestamp (defaults to now, UTC)
            interval_seconds: Time covered by the sample, for energy accumulation
        """
        if inject_anomaly:
            self.active_anomaly = inject_anomaly
            self.anomaly_duration = self.rng.randint(5, 20)  # lasts 5-20 samples

        voltage_mult = 1.0
        current_mult = 1.0
        pf_mult = 1.0
        power_mult = 1.0

        if self.active_anomaly:
            if self.active_anomaly == AnomalyType.VOLTAGE_SAG:
                voltage_mult = self.rng.uniform(0.75, 0.85)
            elif self.active_anomaly == AnomalyType.VOLTAGE_SURGE:
                voltage_mult = self.rng.uniform(1.12, 1.25)
            elif self.active_anomaly == AnomalyType.CURRENT_SPIKE:
                current_mult = self.rng.uniform(2.5, 4.0)
            elif self.active_anomaly == AnomalyType.POWER_SURGE:
                # Power reading diverges from voltage * current
                power_mult = self.rng.uniform(1.8, 2.5)
            elif self.active_anomaly == AnomalyType.POWER_FACTOR_DROP:
                pf_mult = self.rng.uniform(0.5, 0.7)

            self.anomaly_duration -= 1
            if self.anomaly_duration <= 0:
                self.active_anomaly = None

        # Natural variation
        voltage = self.base_voltage * voltage_mult * self.rng.uniform(0.985, 1.015)
        current = self.base_current * current_mult * self.rng.uniform(0.95, 1.05)
        power_factor = min(
            1.0, self.base_power_factor * pf_mult + self.rng.uniform(-0.01, 0.01)
        )
        power = voltage * current * power_factor * power_mult

        self.energy_kwh += power * interval_seconds / 3_600_000

        return TelemetrySample(
            device_id=self.device_id,
            timestamp=timestamp or datetime.now(UTC),
            voltage=round(voltage, 2),
            current=round(current, 3),
            power=round(power, 1),
            energy=round(self.energy_kwh, 6),
        )
