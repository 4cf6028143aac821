"""
Data models and configuration for the anomaly detection engine.
"""

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any


@dataclass
class EngineConfig:
    """Configuration for the anomaly detection engine"""

    # Sliding history
    history_capacity: int = 1000
    warmup_size: int = 10  # Minimum baseline size for statistical detection

    # Retraining policy
    min_training_size: int = 50
    retrain_interval_minutes: float = 30.0
    background_retraining: bool = False

    # Statistical detection
    z_score_threshold: float = 2.5
    z_score_high: float = 3.5
    iqr_multiplier: float = 1.5
    iqr_high_multiplier: float = 2.0

    # Predictive detection (relative error)
    prediction_error_threshold: float = 0.15
    prediction_error_high: float = 0.30

    # Regression backend
    regressor_name: str = "gradient_boosting"
    regressor_config: dict = field(default_factory=dict)

    def __post_init__(self):
        if self.history_capacity < 1:
            raise ValueError(f"history_capacity must be >= 1, got {self.history_capacity}")
        if self.warmup_size < 2:
            # Population stddev of a single point is always 0
            raise ValueError(f"warmup_size must be >= 2, got {self.warmup_size}")
        if self.min_training_size < 1:
            raise ValueError(f"min_training_size must be >= 1, got {self.min_training_size}")
        if self.retrain_interval_minutes < 0:
            raise ValueError("retrain_interval_minutes must not be negative")
        for name in (
            "z_score_threshold",
            "z_score_high",
            "iqr_multiplier",
            "iqr_high_multiplier",
            "prediction_error_threshold",
            "prediction_error_high",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

    @property
    def retrain_interval(self) -> timedelta:
        return timedelta(minutes=self.retrain_interval_minutes)


@dataclass(frozen=True)
class TelemetrySample:
    """A single telemetry reading from a device"""

    device_id: str
    timestamp: datetime
    voltage: float
    current: float
    power: float
    energy: float = 0.0  # cumulative kWh, not used for detection

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TelemetrySample":
        """Build a sample from a decoded telemetry message

        Accepts both ``device_id`` and ``deviceIdentifier`` keys, ISO-8601
        timestamps (``Z`` suffix allowed) or datetime objects.

        Raises:
            ValueError: If a field is missing or not a finite number
        """
        device_id = data.get("device_id", data.get("deviceIdentifier"))
        if not device_id:
            raise ValueError("Telemetry message has no device identifier")

        raw_ts = data.get("timestamp")
        if raw_ts is None:
            timestamp = datetime.now(UTC)
        elif isinstance(raw_ts, datetime):
            timestamp = raw_ts
        else:
            timestamp = datetime.fromisoformat(str(raw_ts).replace("Z", "+00:00"))

        values = {}
        for name in ("voltage", "current", "power"):
            if name not in data:
                raise ValueError(f"Telemetry message missing field '{name}'")
            values[name] = _finite(name, data[name])

        return cls(
            device_id=str(device_id),
            timestamp=timestamp,
            energy=_finite("energy", data.get("energy", 0.0)),
            **values,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "device_id": self.device_id,
            "timestamp": self.timestamp.isoformat(),
            "voltage": self.voltage,
            "current": self.current,
            "power": self.power,
            "energy": self.energy,
        }


def _finite(name: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Field '{name}' is not numeric: {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"Field '{name}' is not finite: {value!r}")
    return number


@dataclass(frozen=True)
class FeatureRecord:
    """Feature-engineered sample kept in the sliding history"""

    voltage: float
    current: float
    power: float
    power_factor: float
    efficiency: float


class Severity(Enum):
    """Urgency tier of a finding"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DetectionMethod(Enum):
    """Method that produced a finding"""

    Z_SCORE = "z_score"
    IQR = "iqr"
    PREDICTIVE = "predictive"


class FindingKind(Enum):
    """What kind of abnormality a finding reports"""

    VOLTAGE_ANOMALY = "voltage_anomaly"
    CURRENT_ANOMALY = "current_anomaly"
    POWER_ANOMALY = "power_anomaly"
    POWER_OUTLIER = "power_outlier"
    POWER_PREDICTION_ANOMALY = "power_prediction_anomaly"


@dataclass(frozen=True)
class Finding:
    """An anomaly reported for a single sample"""

    score: float
    kind: FindingKind
    method: DetectionMethod
    message: str
    severity: Severity
    device_id: str = ""
    timestamp: datetime | None = None
    is_anomaly: bool = field(default=True, init=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the alert collaborator"""
        return {
            "device_id": self.device_id,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "is_anomaly": self.is_anomaly,
            "kind": self.kind.value,
            "method": self.method.value,
            "severity": self.severity.value,
            "score": self.score,
            "message": self.message,
        }


@dataclass(frozen=True)
class EngineStatus:
    """Health snapshot of the engine"""

    history_size: int
    model_trained: bool
    last_trained: datetime | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "history_size": self.history_size,
            "model_trained": self.model_trained,
            "last_trained": self.last_trained.isoformat() if self.last_trained else None,
        }
