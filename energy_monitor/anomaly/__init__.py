"""
Anomaly Detection Engine

Near-real-time anomaly detection for electrical telemetry.

Architecture:
- Sliding History: bounded FIFO of feature-engineered samples
- Statistical Detection: Z-score on voltage/current/power, IQR fences on power
- Predictive Detection: regression model predicting power from voltage/current,
  retrained automatically as history accumulates

Usage:
    engine = AnomalyEngine(EngineConfig())
    findings = engine.ingest(sample)
"""

from .engine import AnomalyEngine
from .exceptions import (
    AnomalyEngineError,
    InsufficientDataError,
    ModelNotReadyError,
    TrainingError,
)
from .models import (
    DetectionMethod,
    EngineConfig,
    EngineStatus,
    FeatureRecord,
    Finding,
    FindingKind,
    Severity,
    TelemetrySample,
)
from .predictor import PowerPredictor

__all__ = [
    "AnomalyEngine",
    "AnomalyEngineError",
    "DetectionMethod",
    "EngineConfig",
    "EngineStatus",
    "FeatureRecord",
    "Finding",
    "FindingKind",
    "InsufficientDataError",
    "ModelNotReadyError",
    "PowerPredictor",
    "Severity",
    "TelemetrySample",
    "TrainingError",
]
