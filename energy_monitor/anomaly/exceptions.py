"""
Error taxonomy for the anomaly detection engine.

None of these escape AnomalyEngine.ingest(): the engine treats them as
skips (insufficient data, model not ready) or logs and recovers (training
failure).
"""


class AnomalyEngineError(Exception):
    """Base class for engine errors"""


class InsufficientDataError(AnomalyEngineError, ValueError):
    """History is below a detection or training floor"""


class ModelNotReadyError(AnomalyEngineError, RuntimeError):
    """Prediction requested before any model was fitted"""


class TrainingError(AnomalyEngineError, RuntimeError):
    """A regression fit attempt failed"""
