"""
Severity tiers for findings, kept apart from detection so thresholds can be
tuned without touching the detectors.
"""

from dataclasses import dataclass

from .models import DetectionMethod, EngineConfig, Severity


@dataclass(frozen=True)
class SeverityPolicy:
    """Maps a (method, score) pair to a severity tier"""

    z_score_high: float = 3.5
    iqr_high_multiplier: float = 2.0  # distance beyond the fence, in IQRs
    prediction_error_high: float = 0.30

    @classmethod
    def from_config(cls, config: EngineConfig) -> "SeverityPolicy":
        return cls(
            z_score_high=config.z_score_high,
            iqr_high_multiplier=config.iqr_high_multiplier,
            prediction_error_high=config.prediction_error_high,
        )

    def classify(
        self, method: DetectionMethod, score: float, spread: float | None = None
    ) -> Severity:
        """Severity of a finding that already crossed its detection threshold

        Args:
            method: Detection method that produced the score
            score: z-score, distance to the IQR fence, or relative prediction error
            spread: Interquartile range, required for IQR findings
        """
        if method is DetectionMethod.Z_SCORE:
            high = score > self.z_score_high
        elif method is DetectionMethod.IQR:
            if spread is None:
                raise ValueError("IQR severity needs the interquartile range as spread")
            high = score > self.iqr_high_multiplier * spread
        elif method is DetectionMethod.PREDICTIVE:
            high = score > self.prediction_error_high
        else:
            raise ValueError(f"Unknown detection method: {method!r}")

        return Severity.HIGH if high else Severity.MEDIUM
