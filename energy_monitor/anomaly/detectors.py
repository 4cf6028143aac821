"""
Statistical and predictive anomaly detectors.

Both are stateless over their inputs: the engine hands them the sample, the
history baseline and the predictor, and they return findings.
"""

from collections.abc import Sequence

import structlog

from .exceptions import ModelNotReadyError
from .history import project
from .models import (
    DetectionMethod,
    EngineConfig,
    FeatureRecord,
    Finding,
    FindingKind,
    TelemetrySample,
)
from .predictor import PowerPredictor
from .severity import SeverityPolicy
from .stats import StatSummary, calculate_stats

logger = structlog.get_logger(__name__)

# (metric, kind, label, unit), in output order
Z_SCORE_METRICS = [
    ("voltage", FindingKind.VOLTAGE_ANOMALY, "Voltage", "V"),
    ("current", FindingKind.CURRENT_ANOMALY, "Current", "A"),
    ("power", FindingKind.POWER_ANOMALY, "Power", "W"),
]


class StatisticalDetector:
    """Z-score on voltage, current and power, plus IQR fencing on power"""

    def __init__(self, config: EngineConfig, severity_policy: SeverityPolicy | None = None):
        self.config = config
        self.severity_policy = severity_policy or SeverityPolicy.from_config(config)

    def detect(
        self, sample: TelemetrySample, baseline: Sequence[FeatureRecord]
    ) -> list[Finding]:
        """Compare a sample against the history baseline

        Args:
            sample: The incoming sample
            baseline: History records, already including the sample

        Returns:
            Findings in voltage, current, power Z-score, power IQR order
        """
        if len(baseline) < self.config.warmup_size:
            logger.debug(
                "Baseline too small, skipping statistical detection",
                device_id=sample.device_id,
                baseline_size=len(baseline),
            )
            return []

        findings = []

        for metric, kind, label, unit in Z_SCORE_METRICS:
            summary = calculate_stats(project(baseline, metric))
            value = getattr(sample, metric)
            z_score = summary.z_score(value)

            if z_score > self.config.z_score_threshold:
                findings.append(
                    Finding(
                        score=z_score,
                        kind=kind,
                        method=DetectionMethod.Z_SCORE,
                        message=(
                            f"{label} {value:.1f}{unit} is {z_score:.1f} standard deviations "
                            f"from normal ({summary.mean:.1f}±{summary.std_dev:.1f}{unit})"
                        ),
                        severity=self.severity_policy.classify(DetectionMethod.Z_SCORE, z_score),
                        device_id=sample.device_id,
                        timestamp=sample.timestamp,
                    )
                )

            if metric == "power":
                outlier = self._detect_power_outlier(sample, summary)
                if outlier:
                    findings.append(outlier)

        return findings

    def _detect_power_outlier(
        self, sample: TelemetrySample, summary: StatSummary
    ) -> Finding | None:
        iqr = summary.iqr
        lower = summary.q1 - self.config.iqr_multiplier * iqr
        upper = summary.q3 + self.config.iqr_multiplier * iqr
        power = sample.power

        if lower <= power <= upper:
            return None

        distance = min(abs(power - lower), abs(power - upper))
        return Finding(
            score=distance,
            kind=FindingKind.POWER_OUTLIER,
            method=DetectionMethod.IQR,
            message=f"Power {power:.1f}W is an outlier (Normal range: {lower:.1f}-{upper:.1f}W)",
            severity=self.severity_policy.classify(DetectionMethod.IQR, distance, spread=iqr),
            device_id=sample.device_id,
            timestamp=sample.timestamp,
        )


class PredictiveDetector:
    """Flags samples whose power deviates from the model's prediction"""

    def __init__(self, config: EngineConfig, severity_policy: SeverityPolicy | None = None):
        self.config = config
        self.severity_policy = severity_policy or SeverityPolicy.from_config(config)
        self.failures = 0

    def detect(
        self, sample: TelemetrySample, predictor: PowerPredictor, history_size: int
    ) -> Finding | None:
        """Compare measured power with the predicted power

        Never raises: an unavailable model or a prediction fault means no finding.
        """
        if not predictor.is_ready or history_size < self.config.min_training_size:
            return None

        try:
            predicted = predictor.predict(sample.voltage, sample.current)
        except ModelNotReadyError:
            return None
        except Exception as e:
            self.failures += 1
            logger.warning(
                "Power prediction failed, skipping predictive detection",
                device_id=sample.device_id,
                error=str(e),
                exc_info=True,
            )
            return None

        error = abs(sample.power - predicted)
        relative_error = error / max(predicted, 1.0)

        if relative_error <= self.config.prediction_error_threshold:
            return None

        return Finding(
            score=relative_error,
            kind=FindingKind.POWER_PREDICTION_ANOMALY,
            method=DetectionMethod.PREDICTIVE,
            message=(
                f"Power {sample.power:.1f}W deviates {relative_error:.1%} "
                f"from predicted {predicted:.1f}W"
            ),
            severity=self.severity_policy.classify(DetectionMethod.PREDICTIVE, relative_error),
            device_id=sample.device_id,
            timestamp=sample.timestamp,
        )
