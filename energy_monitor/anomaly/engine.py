"""
Streaming anomaly detection engine.

Owns the sliding history and the power predictor, runs both detectors on
every sample and retrains the predictor when the retraining guard allows.
A single reentrant lock serializes ingestion and counters; model fits may
run on a background worker and are published by reference swap.
"""

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import UTC, datetime

import structlog

from .detectors import PredictiveDetector, StatisticalDetector
from .features import engineer_features
from .history import HistoryStore
from .models import EngineConfig, EngineStatus, FeatureRecord, Finding, TelemetrySample
from .predictor import PowerPredictor
from .severity import SeverityPolicy

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class AnomalyEngine:
    """Single shared detector for all devices"""

    def __init__(
        self,
        config: EngineConfig | None = None,
        clock: Clock | None = None,
        predictor: PowerPredictor | None = None,
    ):
        self.config = config or EngineConfig()
        self._clock = clock or utc_now

        self.history = HistoryStore(self.config.history_capacity)
        self.predictor = predictor or PowerPredictor(
            regressor_name=self.config.regressor_name,
            regressor_config=self.config.regressor_config,
            min_training_size=self.config.min_training_size,
        )

        severity_policy = SeverityPolicy.from_config(self.config)
        self.statistical_detector = StatisticalDetector(self.config, severity_policy)
        self.predictive_detector = PredictiveDetector(self.config, severity_policy)

        self._lock = threading.RLock()
        self._executor: ThreadPoolExecutor | None = None
        if self.config.background_retraining:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="retrain")
        self._training_future: Future | None = None

        self._stats = {
            "total_ingested": 0,
            "statistical_findings": 0,
            "predictive_findings": 0,
            "training_runs": 0,
            "training_failures": 0,
            "ingest_errors": 0,
        }

        logger.info(
            "Anomaly engine initialized",
            history_capacity=self.config.history_capacity,
            min_training_size=self.config.min_training_size,
            retrain_interval_minutes=self.config.retrain_interval_minutes,
            regressor=self.predictor.regressor_name,
            background_retraining=self.config.background_retraining,
        )

    def ingest(self, sample: TelemetrySample) -> list[Finding]:
        """Process one sample and return its findings

        Statistical findings come first (voltage, current, power Z-score,
        power IQR), then the predictive finding if any. Engine-internal
        faults are logged, never raised.
        """
        statistical: list[Finding] = []
        predictive: Finding | None = None

        with self._lock:
            try:
                record = engineer_features(sample)

                self.history.append(record)
                self._stats["total_ingested"] += 1

                # Baseline includes the incoming sample itself
                statistical = self.statistical_detector.detect(sample, self.history.snapshot())
                predictive = self.predictive_detector.detect(
                    sample, self.predictor, self.history.size()
                )

                self._retrain_if_due()

            except Exception as e:
                self._stats["ingest_errors"] += 1
                logger.error(
                    "Failed to process sample",
                    device_id=getattr(sample, "device_id", None),
                    error=str(e),
                    exc_info=True,
                )

            findings = statistical + ([predictive] if predictive else [])
            self._stats["statistical_findings"] += len(statistical)
            self._stats["predictive_findings"] += 1 if predictive else 0

        for finding in findings:
            logger.info(
                "Anomaly detected",
                device_id=finding.device_id,
                kind=finding.kind.value,
                method=finding.method.value,
                severity=finding.severity.value,
                score=round(finding.score, 3),
            )

        return findings

    def status(self) -> EngineStatus:
        """Health snapshot; has no side effects"""
        with self._lock:
            return EngineStatus(
                history_size=self.history.size(),
                model_trained=self.predictor.is_ready,
                last_trained=self.predictor.last_trained,
            )

    @property
    def stats(self) -> dict[str, int]:
        with self._lock:
            stats = dict(self._stats)
        stats["prediction_errors"] = self.predictive_detector.failures
        return stats

    @property
    def training_in_progress(self) -> bool:
        future = self._training_future
        return future is not None and not future.done()

    def _retrain_if_due(self) -> None:
        """Evaluate the retraining guard; caller holds the lock"""
        if self.history.size() < self.config.min_training_size:
            return

        now = self._clock()
        last_trained = self.predictor.last_trained
        if last_trained is not None and now - last_trained < self.config.retrain_interval:
            return

        if self.training_in_progress:
            return

        records = self.history.snapshot()
        if self._executor is None:
            self._train(records, now)
        else:
            logger.debug("Dispatching background retraining", n_samples=len(records))
            self._training_future = self._executor.submit(self._train, records, now)

    def _train(self, records: tuple[FeatureRecord, ...], trained_at: datetime) -> bool:
        """Fit a new model; a failure keeps the previous one and retries next ingest"""
        try:
            model = self.predictor.fit(records, trained_at=trained_at)
        except Exception as e:
            with self._lock:
                self._stats["training_failures"] += 1
            logger.error(
                "Model training failed",
                n_samples=len(records),
                regressor=self.predictor.regressor_name,
                error=str(e),
                exc_info=True,
            )
            return False

        with self._lock:
            self._stats["training_runs"] += 1
        logger.info(
            "Power model retrained",
            n_samples=model.n_samples,
            regressor=self.predictor.regressor_name,
            trained_at=model.trained_at.isoformat(),
        )
        return True

    def wait_for_training(self, timeout: float | None = None) -> None:
        """Block until an in-flight background fit completes"""
        future = self._training_future
        if future is not None:
            future.result(timeout=timeout)

    def close(self) -> None:
        """Wait for background training and release the worker

        Later ingests fall back to synchronous retraining.
        """
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        logger.info("Anomaly engine closed", **self.stats)

    def __enter__(self) -> "AnomalyEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
