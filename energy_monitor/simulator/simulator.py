"""
Telemetry simulator feeding synthetic device readings into the anomaly engine.
"""

import random
import time
from datetime import datetime

import structlog

from ..anomaly.engine import AnomalyEngine
from ..anomaly.models import Finding, Severity
from .device_state import DeviceState
from .models import SimulatorConfig

logger = structlog.get_logger(__name__)


class TelemetrySimulator:
    """Drives a fleet of simulated devices through an AnomalyEngine"""

    def __init__(self, config: SimulatorConfig, engine: AnomalyEngine | None = None):
        self.config = config
        self.engine = engine or AnomalyEngine()
        self.rng = random.Random(config.seed)

        self.devices: list[DeviceState] = [
            DeviceState(f"dev-{i + 1:03d}", config.nominal_voltage, rng=self.rng)
            for i in range(config.num_devices)
        ]

        self.stats = {
            "total_samples": 0,
            "anomalies_injected": 0,
            "findings": 0,
            "high_severity_findings": 0,
        }

        logger.info(
            "Simulator initialized",
            devices=len(self.devices),
            probability=config.anomaly_probability,
            enabled_anomalies=[a.value for a in config.enabled_anomalies],
        )

    def generate_round(self, timestamp: datetime | None = None) -> list[Finding]:
        """Generate one sample per device and ingest it

        Returns:
            All findings raised during the round
        """
        findings: list[Finding] = []

        for device in self.devices:
            anomaly = None
            enabled = self.config.enabled_anomalies
            if enabled and self.rng.random() < self.config.anomaly_probability:
                anomaly = self.rng.choice(enabled)

            sample = device.generate_sample(
                inject_anomaly=anomaly,
                timestamp=timestamp,
                interval_seconds=self.config.event_interval_seconds,
            )
            self.stats["total_samples"] += 1

            if anomaly:
                self.stats["anomalies_injected"] += 1
                logger.warning(
                    "Anomaly injected",
                    anomaly_type=anomaly.value,
                    device_id=device.device_id,
                )

            device_findings = self.engine.ingest(sample)
            self.stats["findings"] += len(device_findings)
            self.stats["high_severity_findings"] += sum(
                1 for f in device_findings if f.severity is Severity.HIGH
            )
            findings.extend(device_findings)

        return findings

    def run(self, duration_seconds: float | None = None, rounds: int | None = None):
        """Run the simulator until the duration or round limit is reached

        Args:
            duration_seconds: Optional duration in seconds
            rounds: Optional number of rounds. If both are None, runs indefinitely.
        """
        logger.info(
            "Starting simulator",
            duration=duration_seconds if duration_seconds else "indefinite",
            rounds=rounds if rounds else "unbounded",
        )

        start_time = time.time()
        last_log_time = start_time
        completed_rounds = 0

        try:
            while True:
                self.generate_round()
                completed_rounds += 1

                elapsed = time.time() - start_time

                # Log stats every 10 seconds
                if time.time() - last_log_time >= 10:
                    status = self.engine.status()
                    logger.info(
                        "Simulator stats",
                        rounds=completed_rounds,
                        history_size=status.history_size,
                        model_trained=status.model_trained,
                        **self.stats,
                    )
                    last_log_time = time.time()

                if rounds and completed_rounds >= rounds:
                    logger.info("Round limit reached", rounds=rounds)
                    break

                if duration_seconds and elapsed >= duration_seconds:
                    logger.info("Duration limit reached", duration_seconds=duration_seconds)
                    break

                time.sleep(self.config.event_interval_seconds)

        except KeyboardInterrupt:
            logger.info("Received interrupt signal, stopping simulator")

        finally:
            elapsed = time.time() - start_time
            self.engine.close()
            logger.info(
                "Simulator stopped",
                rounds=completed_rounds,
                elapsed_sec=round(elapsed, 1),
                **self.stats,
            )

        return self.stats
