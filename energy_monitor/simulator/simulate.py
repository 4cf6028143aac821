"""
Telemetry Simulator - CLI Entry Point
Runs simulated devices through the anomaly engine and logs the findings
"""

import argparse
import dataclasses
import logging
import os
import sys

import structlog

from energy_monitor.anomaly import AnomalyEngine, EngineConfig
from energy_monitor.anomaly.regressors import list_regressors
from energy_monitor.core.logger import setup_logging
from energy_monitor.simulator import (
    CHAOS_CONFIG,
    DEV_CONFIG,
    NORMAL_CONFIG,
    VOLTAGE_FOCUS_CONFIG,
    AnomalyType,
    SimulatorConfig,
    TelemetrySimulator,
)

logger = structlog.get_logger(__name__)


# Predefined configurations
CONFIGS = {
    "normal": NORMAL_CONFIG,
    "chaos": CHAOS_CONFIG,
    "voltage": VOLTAGE_FOCUS_CONFIG,
    "dev": DEV_CONFIG,
}


def parse_arguments(argv=None):
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(
        description="Simulated electrical telemetry through the anomaly engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
        Examples:
        # Use predefined normal config
        python -m energy_monitor.simulator.simulate --config normal

        # Chaos config for 300 seconds with background retraining
        python -m energy_monitor.simulator.simulate --config chaos --duration 300 --background-retraining

        # Custom fleet and faults
        python -m energy_monitor.simulator.simulate --devices 20 --anomaly-prob 0.05 \\
            --anomalies power_surge current_spike --rounds 500
        """,
    )

    # Predefined config
    parser.add_argument(
        "--config", choices=list(CONFIGS.keys()), help="Use a predefined configuration"
    )

    # Simulation settings
    parser.add_argument("--devices", type=int, help="Number of devices to simulate")
    parser.add_argument("--interval", type=float, help="Interval between rounds in seconds")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible runs")
    parser.add_argument(
        "--anomaly-prob", type=float, help="Probability of fault injection (0.0 to 1.0)"
    )
    parser.add_argument(
        "--anomalies",
        nargs="+",
        choices=[a.value for a in AnomalyType],
        help="Specific fault types to enable",
    )

    # Engine settings
    parser.add_argument(
        "--history-capacity",
        type=int,
        default=int(os.getenv("HISTORY_CAPACITY", "1000")),
        help="Sliding history capacity (default: 1000)",
    )
    parser.add_argument(
        "--min-training-size",
        type=int,
        default=int(os.getenv("MIN_TRAINING_SIZE", "50")),
        help="Records required before the power model is trained (default: 50)",
    )
    parser.add_argument(
        "--retrain-interval",
        type=float,
        default=float(os.getenv("RETRAIN_INTERVAL_MINUTES", "30")),
        help="Minutes between retrains (default: 30)",
    )
    parser.add_argument(
        "--z-score-threshold",
        type=float,
        default=float(os.getenv("Z_SCORE_THRESHOLD", "2.5")),
        help="Z-score threshold for statistical detection (default: 2.5)",
    )
    parser.add_argument(
        "--prediction-error-threshold",
        type=float,
        default=float(os.getenv("PREDICTION_ERROR_THRESHOLD", "0.15")),
        help="Relative prediction error threshold (default: 0.15)",
    )
    parser.add_argument(
        "--regressor",
        default=os.getenv("REGRESSOR", "gradient_boosting"),
        choices=list_regressors(),
        help="Power regression backend (default: gradient_boosting)",
    )
    parser.add_argument(
        "--background-retraining",
        action="store_true",
        help="Fit the power model on a background worker",
    )

    # Runtime settings
    parser.add_argument(
        "--duration", type=float, help="Duration to run in seconds (default: infinite)"
    )
    parser.add_argument("--rounds", type=int, help="Number of rounds to run (default: infinite)")

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Logging level (default: INFO or LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines instead of console output",
    )

    return parser.parse_args(argv)


def build_simulator_config(args) -> SimulatorConfig:
    """Build a SimulatorConfig from command-line arguments"""
    if args.config:
        base = CONFIGS[args.config]
        logger.info("Using predefined configuration", config_name=args.config)
    else:
        base = SimulatorConfig()
        logger.info("Using default configuration")

    overrides = {"enabled_anomalies": list(base.enabled_anomalies)}
    if args.devices:
        overrides["num_devices"] = args.devices
    if args.interval:
        overrides["event_interval_seconds"] = args.interval
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.anomaly_prob is not None:
        overrides["anomaly_probability"] = args.anomaly_prob
    if args.anomalies:
        overrides["enabled_anomalies"] = [AnomalyType(a) for a in args.anomalies]

    # replace() re-runs validation and never mutates the preset
    return dataclasses.replace(base, **overrides)


def build_engine_config(args) -> EngineConfig:
    """Build an EngineConfig from command-line arguments"""
    return EngineConfig(
        history_capacity=args.history_capacity,
        min_training_size=args.min_training_size,
        retrain_interval_minutes=args.retrain_interval,
        z_score_threshold=args.z_score_threshold,
        prediction_error_threshold=args.prediction_error_threshold,
        regressor_name=args.regressor,
        background_retraining=args.background_retraining,
    )


def main(argv=None):
    """Main entry point"""
    args = parse_arguments(argv)

    # Setup logging
    setup_logging(level=getattr(logging, args.log_level), json_output=args.json_logs)

    logger.info("Starting telemetry simulator")

    try:
        engine = AnomalyEngine(build_engine_config(args))
        simulator = TelemetrySimulator(build_simulator_config(args), engine)
        stats = simulator.run(duration_seconds=args.duration, rounds=args.rounds)

        logger.info(
            "Simulator completed successfully",
            stats=stats,
            status=engine.status().to_dict(),
        )
        return 0

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0

    except Exception as e:
        logger.error("Simulator failed", error=str(e), exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
