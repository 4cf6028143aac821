"""
Power predictor: a retrainable regression model over engineered features.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

import pandas as pd
import structlog

from .exceptions import InsufficientDataError, ModelNotReadyError, TrainingError
from .features import FEATURE_COLUMNS, TARGET_COLUMN, query_features
from .models import FeatureRecord
from .regressors import PowerRegressor, get_regressor

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TrainedModel:
    """A fitted regressor and when it was trained"""

    regressor: PowerRegressor
    trained_at: datetime
    n_samples: int


class PowerPredictor:
    """Predicts power draw from voltage and current

    Holds at most one live TrainedModel. fit() builds the replacement on the
    side and publishes it with a single reference assignment, so concurrent
    readers see either the old model or the new one.
    """

    def __init__(
        self,
        regressor_name: str = "gradient_boosting",
        regressor_config: dict | None = None,
        min_training_size: int = 50,
    ):
        # Fail fast on an unknown backend name
        get_regressor(regressor_name, regressor_config)

        self.regressor_name = regressor_name
        self.regressor_config = dict(regressor_config or {})
        self.min_training_size = min_training_size
        self._model: TrainedModel | None = None

    @property
    def model(self) -> TrainedModel | None:
        return self._model

    @property
    def is_ready(self) -> bool:
        return self._model is not None

    @property
    def last_trained(self) -> datetime | None:
        model = self._model
        return model.trained_at if model else None

    def fit(
        self, records: Sequence[FeatureRecord], trained_at: datetime | None = None
    ) -> TrainedModel:
        """Train a new model and make it live

        Args:
            records: Training records, at least min_training_size of them
            trained_at: Timestamp to record (defaults to now, UTC)

        Returns:
            The newly published TrainedModel

        Raises:
            InsufficientDataError: If there are too few records
            TrainingError: If the backend fails; the previous model stays live
        """
        if len(records) < self.min_training_size:
            raise InsufficientDataError(
                f"Insufficient training records: {len(records)} < {self.min_training_size}"
            )

        frame = pd.DataFrame(
            [
                (r.voltage, r.current, r.power_factor, r.efficiency, r.power)
                for r in records
            ],
            columns=[*FEATURE_COLUMNS, TARGET_COLUMN],
        )

        regressor = get_regressor(self.regressor_name, self.regressor_config)
        try:
            regressor.fit(frame[FEATURE_COLUMNS], frame[TARGET_COLUMN])
        except Exception as e:
            raise TrainingError(f"{regressor.name} fit failed: {e}") from e

        model = TrainedModel(
            regressor=regressor,
            trained_at=trained_at or datetime.now(UTC),
            n_samples=len(frame),
        )
        self._model = model
        return model

    def predict(self, voltage: float, current: float) -> float:
        """Predict power draw for a voltage/current pair

        Raises:
            ModelNotReadyError: If no model has been fitted yet
        """
        model = self._model
        if model is None:
            raise ModelNotReadyError("Model has not been trained yet")

        query = pd.DataFrame([query_features(voltage, current)], columns=FEATURE_COLUMNS)
        return float(model.regressor.predict(query)[0])

    def __repr__(self) -> str:
        return (
            f"PowerPredictor(regressor={self.regressor_name}, "
            f"ready={self.is_ready}, last_trained={self.last_trained})"
        )
