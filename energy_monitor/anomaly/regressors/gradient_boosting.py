"""
Gradient-boosted regression trees for power prediction.

Captures the nonlinear relation between voltage, current and power draw
(power = voltage * current * power_factor) without hand-crafted terms.
"""

from dataclasses import asdict, dataclass
from typing import Any

import numpy as np
import pandas as pd
import structlog
from sklearn.ensemble import GradientBoostingRegressor

from ..features import FEATURE_COLUMNS
from .base import PowerRegressor

logger = structlog.get_logger(__name__)


@dataclass
class GradientBoostingConfig:
    """Configuration for the gradient boosting backend"""

    n_estimators: int = 100
    learning_rate: float = 0.1
    max_depth: int = 3
    random_state: int = 42  # Fixed seed so retrains are comparable


class GradientBoostingPowerRegressor(PowerRegressor):
    """scikit-learn GradientBoostingRegressor over engineered features"""

    def __init__(self, config: dict | None = None):
        self.config = GradientBoostingConfig(**(config or {}))
        self._name = "gradient_boosting"
        self._model: GradientBoostingRegressor | None = None

    @property
    def name(self) -> str:
        return self._name

    def get_config(self) -> dict[str, Any]:
        return asdict(self.config)

    def fit(self, features: pd.DataFrame, target: pd.Series) -> "GradientBoostingPowerRegressor":
        self.validate_training_data(features, target)

        model = GradientBoostingRegressor(
            n_estimators=self.config.n_estimators,
            learning_rate=self.config.learning_rate,
            max_depth=self.config.max_depth,
            random_state=self.config.random_state,
        )
        model.fit(features[FEATURE_COLUMNS].to_numpy(), target.to_numpy())
        self._model = model

        logger.debug(
            "Gradient boosting model fitted",
            n_samples=len(features),
            train_score=round(float(model.train_score_[-1]), 4),
        )
        return self

    def predict(self, features: pd.DataFrame) -> np.ndarray:
        if self._model is None:
            raise RuntimeError("GradientBoostingPowerRegressor has not been fitted")
        return self._model.predict(features[FEATURE_COLUMNS].to_numpy())
