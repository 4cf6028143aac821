"""
Ordinary least squares fallback for power prediction.

Cheaper than boosted trees and fully deterministic, but only linear in its
inputs, so it underfits power = voltage * current.
"""

from dataclasses import asdict, dataclass
from typing import Any

import numpy as np
import pandas as pd
import statsmodels.api as sm
import structlog

from ..features import FEATURE_COLUMNS
from .base import PowerRegressor

logger = structlog.get_logger(__name__)


@dataclass
class LinearConfig:
    """Configuration for the OLS backend"""

    fit_intercept: bool = True


class LinearPowerRegressor(PowerRegressor):
    """statsmodels OLS over engineered features"""

    def __init__(self, config: dict | None = None):
        self.config = LinearConfig(**(config or {}))
        self._name = "linear"
        self._results = None

    @property
    def name(self) -> str:
        return self._name

    def get_config(self) -> dict[str, Any]:
        return asdict(self.config)

    def _design_matrix(self, features: pd.DataFrame) -> pd.DataFrame:
        exog = features[FEATURE_COLUMNS].astype(float)
        if self.config.fit_intercept:
            exog = sm.add_constant(exog, has_constant="add")
        return exog

    def fit(self, features: pd.DataFrame, target: pd.Series) -> "LinearPowerRegressor":
        self.validate_training_data(features, target)

        # pinv tolerates collinear columns (power_factor and efficiency are proportional)
        results = sm.OLS(target.astype(float).to_numpy(), self._design_matrix(features)).fit(
            method="pinv"
        )
        self._results = results

        logger.debug(
            "OLS model fitted",
            n_samples=len(features),
            r_squared=round(float(results.rsquared), 4) if np.isfinite(results.rsquared) else None,
        )
        return self

    def predict(self, features: pd.DataFrame) -> np.ndarray:
        if self._results is None:
            raise RuntimeError("LinearPowerRegressor has not been fitted")
        return np.asarray(self._results.predict(self._design_matrix(features)))
