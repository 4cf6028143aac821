"""
Base abstract interface for power regression backends.

All backends must inherit from PowerRegressor and implement:
- fit(): Train on engineered features
- predict(): Estimate power draw for new feature rows
"""

from abc import ABC, abstractmethod
from typing import Any

import numpy as np
import pandas as pd

from ..features import FEATURE_COLUMNS


class PowerRegressor(ABC):
    """Abstract base class for regressors mapping features to power draw

    A fresh instance is created for every training run, so implementations
    may keep the fitted model as plain instance state.
    """

    @abstractmethod
    def fit(self, features: pd.DataFrame, target: pd.Series) -> "PowerRegressor":
        """Train the regressor

        Args:
            features: DataFrame with the FEATURE_COLUMNS columns
            target: Observed power for each row

        Returns:
            self, fitted
        """
        pass

    @abstractmethod
    def predict(self, features: pd.DataFrame) -> np.ndarray:
        """Predict power for each feature row"""
        pass

    @abstractmethod
    def get_config(self) -> dict[str, Any]:
        """Get the current configuration of this backend"""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the regression backend"""
        pass

    def validate_training_data(self, features: pd.DataFrame, target: pd.Series) -> None:
        """Validate that the training data has the required format

        Raises:
            ValueError: If the training data is invalid
        """
        if features.empty:
            raise ValueError("Training features are empty")

        missing = set(FEATURE_COLUMNS) - set(features.columns)
        if missing:
            raise ValueError(f"Training features missing required columns: {missing}")

        if len(features) != len(target):
            raise ValueError(
                f"Feature/target length mismatch: {len(features)} != {len(target)}"
            )

        if not np.isfinite(features[FEATURE_COLUMNS].to_numpy()).all():
            raise ValueError("Training features contain non-finite values")

        if not np.isfinite(target.to_numpy()).all():
            raise ValueError("Training target contains non-finite values")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self.get_config()})"
