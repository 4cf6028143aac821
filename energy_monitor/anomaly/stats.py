"""
Summary statistics over a projection of the sliding history.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from .exceptions import InsufficientDataError


@dataclass(frozen=True)
class StatSummary:
    """Distribution summary of one metric"""

    mean: float
    std_dev: float  # population standard deviation
    min: float
    max: float
    q1: float
    q3: float

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1

    def z_score(self, value: float) -> float:
        """Absolute z-score of value, 0 when the metric is constant"""
        if self.std_dev == 0:
            return 0.0
        return abs(value - self.mean) / self.std_dev


def calculate_stats(values: Sequence[float]) -> StatSummary:
    """Compute mean, population stddev, min, max and nearest-rank quartiles

    Quartiles are the values at index floor(n * 0.25) and floor(n * 0.75) of
    the sorted sample, without interpolation.

    Raises:
        InsufficientDataError: If fewer than 2 values are given
    """
    if len(values) < 2:
        raise InsufficientDataError(f"Need at least 2 values for statistics, got {len(values)}")

    ordered = np.sort(np.asarray(values, dtype=np.float64))
    n = len(ordered)

    return StatSummary(
        mean=float(ordered.mean()),
        std_dev=float(ordered.std(ddof=0)),
        min=float(ordered[0]),
        max=float(ordered[-1]),
        q1=float(ordered[int(n * 0.25)]),
        q3=float(ordered[int(n * 0.75)]),
    )
