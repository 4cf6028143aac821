"""
Bounded FIFO history of feature-engineered samples.
"""

from collections import deque
from collections.abc import Callable, Iterable

from .models import FeatureRecord

MetricSelector = str | Callable[[FeatureRecord], float]


def project(records: Iterable[FeatureRecord], selector: MetricSelector) -> list[float]:
    """Values of one metric, in the order of records

    Args:
        records: FeatureRecords, e.g. a HistoryStore snapshot
        selector: FeatureRecord field name, or a callable taking a record
    """
    if isinstance(selector, str):
        return [getattr(record, selector) for record in records]
    return [selector(record) for record in records]


class HistoryStore:
    """Sliding window of FeatureRecords, evicting the oldest beyond capacity

    Not synchronized: the owning engine serializes every access.
    """

    def __init__(self, capacity: int = 1000):
        if capacity < 1:
            raise ValueError(f"History capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._records: deque[FeatureRecord] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, record: FeatureRecord) -> None:
        self._records.append(record)

    def size(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def projection(self, selector: MetricSelector) -> list[float]:
        """Values of one metric in insertion order"""
        return project(self._records, selector)

    def snapshot(self) -> tuple[FeatureRecord, ...]:
        """Immutable copy of the current contents, oldest first"""
        return tuple(self._records)

    def __repr__(self) -> str:
        return f"HistoryStore(size={len(self._records)}, capacity={self._capacity})"
