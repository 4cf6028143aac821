"""
Tests for the sliding history store.
"""

import pytest

from energy_monitor.anomaly.history import HistoryStore, project
from tests.factories import make_record


class TestHistoryStore:
    """Tests for HistoryStore."""

    def test_initialization(self):
        """Test an empty store."""
        store = HistoryStore(capacity=5)

        assert store.capacity == 5
        assert store.size() == 0
        assert len(store) == 0
        assert store.snapshot() == ()

    def test_default_capacity(self):
        """Test the default capacity."""
        assert HistoryStore().capacity == 1000

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_invalid_capacity(self, capacity):
        """Test that a non-positive capacity is rejected."""
        with pytest.raises(ValueError):
            HistoryStore(capacity=capacity)

    def test_fifo_eviction(self):
        """Test that the oldest records are evicted first."""
        store = HistoryStore(capacity=5)
        for voltage in range(1, 9):
            store.append(make_record(voltage=float(voltage)))

        assert store.size() == 5
        assert store.projection("voltage") == [4.0, 5.0, 6.0, 7.0, 8.0]

    def test_size_never_exceeds_capacity(self):
        """Test the capacity bound after every append."""
        store = HistoryStore(capacity=3)
        for i in range(10):
            store.append(make_record(current=float(i + 1)))
            assert store.size() == min(i + 1, 3)

    def test_projection_with_callable(self):
        """Test projecting with a selector function."""
        store = HistoryStore()
        store.append(make_record(voltage=230.0, current=2.0))
        store.append(make_record(voltage=220.0, current=3.0))

        assert store.projection(lambda r: r.voltage * r.current) == [460.0, 660.0]

    def test_snapshot_is_detached(self):
        """Test that a snapshot does not see later appends."""
        store = HistoryStore()
        store.append(make_record())
        snapshot = store.snapshot()
        store.append(make_record())

        assert len(snapshot) == 1
        assert store.size() == 2


class TestProject:
    """Tests for the project helper."""

    def test_project_snapshot(self):
        """Test that a snapshot projects like the live store."""
        store = HistoryStore()
        for voltage in (229.0, 230.0, 231.0):
            store.append(make_record(voltage=voltage))

        assert project(store.snapshot(), "voltage") == store.projection("voltage")

    def test_project_with_callable(self):
        records = [make_record(current=2.0), make_record(current=4.0)]

        assert project(records, lambda r: r.current * 10) == [20.0, 40.0]
