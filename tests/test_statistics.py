"""
Tests for the shared Statistics sink
"""

import threading

import pytest
from pwl_engine import Statistics, StatisticsLongAttribute

NOTIFICATIONS = StatisticsLongAttribute.NUM_BOUND_NOTIFICATIONS_TO_PL_CONSTRAINTS


class TestStatistics:
    """Test counter semantics."""

    def test_starts_at_zero(self):
        assert Statistics().get_long_attribute(NOTIFICATIONS) == 0

    def test_increment(self):
        statistics = Statistics()
        statistics.inc_long_attribute(NOTIFICATIONS)
        statistics.inc_long_attribute(NOTIFICATIONS, 4)
        assert statistics.get_long_attribute(NOTIFICATIONS) == 5
        assert statistics.snapshot() == {NOTIFICATIONS.value: 5}

    def test_counters_only_grow(self):
        with pytest.raises(ValueError):
            Statistics().inc_long_attribute(NOTIFICATIONS, -1)

    def test_concurrent_increments(self):
        """Increments from several branches are not lost."""
        statistics = Statistics()

        def work():
            for _ in range(1000):
                statistics.inc_long_attribute(NOTIFICATIONS)

        threads = [threading.Thread(target=work) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert statistics.get_long_attribute(NOTIFICATIONS) == 8000


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
