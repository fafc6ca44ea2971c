"""
Statistics Sink

Counters shared by every search branch. Branches may run on separate
threads, so increments are serialized by a lock; counters only grow.
"""

import threading
from enum import Enum
from typing import Dict

from ..collaborators import StatisticsInterface


class StatisticsLongAttribute(Enum):
    """Integer counters collected by the engine."""
    NUM_BOUND_NOTIFICATIONS_TO_PL_CONSTRAINTS = "num_bound_notifications_to_pl_constraints"


class Statistics(StatisticsInterface):
    """Lock-protected counters keyed by StatisticsLongAttribute."""

    def __init__(self):
        self._lock = threading.Lock()
        self._long_attributes: Dict[StatisticsLongAttribute, int] = {
            attribute: 0 for attribute in StatisticsLongAttribute
        }

    def inc_long_attribute(self, attribute: StatisticsLongAttribute, value: int = 1) -> None:
        if value < 0:
            raise ValueError("Statistics counters are increment-only")
        with self._lock:
            self._long_attributes[attribute] += value

    def get_long_attribute(self, attribute: StatisticsLongAttribute) -> int:
        with self._lock:
            return self._long_attributes[attribute]

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return {a.value: v for a, v in self._long_attributes.items()}
