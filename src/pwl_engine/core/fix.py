"""
Repair suggestions for violated constraints.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Fix:
    """Set `variable` to `value` to reduce or remove a violation."""
    variable: int
    value: float
