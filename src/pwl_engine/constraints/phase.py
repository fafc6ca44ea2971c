"""
Phase statuses and constraint kinds.
"""

from enum import Enum


class PhaseStatus(Enum):
    """Which branch of a piecewise-linear relation is known to hold."""
    RELU_PHASE_ACTIVE = 0
    RELU_PHASE_INACTIVE = 1
    PHASE_NOT_FIXED = 999


class PiecewiseLinearFunctionType(Enum):
    """Constraint kinds; the value is the serialization tag."""
    RELU = "relu"


def phase_to_string(phase: PhaseStatus) -> str:
    if isinstance(phase, PhaseStatus):
        return phase.name
    return "UNKNOWN"
