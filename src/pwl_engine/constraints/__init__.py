"""
Constraints Module - Piecewise-Linear Relations

Provides:
- Phase statuses and constraint kinds
- PiecewiseLinearConstraint (abstract contract)
- ReluConstraint
- Proof-row construction for ReLU
"""

from .phase import PhaseStatus, PiecewiseLinearFunctionType, phase_to_string
from .piecewise_linear import PiecewiseLinearConstraint
from .proof_row import build_relu_tightening_row
from .relu import ReluConstraint

__all__ = [
    'PhaseStatus',
    'PiecewiseLinearFunctionType',
    'phase_to_string',
    'PiecewiseLinearConstraint',
    'build_relu_tightening_row',
    'ReluConstraint',
]
