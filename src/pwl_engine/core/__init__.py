"""
Core Module - Value Types

Provides:
- Canonical JSON serialization
- Tightenings, equations, case splits and fixes
- Tableau rows (proof justifications) and linear expressions
- Propagation results
"""

from .canonical_json import canonical_dumps, canonical_hash
from .tightening import BoundType, Tightening
from .equation import Addend, Equation, EquationType
from .case_split import CaseSplit
from .fix import Fix
from .tableau_row import TableauRow, TableauRowEntry
from .linear_expression import LinearExpression
from .propagation import PropagationResult, PropagationStatus

__all__ = [
    'canonical_dumps',
    'canonical_hash',
    'BoundType',
    'Tightening',
    'Addend',
    'Equation',
    'EquationType',
    'CaseSplit',
    'Fix',
    'TableauRow',
    'TableauRowEntry',
    'LinearExpression',
    'PropagationResult',
    'PropagationStatus',
]
