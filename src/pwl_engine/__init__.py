"""
pwl-engine - Piecewise-Linear Constraint Reasoning for Neural Network Verification

This package provides the constraint-reasoning core used when deciding
satisfiability of linear equalities mixed with ReLU activations:

- Phase inference: which branch of a ReLU is forced by current bounds
- Bound propagation, optionally with machine-checkable justifications
- Repair suggestions for violated assignments (plain and pivot-aware)
- Case-split enumeration and ordering for a branching search
- Cloning, elimination, reindexing and serialization for the search driver

Bound propagation never raises on infeasibility: every notification
returns a PropagationResult the search driver inspects to prune.
"""

from .config import EngineConfig, DEFAULT_CONFIG
from .errors import ConstraintError, ErrorCode
from .core import (
    BoundType,
    Tightening,
    Addend,
    Equation,
    EquationType,
    CaseSplit,
    Fix,
    TableauRow,
    TableauRowEntry,
    LinearExpression,
    PropagationResult,
    PropagationStatus,
    canonical_dumps,
    canonical_hash,
)
from .collaborators import (
    BoundManagerInterface,
    TableauInterface,
    QueryInterface,
    NetworkLevelReasonerInterface,
    StatisticsInterface,
)
from .constraints import (
    PhaseStatus,
    PiecewiseLinearFunctionType,
    PiecewiseLinearConstraint,
    ReluConstraint,
    build_relu_tightening_row,
)
from .engine import (
    SearchContext,
    BoundManager,
    BoundExplainer,
    PLCLemma,
    Query,
    Statistics,
    StatisticsLongAttribute,
)

__version__ = "0.1.0"

__all__ = [
    # Configuration and errors
    "EngineConfig",
    "DEFAULT_CONFIG",
    "ConstraintError",
    "ErrorCode",
    # Value types
    "BoundType",
    "Tightening",
    "Addend",
    "Equation",
    "EquationType",
    "CaseSplit",
    "Fix",
    "TableauRow",
    "TableauRowEntry",
    "LinearExpression",
    "PropagationResult",
    "PropagationStatus",
    "canonical_dumps",
    "canonical_hash",
    # Collaborator contracts
    "BoundManagerInterface",
    "TableauInterface",
    "QueryInterface",
    "NetworkLevelReasonerInterface",
    "StatisticsInterface",
    # Constraints
    "PhaseStatus",
    "PiecewiseLinearFunctionType",
    "PiecewiseLinearConstraint",
    "ReluConstraint",
    "build_relu_tightening_row",
    # Reference collaborators
    "SearchContext",
    "BoundManager",
    "BoundExplainer",
    "PLCLemma",
    "Query",
    "Statistics",
    "StatisticsLongAttribute",
]
