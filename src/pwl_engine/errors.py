"""
Error Taxonomy

Contract violations raise ConstraintError with a distinguishing code.
They indicate a caller bug and abort the current operation.

Infeasibility is not an error: propagation entry points return a
PropagationResult whose status tells the search driver to prune.
"""

from enum import Enum


class ErrorCode(Enum):
    """Kinds of contract violation."""
    PARTICIPATING_VARIABLE_MISSING_ASSIGNMENT = "participating_variable_missing_assignment"
    REQUESTED_CASE_SPLITS_FROM_FIXED_CONSTRAINT = "requested_case_splits_from_fixed_constraint"
    REQUESTED_NONEXISTENT_CASE_SPLIT = "requested_nonexistent_case_split"
    REQUESTED_FIXES_FOR_SATISFIED_CONSTRAINT = "requested_fixes_for_satisfied_constraint"
    NETWORK_LEVEL_REASONER_NOT_AVAILABLE = "network_level_reasoner_not_available"
    PHASE_REVERSAL = "phase_reversal"
    RESTORE_TYPE_MISMATCH = "restore_type_mismatch"


class ConstraintError(Exception):
    """
    Raised when a constraint is used in a way its contract forbids.

    Attributes:
        code: The ErrorCode identifying the violation
        message: Human-readable detail
    """

    def __init__(self, code: ErrorCode, message: str = ""):
        self.code = code
        self.message = message
        text = code.value if not message else f"{code.value}: {message}"
        super().__init__(text)
