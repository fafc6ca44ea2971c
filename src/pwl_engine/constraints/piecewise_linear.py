"""
Piecewise-Linear Constraint Contract

Defines the interface every piecewise-linear relation implements, and the
state every relation shares:

- Activity flag and phase status (context-dependent, restored on backtrack)
- Infeasible-case bookkeeping for the search driver
- Local bound cache (standalone mode) or a delegated bound manager
  (integrated mode); exactly one of the two is in effect
- Concrete assignment cache used by satisfaction checks and fixes
- Non-owning collaborator handles, each of which may be absent
- Branching score

Phase status is monotone: NOT_FIXED may become a terminal phase, but a
terminal phase is never overwritten by a different one. Only a trail
restore (SearchContext.pop) returns a constraint to NOT_FIXED.
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from ..config import DEFAULT_CONFIG, EngineConfig
from ..collaborators import (
    BoundManagerInterface,
    NetworkLevelReasonerInterface,
    QueryInterface,
    StatisticsInterface,
    TableauInterface,
)
from ..core.case_split import CaseSplit
from ..core.fix import Fix
from ..core.linear_expression import LinearExpression
from ..core.propagation import PropagationResult
from ..core.tightening import Tightening
from ..engine.context import SearchContext
from ..errors import ConstraintError, ErrorCode
from .phase import PhaseStatus, PiecewiseLinearFunctionType, phase_to_string

logger = logging.getLogger(__name__)


# Fields whose values are restored by the search context on backtrack
CONTEXT_DEPENDENT_FIELDS = ('_constraint_active', '_phase_status', '_infeasible_cases')

# Handles that stay bound to the receiving constraint on restore_state
COLLABORATOR_FIELDS = (
    '_bound_manager',
    '_tableau',
    '_statistics',
    '_network_level_reasoner',
    '_context',
)


class PiecewiseLinearConstraint(ABC):
    """
    Base class for piecewise-linear relations over engine variables.

    Subclasses provide the relation-specific logic (phase inference,
    propagation, fixes, case splits); this class owns the bookkeeping.
    """

    def __init__(self, num_cases: int, config: Optional[EngineConfig] = None):
        self._config = config or DEFAULT_CONFIG
        self._num_cases = num_cases

        self._constraint_active = True
        self._phase_status = PhaseStatus.PHASE_NOT_FIXED
        self._infeasible_cases: Tuple[PhaseStatus, ...] = ()

        self._lower_bounds: Dict[int, float] = {}
        self._upper_bounds: Dict[int, float] = {}
        self._assignment: Dict[int, float] = {}

        self._score = -1.0
        self._tableau_aux_vars: List[int] = []

        self._bound_manager: Optional[BoundManagerInterface] = None
        self._tableau: Optional[TableauInterface] = None
        self._statistics: Optional[StatisticsInterface] = None
        self._network_level_reasoner: Optional[NetworkLevelReasonerInterface] = None
        self._context: Optional[SearchContext] = None

    # ------------------------------------------------------------------
    # Relation-specific interface
    # ------------------------------------------------------------------

    @abstractmethod
    def get_type(self) -> PiecewiseLinearFunctionType: ...

    @abstractmethod
    def register_as_watcher(self, tableau: TableauInterface) -> None: ...

    @abstractmethod
    def unregister_as_watcher(self, tableau: TableauInterface) -> None: ...

    @abstractmethod
    def notify_lower_bound(self, variable: int, bound: float) -> PropagationResult:
        """
        React to a tightened lower bound of a participating variable.

        Returns:
            PropagationResult; INFEASIBLE when the branch is refuted
        """

    @abstractmethod
    def notify_upper_bound(self, variable: int, bound: float) -> PropagationResult: ...

    @abstractmethod
    def participating_variable(self, variable: int) -> bool: ...

    @abstractmethod
    def get_participating_variables(self) -> List[int]: ...

    @abstractmethod
    def satisfied(self) -> bool: ...

    @abstractmethod
    def get_possible_fixes(self) -> List[Fix]: ...

    @abstractmethod
    def get_smart_fixes(self, tableau: TableauInterface) -> List[Fix]: ...

    @abstractmethod
    def get_case_splits(self) -> List[CaseSplit]: ...

    @abstractmethod
    def get_all_cases(self) -> List[PhaseStatus]: ...

    @abstractmethod
    def get_case_split(self, phase: PhaseStatus) -> CaseSplit: ...

    @abstractmethod
    def get_implied_case_split(self) -> CaseSplit: ...

    def get_valid_case_split(self) -> CaseSplit:
        return self.get_implied_case_split()

    @abstractmethod
    def eliminate_variable(self, variable: int, fixed_value: float) -> None: ...

    @abstractmethod
    def update_variable_index(self, old_index: int, new_index: int) -> None: ...

    @abstractmethod
    def constraint_obsolete(self) -> bool: ...

    @abstractmethod
    def get_entailed_tightenings(self, tightenings: List[Tightening]) -> List[Tightening]: ...

    @abstractmethod
    def serialize_to_string(self) -> str: ...

    @abstractmethod
    def dump(self) -> str: ...

    @abstractmethod
    def get_cost_function_component(self, cost: LinearExpression, phase: PhaseStatus) -> None: ...

    @abstractmethod
    def get_phase_status_in_assignment(self, assignment: Dict[int, float]) -> PhaseStatus: ...

    @abstractmethod
    def transform_to_use_aux_variables(self, query: QueryInterface) -> None: ...

    def supports_polarity(self) -> bool:
        return False

    def supports_babsr(self) -> bool:
        return False

    def update_direction(self) -> None:
        pass

    def get_direction(self) -> PhaseStatus:
        return PhaseStatus.PHASE_NOT_FIXED

    def get_native_aux_vars(self) -> List[int]:
        return []

    def add_tableau_aux_var(self, tableau_aux_var: int, constraint_aux_var: int) -> None:
        pass

    def get_tableau_aux_vars(self) -> List[int]:
        return list(self._tableau_aux_vars)

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def register_bound_manager(self, bound_manager: Optional[BoundManagerInterface]) -> None:
        self._bound_manager = bound_manager

    def register_tableau(self, tableau: Optional[TableauInterface]) -> None:
        self._tableau = tableau

    def set_statistics(self, statistics: Optional[StatisticsInterface]) -> None:
        self._statistics = statistics

    def register_network_level_reasoner(
        self,
        network_level_reasoner: Optional[NetworkLevelReasonerInterface]
    ) -> None:
        self._network_level_reasoner = network_level_reasoner

    def initialize_context(self, context: Optional[SearchContext]) -> None:
        self._context = context

    # ------------------------------------------------------------------
    # Context-dependent state
    # ------------------------------------------------------------------

    def _set_context_dependent(self, attribute: str, value: Any) -> None:
        if self._context is not None:
            self._context.record(self, attribute, getattr(self, attribute))
        setattr(self, attribute, value)

    def set_active_constraint(self, active: bool) -> None:
        self._set_context_dependent('_constraint_active', active)

    def is_active(self) -> bool:
        return self._constraint_active

    def get_phase_status(self) -> PhaseStatus:
        return self._phase_status

    def phase_fixed(self) -> bool:
        return self._phase_status != PhaseStatus.PHASE_NOT_FIXED

    def set_phase_status(self, phase: PhaseStatus) -> None:
        """
        Fix the phase of this constraint.

        Raises:
            ConstraintError(PHASE_REVERSAL): if a different terminal phase
                is already fixed, or if asked to unfix a fixed phase
        """
        current = self._phase_status
        if phase == current:
            return
        if current != PhaseStatus.PHASE_NOT_FIXED:
            raise ConstraintError(
                ErrorCode.PHASE_REVERSAL,
                f"{phase_to_string(current)} -> {phase_to_string(phase)}"
            )
        self._set_context_dependent('_phase_status', phase)
        logger.debug("%s: phase fixed to %s", self.serialize_to_string(), phase.name)

    def mark_infeasible(self, phase: PhaseStatus) -> None:
        """Record that the case `phase` has been refuted in this branch."""
        if phase in self._infeasible_cases:
            return
        self._set_context_dependent('_infeasible_cases', self._infeasible_cases + (phase,))

    def get_infeasible_cases(self) -> List[PhaseStatus]:
        return list(self._infeasible_cases)

    def next_feasible_case(self) -> PhaseStatus:
        """First case, in preference order, not yet marked infeasible."""
        for phase in self.get_all_cases():
            if phase not in self._infeasible_cases:
                return phase
        return PhaseStatus.PHASE_NOT_FIXED

    def get_num_cases(self) -> int:
        return self._num_cases

    def num_feasible_cases(self) -> int:
        return self._num_cases - len(self._infeasible_cases)

    def is_feasible(self) -> bool:
        return self.num_feasible_cases() > 0

    def is_implication(self) -> bool:
        return self.num_feasible_cases() == 1

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------

    def exists_lower_bound(self, variable: int) -> bool:
        if self._bound_manager is not None:
            return True
        return variable in self._lower_bounds

    def exists_upper_bound(self, variable: int) -> bool:
        if self._bound_manager is not None:
            return True
        return variable in self._upper_bounds

    def get_lower_bound(self, variable: int) -> float:
        if self._bound_manager is not None:
            return self._bound_manager.get_lower_bound(variable)
        return self._lower_bounds.get(variable, float('-inf'))

    def get_upper_bound(self, variable: int) -> float:
        if self._bound_manager is not None:
            return self._bound_manager.get_upper_bound(variable)
        return self._upper_bounds.get(variable, float('inf'))

    def set_lower_bound(self, variable: int, value: float) -> None:
        self._lower_bounds[variable] = value

    def set_upper_bound(self, variable: int, value: float) -> None:
        self._upper_bounds[variable] = value

    def _relocate_cached_bounds(self, old_index: int, new_index: int) -> None:
        if old_index in self._lower_bounds:
            self._lower_bounds[new_index] = self._lower_bounds.pop(old_index)
        if old_index in self._upper_bounds:
            self._upper_bounds[new_index] = self._upper_bounds.pop(old_index)
        if old_index in self._assignment:
            self._assignment[new_index] = self._assignment.pop(old_index)

    # ------------------------------------------------------------------
    # Assignment
    # ------------------------------------------------------------------

    def set_assignment(self, variable: int, value: float) -> None:
        self._assignment[variable] = value

    def exists_assignment(self, variable: int) -> bool:
        return variable in self._assignment

    def get_assignment(self, variable: int) -> float:
        return self._assignment[variable]

    def clear_assignment(self) -> None:
        self._assignment.clear()

    # ------------------------------------------------------------------
    # Scores
    # ------------------------------------------------------------------

    def get_score(self) -> float:
        return self._score

    def __lt__(self, other: 'PiecewiseLinearConstraint') -> bool:
        return self._score < other._score

    # ------------------------------------------------------------------
    # Duplication and restore
    # ------------------------------------------------------------------

    def duplicate_constraint(self) -> 'PiecewiseLinearConstraint':
        """
        Deep value copy for a new search branch.

        Bounds, assignment and case bookkeeping are copied; collaborator
        handles are shared, since they are not owned by the constraint.
        The clone is detached from the search context: its branch attaches
        its own with initialize_context.
        """
        clone = copy.copy(self)
        clone._context = None
        clone._lower_bounds = dict(self._lower_bounds)
        clone._upper_bounds = dict(self._upper_bounds)
        clone._assignment = dict(self._assignment)
        clone._tableau_aux_vars = list(self._tableau_aux_vars)
        return clone

    def restore_state(self, state: 'PiecewiseLinearConstraint') -> None:
        """
        Overwrite this constraint's value state with a snapshot's.

        Collaborator handles are kept. When a search context is attached,
        context-dependent fields are left to the trail.

        Raises:
            ConstraintError(RESTORE_TYPE_MISMATCH): if the snapshot is of a
                different constraint kind
        """
        if type(state) is not type(self):
            raise ConstraintError(
                ErrorCode.RESTORE_TYPE_MISMATCH,
                f"cannot restore {type(self).__name__} from {type(state).__name__}"
            )

        kept = {name: getattr(self, name) for name in COLLABORATOR_FIELDS}
        if self._context is not None:
            kept.update({name: getattr(self, name) for name in CONTEXT_DEPENDENT_FIELDS})

        snapshot = state.duplicate_constraint()
        self.__dict__.update(snapshot.__dict__)
        self.__dict__.update(kept)
