"""
ReLU Constraint

Implements f = max(b, 0), optionally with a slack variable aux = f - b,
aux >= 0.

Phase Inference:
    lb(f) > 0        => ACTIVE
    lb(b) >= 0       => ACTIVE
    lb(aux) > 0      => INACTIVE
    ub(f) <= 0       => INACTIVE
    ub(b) <= 0       => INACTIVE
    ub(aux) == 0     => ACTIVE

Two operating modes:
- Standalone: no bound manager; bounds are cached locally and only phase
  inference runs.
- Integrated: bounds live in a bound manager; consequences of every new
  bound are pushed back to it. When the bound manager produces proofs,
  each pushed bound carries either the constraint's tightening row
  (exact linear consequence) or a lemma citing the triggering bound
  (disjunctive consequence, while the phase is still open).
"""

import logging
from typing import Dict, List, Optional

from .. import float_utils
from ..config import EngineConfig
from ..collaborators import QueryInterface, TableauInterface
from ..core.case_split import CaseSplit
from ..core.equation import Equation, EquationType
from ..core.fix import Fix
from ..core.linear_expression import LinearExpression
from ..core.propagation import PropagationResult
from ..core.tableau_row import TableauRow
from ..core.tightening import BoundType, Tightening
from ..engine.statistics import StatisticsLongAttribute
from ..errors import ConstraintError, ErrorCode
from .phase import PhaseStatus, PiecewiseLinearFunctionType, phase_to_string
from .piecewise_linear import PiecewiseLinearConstraint
from .proof_row import build_relu_tightening_row

logger = logging.getLogger(__name__)

ACTIVE = PhaseStatus.RELU_PHASE_ACTIVE
INACTIVE = PhaseStatus.RELU_PHASE_INACTIVE
NOT_FIXED = PhaseStatus.PHASE_NOT_FIXED


class ReluConstraint(PiecewiseLinearConstraint):
    """
    f = ReLU(b).

    Attributes:
        b: Input variable
        f: Output variable
        aux: Slack variable, only meaningful once aux is in use
    """

    def __init__(self, b: int, f: int, config: Optional[EngineConfig] = None):
        super().__init__(num_cases=2, config=config)
        self._b = b
        self._f = f
        self._aux: Optional[int] = None
        self._aux_var_in_use = False
        self._direction = NOT_FIXED
        self._have_eliminated_variables = False
        self._tightening_row: Optional[TableauRow] = None

    @classmethod
    def from_string(cls, serialized: str, config: Optional[EngineConfig] = None) -> 'ReluConstraint':
        """
        Parse the canonical form relu,<f>,<b>[,<aux>].

        Malformed input is a precondition failure.
        """
        tag = PiecewiseLinearFunctionType.RELU.value
        assert serialized[:4] == tag, f"not a {tag} constraint: {serialized!r}"
        assert serialized[4:5] == ",", f"malformed {tag} constraint: {serialized!r}"

        values = serialized[5:].split(",")
        assert 2 <= len(values) <= 3, f"malformed {tag} constraint: {serialized!r}"

        f = int(values[0])
        b = int(values[1])
        constraint = cls(b, f, config)

        if len(values) == 3:
            constraint._aux = int(values[2])
            constraint._aux_var_in_use = True

        return constraint

    def get_type(self) -> PiecewiseLinearFunctionType:
        return PiecewiseLinearFunctionType.RELU

    def get_b(self) -> int:
        return self._b

    def get_f(self) -> int:
        return self._f

    def get_aux(self) -> Optional[int]:
        return self._aux

    def aux_variable_in_use(self) -> bool:
        return self._aux_var_in_use

    def get_tightening_row(self) -> Optional[TableauRow]:
        return self._tightening_row

    def participating_variable(self, variable: int) -> bool:
        return (
            variable == self._b
            or variable == self._f
            or (self._aux_var_in_use and variable == self._aux)
        )

    def get_participating_variables(self) -> List[int]:
        if self._aux_var_in_use:
            return [self._b, self._f, self._aux]
        return [self._b, self._f]

    def register_as_watcher(self, tableau: TableauInterface) -> None:
        for variable in self.get_participating_variables():
            tableau.register_to_watch_variable(self, variable)

    def unregister_as_watcher(self, tableau: TableauInterface) -> None:
        for variable in self.get_participating_variables():
            tableau.unregister_to_watch_variable(self, variable)

    # ------------------------------------------------------------------
    # Phase inference
    # ------------------------------------------------------------------

    def _check_if_lower_bound_update_fixes_phase(self, variable: int, bound: float) -> PropagationResult:
        implied = None
        if variable == self._f and float_utils.is_positive(bound):
            implied = ACTIVE
        elif variable == self._b and not float_utils.is_negative(bound):
            implied = ACTIVE
        elif self._aux_var_in_use and variable == self._aux and float_utils.is_positive(bound):
            implied = INACTIVE
        return self._fix_phase(implied, variable, bound, BoundType.LB)

    def _check_if_upper_bound_update_fixes_phase(self, variable: int, bound: float) -> PropagationResult:
        implied = None
        if (variable == self._f or variable == self._b) and not float_utils.is_positive(bound):
            implied = INACTIVE
        elif self._aux_var_in_use and variable == self._aux and float_utils.is_zero(bound):
            implied = ACTIVE
        return self._fix_phase(implied, variable, bound, BoundType.UB)

    def _fix_phase(self, implied: Optional[PhaseStatus], variable: int,
                   bound: float, bound_type: BoundType) -> PropagationResult:
        if implied is None or implied == self._phase_status:
            return PropagationResult.feasible()

        if self._phase_status == NOT_FIXED:
            self.set_phase_status(implied)
            return PropagationResult.feasible()

        # At 0 both phases coincide (b = f = aux = 0), so the fixed phase stands
        if float_utils.is_zero(bound):
            return PropagationResult.feasible()

        logger.debug(
            "%s: bound %s on x%d implies %s but phase is %s",
            self.serialize_to_string(), bound, variable,
            phase_to_string(implied), phase_to_string(self._phase_status)
        )
        return PropagationResult.infeasible_because(
            "phase_conflict",
            variable=variable,
            bound=bound,
            bound_type=bound_type.value,
            fixed_phase=self._phase_status.name,
            implied_phase=implied.name
        )

    # ------------------------------------------------------------------
    # Bound notifications
    # ------------------------------------------------------------------

    def notify_lower_bound(self, variable: int, new_bound: float) -> PropagationResult:
        if self._statistics is not None:
            self._statistics.inc_long_attribute(
                StatisticsLongAttribute.NUM_BOUND_NOTIFICATIONS_TO_PL_CONSTRAINTS)

        if self._bound_manager is None:
            if (self.exists_lower_bound(variable)
                    and not float_utils.gt(new_bound, self.get_lower_bound(variable))):
                return PropagationResult.feasible()
            self.set_lower_bound(variable, new_bound)
            return self._check_if_lower_bound_update_fixes_phase(variable, new_bound)

        # Nothing remains to propagate once the constraint is known inactive
        if self._phase_status == INACTIVE:
            return PropagationResult.feasible()

        bound = self.get_lower_bound(variable)
        result = self._check_if_lower_bound_update_fixes_phase(variable, bound)
        if result.infeasible or not self.is_active():
            return result
        return result.merge(self._propagate_lower_bound(variable, bound))

    def notify_upper_bound(self, variable: int, new_bound: float) -> PropagationResult:
        if self._statistics is not None:
            self._statistics.inc_long_attribute(
                StatisticsLongAttribute.NUM_BOUND_NOTIFICATIONS_TO_PL_CONSTRAINTS)

        if self._bound_manager is None:
            if (self.exists_upper_bound(variable)
                    and not float_utils.lt(new_bound, self.get_upper_bound(variable))):
                return PropagationResult.feasible()
            self.set_upper_bound(variable, new_bound)
            return self._check_if_upper_bound_update_fixes_phase(variable, new_bound)

        bound = self.get_upper_bound(variable)
        if self._phase_status == INACTIVE:
            if variable == self._f and float_utils.is_negative(bound):
                return PropagationResult.infeasible_because(
                    "negative_output_upper_bound", variable=variable, bound=bound)
            return PropagationResult.feasible()

        result = self._check_if_upper_bound_update_fixes_phase(variable, bound)
        if result.infeasible or not self.is_active():
            return result
        return result.merge(self._propagate_upper_bound(variable, bound))

    def _propagate_lower_bound(self, variable: int, bound: float) -> PropagationResult:
        proofs = self._bound_manager.should_produce_proofs()
        if proofs:
            self._create_tightening_row()

        result = PropagationResult.feasible()
        b, f, aux = self._b, self._f, self._aux

        if (variable == f or variable == b) and bound > 0:
            # Active: aux is 0 and b, f share the positive lower bound
            if self._aux_var_in_use:
                if proofs:
                    self._tighten_by_lemma(result, aux, 0.0, BoundType.UB, variable, BoundType.LB)
                else:
                    self._tighten(result, aux, 0.0, BoundType.UB)
            partner = b if variable == f else f
            self._tighten_exact(result, partner, bound, BoundType.LB, variable, BoundType.LB)

        elif self._aux_var_in_use and variable == b and float_utils.is_zero(bound):
            if proofs:
                self._tighten_by_lemma(result, aux, 0.0, BoundType.UB, variable, BoundType.LB)
            else:
                self._tighten(result, aux, 0.0, BoundType.UB)

        elif self._aux_var_in_use and variable == aux and bound > 0:
            # Inactive: f is 0 and b = -aux
            if proofs:
                self._tighten_by_lemma(result, f, 0.0, BoundType.UB, variable, BoundType.LB)
            else:
                self._tighten(result, f, 0.0, BoundType.UB)
            self._tighten_exact(result, b, -bound, BoundType.UB, variable, BoundType.LB)

        elif self._aux_var_in_use and variable == b and bound < 0:
            if proofs:
                if self._phase_status == INACTIVE:
                    self._tighten_exact(result, aux, -bound, BoundType.UB, variable, BoundType.LB)
                else:
                    self._tighten_by_lemma(result, aux, -bound, BoundType.UB, variable, BoundType.LB)
            else:
                self._tighten(result, aux, -bound, BoundType.UB)

        elif variable == f and bound < 0:
            if proofs:
                self._tighten_by_lemma(result, f, 0.0, BoundType.LB, variable, BoundType.LB)
            else:
                self._tighten(result, f, 0.0, BoundType.LB)

        return result

    def _propagate_upper_bound(self, variable: int, bound: float) -> PropagationResult:
        proofs = self._bound_manager.should_produce_proofs()
        if proofs:
            self._create_tightening_row()

        result = PropagationResult.feasible()
        b, f, aux = self._b, self._f, self._aux

        if variable == f:
            if self._phase_status == INACTIVE and float_utils.is_negative(bound):
                return PropagationResult.infeasible_because(
                    "negative_output_upper_bound", variable=f, bound=bound)
            if proofs:
                if self._phase_status != INACTIVE:
                    self._tighten_exact(result, b, bound, BoundType.UB, variable, BoundType.UB)
                elif float_utils.is_zero(bound):
                    self._tighten_by_lemma(result, b, 0.0, BoundType.UB, variable, BoundType.UB)
            else:
                self._tighten(result, b, bound, BoundType.UB)

        elif variable == b:
            if not float_utils.is_positive(bound):
                # Non-positive input: f is 0 and aux = -b
                if proofs:
                    self._tighten_by_lemma(result, f, 0.0, BoundType.UB, variable, BoundType.UB)
                else:
                    self._tighten(result, f, 0.0, BoundType.UB)
                if self._aux_var_in_use:
                    self._tighten_exact(result, aux, -bound, BoundType.LB, variable, BoundType.UB)
            else:
                if proofs:
                    if self._phase_status == ACTIVE:
                        self._tighten_exact(result, f, bound, BoundType.UB, variable, BoundType.UB)
                    else:
                        self._tighten_by_lemma(result, f, bound, BoundType.UB, variable, BoundType.UB)
                else:
                    self._tighten(result, f, bound, BoundType.UB)

        elif self._aux_var_in_use and variable == aux:
            if self._phase_status == ACTIVE and float_utils.is_negative(bound):
                return PropagationResult.infeasible_because(
                    "negative_aux_upper_bound", variable=aux, bound=bound)
            if proofs:
                if self._phase_status != ACTIVE:
                    self._tighten_exact(result, b, -bound, BoundType.LB, variable, BoundType.UB)
                elif float_utils.is_zero(bound):
                    self._tighten_by_lemma(result, b, 0.0, BoundType.LB, variable, BoundType.UB)
            else:
                self._tighten(result, b, -bound, BoundType.LB)

        return result

    def _tighten(self, result: PropagationResult, variable: int, value: float,
                 bound_type: BoundType, row: Optional[TableauRow] = None) -> None:
        if bound_type == BoundType.LB:
            changed = self._bound_manager.tighten_lower_bound(variable, value, row)
        else:
            changed = self._bound_manager.tighten_upper_bound(variable, value, row)
        self._record_tightening(result, changed, variable, value, bound_type)

    def _tighten_exact(self, result: PropagationResult, variable: int, value: float,
                       bound_type: BoundType, causing_variable: int,
                       causing_bound_type: BoundType) -> None:
        # In proof mode a bound without the tightening row is justified by a lemma
        if self._bound_manager.should_produce_proofs() and self._tightening_row is None:
            self._tighten_by_lemma(result, variable, value, bound_type,
                                   causing_variable, causing_bound_type)
        else:
            self._tighten(result, variable, value, bound_type, self._tightening_row)

    def _tighten_by_lemma(self, result: PropagationResult, variable: int, value: float,
                          bound_type: BoundType, causing_variable: int,
                          causing_bound_type: BoundType) -> None:
        changed = self._bound_manager.add_lemma_explanation_and_tighten_bound(
            variable, value, bound_type, [causing_variable], causing_bound_type, self.get_type())
        self._record_tightening(result, changed, variable, value, bound_type)

    def _record_tightening(self, result: PropagationResult, changed: bool, variable: int,
                           value: float, bound_type: BoundType) -> None:
        if changed:
            result.tightenings.append(Tightening(variable, value, bound_type))

        lower = self._bound_manager.get_lower_bound(variable)
        upper = self._bound_manager.get_upper_bound(variable)
        if float_utils.gt(lower, upper):
            logger.debug("%s: x%d emptied to [%s, %s]", self.serialize_to_string(),
                         variable, lower, upper)
            result.merge(PropagationResult.infeasible_because(
                "empty_interval", variable=variable, lower=lower, upper=upper))

    def _create_tightening_row(self) -> None:
        # Built once, lazily, and only once the tableau has a slack for aux
        if (self._bound_manager.get_bound_explainer() is None
                or self._tightening_row is not None
                or not self._aux_var_in_use
                or not self._tableau_aux_vars):
            return
        self._tightening_row = build_relu_tightening_row(
            self._f, self._b, self._aux, self._tableau_aux_vars[-1])

    # ------------------------------------------------------------------
    # Satisfaction and fixes
    # ------------------------------------------------------------------

    def satisfied(self) -> bool:
        if not (self.exists_assignment(self._b) and self.exists_assignment(self._f)):
            raise ConstraintError(ErrorCode.PARTICIPATING_VARIABLE_MISSING_ASSIGNMENT,
                                  self.serialize_to_string())

        b_value = self.get_assignment(self._b)
        f_value = self.get_assignment(self._f)

        if float_utils.is_negative(f_value):
            return False

        if float_utils.is_positive(f_value):
            return float_utils.are_equal(
                b_value, f_value, self._config.constraint_comparison_tolerance)
        return not float_utils.is_positive(b_value)

    def _require_violation(self) -> None:
        if self.satisfied():
            raise ConstraintError(ErrorCode.REQUESTED_FIXES_FOR_SATISFIED_CONSTRAINT,
                                  self.serialize_to_string())

    def get_possible_fixes(self) -> List[Fix]:
        """
        Assignment-only repairs, preferred first.

        Violations handled:
            1. f > 0, b > 0, b != f
            2. f > 0, b <= 0
            3. f <= 0, b > 0 (or f < 0)
        """
        self._require_violation()

        b_value = self.get_assignment(self._b)
        f_value = self.get_assignment(self._f)

        if float_utils.is_positive(f_value):
            if float_utils.is_positive(b_value):
                return [Fix(self._b, f_value), Fix(self._f, b_value)]
            if self._direction == INACTIVE:
                return [Fix(self._f, 0.0), Fix(self._b, f_value)]
            return [Fix(self._b, f_value), Fix(self._f, 0.0)]

        if self._direction == ACTIVE:
            return [Fix(self._f, b_value), Fix(self._b, 0.0)]
        return [Fix(self._b, 0.0), Fix(self._f, b_value)]

    def get_smart_fixes(self, tableau: TableauInterface) -> List[Fix]:
        """
        Pivot-aware repairs.

        When b and f are linked by the current basis (one basic, the other
        not), changing the non-basic one moves the basic one by a known
        coefficient. That lets us compute the exact change that makes
        b == f (active repair) or f == 0 with b <= 0 (inactive repair).

        Args:
            tableau: Provides basis membership and linear dependency

        Returns:
            List of fixes; the plain possible fixes if b and f are independent
        """
        self._require_violation()

        dependent, b_delta_to_f_delta, f_delta_to_b_delta = tableau.are_linearly_dependent(
            self._b, self._f)
        if not dependent:
            return self.get_possible_fixes()

        f_is_basic = tableau.is_basic(self._f)
        b_is_basic = tableau.is_basic(self._b)
        assert b_is_basic != f_is_basic

        b_value = self.get_assignment(self._b)
        f_value = self.get_assignment(self._f)
        fixes = []

        # Active repair: move the non-basic variable until b' == f' >= 0
        if not b_is_basic:
            # b + delta = f + b_delta_to_f_delta * delta
            if not float_utils.are_equal(b_delta_to_f_delta, 1.0):
                delta = (b_value - f_value) / (b_delta_to_f_delta - 1)
                active_fix = b_value + delta
                if not float_utils.is_negative(active_fix):
                    fixes.append(Fix(self._b, active_fix))
        else:
            # f + delta = b + f_delta_to_b_delta * delta
            if not float_utils.are_equal(f_delta_to_b_delta, 1.0):
                delta = (f_value - b_value) / (f_delta_to_b_delta - 1)
                active_fix = f_value + delta
                if not float_utils.is_negative(active_fix):
                    fixes.append(Fix(self._f, active_fix))

        # Inactive repair: f' == 0 and b' <= 0
        if not f_is_basic:
            new_b_value = b_value + f_delta_to_b_delta * (-f_value)
            if new_b_value <= 0:
                fixes.append(Fix(self._f, 0.0))
        else:
            # f + b_delta_to_f_delta * delta = 0
            inactive_fix = b_value + f_value / (-b_delta_to_f_delta)
            if inactive_fix <= 0:
                fixes.append(Fix(self._b, inactive_fix))

        return fixes

    # ------------------------------------------------------------------
    # Case splits
    # ------------------------------------------------------------------

    def get_all_cases(self) -> List[PhaseStatus]:
        if self._direction == INACTIVE:
            return [INACTIVE, ACTIVE]
        if self._direction == ACTIVE:
            return [ACTIVE, INACTIVE]

        # Lean towards the phase the current assignment is in
        if self.exists_assignment(self._f):
            if float_utils.is_positive(self.get_assignment(self._f)):
                return [ACTIVE, INACTIVE]
            return [INACTIVE, ACTIVE]

        # Inactive first: it adds no equation
        return [INACTIVE, ACTIVE]

    def get_case_splits(self) -> List[CaseSplit]:
        if self._phase_status != NOT_FIXED:
            raise ConstraintError(ErrorCode.REQUESTED_CASE_SPLITS_FROM_FIXED_CONSTRAINT,
                                  self.serialize_to_string())
        return [self.get_case_split(phase) for phase in self.get_all_cases()]

    def get_case_split(self, phase: PhaseStatus) -> CaseSplit:
        if phase == INACTIVE:
            return self._get_inactive_split()
        if phase == ACTIVE:
            return self._get_active_split()
        raise ConstraintError(ErrorCode.REQUESTED_NONEXISTENT_CASE_SPLIT, phase_to_string(phase))

    def get_implied_case_split(self) -> CaseSplit:
        if self._phase_status == NOT_FIXED:
            raise ConstraintError(ErrorCode.REQUESTED_NONEXISTENT_CASE_SPLIT,
                                  "phase is not fixed")
        if self._phase_status == ACTIVE:
            return self._get_active_split()
        return self._get_inactive_split()

    def _get_inactive_split(self) -> CaseSplit:
        # b <= 0, f = 0
        split = CaseSplit()
        split.store_bound_tightening(Tightening(self._b, 0.0, BoundType.UB))
        split.store_bound_tightening(Tightening(self._f, 0.0, BoundType.UB))
        return split

    def _get_active_split(self) -> CaseSplit:
        # b >= 0, b - f = 0
        split = CaseSplit()
        split.store_bound_tightening(Tightening(self._b, 0.0, BoundType.LB))

        if self._aux_var_in_use:
            # aux = f - b >= 0, so aux <= 0 pins it to 0
            split.store_bound_tightening(Tightening(self._aux, 0.0, BoundType.UB))
        else:
            equation = Equation(EquationType.EQ)
            equation.add_addend(1.0, self._b)
            equation.add_addend(-1.0, self._f)
            equation.set_scalar(0.0)
            split.add_equation(equation)

        return split

    # ------------------------------------------------------------------
    # Preprocessing
    # ------------------------------------------------------------------

    def eliminate_variable(self, variable: int, fixed_value: float) -> None:
        """
        A participating variable became a constant: the whole ReLU is obsolete.

        With debug checks on, the fixed value must agree with any phase
        already inferred.
        """
        assert self.participating_variable(variable)

        if self._config.debug_checks:
            if variable == self._f:
                assert float_utils.gte(fixed_value, 0.0)

            if variable == self._f or variable == self._b:
                if float_utils.gt(fixed_value, 0.0):
                    assert self._phase_status != INACTIVE
                elif float_utils.lt(fixed_value, 0.0):
                    assert self._phase_status != ACTIVE
            elif float_utils.is_positive(fixed_value):
                assert self._phase_status != ACTIVE

        logger.debug("%s: x%d fixed to %s, constraint obsolete",
                     self.serialize_to_string(), variable, fixed_value)
        self._have_eliminated_variables = True

    def constraint_obsolete(self) -> bool:
        return self._have_eliminated_variables

    def update_variable_index(self, old_index: int, new_index: int) -> None:
        assert self.participating_variable(old_index)
        assert not self.participating_variable(new_index)
        assert new_index not in self._lower_bounds and new_index not in self._upper_bounds

        self._relocate_cached_bounds(old_index, new_index)

        if old_index == self._b:
            self._b = new_index
        elif old_index == self._f:
            self._f = new_index
        else:
            self._aux = new_index

    def transform_to_use_aux_variables(self, query: QueryInterface) -> None:
        """
        Add aux with f - b - aux = 0 to the query.

        aux >= 0 always; aux <= -lb(b), or aux <= 0 when lb(b) > 0.
        Idempotent.
        """
        if self._aux_var_in_use:
            return

        self._aux = query.get_number_of_variables()
        query.set_number_of_variables(self._aux + 1)

        equation = Equation(EquationType.EQ)
        equation.add_addend(1.0, self._f)
        equation.add_addend(-1.0, self._b)
        equation.add_addend(-1.0, self._aux)
        equation.set_scalar(0.0)
        query.add_equation(equation)

        query.set_lower_bound(self._aux, 0.0)

        b_lower_bound = (self.get_lower_bound(self._b) if self.exists_lower_bound(self._b)
                         else float_utils.negative_infinity())
        aux_upper_bound = 0.0 if b_lower_bound > 0 else -b_lower_bound
        query.set_upper_bound(self._aux, aux_upper_bound)

        self._aux_var_in_use = True
        logger.debug("%s: aux variable added", self.serialize_to_string())

    def get_native_aux_vars(self) -> List[int]:
        if self._aux_var_in_use:
            return [self._aux]
        return []

    def add_tableau_aux_var(self, tableau_aux_var: int, constraint_aux_var: int) -> None:
        assert not self._tableau_aux_vars
        if constraint_aux_var == self._aux:
            self._tableau_aux_vars.append(tableau_aux_var)

    # ------------------------------------------------------------------
    # Entailed bounds
    # ------------------------------------------------------------------

    def get_entailed_tightenings(self, tightenings: List[Tightening]) -> List[Tightening]:
        """
        Append every bound derivable from the current bounds without branching.

        Args:
            tightenings: Output list, extended in place

        Returns:
            The same list
        """
        b, f, aux = self._b, self._f, self._aux
        assert self.exists_lower_bound(b) and self.exists_upper_bound(b)
        assert self.exists_lower_bound(f) and self.exists_upper_bound(f)
        assert not self._aux_var_in_use or (
            self.exists_lower_bound(aux) and self.exists_upper_bound(aux))

        b_lower = self.get_lower_bound(b)
        f_lower = self.get_lower_bound(f)
        b_upper = self.get_upper_bound(b)
        f_upper = self.get_upper_bound(f)

        aux_lower = 0.0
        aux_upper = 0.0
        if self._aux_var_in_use:
            aux_lower = self.get_lower_bound(aux)
            aux_upper = self.get_upper_bound(aux)

        LB, UB = BoundType.LB, BoundType.UB

        if (not float_utils.is_negative(b_lower) or float_utils.is_positive(f_lower)
                or (self._aux_var_in_use and float_utils.is_zero(aux_upper))):
            # Active: b and f share all bounds, aux is 0
            tightenings.append(Tightening(b, f_lower, LB))
            tightenings.append(Tightening(f, b_lower, LB))
            tightenings.append(Tightening(b, f_upper, UB))
            tightenings.append(Tightening(f, b_upper, UB))

            if self._aux_var_in_use:
                tightenings.append(Tightening(aux, 0.0, LB))
                tightenings.append(Tightening(aux, 0.0, UB))

            tightenings.append(Tightening(b, 0.0, LB))
            tightenings.append(Tightening(f, 0.0, LB))

        elif (float_utils.is_negative(b_upper) or float_utils.is_zero(f_upper)
                or (self._aux_var_in_use and float_utils.is_positive(aux_lower))):
            # Inactive: f is 0, b is non-positive, aux = -b
            tightenings.append(Tightening(f, 0.0, LB))
            tightenings.append(Tightening(f, 0.0, UB))
            tightenings.append(Tightening(b, 0.0, UB))

            if self._aux_var_in_use:
                tightenings.append(Tightening(aux, -b_lower, UB))
                tightenings.append(Tightening(aux, -b_upper, LB))
                tightenings.append(Tightening(b, -aux_lower, UB))
                tightenings.append(Tightening(b, -aux_upper, LB))
                tightenings.append(Tightening(aux, 0.0, LB))

        else:
            # Unknown phase: b and f share upper bounds, f and aux are non-negative
            tightenings.append(Tightening(b, f_upper, UB))
            tightenings.append(Tightening(f, b_upper, UB))

            if self._aux_var_in_use:
                tightenings.append(Tightening(b, -aux_upper, LB))
                tightenings.append(Tightening(aux, -b_lower, UB))

            tightenings.append(Tightening(f, 0.0, LB))
            if self._aux_var_in_use:
                tightenings.append(Tightening(aux, 0.0, LB))

        return tightenings

    # ------------------------------------------------------------------
    # Relaxation cost
    # ------------------------------------------------------------------

    def get_cost_function_component(self, cost: LinearExpression, phase: PhaseStatus) -> None:
        """Add this constraint's term for `phase` to a relaxation objective."""
        if not self.is_active() or self.phase_fixed():
            return

        assert not self.have_out_of_bound_variables()

        if phase == INACTIVE:
            # f is 0 and minimal iff inactive holds
            cost.add_to_addend(self._f, 1.0)
        elif phase == ACTIVE:
            # f - b is 0 and minimal iff active holds (given f >= b)
            cost.add_to_addend(self._f, 1.0)
            cost.add_to_addend(self._b, -1.0)
        else:
            raise ConstraintError(ErrorCode.REQUESTED_NONEXISTENT_CASE_SPLIT, phase_to_string(phase))

    def get_phase_status_in_assignment(self, assignment: Dict[int, float]) -> PhaseStatus:
        assert self._b in assignment
        return INACTIVE if float_utils.is_negative(assignment[self._b]) else ACTIVE

    def have_out_of_bound_variables(self) -> bool:
        tolerance = self._config.constraint_comparison_tolerance
        for variable in (self._b, self._f):
            value = self.get_assignment(variable)
            if (float_utils.gt(self.get_lower_bound(variable), value, tolerance)
                    or float_utils.lt(self.get_upper_bound(variable), value, tolerance)):
                return True
        return False

    # ------------------------------------------------------------------
    # Branching heuristics
    # ------------------------------------------------------------------

    def supports_polarity(self) -> bool:
        return True

    def supports_babsr(self) -> bool:
        return True

    def compute_polarity(self) -> float:
        """
        Position of b's interval relative to 0, in [-1, 1].

        1 if b is known non-negative, -1 if known non-positive, otherwise
        (ub + lb) / (ub - lb). An unbounded side gives 0.
        """
        lower = self.get_lower_bound(self._b)
        upper = self.get_upper_bound(self._b)
        if lower >= 0:
            return 1.0
        if upper <= 0:
            return -1.0
        if not (float_utils.is_finite(lower) and float_utils.is_finite(upper)):
            return 0.0
        return (upper + lower) / (upper - lower)

    def compute_babsr(self) -> float:
        """
        BaBSR branching score.

        Combines the bias feeding b (from the network-level reasoner), the
        current input/output values and b's bounds. A fixed or unbounded
        interval for b gives 0.

        Raises:
            ConstraintError(NETWORK_LEVEL_REASONER_NOT_AVAILABLE)
        """
        if self._network_level_reasoner is None:
            raise ConstraintError(ErrorCode.NETWORK_LEVEL_REASONER_NOT_AVAILABLE)

        bias = self._network_level_reasoner.get_previous_bias(self)

        upper = self.get_upper_bound(self._b)
        lower = self.get_lower_bound(self._b)
        if (not (float_utils.is_finite(lower) and float_utils.is_finite(upper))
                or float_utils.are_equal(lower, upper)):
            return 0.0

        if self._tableau is not None:
            relu_input = self._tableau.get_value(self._b)
            relu_output = self._tableau.get_value(self._f)
        else:
            relu_input = self.get_assignment(self._b)
            relu_output = self.get_assignment(self._f)

        scaler = upper / (upper - lower)
        term1 = min(scaler * relu_input * bias, (scaler - 1.0) * relu_input * bias)
        term2 = (scaler * lower) * relu_output
        return term1 - term2

    def update_direction(self) -> None:
        self._direction = ACTIVE if self.compute_polarity() > 0 else INACTIVE

    def set_direction(self, direction: PhaseStatus) -> None:
        self._direction = direction

    def get_direction(self) -> PhaseStatus:
        return self._direction

    def update_score_based_on_polarity(self) -> None:
        self._score = abs(self.compute_polarity())

    def update_score_based_on_babsr(self) -> None:
        self._score = abs(self.compute_babsr())

    # ------------------------------------------------------------------
    # Duplication, serialization, diagnostics
    # ------------------------------------------------------------------

    def duplicate_constraint(self) -> 'ReluConstraint':
        clone = super().duplicate_constraint()
        if self._tightening_row is not None:
            clone._tightening_row = TableauRow(
                lhs=self._tightening_row.lhs,
                row=list(self._tightening_row.row),
                scalar=self._tightening_row.scalar
            )
        return clone

    def serialize_to_string(self) -> str:
        # Output order is f, b, aux
        if self._aux_var_in_use:
            return f"relu,{self._f},{self._b},{self._aux}"
        return f"relu,{self._f},{self._b}"

    def _format_range(self, variable: int) -> str:
        lower = (float_utils.format_bound(self.get_lower_bound(variable))
                 if self.exists_lower_bound(variable) else "-inf")
        upper = (float_utils.format_bound(self.get_upper_bound(variable))
                 if self.exists_upper_bound(variable) else "inf")
        return f"[{lower}, {upper}]"

    def dump(self) -> str:
        output = (
            f"ReluConstraint: x{self._f} = ReLU( x{self._b} ). "
            f"Active? {'Yes' if self._constraint_active else 'No'}. "
            f"PhaseStatus = {self._phase_status.value} ({phase_to_string(self._phase_status)}).\n"
        )
        output += f"b in {self._format_range(self._b)}, "
        output += f"f in {self._format_range(self._f)}"
        if self._aux_var_in_use:
            output += f". Aux var: {self._aux}. Range: {self._format_range(self._aux)}\n"
        return output
