"""
Bound Manager (reference collaborator)

Holds the current lower/upper bound of every variable in one search
branch. Tightenings are accepted only when strictly tighter. In proof
mode a BoundExplainer records, for every accepted tightening, the
justification that produced it: a tableau row (exact linear consequence)
or a PLCLemma (disjunctive consequence of a piecewise-linear constraint).

Bounds are stored in numpy arrays indexed by variable and grow on demand.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .. import float_utils
from ..collaborators import BoundManagerInterface
from ..config import DEFAULT_CONFIG, EngineConfig
from ..core.canonical_json import canonical_hash
from ..core.tableau_row import TableauRow
from ..core.tightening import BoundType

logger = logging.getLogger(__name__)


@dataclass
class PLCLemma:
    """
    Disjunctive justification of a bound.

    Attributes:
        causing_vars: Variables whose bounds triggered the inference
        affected_var: Variable whose bound was tightened
        bound: The new bound value
        causing_var_bound: Which bound of the causing variables was used
        affected_var_bound: Which bound of the affected variable changed
        constraint_type: Tag of the constraint kind that produced the lemma
    """
    causing_vars: List[int]
    affected_var: int
    bound: float
    causing_var_bound: BoundType
    affected_var_bound: BoundType
    constraint_type: Any
    lemma_hash: str = ""

    def __post_init__(self):
        if not self.lemma_hash:
            self.lemma_hash = canonical_hash(self.to_canonical())

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "causing_vars": list(self.causing_vars),
            "affected_var": self.affected_var,
            "bound": self.bound,
            "causing_var_bound": self.causing_var_bound.value,
            "affected_var_bound": self.affected_var_bound.value,
            "constraint_type": getattr(self.constraint_type, "value", self.constraint_type)
        }

    def verify(self) -> bool:
        return self.lemma_hash == canonical_hash(self.to_canonical())


@dataclass
class BoundExplanation:
    """Why a bound holds: exactly one of row / lemma is set."""
    variable: int
    bound_type: BoundType
    value: float
    row: Optional[TableauRow] = None
    lemma: Optional[PLCLemma] = None


@dataclass
class BoundExplainer:
    """Latest explanation per (variable, bound side), plus all lemmas in order."""
    explanations: Dict[Tuple[int, BoundType], BoundExplanation] = field(default_factory=dict)
    lemmas: List[PLCLemma] = field(default_factory=list)

    def set_explanation(self, explanation: BoundExplanation) -> None:
        self.explanations[(explanation.variable, explanation.bound_type)] = explanation

    def clear_explanation(self, variable: int, bound_type: BoundType) -> None:
        self.explanations.pop((variable, bound_type), None)

    def get_explanation(self, variable: int, bound_type: BoundType) -> Optional[BoundExplanation]:
        return self.explanations.get((variable, bound_type))

    def add_lemma(self, lemma: PLCLemma) -> None:
        self.lemmas.append(lemma)


class BoundManager(BoundManagerInterface):
    """
    Reference bound manager for one search branch.

    Args:
        num_variables: Initial number of variables (all unbounded)
        config: Engine configuration; produce_proofs enables the explainer
    """

    def __init__(self, num_variables: int = 0, config: Optional[EngineConfig] = None):
        self._config = config or DEFAULT_CONFIG
        self._lower = np.full(num_variables, -np.inf, dtype=np.float64)
        self._upper = np.full(num_variables, np.inf, dtype=np.float64)
        self._explainer = BoundExplainer() if self._config.produce_proofs else None

    @property
    def num_variables(self) -> int:
        return len(self._lower)

    def _ensure_variable(self, variable: int) -> None:
        if variable < self.num_variables:
            return
        extra = variable + 1 - self.num_variables
        self._lower = np.concatenate([self._lower, np.full(extra, -np.inf)])
        self._upper = np.concatenate([self._upper, np.full(extra, np.inf)])

    def get_lower_bound(self, variable: int) -> float:
        if variable >= self.num_variables:
            return float('-inf')
        return float(self._lower[variable])

    def get_upper_bound(self, variable: int) -> float:
        if variable >= self.num_variables:
            return float('inf')
        return float(self._upper[variable])

    def set_lower_bound(self, variable: int, value: float) -> None:
        """Unconditional write, for initial bounds."""
        self._ensure_variable(variable)
        self._lower[variable] = value

    def set_upper_bound(self, variable: int, value: float) -> None:
        self._ensure_variable(variable)
        self._upper[variable] = value

    def tighten_lower_bound(self, variable: int, value: float,
                            row: Optional[TableauRow] = None) -> bool:
        if not float_utils.gt(value, self.get_lower_bound(variable)):
            return False
        self.set_lower_bound(variable, value)
        self._explain(variable, BoundType.LB, value, row)
        return True

    def tighten_upper_bound(self, variable: int, value: float,
                            row: Optional[TableauRow] = None) -> bool:
        if not float_utils.lt(value, self.get_upper_bound(variable)):
            return False
        self.set_upper_bound(variable, value)
        self._explain(variable, BoundType.UB, value, row)
        return True

    def _explain(self, variable: int, bound_type: BoundType, value: float,
                 row: Optional[TableauRow]) -> None:
        # An accepted tightening always replaces the previous explanation
        if self._explainer is None:
            return
        if row is None:
            self._explainer.clear_explanation(variable, bound_type)
        else:
            self._explainer.set_explanation(BoundExplanation(variable, bound_type, value, row=row))

    def add_lemma_explanation_and_tighten_bound(
        self,
        variable: int,
        value: float,
        bound_type: BoundType,
        causing_vars: List[int],
        causing_bound_type: BoundType,
        constraint_type: Any
    ) -> bool:
        if bound_type == BoundType.LB:
            changed = self.tighten_lower_bound(variable, value)
        else:
            changed = self.tighten_upper_bound(variable, value)

        if changed and self._explainer is not None:
            lemma = PLCLemma(
                causing_vars=list(causing_vars),
                affected_var=variable,
                bound=value,
                causing_var_bound=causing_bound_type,
                affected_var_bound=bound_type,
                constraint_type=constraint_type
            )
            self._explainer.add_lemma(lemma)
            self._explainer.set_explanation(BoundExplanation(variable, bound_type, value, lemma=lemma))
        return changed

    def should_produce_proofs(self) -> bool:
        return self._config.produce_proofs

    def get_bound_explainer(self) -> Optional[BoundExplainer]:
        return self._explainer

    def consistent_bounds(self, variable: int) -> bool:
        return float_utils.lte(self.get_lower_bound(variable), self.get_upper_bound(variable))

    def inconsistent_variables(self) -> List[int]:
        bad = np.where(self._lower > self._upper + float_utils.DEFAULT_EPSILON)[0]
        return [int(v) for v in bad]

    def store_local_bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        """Snapshot of every bound, for backtracking."""
        return self._lower.copy(), self._upper.copy()

    def restore_local_bounds(self, snapshot: Tuple[np.ndarray, np.ndarray]) -> None:
        lower, upper = snapshot
        self._lower = lower.copy()
        self._upper = upper.copy()
        logger.debug("Restored bounds for %d variables", self.num_variables)
