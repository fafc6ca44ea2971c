"""
Linear equations over engine variables.

An Equation is sum(coefficient_i * x_i) <relation> scalar.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping

from .. import float_utils


class EquationType(Enum):
    """Relation between the left-hand sum and the scalar."""
    EQ = "eq"
    GE = "ge"
    LE = "le"


@dataclass
class Addend:
    """A single coefficient * variable term."""
    coefficient: float
    variable: int


@dataclass
class Equation:
    """
    A linear relation.

    Attributes:
        type: EquationType of the relation
        addends: Ordered (coefficient, variable) terms
        scalar: Right-hand side constant
    """
    type: EquationType = EquationType.EQ
    addends: List[Addend] = field(default_factory=list)
    scalar: float = 0.0

    def add_addend(self, coefficient: float, variable: int) -> None:
        self.addends.append(Addend(coefficient, variable))

    def set_scalar(self, scalar: float) -> None:
        self.scalar = scalar

    def get_participating_variables(self) -> List[int]:
        return [addend.variable for addend in self.addends]

    def update_variable_index(self, old_index: int, new_index: int) -> None:
        for addend in self.addends:
            if addend.variable == old_index:
                addend.variable = new_index

    def evaluate(self, assignment: Mapping[int, float]) -> float:
        """Return lhs - scalar under the given assignment."""
        lhs = sum(a.coefficient * assignment[a.variable] for a in self.addends)
        return lhs - self.scalar

    def is_satisfied(self, assignment: Mapping[int, float],
                     tolerance: float = float_utils.DEFAULT_EPSILON) -> bool:
        residual = self.evaluate(assignment)
        if self.type == EquationType.EQ:
            return float_utils.is_zero(residual, tolerance)
        if self.type == EquationType.GE:
            return not float_utils.is_negative(residual, tolerance)
        return not float_utils.is_positive(residual, tolerance)

    def dump(self) -> str:
        terms = " + ".join(f"{a.coefficient}*x{a.variable}" for a in self.addends)
        relation = {EquationType.EQ: "=", EquationType.GE: ">=", EquationType.LE: "<="}[self.type]
        return f"{terms} {relation} {self.scalar}"

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "addends": [[a.coefficient, a.variable] for a in self.addends],
            "scalar": self.scalar
        }
