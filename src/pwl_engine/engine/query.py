"""
Query (problem model)

The verification problem as seen by preprocessing: a number of variables,
linear equations, variable bounds and the piecewise-linear constraints
over them. The aux-variable transformation rewrites it in place.
"""

import logging
from typing import Any, Dict, List

from ..collaborators import QueryInterface
from ..core.canonical_json import canonical_hash
from ..core.equation import Equation

logger = logging.getLogger(__name__)


class Query(QueryInterface):
    """
    Mutable problem model.

    Attributes:
        equations: Linear equations, in insertion order
        lower_bounds: Known lower bounds by variable
        upper_bounds: Known upper bounds by variable
    """

    def __init__(self, num_variables: int = 0):
        self._num_variables = num_variables
        self.equations: List[Equation] = []
        self.lower_bounds: Dict[int, float] = {}
        self.upper_bounds: Dict[int, float] = {}
        self._pl_constraints: List[Any] = []

    def get_number_of_variables(self) -> int:
        return self._num_variables

    def set_number_of_variables(self, number: int) -> None:
        self._num_variables = number

    def add_equation(self, equation: Equation) -> None:
        self.equations.append(equation)

    def set_lower_bound(self, variable: int, value: float) -> None:
        assert 0 <= variable < self._num_variables, f"x{variable} out of range"
        self.lower_bounds[variable] = value

    def set_upper_bound(self, variable: int, value: float) -> None:
        assert 0 <= variable < self._num_variables, f"x{variable} out of range"
        self.upper_bounds[variable] = value

    def get_lower_bound(self, variable: int) -> float:
        return self.lower_bounds.get(variable, float('-inf'))

    def get_upper_bound(self, variable: int) -> float:
        return self.upper_bounds.get(variable, float('inf'))

    def add_piecewise_linear_constraint(self, constraint: Any) -> None:
        self._pl_constraints.append(constraint)

    def get_piecewise_linear_constraints(self) -> List[Any]:
        return self._pl_constraints

    def transform_to_use_aux_variables(self) -> None:
        """Give every piecewise-linear constraint its aux variable."""
        for constraint in self._pl_constraints:
            constraint.transform_to_use_aux_variables(self)
        logger.debug("Query now has %d variables and %d equations",
                     self._num_variables, len(self.equations))

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "num_variables": self._num_variables,
            "equations": [e.to_canonical() for e in self.equations],
            "lower_bounds": {str(v): b for v, b in sorted(self.lower_bounds.items())},
            "upper_bounds": {str(v): b for v, b in sorted(self.upper_bounds.items())},
            "pl_constraints": [c.serialize_to_string() for c in self._pl_constraints]
        }

    def fingerprint(self) -> str:
        return canonical_hash(self.to_canonical())
