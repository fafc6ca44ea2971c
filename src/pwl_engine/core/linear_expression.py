"""
Linear expressions accumulated into relaxation cost functions.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping


@dataclass
class LinearExpression:
    """sum(addends[v] * x_v) + constant."""
    addends: Dict[int, float] = field(default_factory=dict)
    constant: float = 0.0

    def add_to_addend(self, variable: int, coefficient: float) -> None:
        self.addends[variable] = self.addends.get(variable, 0.0) + coefficient

    def evaluate(self, assignment: Mapping[int, float]) -> float:
        return sum(c * assignment[v] for v, c in self.addends.items()) + self.constant
