"""
Tableau rows used as linear justifications of bound tightenings.

A row encodes lhs = sum(coefficient_i * x_i) + scalar.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping


@dataclass
class TableauRowEntry:
    variable: int
    coefficient: float


@dataclass
class TableauRow:
    """
    Attributes:
        lhs: The variable expressed by the row
        row: Right-hand side terms
        scalar: Right-hand side constant
    """
    lhs: int
    row: List[TableauRowEntry] = field(default_factory=list)
    scalar: float = 0.0

    @property
    def size(self) -> int:
        return len(self.row)

    def evaluate_rhs(self, assignment: Mapping[int, float]) -> float:
        return sum(e.coefficient * assignment[e.variable] for e in self.row) + self.scalar

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "lhs": self.lhs,
            "row": [[e.variable, e.coefficient] for e in self.row],
            "scalar": self.scalar
        }
