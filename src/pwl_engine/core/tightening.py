"""
Bound tightenings: a proposed or applied change to one variable bound.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class BoundType(Enum):
    """Which side of a variable's interval a bound refers to."""
    LB = "lb"
    UB = "ub"


@dataclass(frozen=True)
class Tightening:
    """
    A strengthened lower or upper bound on a variable.

    Attributes:
        variable: Variable index
        value: New bound value
        type: BoundType.LB or BoundType.UB
    """
    variable: int
    value: float
    type: BoundType

    def dump(self) -> str:
        relation = ">=" if self.type == BoundType.LB else "<="
        return f"x{self.variable} {relation} {self.value}"

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "variable": self.variable,
            "value": self.value,
            "type": self.type.value
        }
