"""
Case splits: one branch of a piecewise-linear case distinction.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .canonical_json import canonical_hash
from .equation import Equation
from .tightening import Tightening


@dataclass
class CaseSplit:
    """
    A bundle of bound tightenings plus at most one equation.

    Applying a case split never proves infeasibility by itself; that is
    discovered by later propagation.
    """
    bound_tightenings: List[Tightening] = field(default_factory=list)
    equations: List[Equation] = field(default_factory=list)

    def store_bound_tightening(self, tightening: Tightening) -> None:
        self.bound_tightenings.append(tightening)

    def add_equation(self, equation: Equation) -> None:
        assert not self.equations, "A case split carries at most one equation"
        self.equations.append(equation)

    def get_bound_tightenings(self) -> List[Tightening]:
        return self.bound_tightenings

    def get_equations(self) -> List[Equation]:
        return self.equations

    def update_variable_index(self, old_index: int, new_index: int) -> None:
        self.bound_tightenings = [
            Tightening(new_index, t.value, t.type) if t.variable == old_index else t
            for t in self.bound_tightenings
        ]
        for equation in self.equations:
            equation.update_variable_index(old_index, new_index)

    def dump(self) -> str:
        lines = ["Case split:", "  Bounds:"]
        lines.extend(f"    {t.dump()}" for t in self.bound_tightenings)
        if self.equations:
            lines.append("  Equations:")
            lines.extend(f"    {e.dump()}" for e in self.equations)
        return "\n".join(lines)

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "bound_tightenings": [t.to_canonical() for t in self.bound_tightenings],
            "equations": [e.to_canonical() for e in self.equations]
        }

    def fingerprint(self) -> str:
        """Canonical hash, stable across duplicated constraints."""
        return canonical_hash(self.to_canonical())
