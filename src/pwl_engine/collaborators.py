"""
Collaborator Contracts

Interfaces of the external components a piecewise-linear constraint talks
to. Constraints hold these as non-owning handles; any of them may be
absent (None), and every code path has a defined behaviour for that case.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from .core.equation import Equation
from .core.tableau_row import TableauRow
from .core.tightening import BoundType


class BoundManagerInterface(ABC):
    """Owns the current bounds of every variable in one search branch."""

    @abstractmethod
    def get_lower_bound(self, variable: int) -> float: ...

    @abstractmethod
    def get_upper_bound(self, variable: int) -> float: ...

    @abstractmethod
    def tighten_lower_bound(self, variable: int, value: float,
                            row: Optional[TableauRow] = None) -> bool:
        """Accept value if strictly tighter; return whether the bound changed."""

    @abstractmethod
    def tighten_upper_bound(self, variable: int, value: float,
                            row: Optional[TableauRow] = None) -> bool: ...

    @abstractmethod
    def add_lemma_explanation_and_tighten_bound(
        self,
        variable: int,
        value: float,
        bound_type: BoundType,
        causing_vars: List[int],
        causing_bound_type: BoundType,
        constraint_type: Any
    ) -> bool:
        """Tighten a bound justified by a disjunctive lemma of a constraint."""

    @abstractmethod
    def should_produce_proofs(self) -> bool: ...

    @abstractmethod
    def get_bound_explainer(self) -> Optional[Any]: ...


class TableauInterface(ABC):
    """The simplex collaborator: variable values and basis structure."""

    @abstractmethod
    def register_to_watch_variable(self, watcher: Any, variable: int) -> None: ...

    @abstractmethod
    def unregister_to_watch_variable(self, watcher: Any, variable: int) -> None: ...

    @abstractmethod
    def is_basic(self, variable: int) -> bool: ...

    @abstractmethod
    def are_linearly_dependent(self, x1: int, x2: int) -> Tuple[bool, float, float]:
        """
        Check whether x1 and x2 are linked by the current basis.

        Returns:
            (dependent, x1_delta_to_x2_delta, x2_delta_to_x1_delta)
        """

    @abstractmethod
    def get_value(self, variable: int) -> float: ...


class QueryInterface(ABC):
    """Problem model rewritten by the aux-variable transformation."""

    @abstractmethod
    def get_number_of_variables(self) -> int: ...

    @abstractmethod
    def set_number_of_variables(self, number: int) -> None: ...

    @abstractmethod
    def add_equation(self, equation: Equation) -> None: ...

    @abstractmethod
    def set_lower_bound(self, variable: int, value: float) -> None: ...

    @abstractmethod
    def set_upper_bound(self, variable: int, value: float) -> None: ...


class NetworkLevelReasonerInterface(ABC):
    """Network-level analysis supplying the bias feeding a constraint."""

    @abstractmethod
    def get_previous_bias(self, constraint: Any) -> float: ...


class StatisticsInterface(ABC):
    """Thread-safe, increment-only statistics sink."""

    @abstractmethod
    def inc_long_attribute(self, attribute: Any, value: int = 1) -> None: ...
