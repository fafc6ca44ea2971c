"""
Propagation Results

Every bound-notification entry point returns a PropagationResult.
An INFEASIBLE status means the current branch has been refuted and the
search driver should prune it; it is never raised as an exception.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from .tightening import Tightening


class PropagationStatus(Enum):
    """Outcome of a propagation step."""
    FEASIBLE = "feasible"
    INFEASIBLE = "infeasible"


@dataclass
class PropagationResult:
    """
    Result of one bound notification.

    Attributes:
        status: FEASIBLE or INFEASIBLE
        tightenings: Bounds that were actually tightened downstream
        certificate: Why the branch is infeasible (empty when feasible)
    """
    status: PropagationStatus = PropagationStatus.FEASIBLE
    tightenings: List[Tightening] = field(default_factory=list)
    certificate: Dict[str, Any] = field(default_factory=dict)

    @property
    def infeasible(self) -> bool:
        return self.status == PropagationStatus.INFEASIBLE

    @classmethod
    def feasible(cls) -> 'PropagationResult':
        return cls()

    @classmethod
    def infeasible_because(cls, reason: str, **details: Any) -> 'PropagationResult':
        certificate = {"type": reason}
        certificate.update(details)
        return cls(status=PropagationStatus.INFEASIBLE, certificate=certificate)

    def merge(self, other: 'PropagationResult') -> 'PropagationResult':
        """Fold another result into this one; infeasibility wins."""
        self.tightenings.extend(other.tightenings)
        if other.infeasible and not self.infeasible:
            self.status = PropagationStatus.INFEASIBLE
            self.certificate = other.certificate
        return self
