"""
Engine Configuration

Numeric tolerances and operating modes shared by every constraint.
"""

from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Configuration for constraint reasoning."""
    # Generic epsilon used by float_utils comparisons
    default_epsilon_for_comparisons: float = 1e-10

    # Tolerance used when checking whether an assignment satisfies a constraint
    constraint_comparison_tolerance: float = 1e-5

    # Reference bound manager attaches justifications to every tightening
    produce_proofs: bool = False

    # Run consistency checks on elimination and reindexing
    debug_checks: bool = True


# Default configuration instance
DEFAULT_CONFIG = EngineConfig()
