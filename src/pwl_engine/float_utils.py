"""
Tolerance-aware floating point comparisons.

Values within epsilon of each other are treated as equal, so
"positive" means strictly greater than epsilon and "zero" means
within epsilon of 0.
"""

import math

from .config import DEFAULT_CONFIG


DEFAULT_EPSILON = DEFAULT_CONFIG.default_epsilon_for_comparisons


def infinity() -> float:
    return float('inf')


def negative_infinity() -> float:
    return float('-inf')


def is_finite(x: float) -> bool:
    return math.isfinite(x)


def is_zero(x: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    return -epsilon <= x <= epsilon


def is_positive(x: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    return x > epsilon


def is_negative(x: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    return x < -epsilon


def are_equal(x: float, y: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    if x == y:
        # Covers matching infinities
        return True
    return is_zero(x - y, epsilon)


def gt(x: float, y: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    return is_positive(x - y, epsilon)


def gte(x: float, y: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    return not is_negative(x - y, epsilon)


def lt(x: float, y: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    return gt(y, x, epsilon)


def lte(x: float, y: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    return gte(y, x, epsilon)


def format_bound(x: float) -> str:
    """Render a bound the way dumps print it ('-inf'/'inf' for infinities)."""
    if x == float('-inf'):
        return "-inf"
    if x == float('inf'):
        return "inf"
    return f"{x:f}"
