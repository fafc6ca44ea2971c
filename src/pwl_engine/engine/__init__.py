"""
Engine Module - Reference Collaborators

Provides:
- SearchContext (backtracking trail)
- BoundManager with proof explanations
- Query (problem model)
- Statistics (thread-safe counters)
"""

from .context import SearchContext
from .statistics import Statistics, StatisticsLongAttribute
from .bound_manager import (
    BoundManager,
    BoundExplainer,
    BoundExplanation,
    PLCLemma,
)
from .query import Query

__all__ = [
    'SearchContext',
    'Statistics',
    'StatisticsLongAttribute',
    'BoundManager',
    'BoundExplainer',
    'BoundExplanation',
    'PLCLemma',
    'Query',
]
