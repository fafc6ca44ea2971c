"""
Search Context (backtracking trail)

Constraints route their context-dependent fields (phase status, activity
flag, infeasible cases) through a SearchContext. Every write made while a
level is open records (owner, attribute, previous value); popping the
level replays those records in reverse, restoring the state the search
had when the level was pushed.

Each search branch owns its own context; contexts are not thread-safe.
"""

from typing import Any, List, Tuple


class SearchContext:
    """A stack of decision levels over a single undo trail."""

    def __init__(self):
        self._trail: List[Tuple[Any, str, Any]] = []
        self._levels: List[int] = []

    @property
    def level(self) -> int:
        return len(self._levels)

    def push(self) -> int:
        """Open a new decision level; returns the new level."""
        self._levels.append(len(self._trail))
        return self.level

    def pop(self) -> int:
        """Undo every write recorded since the matching push."""
        if not self._levels:
            raise IndexError("pop from empty search context")
        mark = self._levels.pop()
        while len(self._trail) > mark:
            owner, attribute, previous = self._trail.pop()
            setattr(owner, attribute, previous)
        return self.level

    def pop_to(self, level: int) -> None:
        while self.level > level:
            self.pop()

    def record(self, owner: Any, attribute: str, previous: Any) -> None:
        # At level 0 there is nothing to restore to
        if self._levels:
            self._trail.append((owner, attribute, previous))

    def __len__(self) -> int:
        return len(self._trail)
