"""
Bounded memoization used by the decision strategies.
"""

from typing import Any, Dict, Hashable

DEFAULT_CAPACITY = 1000


class StateCache:
    """
    A dict whose entries belong to one GameState.

    Everything is forgotten when a different state is observed or when the
    cache grows past `capacity`, so cached values can never leak from one
    board into another.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self.capacity = capacity
        self._state = None
        self._entries: Dict[Hashable, Any] = {}

    def observe(self, state) -> None:
        if state is not self._state:
            self._entries.clear()
            self._state = state

    def get(self, key: Hashable, default=None):
        return self._entries.get(key, default)

    def set(self, key: Hashable, value: Any) -> None:
        if len(self._entries) >= self.capacity:
            self._entries.clear()
        self._entries[key] = value

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
