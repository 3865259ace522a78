"""Spatial memory: a bounded FIFO of recently visited cells."""
from collections import deque

from cognitive_grid.action_space import Position


class SpatialMemory:
    """
    Ring buffer of the last `capacity` visited positions.

    When full, recording a new position evicts the oldest one.
    A capacity of 0 disables memory entirely (nothing is ever remembered).
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self._capacity = capacity
        self._entries: deque[Position] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def record(self, pos) -> None:
        """Remember a visit to `pos`."""
        if self._capacity == 0:
            return
        self._entries.append(Position(*pos))

    def visit_count(self, pos) -> int:
        """How many remembered visits `pos` has (0 if forgotten or never seen)."""
        return self._entries.count(Position(*pos))

    def contains(self, pos) -> bool:
        return Position(*pos) in self._entries

    def entries(self) -> list[Position]:
        """Remembered positions, oldest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SpatialMemory({len(self)}/{self._capacity})"
