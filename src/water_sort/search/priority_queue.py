"""Min-priority queue for the A* frontier."""

import heapq
import itertools
from typing import Generic, List, Tuple, TypeVar

T = TypeVar('T')


class PriorityQueue(Generic[T]):
    """Binary-heap priority queue popping the lowest priority first.

    Items with equal priority come out in insertion order. The same item
    may be pushed several times with different priorities; callers resolve
    stale entries when they pop them.
    """

    def __init__(self):
        self._heap: List[Tuple[float, int, T]] = []
        self._counter = itertools.count()

    def push(self, item: T, priority: float) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def pop(self) -> Tuple[float, T]:
        """Remove and return the (priority, item) pair with lowest priority.

        Raises:
            IndexError: If the queue is empty
        """
        if not self._heap:
            raise IndexError("pop from empty priority queue")
        priority, _, item = heapq.heappop(self._heap)
        return priority, item

    def peek_priority(self) -> float:
        if not self._heap:
            raise IndexError("peek at empty priority queue")
        return self._heap[0][0]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
