"""
Indexed binary min-heap.

The heap lives in a list with slot 0 unused, so the children of position i
are 2i and 2i+1. A companion dict maps every queued element to its current
position, which gives O(1) `get_index` and lets `update` restore heap order
from the element's own slot instead of searching for it.

Elements are indexed by equality, not identity: an element equal to a queued
one (same `__eq__`/`__hash__`) finds and replaces it. Callers must not queue
two distinct elements that compare equal.
"""

from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

from .errors import EmptyCollectionError

T = TypeVar("T")

# Position reported by get_index for elements not in the queue.
NOT_FOUND = -1


class IndexedPriorityQueue(Generic[T]):
    """Min-heap ordered by `key(element)` with a position index.

    To get max-priority behavior, pass a key that inverts the natural order
    (see `colorsim.engine.max_cost_first`).
    """

    def __init__(self, key: Optional[Callable[[T], Any]] = None):
        """
        Initialize an empty queue.

        Args:
            key: Maps an element to the value it is ordered by. Elements are
                 compared directly when omitted.
        """
        self._key = key
        self._array: list[Optional[T]] = [None]
        self._index: dict[T, int] = {}

    def _less(self, lhs: T, rhs: T) -> bool:
        if self._key is None:
            return lhs < rhs  # type: ignore[operator]
        return self._key(lhs) < self._key(rhs)

    def _place(self, item: T, position: int) -> None:
        self._array[position] = item
        self._index[item] = position

    def _sift_up(self, hole: int) -> int:
        item = self._array[hole]
        while hole > 1 and self._less(item, self._array[hole // 2]):
            self._place(self._array[hole // 2], hole)
            hole //= 2
        self._place(item, hole)
        return hole

    def _sift_down(self, hole: int) -> int:
        size = len(self)
        item = self._array[hole]
        while hole * 2 <= size:
            child = hole * 2
            if child != size and self._less(self._array[child + 1], self._array[child]):
                child += 1
            if self._less(self._array[child], item):
                self._place(self._array[child], hole)
                hole = child
            else:
                break
        self._place(item, hole)
        return hole

    def add(self, item: T) -> bool:
        """Insert an item. Always returns True."""
        self._array.append(item)
        self._sift_up(len(self))
        return True

    def peek_min(self) -> T:
        """
        Return the smallest item without removing it.

        Raises:
            EmptyCollectionError: If the queue is empty
        """
        if not self:
            raise EmptyCollectionError("peek on an empty priority queue")
        return self._array[1]

    def remove_min(self) -> T:
        """
        Remove and return the smallest item.

        Raises:
            EmptyCollectionError: If the queue is empty
        """
        if not self:
            raise EmptyCollectionError("remove from an empty priority queue")

        min_item = self._array[1]
        del self._index[min_item]
        last = self._array.pop()
        if self:
            self._array[1] = last
            self._sift_down(1)
        return min_item

    def get_index(self, item: T) -> int:
        """Current 1-based heap position of item, or NOT_FOUND."""
        return self._index.get(item, NOT_FOUND)

    def update(self, item: T) -> bool:
        """
        Replace the queued element equal to item and restore heap order.

        Works whether the item's key went up or down.

        Returns:
            False if no equal element is queued, or the slot the index points
            at holds a different element
        """
        if item is None:
            return False
        position = self.get_index(item)
        if position == NOT_FOUND:
            return False
        if self._array[position] != item:
            return False

        # Drop the old key so the dict stores the new object.
        del self._index[self._array[position]]
        self._place(item, position)
        if self._sift_up(position) == position:
            self._sift_down(position)
        return True

    def clear(self) -> None:
        self._array = [None]
        self._index.clear()

    def size(self) -> int:
        return len(self._array) - 1

    def __len__(self) -> int:
        return len(self._array) - 1

    def __bool__(self) -> bool:
        return len(self._array) > 1

    def __contains__(self, item: object) -> bool:
        return item in self._index

    def __iter__(self) -> Iterator[T]:
        """Iterate in heap-array order. This is not sorted order."""
        return iter(self._array[1:])

    def __repr__(self) -> str:
        return f"IndexedPriorityQueue({self._array[1:]!r})"

