from __future__ import annotations
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class BinaryHeap(Generic[T]):
    """A classical binary max-heap, kept as the reference point for `WeakHeap`.

    Same public surface as the weak heap's core (push/pop/peek/pushpop/replace
    and sorted extraction) and, like it, only ever compares with ``<``.
    """

    __slots__ = ("_data",)

    def __init__(self, it: Optional[Iterable[T]] = None) -> None:
        self._data: List[T] = []
        if it:
            self._data = list(it)
            self._heapify()  # Bulk build in O(n) instead of repeated pushes

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _sift_up(self, idx: int) -> None:
        data = self._data
        while idx > 0:
            parent = (idx - 1) // 2
            if not data[parent] < data[idx]:
                break
            data[parent], data[idx] = data[idx], data[parent]
            idx = parent

    def _sift_down(self, idx: int, end: Optional[int] = None) -> None:
        data = self._data
        n = len(data) if end is None else end
        while True:
            left = 2 * idx + 1
            right = 2 * idx + 2
            largest = idx
            if left < n and data[largest] < data[left]:
                largest = left
            if right < n and data[largest] < data[right]:
                largest = right
            if largest == idx:
                break
            data[idx], data[largest] = data[largest], data[idx]
            idx = largest

    def _heapify(self) -> None:
        """Transform the current list into a heap in-place in O(n) time."""
        n = len(self._data)
        for i in reversed(range(n // 2)):
            self._sift_down(i)

    # -----------------------------
    # Public API
    # -----------------------------
    def push(self, item: T) -> None:
        """Push item onto the heap (O(log n))."""
        self._data.append(item)
        self._sift_up(len(self._data) - 1)

    def pop(self) -> Optional[T]:
        """Pop and return the largest item (O(log n)), or None if empty."""
        if not self._data:
            return None
        data = self._data
        top = data[0]
        last = data.pop()
        if data:
            data[0] = last
            self._sift_down(0)
        return top

    def peek(self) -> Optional[T]:
        """Return the largest item without removing it (O(1))."""
        return self._data[0] if self._data else None

    def replace(self, item: T) -> Optional[T]:
        """Pop the largest item, then push a new item (O(log n))."""
        if not self._data:
            self._data.append(item)
            return None
        top = self._data[0]
        self._data[0] = item
        self._sift_down(0)
        return top

    def pushpop(self, item: T) -> T:
        """Push item then pop largest in a single O(log n) operation."""
        if self._data and item < self._data[0]:
            item, self._data[0] = self._data[0], item
            self._sift_down(0)
        return item

    def into_sorted_list(self) -> List[T]:
        """Heapsort the contents in place (ascending); the heap ends up empty."""
        data = self._data
        end = len(data)
        while end > 1:
            end -= 1
            data[0], data[end] = data[end], data[0]
            self._sift_down(0, end)
        self._data = []
        return data

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return bool(self._data)

    def __iter__(self) -> Iterator[T]:  # pragma: no cover - simple
        # Iterate over the internal array (heap order, not sorted order)
        return iter(self._data)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"BinaryHeap({self._data!r})"
