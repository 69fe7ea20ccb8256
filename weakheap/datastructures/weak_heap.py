"""A priority queue implemented with a weak heap.

This is a max-heap. Checking the largest element is O(1); push and pop are
O(log n). Building a heap from a list is done in place in O(n), and a heap can
be turned into a sorted list in place (weak-heapsort, O(n log n)).

A weak heap stores one reverse bit per node next to the values. The bit of
node ``i`` selects which of ``2*i`` and ``2*i + 1`` is its distinguished
child, so a subtree can be "reflected" without moving any data. The payoff is
in the number of element comparisons: sifting down costs about log2(n)
comparisons instead of the 2*log2(n) of a binary heap. Prefer it when
comparing elements is expensive (long strings, tuples of strings, objects with
a costly ``__lt__``); for plain numbers a binary heap is usually faster.

Elements only need to support ``<``.

Example:
    heap = WeakHeap([3, 2, 5, 1, 4])
    heap.push(7)
    heap.peek()               # 7
    heap.pop()                # 7
    heap.into_sorted_list()   # [1, 2, 3, 4, 5]
"""

from __future__ import annotations
import ctypes
import logging
from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .dynamic_array import DynamicArray

T = TypeVar("T")

logger = logging.getLogger(__name__)


class WeakHeap(Generic[T]):
    """A max-priority queue over a weak-heap layout (values + reverse bits)."""

    __slots__ = ("_data", "_bit", "_guard")

    def __init__(self, it: Optional[Iterable[T]] = None) -> None:
        self._data: DynamicArray[T] = DynamicArray(it)
        self._bit: DynamicArray[bool] = DynamicArray(
            [False] * len(self._data), ctype=ctypes.c_bool
        )
        self._guard: Optional[WeakHeapPeekMut[T]] = None
        if len(self._data) > 1:
            self._rebuild()  # Bulk build in O(n) instead of repeated pushes

    @classmethod
    def with_capacity(cls, capacity: int) -> "WeakHeap[T]":
        """Create an empty heap with room for `capacity` items."""
        heap: WeakHeap[T] = cls()
        heap._data = DynamicArray(capacity=capacity)
        heap._bit = DynamicArray(capacity=capacity, ctype=ctypes.c_bool)
        return heap

    @classmethod
    def from_list(cls, items: List[T]) -> "WeakHeap[T]":
        """Build a heap from a list in O(n). The list itself is left untouched."""
        return cls(items)

    @classmethod
    def from_iter(cls, it: Iterable[T]) -> "WeakHeap[T]":
        """Collect an iterable and build a heap from it in O(n)."""
        return cls(list(it))

    # -----------------------------
    # Sifting
    # -----------------------------
    def _sift_up(self, start: int, pos: int) -> None:
        """Join `pos` with its distinguished ancestor. Only valid while building from scratch.

        Precondition: start < pos < len.
        """
        n = len(self._data)
        assert start < pos < n
        data = self._data.buffer
        bit = self._bit.buffer

        # Climb up the tree in search of the first
        # element for which `pos` is in the right subtree.
        cur = pos
        ancestor = cur // 2
        while ancestor > start and cur % 2 == bit[ancestor]:
            cur //= 2
            ancestor //= 2

        if data[ancestor] < data[pos]:
            # The pos element has both children.
            if 2 * pos - 1 < n:
                bit[pos] = not bit[pos]
            data[ancestor], data[pos] = data[pos], data[ancestor]

    def _sift_up_push(self, start: int, pos: int) -> int:
        """Raise the element at `pos` until its distinguished ancestor is not smaller.

        Unlike `_sift_up` this keeps climbing, so it restores the heap after a
        single element was appended to an already valid heap. The element is
        carried in a local and written exactly once, into the slot it ends up in.
        Returns that final index.

        Precondition: start <= pos < len.
        """
        n = len(self._data)
        assert start <= pos < n
        data = self._data.buffer
        bit = self._bit.buffer

        element = data[pos]
        hole = pos
        cur = pos
        try:
            while cur > start:
                ancestor = cur // 2
                while ancestor > start and cur % 2 == bit[ancestor]:
                    cur //= 2
                    ancestor //= 2

                if data[ancestor] < element:
                    # The pos element has both children.
                    if 2 * pos - 1 < n:
                        bit[pos] = not bit[pos]
                    data[hole] = data[ancestor]
                    hole = ancestor
                else:
                    break  # Heap property restored.

                cur = ancestor
        finally:
            data[hole] = element

        return hole

    def _sift_down_range(self, start: int, end: int) -> None:
        """Restore the heap inside the window [start, end) after `start` was replaced.

        Walks down the distinguished children without comparing anything, then
        climbs back to `start` with one comparison per level: log2(n)
        comparisons rather than the 2*log2(n) of a binary heap.

        Precondition: start < end <= len.
        """
        assert 0 <= start < end <= len(self._data)
        if end == 1:
            return

        data = self._data.buffer
        bit = self._bit.buffer

        pos = max(start, 1)

        # Go down the left descendants as low as possible.
        while 2 * pos + bit[pos] < end:
            pos = 2 * pos + bit[pos]

        while pos > start:
            if data[start] < data[pos]:
                bit[pos] = not bit[pos]
                data[start], data[pos] = data[pos], data[start]
            pos //= 2

    def _sift_down(self, pos: int) -> None:
        self._sift_down_range(pos, len(self._data))

    def _rebuild(self) -> None:
        """Turn the current contents into a weak heap in O(n) comparisons."""
        logger.debug("rebuilding weak heap of %d items", len(self._data))
        for n in reversed(range(1, len(self._data))):
            self._sift_up(0, n)

    def _rebuild_tail(self, start: int) -> None:
        """Insert items [start, len) one by one into the valid prefix [0, start)."""
        for i in range(start, len(self._data)):
            self._sift_up_push(0, i)

    def _weak_ancestor(self, pos: int) -> int:
        bit = self._bit.buffer
        cur = pos
        ancestor = cur // 2
        while ancestor > 0 and cur % 2 == bit[ancestor]:
            cur //= 2
            ancestor //= 2
        return ancestor

    def _ensure_unborrowed(self) -> None:
        if self._guard is not None:
            raise RuntimeError("heap is borrowed by an active peek_mut handle")

    # -----------------------------
    # Public API
    # -----------------------------
    def push(self, item: T) -> None:
        """Push item onto the heap (O(1) expected, O(log n) worst case)."""
        self._ensure_unborrowed()
        old_len = len(self._data)
        self._data.append(item)
        self._bit.append(False)

        if old_len != 0:
            self._sift_up_push(0, old_len)

    def pop(self) -> Optional[T]:
        """Remove and return the greatest item, or None if the heap is empty."""
        self._ensure_unborrowed()
        return self._pop()

    def _pop(self) -> Optional[T]:
        if not self._data:
            return None
        self._bit.pop()
        item = self._data.pop()
        if self._data:
            data = self._data.buffer
            item, data[0] = data[0], item
            self._sift_down(0)
        return item

    def peek(self) -> Optional[T]:
        """Return the greatest item without removing it (O(1)), or None if empty."""
        return self._data[0] if self._data else None

    def peek_mut(self) -> Optional["WeakHeapPeekMut[T]"]:
        """Return a handle to the greatest item, or None if the heap is empty.

        Changing the item through the handle re-sifts the heap when the handle
        is released; only reading it does not. Use it as a context manager:

            with heap.peek_mut() as top:
                top.value = top.value - 10
        """
        self._ensure_unborrowed()
        if not self._data:
            return None
        guard = WeakHeapPeekMut(self)
        self._guard = guard
        return guard

    def pushpop(self, item: T) -> T:
        """Push `item` and pop the greatest item in one step, without growing the heap."""
        self._ensure_unborrowed()
        if not self._data:
            return item

        data = self._data.buffer
        if not item < data[0]:
            return item
        item, data[0] = data[0], item
        self._sift_down(0)
        return item

    def replace(self, item: T) -> Optional[T]:
        """Pop the greatest item and push `item` in one O(log n) step.

        On an empty heap `item` is simply pushed and None is returned.
        """
        self._ensure_unborrowed()
        if not self._data:
            self.push(item)
            return None
        data = self._data.buffer
        top = data[0]
        data[0] = item
        self._sift_down(0)
        return top

    def into_sorted_list(self) -> List[T]:
        """Sort the contents in place (ascending) and hand them out; the heap ends up empty."""
        self._ensure_unborrowed()
        logger.debug("weak-heapsort of %d items", len(self._data))
        data = self._data.buffer
        end = len(self._data)
        while end > 1:
            end -= 1
            data[0], data[end] = data[end], data[0]
            self._sift_down_range(0, end)
        return self.into_list()

    def into_list(self) -> List[T]:
        """Hand out the contents in storage order; the heap ends up empty."""
        self._ensure_unborrowed()
        out = self._data.to_list()
        self._data.clear()
        self._bit.clear()
        return out

    def append(self, other: "WeakHeap[T]") -> None:
        """Move every item of `other` into this heap, leaving `other` empty.

        The smaller heap is always poured into the larger one.
        """
        if other is self:
            raise ValueError("cannot append a heap to itself")
        self._ensure_unborrowed()
        other._ensure_unborrowed()
        if len(self._data) < len(other._data):
            self._data, other._data = other._data, self._data
            self._bit, other._bit = other._bit, self._bit

        start = len(self._data)
        logger.debug("appending %d items onto heap of %d", len(other._data), start)

        self._data.take_from(other._data)
        self._bit.take_from(other._bit)

        self._rebuild_tail(start)

    def append_list(self, other: List[T]) -> None:
        """Move every item of the list `other` into this heap and clear the list."""
        self._ensure_unborrowed()
        start = len(self._data)
        logger.debug("appending %d list items onto heap of %d", len(other), start)

        self._bit.extend([False] * len(other))
        self._data.extend(other)
        other.clear()

        self._rebuild_tail(start)

    def extend(self, it: Iterable[T]) -> None:
        """Push every item of `it`."""
        for x in it:
            self.push(x)

    def is_valid(self) -> bool:
        """Check the weak-heap order: no item is greater than its distinguished ancestor."""
        data = self._data.buffer
        for i in range(1, len(self._data)):
            if data[self._weak_ancestor(i)] < data[i]:
                return False
        return True

    # -----------------------------
    # Capacity and plumbing
    # -----------------------------
    @property
    def capacity(self) -> int:
        return self._data.capacity

    def reserve(self, additional: int) -> None:
        self._data.reserve(additional)
        self._bit.reserve(additional)

    def reserve_exact(self, additional: int) -> None:
        self._data.reserve_exact(additional)
        self._bit.reserve_exact(additional)

    def shrink_to_fit(self) -> None:
        self._data.shrink_to_fit()
        self._bit.shrink_to_fit()

    def shrink_to(self, min_capacity: int) -> None:
        self._data.shrink_to(min_capacity)
        self._bit.shrink_to(min_capacity)

    def drain(self) -> Iterator[T]:
        """Empty the heap now and iterate over the removed items in storage order."""
        return iter(self.into_list())

    def clear(self) -> None:
        self.into_list()

    def is_empty(self) -> bool:
        return len(self._data) == 0

    def copy(self) -> "WeakHeap[T]":
        """Shallow copy: same items, same bits."""
        heap: WeakHeap[T] = WeakHeap()
        heap.clone_from(self)
        return heap

    __copy__ = copy

    def clone_from(self, source: "WeakHeap[T]") -> None:
        """Overwrite this heap with a shallow copy of `source`."""
        self._ensure_unborrowed()
        self._data = DynamicArray(source._data)
        self._bit = DynamicArray(source._bit, ctype=ctypes.c_bool)

    def to_list(self) -> List[T]:
        return self._data.to_list()

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return bool(self._data)

    def __iter__(self) -> Iterator[T]:
        # Iterate over the internal array (heap order, not sorted order)
        return iter(self._data)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        pairs: List[Tuple[T, bool]] = list(zip(self._data, self._bit))
        return f"WeakHeap({pairs!r})"


class WeakHeapPeekMut(Generic[T]):
    """Scoped, exclusive access to the greatest item of a `WeakHeap`.

    Reading `value` leaves the heap alone. Assigning `value` or calling
    `get_mut()` marks the heap for a sift-down, which runs once when the
    handle is released (on leaving the `with` block, even by an exception).
    `pop()` removes the item instead and cancels any pending sift.
    """

    __slots__ = ("_heap", "_sift")

    def __init__(self, heap: WeakHeap[T]) -> None:
        self._heap: Optional[WeakHeap[T]] = heap
        self._sift = False

    def _live_heap(self) -> WeakHeap[T]:
        if self._heap is None:
            raise RuntimeError("peek_mut handle already released")
        return self._heap

    @property
    def value(self) -> T:
        return self._live_heap()._data[0]

    @value.setter
    def value(self, item: T) -> None:
        heap = self._live_heap()
        self._sift = True
        heap._data[0] = item

    def get_mut(self) -> T:
        """Return the greatest item for in-place mutation; the heap is re-sifted on release."""
        heap = self._live_heap()
        self._sift = True
        return heap._data[0]

    def pop(self) -> T:
        """Remove and return the peeked item, releasing the handle."""
        heap = self._live_heap()
        self._sift = False
        self._heap = None
        heap._guard = None
        return heap._pop()  # type: ignore[return-value]

    def release(self) -> None:
        """Re-sift the heap if the item was touched and end exclusive access."""
        heap = self._heap
        if heap is None:
            return
        self._heap = None
        heap._guard = None
        if self._sift:
            self._sift = False
            heap._sift_down(0)

    def __enter__(self) -> "WeakHeapPeekMut[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False

    def __repr__(self) -> str:  # pragma: no cover - trivial
        if self._heap is None:
            return "WeakHeapPeekMut(<released>)"
        return f"WeakHeapPeekMut({self._heap._data[0]!r})"
