from __future__ import annotations
import ctypes
import sys
from typing import Any, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class DynamicArray(Generic[T]):
    """A growable array over a raw ctypes buffer with an explicit capacity.

    Implementation notes
    --------------------
    • Storage is a ctypes array of `py_object` by default, or any other ctypes
      scalar type (`c_bool` is used for the weak heap's reverse bits).
    • `capacity` is logical: a fresh array reports 0 and allocates on first push.
    • Capacity grows geometrically (x2) when full and never shrinks on its own.
    • Negative indices are normalized (like built-in list semantics).
    • `buffer` exposes the raw storage for tight loops; valid indices are
      [0, len) and the reference goes stale after any growth.
    """

    __slots__ = ("_buf", "_size", "_capacity", "_ctype")

    # Capacity allocated by the first push onto an empty array.
    _INITIAL_CAPACITY = 4

    def __init__(self, it: Optional[Iterable[T]] = None, *, capacity: int = 0, ctype: Any = ctypes.py_object) -> None:
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self._ctype = ctype
        self._capacity = capacity
        self._buf = self._make_array(capacity)
        self._size = 0

        if it is not None:
            items = list(it)
            if len(items) > self._capacity:
                self._resize(len(items))
            for i, v in enumerate(items):
                self._buf[i] = v
            self._size = len(items)

    # ------------------------------- internals -------------------------------

    def _make_array(self, capacity: int):
        """Allocate a raw ctypes array able to hold `capacity` items."""
        if capacity <= 0:
            capacity = 1  # never allow a zero-length buffer
        return (capacity * self._ctype)()

    def _empty_value(self) -> Any:
        return None if self._ctype is ctypes.py_object else self._ctype().value

    def _resize(self, new_capacity: int) -> None:
        """Move the live items into a buffer of `new_capacity` (must be >= size)."""
        if new_capacity < self._size:
            raise ValueError("new capacity must be >= size")

        new_buf = self._make_array(new_capacity)
        for i in range(self._size):
            new_buf[i] = self._buf[i]

        self._buf = new_buf
        self._capacity = new_capacity

    def _grow_if_full(self) -> None:
        """Double capacity when the buffer is full (amortized O(1) append)."""
        if self._size >= self._capacity:
            self._resize(max(self._capacity * 2, self._size + 1, self._INITIAL_CAPACITY))

    @staticmethod
    def _normalize_index(idx: int, size: int) -> int:
        """Map negative indices and validate bounds.

        Returns the non-negative index in [0, size).
        Raises IndexError if out of range.
        """
        if idx < 0:
            idx += size
        if idx < 0 or idx >= size:
            raise IndexError("array index out of range")
        return idx

    def _required(self, additional: int) -> int:
        if additional < 0:
            raise ValueError("additional must be >= 0")
        required = self._size + additional
        if required > sys.maxsize:
            raise OverflowError("capacity overflow")
        return required

    # --------------------------------- API -----------------------------------

    @property
    def capacity(self) -> int:
        """Number of items the array can hold without reallocating."""
        return self._capacity

    @property
    def buffer(self):
        return self._buf

    def append(self, value: T) -> None:
        """Append `value` to the end. Amortized O(1)."""
        self._grow_if_full()
        self._buf[self._size] = value
        self._size += 1

    def extend(self, it: Iterable[T]) -> None:
        """Append all elements from `it` in order. O(n) in number of items."""
        for v in it:
            self.append(v)

    def pop(self) -> T:
        """Remove and return the last item. O(1).

        Raises:
            IndexError: if the array is empty.
        """
        if self._size == 0:
            raise IndexError("pop from empty array")
        self._size -= 1
        val = self._buf[self._size]
        self._buf[self._size] = self._empty_value()
        return val  # type: ignore[return-value]

    def swap(self, i: int, j: int) -> None:
        """Exchange the items at `i` and `j`."""
        i = self._normalize_index(i, self._size)
        j = self._normalize_index(j, self._size)
        buf = self._buf
        buf[i], buf[j] = buf[j], buf[i]

    def take_from(self, other: "DynamicArray[T]") -> None:
        """Move every item of `other` to the end of this array, leaving `other` empty."""
        self.reserve(len(other))
        buf = self._buf
        for i in range(other._size):
            buf[self._size + i] = other._buf[i]
        self._size += other._size
        other.clear()

    def reserve(self, additional: int) -> None:
        """Make room for at least `additional` more items, growing geometrically."""
        required = self._required(additional)
        if required > self._capacity:
            self._resize(max(self._capacity * 2, required))

    def reserve_exact(self, additional: int) -> None:
        """Make room for exactly `additional` more items if the array is too small."""
        required = self._required(additional)
        if required > self._capacity:
            self._resize(required)

    def shrink_to_fit(self) -> None:
        """Drop spare capacity so that capacity == len."""
        if self._capacity > self._size:
            self._resize(self._size)

    def shrink_to(self, min_capacity: int) -> None:
        """Lower capacity to `min_capacity` (but never below len). Never grows."""
        target = max(self._size, min_capacity)
        if target < self._capacity:
            self._resize(target)

    def clear(self) -> None:
        """Remove all items. Keeps capacity to avoid churn on re-use."""
        empty = self._empty_value()
        for i in range(self._size):
            self._buf[i] = empty
        self._size = 0

    def to_list(self) -> List[T]:
        """Copy the live items into a plain Python `list`."""
        return [self._buf[i] for i in range(self._size)]

    def __len__(self) -> int:
        """Number of stored elements. O(1)."""
        return self._size

    def __iter__(self) -> Iterator[T]:
        """Yield items from left to right."""
        for i in range(self._size):
            yield self._buf[i]  # type: ignore[misc]

    def __getitem__(self, idx: int) -> T:
        i = self._normalize_index(idx, self._size)
        return self._buf[i]  # type: ignore[return-value]

    def __setitem__(self, idx: int, value: T) -> None:
        """Set the element at `idx` to `value` (supports negative indices)."""
        i = self._normalize_index(idx, self._size)
        self._buf[i] = value

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return self._size != 0

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"DynamicArray({self.to_list()!r})"
