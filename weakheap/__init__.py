"""Weak-heap priority queue: fewer comparisons per push, pop and sort."""

from .datastructures import BinaryHeap, DynamicArray, WeakHeap, WeakHeapPeekMut

__all__ = [
    "WeakHeap",
    "WeakHeapPeekMut",
    "BinaryHeap",
    "DynamicArray",
]

__version__ = "0.1.0"
