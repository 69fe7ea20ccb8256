from .dynamic_array import DynamicArray
from .weak_heap import WeakHeap, WeakHeapPeekMut
from .binary_heap import BinaryHeap

__all__ = [
    "DynamicArray",
    "WeakHeap",
    "WeakHeapPeekMut",
    "BinaryHeap",
]
