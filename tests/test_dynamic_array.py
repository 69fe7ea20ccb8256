import ctypes

import pytest

from weakheap.datastructures import DynamicArray


def test_get_valid_indices_matches_builtin_list_behavior():
    data = [10, 20, 30, 40]
    arr = DynamicArray(data)
    for i in range(-len(data), len(data)):
        assert arr[i] == data[i]
    with pytest.raises(IndexError):
        arr[4]
    with pytest.raises(IndexError):
        arr[-5]


def test_append_grows_geometrically():
    arr = DynamicArray()
    assert arr.capacity == 0
    seen = []
    for i in range(9):
        arr.append(i)
        seen.append(arr.capacity)
    assert seen == [4, 4, 4, 4, 8, 8, 8, 8, 16]
    assert arr.to_list() == list(range(9))


def test_pop_returns_last_and_keeps_capacity():
    arr = DynamicArray([1, 2, 3])
    cap = arr.capacity
    assert arr.pop() == 3
    assert arr.pop() == 2
    assert len(arr) == 1
    assert arr.capacity == cap
    arr.pop()
    with pytest.raises(IndexError):
        arr.pop()


def test_swap_and_setitem():
    arr = DynamicArray(["a", "b", "c"])
    arr.swap(0, -1)
    arr[1] = "z"
    assert list(arr) == ["c", "z", "a"]


def test_bool_storage():
    bits = DynamicArray([False, True], ctype=ctypes.c_bool)
    bits.append(True)
    assert list(bits) == [False, True, True]
    bits[0] = not bits[0]
    assert bits.pop() is True
    assert bits.to_list() == [True, True]
    bits.clear()
    assert len(bits) == 0


def test_take_from_moves_everything():
    a = DynamicArray([1, 2])
    b = DynamicArray([3, 4, 5])
    a.take_from(b)
    assert a.to_list() == [1, 2, 3, 4, 5]
    assert len(b) == 0


def test_reserve_variants():
    arr = DynamicArray([1, 2])
    arr.reserve(1)
    assert arr.capacity == 4
    arr.reserve_exact(10)
    assert arr.capacity == 12
    arr.reserve(0)
    assert arr.capacity == 12
    with pytest.raises(ValueError):
        arr.reserve(-1)
    with pytest.raises(OverflowError):
        arr.reserve_exact(2 ** 64)


def test_shrink():
    arr = DynamicArray(capacity=20)
    arr.extend([1, 2, 3])
    arr.shrink_to(50)
    assert arr.capacity == 20
    arr.shrink_to(1)
    assert arr.capacity == 3
    arr.shrink_to_fit()
    assert arr.capacity == 3
    assert arr.to_list() == [1, 2, 3]


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        DynamicArray(capacity=-1)
