from weakheap.datastructures import BinaryHeap


def test_heap_push_pop_peek():
    h = BinaryHeap([5, 2, 9, 1])
    assert h.peek() == 9
    assert h.pop() == 9
    assert h.pop() == 5
    h.push(10)
    assert h.peek() == 10
    assert len(h) == 3


def test_empty_heap_signals_absence():
    h = BinaryHeap()
    assert h.peek() is None
    assert h.pop() is None
    assert h.pushpop(3) == 3
    assert len(h) == 0


def test_replace_and_pushpop():
    h = BinaryHeap([4, 8, 6])
    assert h.replace(1) == 8
    assert h.peek() == 6
    assert h.pushpop(7) == 7
    assert h.pushpop(5) == 6
    assert h.into_sorted_list() == [1, 4, 5]
    assert len(h) == 0
