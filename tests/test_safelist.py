import random
import threading

import pytest

from dronerescue.safelist import ThreadSafeList
from dronerescue.survivor import Survivor


def _filled(n):
    rng = random.Random(0)
    items = ThreadSafeList()
    for i in range(n):
        items.append(Survivor(id=i, x=rng.randrange(1000), y=rng.randrange(100), created_at=0))
    return items


def test_add_twenty_pop_ten_leaves_ten_in_order():
    items = _filled(20)
    assert len(items) == 20
    popped = [items.pop_front() for _ in range(10)]
    assert [s.id for s in popped] == list(range(10))
    assert len(items) == 10
    assert [s.id for s in items] == list(range(10, 20))


def test_pop_front_empty_raises():
    items = ThreadSafeList()
    with pytest.raises(IndexError):
        items.pop_front()


def test_remove_first_match_only():
    items = ThreadSafeList()
    for value in [1, 2, 3, 2]:
        items.append(value)
    removed = items.remove(lambda v: v == 2)
    assert removed == 2
    assert items.snapshot() == [1, 3, 2]


def test_remove_no_match_returns_none_and_keeps_items():
    items = ThreadSafeList()
    items.append("a")
    assert items.remove(lambda v: v == "b") is None
    assert items.snapshot() == ["a"]


def test_for_each_visits_in_order():
    items = ThreadSafeList()
    for value in "xyz":
        items.append(value)
    seen = []
    items.for_each(seen.append)
    assert seen == ["x", "y", "z"]


def test_clear_calls_on_remove_and_empties():
    items = ThreadSafeList()
    for value in range(4):
        items.append(value)
    released = []
    items.clear(released.append)
    assert released == [0, 1, 2, 3]
    assert len(items) == 0


def test_clear_without_callback():
    items = ThreadSafeList()
    items.append(1)
    items.clear()
    assert items.snapshot() == []


def test_locked_allows_reentrant_use():
    items = ThreadSafeList()
    items.append(1)
    with items.locked() as live:
        items.append(2)
        assert live == [1, 2]
        assert len(items) == 2


def test_snapshot_is_a_copy():
    items = ThreadSafeList()
    items.append(1)
    copy = items.snapshot()
    copy.append(99)
    assert items.snapshot() == [1]


def test_concurrent_appends_are_all_kept():
    items = ThreadSafeList()

    def worker(base):
        for i in range(200):
            items.append(base + i)

    threads = [threading.Thread(target=worker, args=(k * 1000,)) for k in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(items) == 1600
    assert len(set(items)) == 1600