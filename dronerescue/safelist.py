"""A FIFO list guarded by a re-entrant lock, shared between worker threads."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any


class ThreadSafeList:
    """An ordered collection whose every operation holds one lock."""

    def __init__(self) -> None:
        self._items: list[Any] = []
        self._lock = threading.RLock()

    def append(self, item: Any) -> None:
        """Add ``item`` at the tail."""
        with self._lock:
            self._items.append(item)

    def pop_front(self) -> Any:
        """Remove and return the head item; raise IndexError when empty."""
        with self._lock:
            if not self._items:
                raise IndexError("pop from an empty list")
            return self._items.pop(0)

    def remove(self, predicate: Callable[[Any], bool]) -> Any:
        """Remove the first item matching ``predicate`` and return it, or None."""
        with self._lock:
            for position, item in enumerate(self._items):
                if predicate(item):
                    del self._items[position]
                    return item
        return None

    def for_each(self, fn: Callable[[Any], Any]) -> None:
        """Call ``fn`` on every item, in order, while holding the lock."""
        with self._lock:
            for item in self._items:
                fn(item)

    def snapshot(self) -> list[Any]:
        """Return a copy of the items in order."""
        with self._lock:
            return list(self._items)

    def clear(self, on_remove: Callable[[Any], Any] | None = None) -> None:
        """Empty the list, handing each item to ``on_remove`` first if given."""
        with self._lock:
            if on_remove is not None:
                for item in self._items:
                    on_remove(item)
            self._items.clear()

    @contextmanager
    def locked(self) -> Iterator[list[Any]]:
        """Hold the lock for a block and give it the live item list."""
        with self._lock:
            yield self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.snapshot())