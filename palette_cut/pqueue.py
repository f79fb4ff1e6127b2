# palette_cut/pqueue.py
from __future__ import annotations

"""
Sort-on-demand priority queue.

Items are kept in insertion order until a read needs ordering; then they are
stably sorted ascending by key and the maximum is taken from the end. Equal
keys therefore pop in reverse insertion order, which keeps palettes stable
from run to run.
"""

from typing import Callable, Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class PQueue(Generic[T]):
    def __init__(self, key: Callable[[T], float]) -> None:
        self._contents: List[T] = []
        self._sorted = False
        self._key = key

    def _sort(self) -> None:
        self._contents.sort(key=self._key)
        self._sorted = True

    def push(self, item: T) -> None:
        self._contents.append(item)
        self._sorted = False

    def peek(self, index: Optional[int] = None) -> T:
        """Item at `index` in ascending order; the maximum when omitted."""
        if not self._contents:
            raise IndexError("peek from empty queue")
        if not self._sorted:
            self._sort()
        return self._contents[-1 if index is None else index]

    def pop(self) -> T:
        """Remove and return the maximum-priority item."""
        if not self._contents:
            raise IndexError("pop from empty queue")
        if not self._sorted:
            self._sort()
        return self._contents.pop()

    def size(self) -> int:
        return len(self._contents)

    def __len__(self) -> int:
        return len(self._contents)

    def __iter__(self) -> Iterator[T]:
        """Contents in storage order (insertion order unless a read sorted them)."""
        return iter(list(self._contents))

    def map(self, fn: Callable[[T], U]) -> List[U]:
        return [fn(item) for item in self._contents]


__all__ = ["PQueue"]
