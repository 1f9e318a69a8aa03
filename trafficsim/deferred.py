"""A list whose modifications are queued and applied only on request."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from enum import Enum, auto
from typing import Generic, TypeVar

T = TypeVar("T")


class _Op(Enum):
    PUSH_BACK = auto()
    PUSH_FRONT = auto()
    ERASE = auto()


class DeferredList(Generic[T]):
    """A sequence whose insertions and removals take effect on ``update``.

    Iterating the list while changes are queued is safe: the queued
    changes become visible only once ``update`` (or ``clear``) runs.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = list(items)
        self._pending: deque[tuple[_Op, T]] = deque()

    def push_back(self, item: T) -> None:
        """Queue ``item`` to be appended at the end."""
        self._pending.append((_Op.PUSH_BACK, item))

    def push_front(self, item: T) -> None:
        """Queue ``item`` to be inserted before the first element."""
        self._pending.append((_Op.PUSH_FRONT, item))

    def erase(self, item: T) -> None:
        """Queue the removal of ``item``."""
        self._pending.append((_Op.ERASE, item))

    def update(self) -> None:
        """Apply all queued changes in the order they were made.

        Raises ValueError if a queued removal names an item that is not
        in the list when the change is applied.
        """
        while self._pending:
            op, item = self._pending.popleft()
            if op is _Op.PUSH_BACK:
                self._items.append(item)
            elif op is _Op.PUSH_FRONT:
                self._items.insert(0, item)
            else:
                del self._items[self._position(item)]

    def clear(self) -> None:
        """Apply queued changes, then remove every element."""
        self.update()
        self._items.clear()

    def empty(self) -> bool:
        """Return True if the list currently holds no elements."""
        return not self._items

    def _position(self, item: T) -> int:
        for index, candidate in enumerate(self._items):
            if candidate is item:
                return index
        try:
            return self._items.index(item)
        except ValueError:
            raise ValueError(f"cannot erase {item!r}: not in list") from None

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"DeferredList({self._items!r}, pending={len(self._pending)})"