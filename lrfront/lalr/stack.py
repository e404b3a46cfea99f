"""오토마톤용 LIFO 스택.

비어 있는 스택에서 `pop()`/`peek()`을 하면 예외 대신 `EMPTY` 센티널을 돌려준다.
파서 루프는 토큰마다 돌기 때문에 분기로 검사한다.
"""
from __future__ import annotations
from typing import Generic, Iterator, List, TypeVar, Union

T = TypeVar("T")


class _Empty:
    __slots__ = ()

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = _Empty()


class Stack(Generic[T]):
    __slots__ = ("_items",)

    def __init__(self, items=()):
        self._items: List[T] = list(items)

    def push(self, v: T) -> None:
        self._items.append(v)

    def pop(self) -> Union[T, _Empty]:
        if not self._items:
            return EMPTY
        return self._items.pop()

    def peek(self) -> Union[T, _Empty]:
        if not self._items:
            return EMPTY
        return self._items[-1]

    def top(self, n: int) -> List[T]:
        """위쪽 n개를 바닥 → top 순서로 (pop 하지 않음)."""
        if n <= 0:
            return []
        return self._items[-n:]

    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        """바닥 → top 순서."""
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Stack({self._items!r})"
