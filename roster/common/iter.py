# roster/common/iter.py
from __future__ import annotations

from typing import Iterable, Iterator, TypeVar

T = TypeVar("T")


def chunked(it: Iterable[T], size: int) -> Iterator[list[T]]:
    """Yield lists of at most `size` items (last one may be shorter). Used to bound IN (...) clauses."""
    if size < 1:
        raise ValueError("size must be >= 1")
    buf: list[T] = []
    for x in it:
        buf.append(x)
        if len(buf) >= size:
            yield buf
            buf = []
    if buf:
        yield buf
