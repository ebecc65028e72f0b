from __future__ import annotations

from typing import Iterator, List, Sequence, TypeVar

T = TypeVar("T")


def chunked(items: Sequence[T], size: int = 2) -> Iterator[List[T]]:
    """Yield consecutive groups of at most ``size`` items, in order.

    The last group is shorter when ``len(items)`` is not a multiple of ``size``.
    """
    if size < 1:
        raise ValueError("size must be >= 1")
    for i in range(0, len(items), size):
        yield list(items[i:i + size])
