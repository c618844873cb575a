"""Random suggestion picks from a question bank."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def randrange(self, start: int, stop: int) -> int: ...


def random_sample(bank: Sequence[T], n: int, rng: RandomSource | None = None) -> list[T]:
    """Return min(n, len(bank)) distinct entries using a truncated Fisher-Yates shuffle.

    Works on a copy; the source bank keeps its order and contents.
    """
    if n < 0:
        raise ValueError(f"Sample size must be non-negative, got {n}.")
    source = rng if rng is not None else random.Random()
    items = list(bank)
    count = min(n, len(items))
    for index in range(count):
        swap = source.randrange(index, len(items))
        items[index], items[swap] = items[swap], items[index]
    return items[:count]
