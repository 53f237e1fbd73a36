"""Injectable entropy for stage generation.

Every component that needs randomness receives a RandomSource explicitly, so a
test can substitute a fixed-sequence fake and two generations running side by
side never share state. Instances are not meant to be shared across threads.
"""
from __future__ import annotations

import random
from typing import Collection, Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def boolean(self) -> bool: ...

    def integer(self, low: int, high_exclusive: int) -> int: ...

    def choice(self, collection: Collection[T]) -> T: ...


class SeededRandomSource:
    """RandomSource backed by a private ``random.Random``."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def boolean(self) -> bool:
        return self._rng.random() >= 0.5

    def integer(self, low: int, high_exclusive: int) -> int:
        if high_exclusive <= low:
            raise ValueError(f"empty range [{low}, {high_exclusive})")
        return self._rng.randrange(low, high_exclusive)

    def choice(self, collection: Collection[T]) -> T:
        if not collection:
            raise ValueError("cannot choose from an empty collection")
        items: Sequence[T] = collection if isinstance(collection, Sequence) else tuple(collection)
        return items[self._rng.randrange(len(items))]


__all__ = ["RandomSource", "SeededRandomSource"]
