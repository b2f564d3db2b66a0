"""Seeded randomness for reproducible auction simulations.

One :class:`SeededRandom` instance is created per run and passed explicitly to
every consumer. All draws come from a single NumPy ``Generator`` stream, so a
run is repeatable as long as the calls happen in the same order.
"""

from typing import List, MutableSequence, Sequence, TypeVar

import numpy as np

T = TypeVar("T")

_SEED_MODULUS = 2 ** 64


class SeededRandom:
    """Deterministic random source seeded by a single integer."""

    def __init__(self, seed: int):
        self.seed = seed
        # default_rng rejects negative seeds
        self._generator = np.random.default_rng(seed % _SEED_MODULUS)

    def next_float(self) -> float:
        """Float in [0, 1)."""
        return float(self._generator.random())

    def uniform(self, low: float, high: float) -> float:
        """Float in [low, high)."""
        return low + self.next_float() * (high - low)

    def next_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive."""
        if low > high:
            raise ValueError(f"Empty range: low ({low}) > high ({high})")
        return int(self._generator.integers(low, high, endpoint=True))

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle in place. Returns ``items`` for chaining."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(0, i)
            items[i], items[j] = items[j], items[i]
        return items

    def sample(self, items: Sequence[T], n: int) -> List[T]:
        """Pick ``n`` distinct elements without replacement.

        Raises:
            ValueError: If ``n`` is negative or larger than ``len(items)``.
        """
        if n < 0:
            raise ValueError("Cannot sample a negative number of items")
        if n > len(items):
            raise ValueError(
                f"Cannot sample {n} items from a population of {len(items)}"
            )
        pool = list(items)
        self.shuffle(pool)
        return pool[:n]
