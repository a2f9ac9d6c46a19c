"""Seeded pseudo-random number generator.

A linear congruential generator (glibc constants, modulus 2**31). The
multiply step is carried out in IEEE double precision, exactly like the
browser client that writes the same save format, so a seed replays to
the same sequence everywhere.

Example:
    >>> rng = SeededRNG(1)
    >>> rng.next()
    1103527590
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

from long_hall.core.exceptions import EmptyCollectionError
from long_hall.engine.hashing import to_int32


T = TypeVar("T")

_MULTIPLIER = 1103515245.0
_INCREMENT = 12345.0
_MODULUS = 2147483648.0
_FORK_MASK = 0xDEADBEEF


class SeededRNG:
    """Deterministic random source.

    Attributes:
        seed: The seed the generator was created with.
    """

    __slots__ = ("seed", "_current")

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._current = seed

    def __repr__(self) -> str:
        return f"SeededRNG(seed={self.seed})"

    def next(self) -> int:
        """Advance the generator and return a value in ``[0, 2**31)``."""
        value = math.fmod(_MULTIPLIER * float(self._current) + _INCREMENT, _MODULUS)
        if value < 0:
            value += _MODULUS
        self._current = int(value)
        return self._current

    def randint(self, low: int, high: int) -> int:
        """Return an integer in ``[low, high]``; reversed bounds are swapped."""
        if low > high:
            low, high = high, low
        span = high - low + 1
        return low + self.next() % span

    def random(self) -> float:
        """Return a float in ``[0, 1)``."""
        return self.next() / _MODULUS

    def pick(self, items: Sequence[T]) -> T:
        """Pick one element.

        Raises:
            EmptyCollectionError: If ``items`` is empty.
        """
        if not items:
            raise EmptyCollectionError("Cannot pick from empty array")
        return items[self.randint(0, len(items) - 1)]

    def shuffled(self, items: Sequence[T]) -> list[T]:
        """Return a new list holding ``items`` in a seeded order.

        Each element draws one sort key, so the cost to the stream is
        exactly ``len(items)`` values.
        """
        keyed = [(self.random(), index, item) for index, item in enumerate(items)]
        keyed.sort(key=lambda entry: (entry[0], entry[1]))
        return [item for _, _, item in keyed]

    def fork(self) -> SeededRNG:
        """Create a child generator whose stream diverges from this one."""
        return SeededRNG(to_int32(self.next() ^ _FORK_MASK))


__all__ = ["SeededRNG"]
