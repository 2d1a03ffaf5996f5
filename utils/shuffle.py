"""Shuffling helpers, including the reproducible daily challenge shuffle.

The seeded generator is deliberately simple: ``frac(sin(seed) * 10000)``.
It is not a good source of randomness, but it produces the same value for
the same seed on every platform, which is what the daily challenge needs so
that every player sees the same equipment on a given day.
"""

import math
import random
from collections.abc import Iterator, Sequence
from datetime import date
from itertools import count
from typing import Optional, TypeVar

T = TypeVar("T")


def seeded_random(seed: float) -> float:
    """Return a deterministic value in [0, 1) for a seed."""
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def seeded_random_sequence(seed: int) -> Iterator[float]:
    """Yield ``seeded_random(seed)``, ``seeded_random(seed + 1)``, ... forever.

    Calling again with the same seed restarts the sequence.
    """
    for i in count():
        yield seeded_random(seed + i)


def seeded_shuffle(items: Sequence[T], seed: int) -> list[T]:
    """Fisher-Yates shuffle of a copy of ``items`` driven by ``seeded_random``.

    Step ``i`` runs from the last index down to 1 and swaps with index
    ``floor(seeded_random(seed + i) * (i + 1))``.
    """
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = math.floor(seeded_random(seed + i) * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def unseeded_shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """Return a uniformly shuffled copy of ``items``."""
    shuffled = list(items)
    (rng or random).shuffle(shuffled)
    return shuffled


def daily_seed(day: date) -> int:
    """Encode a calendar day as ``year * 10000 + month * 100 + day``."""
    return day.year * 10000 + day.month * 100 + day.day


def date_key(day: date) -> str:
    """The daily seed as a string, used to key leaderboards and played days."""
    return str(daily_seed(day))
