"""
Random sources for combat rolls.

Every roll in the combat core (critical hits, AI coin flips, AI skill
picks) goes through a RandomSource: any zero-argument callable that
returns a float in [0.0, 1.0). Inject one to make battles reproducible.

Usage:
    rng = RNG(seed=123)
    r = rng()                 # float in [0.0, 1.0)
    ok = chance(rng, 0.25)    # 25% chance
    idx = choice_index(rng, 3)
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Optional

RandomSource = Callable[[], float]


def default_source() -> RandomSource:
    """Module-level generator, used when nothing is injected."""
    return random.random


@dataclass
class RNG:
    """
    Seedable random source.

    Instances are callable and can be passed anywhere a RandomSource
    is expected.
    """

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self._random = random.Random(self.seed)

    def __call__(self) -> float:
        return self._random.random()

    def reseed(self, seed: int) -> None:
        """Reset RNG with a new seed."""
        self.seed = seed
        self._random = random.Random(self.seed)


def chance(source: RandomSource, p: Optional[float]) -> bool:
    """
    Return True with probability p.

    None or values <= 0 never succeed and do not consume a roll.
    """
    if p is None or p <= 0:
        return False
    return source() < p


def choice_index(source: RandomSource, n: int) -> int:
    """Return a uniformly drawn index in [0, n-1]."""
    if n <= 0:
        raise ValueError("n must be >= 1")
    # Guard against sources that return exactly 1.0
    return min(int(source() * n), n - 1)
