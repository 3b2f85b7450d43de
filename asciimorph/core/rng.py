from __future__ import annotations

from typing import Callable, Optional, Union

import numpy as np

_MODULUS = 2 ** 31
_MULTIPLIER = 1103515245
_INCREMENT = 12345


def hash_seed(seed: str) -> int:
    """31-multiplier string hash wrapped to a signed 32-bit integer."""
    h = 0
    for ch in seed:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


class SeededRandom:
    """Linear congruential source over 2**31.

    The increment is odd and multiplier-1 is divisible by 4, so every seed
    walks the full 2**31 cycle.
    """

    def __init__(self, seed: str):
        self.seed = seed
        self.state = hash_seed(seed) % _MODULUS

    def next(self) -> float:
        self.state = (self.state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self.state / _MODULUS

    __call__ = next

    def randint(self, n: int) -> int:
        if n <= 0:
            return 0
        return min(int(self.next() * n), n - 1)

    def uniform(self, lo: float, hi: float) -> float:
        return lo + (hi - lo) * self.next()


class SystemRandom(SeededRandom):
    """Unseeded source backed by numpy's OS-entropy generator."""

    def __init__(self):
        self.seed = None
        self._gen = np.random.default_rng()

    def next(self) -> float:
        return float(self._gen.random())

    __call__ = next


RandomSource = Union[SeededRandom, SystemRandom]
RandomFn = Callable[[], float]


def create_random(seed: Optional[str] = None) -> RandomSource:
    if seed is None or seed == "":
        return SystemRandom()
    return SeededRandom(str(seed))


def derive_seed(seed: Optional[str], index: int) -> Optional[str]:
    if not seed:
        return None
    return f"{seed}-{index}"
