"""
Seedable random source for reproducible river generation.

Implements Johannes Baagøe's Alea generator. Alea is seeded from arbitrary
strings and produces the same sequence on every platform, which keeps
generated networks reproducible from a seed name alone.
"""

from typing import Protocol, runtime_checkable


_2_POW_32 = 0x100000000
_2_POW_NEG_32 = 2.3283064365386963e-10


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


@runtime_checkable
class RandomSource(Protocol):
    """Uniform random generator consumed by the growth engine."""

    def random(self) -> float:
        """Uniform float in [0, 1)."""

    def randrange(self, low: int, high: int) -> int:
        """Uniform integer in [low, high)."""


class Mash:
    """Alea's string hashing function, used to derive the initial state."""

    def __init__(self):
        self.n = 0xEFC8249D

    def __call__(self, data) -> float:
        n = self.n
        for char in str(data):
            n += ord(char)
            h = 0.02519603282416938 * n
            n = _uint32(h)
            h -= n
            h *= n
            n = _uint32(h)
            h -= n
            n += h * _2_POW_32
        self.n = n
        return _uint32(n) * _2_POW_NEG_32


class AleaPRNG:
    """Alea pseudo random generator."""

    def __init__(self, seed="default"):
        """
        Initialize with a seed.

        Args:
            seed: String, number, or an iterable of those mixed in turn
        """
        self.seed = seed
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            parts = list(seed)
        else:
            parts = [seed]

        mash = Mash()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for part in parts:
            self.s0 = self._mix(self.s0, mash(part))
            self.s1 = self._mix(self.s1, mash(part))
            self.s2 = self._mix(self.s2, mash(part))

    @staticmethod
    def _mix(state: float, value: float) -> float:
        state -= value
        if state < 0:
            state += 1
        return state

    def random(self) -> float:
        """Next float in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * _2_POW_NEG_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def uniform(self, low: float, high: float) -> float:
        """Float in [low, high)."""
        return low + self.random() * (high - low)

    def randrange(self, low: int, high: int) -> int:
        """Integer in [low, high)."""
        if high <= low:
            raise ValueError(f"Empty range [{low}, {high})")
        return low + int(self.random() * (high - low))
