"""
Alea pseudo-random number generator.

Johannes Baagøe's Alea algorithm: a small, fast generator seeded from an
arbitrary string or number. Every sampler in py_scatter draws from an
instance of this class (or anything else exposing ``random()``), so a seed
fully determines a generated scene.
"""

from typing import Any, Iterable, Sequence, TypeVar, Union

T = TypeVar("T")

TWO_POW_32 = 0x100000000
TWO_POW_NEG_32 = 2.3283064365386963e-10


def _uint32(n: float) -> int:
    """Truncate to an unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class _Mash:
    """Seed hashing function used to initialise the generator state."""

    def __init__(self):
        self.n = 0xEFC8249D

    def __call__(self, data: Any) -> float:
        n = self.n
        for char in str(data):
            n += ord(char)
            h = 0.02519603282416938 * n
            n = _uint32(h)
            h -= n
            h *= n
            n = _uint32(h)
            h -= n
            n += h * TWO_POW_32
        self.n = n
        return _uint32(n) * TWO_POW_NEG_32


class AleaPRNG:
    """
    Seedable uniform generator over [0, 1).

    Two instances built from the same seed produce the same sequence.
    """

    def __init__(self, seed: Union[str, int, float, Iterable[Any]] = "default"):
        """Initialize from a seed string, number, or iterable of those."""
        self.seed = seed
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            parts = list(seed)
        else:
            parts = [seed]

        mash = _Mash()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for part in parts:
            self.s0 = self._wrap(self.s0 - mash(part))
            self.s1 = self._wrap(self.s1 - mash(part))
            self.s2 = self._wrap(self.s2 - mash(part))

    @staticmethod
    def _wrap(value: float) -> float:
        return value + 1 if value < 0 else value

    def random(self) -> float:
        """Return the next value in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * TWO_POW_NEG_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[int(self.random() * len(seq))]

    def __repr__(self) -> str:
        return f"AleaPRNG(seed={self.seed!r}, calls={self.call_count})"
