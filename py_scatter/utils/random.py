"""
Random source utilities.

Sampling functions accept an optional ``rng`` argument. Anything with a
``random()`` method returning floats in [0, 1) qualifies, so an
:class:`AleaPRNG`, a :class:`random.Random` or a test double can be
injected. When no source is passed, the module-level default generator is
used; it is seeded from ``settings.default_seed`` and can be reseeded with
:func:`set_random_seed`.
"""

from typing import Optional, Protocol, runtime_checkable

from ..core.alea_prng import AleaPRNG

# Global PRNG instance
_prng: Optional[AleaPRNG] = None


@runtime_checkable
class RandomSource(Protocol):
    """Uniform random source over [0, 1)."""

    def random(self) -> float: ...


def set_random_seed(seed: str) -> None:
    """
    Reseed the default generator.

    Args:
        seed: Seed string to use
    """
    global _prng
    _prng = AleaPRNG(seed)


def get_prng() -> AleaPRNG:
    """
    Get the default generator, creating it from settings on first use.

    Returns:
        AleaPRNG instance
    """
    global _prng
    if _prng is None:
        from ..config import settings

        _prng = AleaPRNG(settings.default_seed)
    return _prng


def resolve_prng(rng: Optional[RandomSource] = None) -> RandomSource:
    """Return ``rng`` if given, otherwise the default generator."""
    if rng is None:
        return get_prng()
    return rng
