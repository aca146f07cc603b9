"""
Radial and spherical sampling.

This module implements:
- Area-uniform sampling inside a 2D annulus
- Volume-uniform sampling inside a 3D spherical shell
- Power-biased jitter for organic-looking offsets

Uniform density over an area or volume is obtained by drawing the squared
(2D) or cubed (3D) radius uniformly and inverting, not by drawing the radius
itself.
"""

import math
from typing import Callable, NamedTuple, Optional

import numpy as np

from ..utils.random import RandomSource, resolve_prng
from .ranges import map_value, sample_in_range, validate_range

ONE_REVOLUTION = 2 * math.pi


class Position2D(NamedTuple):
    """Point on the horizontal (x, z) plane."""

    x: float
    z: float


class Position3D(NamedTuple):
    """Point in 3D space."""

    x: float
    y: float
    z: float


def random_angle(rng: Optional[RandomSource] = None) -> float:
    """Uniform angle in [0, 2π)."""
    return sample_in_range((0.0, ONE_REVOLUTION), "min", rng)


def sample_annulus_radius(
    min_radius: float, max_radius: float, rng: Optional[RandomSource] = None
) -> float:
    """Radius whose distribution is uniform per unit area of the ring."""
    validate_range((min_radius, max_radius))
    return math.sqrt(sample_in_range((min_radius**2, max_radius**2), "min", rng))


def sample_annulus_position(
    min_radius: float, max_radius: float, rng: Optional[RandomSource] = None
) -> Position2D:
    """
    Generate a random position within an annulus using equal area distribution.

    Sampling r² uniformly prevents clustering near the inner circle.

    Args:
        min_radius: Inner radius of the annulus (exclusion zone)
        max_radius: Outer radius of the annulus (boundary)
        rng: Random source, defaults to the shared generator

    Returns:
        Random (x, z) position inside the annulus
    """
    rng = resolve_prng(rng)
    angle = random_angle(rng)
    radius = sample_annulus_radius(min_radius, max_radius, rng)
    return Position2D(radius * math.cos(angle), radius * math.sin(angle))


def sample_sphere_radius(
    min_radius: float = 0.0, max_radius: float = 10.0, rng: Optional[RandomSource] = None
) -> float:
    """
    Radius whose distribution is uniform per unit volume of the shell.

    V = 4π/3 · ρ³, so ρ = ∛(ρ_min³ + u · (ρ_max³ - ρ_min³)).
    """
    validate_range((min_radius, max_radius))
    u = resolve_prng(rng).random()
    return float(np.cbrt(map_value(u, (0.0, 1.0), (min_radius**3, max_radius**3))))


def sample_sphere_position(
    min_radius: float, max_radius: float, rng: Optional[RandomSource] = None
) -> Position3D:
    """
    Generate a random position uniformly distributed in a spherical shell.

    Args:
        min_radius: Inner radius of the shell
        max_radius: Outer radius of the shell
        rng: Random source, defaults to the shared generator

    Returns:
        Random (x, y, z) position
    """
    rng = resolve_prng(rng)

    # Azimuth in [0, 2π)
    theta = map_value(rng.random(), (0.0, 1.0), (0.0, ONE_REVOLUTION))
    # cos(φ) uniform in (-1, 1]; a uniform φ would cluster points at the poles
    phi = math.acos(1.0 - 2.0 * rng.random())
    rho = sample_sphere_radius(min_radius, max_radius, rng)

    plane_radius = rho * math.sin(phi)
    return Position3D(
        plane_radius * math.cos(theta),
        plane_radius * math.sin(theta),
        rho * math.cos(phi),
    )


def jitter_from(draw: Callable[[], float], magnitude: float, power: float) -> float:
    """:func:`power_jitter` on a bound ``random`` method, for tight loops."""
    value = (draw() * magnitude) ** power
    sign = 1.0 if draw() < 0.5 else -1.0
    return sign * value


def spherical_jitter_from(draw: Callable[[], float], magnitude: float, power: float) -> Position3D:
    """:func:`spherical_jitter` on a bound ``random`` method, for tight loops."""
    theta = draw() * ONE_REVOLUTION
    phi = math.acos(2.0 * draw() - 1.0)
    length = (draw() * magnitude) ** power

    return Position3D(
        length * math.sin(phi) * math.cos(theta),
        length * math.cos(phi),
        length * math.sin(phi) * math.sin(theta),
    )


def power_jitter(magnitude: float, power: float, rng: Optional[RandomSource] = None) -> float:
    """
    Symmetric long-tailed offset ``±(u · magnitude) ** power``.

    Higher powers pull most samples towards zero.
    """
    return jitter_from(resolve_prng(rng).random, magnitude, power)


def spherical_jitter(
    magnitude: float, power: float, rng: Optional[RandomSource] = None
) -> Position3D:
    """Isotropic offset: uniform direction, length ``(u · magnitude) ** power``."""
    return spherical_jitter_from(resolve_prng(rng).random, magnitude, power)
