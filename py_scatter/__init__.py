"""
Procedural point sampling and overlap-aware placement for 3D scenes.
"""

# core goes first: utils.random depends on core.alea_prng
from .core import (
    AleaPRNG,
    InclusionMode,
    InvalidInclusionModeError,
    InvalidRangeError,
    map_value,
    sample_in_range,
    Position2D,
    Position3D,
    sample_annulus_position,
    sample_sphere_position,
    GalaxyConfig,
    PointCloud,
    generate_point_cloud,
    place_brute_force,
    place_best_candidate,
    place_items,
)
from .utils.random import RandomSource, get_prng, set_random_seed

__version__ = "0.1.0"

__all__ = [
    'AleaPRNG',
    'InclusionMode',
    'InvalidInclusionModeError',
    'InvalidRangeError',
    'map_value',
    'sample_in_range',
    'Position2D',
    'Position3D',
    'sample_annulus_position',
    'sample_sphere_position',
    'GalaxyConfig',
    'PointCloud',
    'generate_point_cloud',
    'place_brute_force',
    'place_best_candidate',
    'place_items',
    'RandomSource',
    'get_prng',
    'set_random_seed',
]
