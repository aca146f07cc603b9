"""
Core sampling and placement functionality.
"""

from .alea_prng import AleaPRNG
from .ranges import (
    InclusionMode, InvalidInclusionModeError, InvalidRangeError,
    map_value, sample_in_range,
)
from .distributions import (
    Position2D, Position3D, power_jitter, sample_annulus_position,
    sample_sphere_position, spherical_jitter,
)
from .galaxy import GalaxyConfig, GalaxyGenerator, PointCloud, generate_point_cloud
from .placement import (
    PlacementLayout, PlacementResult, find_position_brute_force,
    place_best_candidate, place_brute_force, place_items,
)

__all__ = ['AleaPRNG', 'InclusionMode', 'InvalidInclusionModeError', 'InvalidRangeError',
           'map_value', 'sample_in_range', 'Position2D', 'Position3D', 'power_jitter',
           'sample_annulus_position', 'sample_sphere_position', 'spherical_jitter',
           'GalaxyConfig', 'GalaxyGenerator', 'PointCloud', 'generate_point_cloud',
           'PlacementLayout', 'PlacementResult', 'find_position_brute_force',
           'place_best_candidate', 'place_brute_force', 'place_items']
