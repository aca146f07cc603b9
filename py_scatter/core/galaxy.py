"""Spiral galaxy point-cloud generation."""

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

import numpy as np
import structlog
from matplotlib.colors import to_rgb

from ..utils.random import RandomSource, resolve_prng
from .distributions import ONE_REVOLUTION, jitter_from, spherical_jitter_from

logger = structlog.get_logger()

# X, Y and Z (or R, G and B) per point
ITEM_SIZE = 3

JITTER_MODES = ("axis", "spherical")


@dataclass(frozen=True)
class GalaxyConfig:
    """Parameters of a generated galaxy.

    Changing a parameter never regenerates an existing cloud; build a new
    config with :meth:`with_changes` and generate again.
    """

    count: int = 100_000
    size: float = 0.01  # point size, consumed by the renderer
    radius: float = 5.0
    branches: int = 3
    spin: float = 1.0
    randomness: float = 1.0
    randomness_power: float = 2.5
    inside_color: str = "#a0c0d6"
    outside_color: str = "#be7b73"
    with_colors: bool = True
    # Radial draw is u ** edge_uniformity_power * radius; 1 keeps it radius-uniform
    edge_uniformity_power: float = 1.0
    # Flatten the disc towards its rim by scaling y jitter with 1 - r/radius
    height_falloff: bool = False
    jitter: str = "axis"

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"count must be >= 0, got {self.count}")
        if self.branches < 1:
            raise ValueError(f"branches must be >= 1, got {self.branches}")
        if self.radius <= 0:
            raise ValueError(f"radius must be > 0, got {self.radius}")
        if self.randomness < 0:
            raise ValueError(f"randomness must be >= 0, got {self.randomness}")
        # Non-positive powers blow up when a draw is exactly 0
        if self.randomness_power <= 0:
            raise ValueError(f"randomness_power must be > 0, got {self.randomness_power}")
        if self.edge_uniformity_power <= 0:
            raise ValueError(
                f"edge_uniformity_power must be > 0, got {self.edge_uniformity_power}"
            )
        if self.jitter not in JITTER_MODES:
            raise ValueError(f"jitter must be one of {JITTER_MODES}, got {self.jitter!r}")
        for name in ("inside_color", "outside_color"):
            try:
                to_rgb(getattr(self, name))
            except ValueError:
                raise ValueError(f"{name} is not a valid color: {getattr(self, name)!r}") from None

    def with_changes(self, **changes) -> "GalaxyConfig":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class PointCloud:
    """Flat position and color buffers, ``3 * count`` float32 values each."""

    positions: np.ndarray
    colors: Optional[np.ndarray]
    config: GalaxyConfig = field(repr=False)

    @property
    def count(self) -> int:
        return len(self.positions) // ITEM_SIZE

    def as_vertices(self) -> np.ndarray:
        """Positions reshaped to ``(count, 3)``."""
        return self.positions.reshape(-1, ITEM_SIZE)


def compute_branch_angle(index: int, branches: int) -> float:
    """Angle of the arm point ``index`` belongs to."""
    return (index % branches) * ONE_REVOLUTION / branches


def mix_colors(
    inside: Tuple[float, float, float], outside: Tuple[float, float, float], t: float
) -> Tuple[float, float, float]:
    """Linear interpolation between two RGB triples."""
    return tuple(a + (b - a) * t for a, b in zip(inside, outside))


def generate_point_cloud(config: GalaxyConfig, rng: Optional[RandomSource] = None) -> PointCloud:
    """
    Generate the positions (and optionally colors) of a spiral galaxy.

    Each point picks a radius, sits on arm ``i mod branches``, is twisted by
    ``radius * spin`` and then displaced by power-biased jitter. The radial
    draw is uniform in radius, not in area, so the core is denser than the
    rim.

    Args:
        config: Galaxy parameters
        rng: Random source, defaults to the shared generator

    Returns:
        PointCloud with flat float32 buffers
    """
    draw = resolve_prng(rng).random
    positions = np.zeros(config.count * ITEM_SIZE, dtype=np.float32)
    colors = np.zeros(config.count * ITEM_SIZE, dtype=np.float32) if config.with_colors else None

    inside = to_rgb(config.inside_color)
    outside = to_rgb(config.outside_color)

    for i in range(config.count):
        radius = (draw() ** config.edge_uniformity_power) * config.radius
        angle = compute_branch_angle(i, config.branches) + radius * config.spin

        if config.jitter == "spherical":
            jx, jy, jz = spherical_jitter_from(draw, config.randomness, config.randomness_power)
        else:
            jx = jitter_from(draw, config.randomness, config.randomness_power)
            jy = jitter_from(draw, config.randomness, config.randomness_power)
            jz = jitter_from(draw, config.randomness, config.randomness_power)

        if config.height_falloff:
            jy *= 1.0 - radius / config.radius

        offset = i * ITEM_SIZE
        positions[offset] = math.cos(angle) * radius + jx
        positions[offset + 1] = jy
        positions[offset + 2] = math.sin(angle) * radius + jz

        if colors is not None:
            colors[offset:offset + ITEM_SIZE] = mix_colors(inside, outside, radius / config.radius)

    logger.debug("Generated point cloud", count=config.count, branches=config.branches)
    return PointCloud(positions=positions, colors=colors, config=config)


class GalaxyGenerator:
    """
    Holds the current cloud of a galaxy shown by a renderer.

    ``release`` is called with a cloud once it is no longer current so the
    renderer can free whatever it built from the buffers.
    """

    def __init__(
        self,
        config: Optional[GalaxyConfig] = None,
        rng: Optional[RandomSource] = None,
        release: Optional[Callable[[PointCloud], None]] = None,
    ):
        self.config = config or GalaxyConfig()
        self.rng = rng
        self.release = release
        self.cloud: Optional[PointCloud] = None

    def regenerate(self, config: Optional[GalaxyConfig] = None) -> PointCloud:
        """Build a new cloud and swap it in, releasing the previous one."""
        if config is not None:
            self.config = config

        cloud = generate_point_cloud(self.config, self.rng)
        previous, self.cloud = self.cloud, cloud
        if previous is not None and self.release is not None:
            self.release(previous)

        logger.info("Galaxy regenerated", count=self.config.count)
        return cloud

    def dispose(self) -> None:
        """Release the current cloud, if any."""
        if self.cloud is None:
            return
        cloud, self.cloud = self.cloud, None
        if self.release is not None:
            self.release(cloud)
