"""
Overlap-aware placement of items inside an annulus.

Items are treated as circles on the (x, z) plane. Two strategies choose the
next position given the positions already placed:

- Brute-force rejection: draw annulus samples until one keeps its distance
  from every placed item, giving up after ``max_retries`` attempts.
- Mitchell's best candidate: draw a fixed number of samples and keep the one
  farthest from its nearest placed neighbour.

Neither strategy modifies ``placed``. The caller appends the returned
position before placing the next item; :func:`place_items` runs that loop.
"""

import math
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Sequence

import numpy as np
import structlog
from scipy.spatial.distance import cdist, pdist

from ..config import settings
from ..utils.random import RandomSource, resolve_prng
from .distributions import Position2D, sample_annulus_position

logger = structlog.get_logger()

STRATEGIES = ("brute-force", "best-candidate")


class PlacementResult(NamedTuple):
    """Outcome of a brute-force placement.

    ``degraded`` is set when no non-overlapping candidate was found and
    ``position`` is the last candidate drawn.
    """

    position: Position2D
    degraded: bool
    attempts: int


def _as_array(positions: Sequence[Position2D]) -> np.ndarray:
    return np.asarray(positions, dtype=np.float64).reshape(-1, 2)


def has_overlap_with_placed(
    candidate: Position2D, placed: Sequence[Position2D], min_distance: float
) -> bool:
    """
    Check whether ``candidate`` is closer than ``min_distance`` to any placed item.

    Args:
        candidate: Position to test
        placed: Already placed positions
        min_distance: Minimum allowed distance, the sum of both bounding radii

    Returns:
        True if the candidate overlaps a placed position
    """
    return any(
        math.hypot(candidate[0] - other[0], candidate[1] - other[1]) < min_distance
        for other in placed
    )


def nearest_distance(candidate: Position2D, placed: Sequence[Position2D]) -> float:
    """Distance from ``candidate`` to its nearest placed position (inf if none)."""
    if len(placed) == 0:
        return math.inf
    return float(cdist([candidate], _as_array(placed)).min())


def find_position_brute_force(
    placed: Sequence[Position2D],
    bounding_radius: float,
    min_radius: float,
    max_radius: float,
    rng: Optional[RandomSource] = None,
    max_retries: Optional[int] = None,
    item_index: Optional[int] = None,
) -> PlacementResult:
    """
    Find a non-overlapping position by rejection sampling.

    Args:
        placed: Already placed positions
        bounding_radius: Bounding circle radius of a single item
        min_radius: Inner radius of the annulus
        max_radius: Outer radius of the annulus
        rng: Random source, defaults to the shared generator
        max_retries: Attempts before giving up, defaults to settings
        item_index: Index of the item being placed, used in the warning

    Returns:
        PlacementResult; ``degraded`` when every attempt overlapped
    """
    rng = resolve_prng(rng)
    if max_retries is None:
        max_retries = settings.placement_max_retries
    if max_retries < 1:
        raise ValueError(f"max_retries must be >= 1, got {max_retries}")

    min_distance = bounding_radius * 2

    for attempt in range(1, max_retries + 1):
        candidate = sample_annulus_position(min_radius, max_radius, rng)
        if not has_overlap_with_placed(candidate, placed, min_distance):
            return PlacementResult(candidate, False, attempt)

    logger.warning(
        "Could not find a non-overlapping position",
        item_index=item_index,
        max_retries=max_retries,
        min_distance=min_distance,
    )
    return PlacementResult(candidate, True, max_retries)


def place_brute_force(
    placed: Sequence[Position2D],
    bounding_radius: float,
    min_radius: float,
    max_radius: float,
    rng: Optional[RandomSource] = None,
    max_retries: Optional[int] = None,
) -> Position2D:
    """Brute-force placement returning only the position."""
    return find_position_brute_force(
        placed, bounding_radius, min_radius, max_radius, rng, max_retries
    ).position


def place_best_candidate(
    placed: Sequence[Position2D],
    candidate_count: int,
    min_radius: float,
    max_radius: float,
    rng: Optional[RandomSource] = None,
) -> Position2D:
    """
    Mitchell's best-candidate placement.

    Draws ``candidate_count`` annulus samples and returns the one whose
    nearest placed neighbour is farthest away. With nothing placed yet, a
    single unconditioned sample is returned. A count of 0 is treated as 1.

    Args:
        placed: Already placed positions
        candidate_count: Number of candidates to draw
        min_radius: Inner radius of the annulus
        max_radius: Outer radius of the annulus
        rng: Random source, defaults to the shared generator

    Returns:
        The chosen (x, z) position
    """
    if candidate_count < 0:
        raise ValueError(f"candidate_count must be >= 0, got {candidate_count}")

    rng = resolve_prng(rng)
    if len(placed) == 0:
        return sample_annulus_position(min_radius, max_radius, rng)

    candidates = [
        sample_annulus_position(min_radius, max_radius, rng)
        for _ in range(max(candidate_count, 1))
    ]
    nearest = cdist(_as_array(candidates), _as_array(placed)).min(axis=1)

    # argmax keeps the first candidate on ties
    return candidates[int(np.argmax(nearest))]


@dataclass
class PlacementLayout:
    """Positions produced by a sequential placement run."""

    positions: List[Position2D] = field(default_factory=list)
    degraded_indices: List[int] = field(default_factory=list)

    def as_array(self) -> np.ndarray:
        """Positions as a ``(n, 2)`` array of (x, z)."""
        return _as_array(self.positions)

    def min_pairwise_distance(self) -> float:
        """Smallest distance between two placed items (inf below two items)."""
        if len(self.positions) < 2:
            return math.inf
        return float(pdist(self.as_array()).min())


def place_items(
    count: int,
    strategy: str = "brute-force",
    *,
    bounding_radius: float = 0.5,
    min_radius: float = 0.0,
    max_radius: float = 1.0,
    candidate_count: Optional[int] = None,
    rng: Optional[RandomSource] = None,
    max_retries: Optional[int] = None,
) -> PlacementLayout:
    """
    Place ``count`` items one after another.

    Args:
        count: Number of items
        strategy: "brute-force" or "best-candidate"
        bounding_radius: Item bounding radius (brute-force only)
        min_radius: Inner radius of the annulus
        max_radius: Outer radius of the annulus
        candidate_count: Candidates per item (best-candidate only), defaults to settings
        rng: Random source, defaults to the shared generator
        max_retries: Attempts per item (brute-force only), defaults to settings

    Returns:
        PlacementLayout with positions in placement order
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"strategy must be one of {STRATEGIES}, got {strategy!r}")
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    rng = resolve_prng(rng)
    if candidate_count is None:
        candidate_count = settings.best_candidate_count

    layout = PlacementLayout()
    for index in range(count):
        if strategy == "brute-force":
            result = find_position_brute_force(
                layout.positions,
                bounding_radius,
                min_radius,
                max_radius,
                rng,
                max_retries,
                item_index=index,
            )
            if result.degraded:
                layout.degraded_indices.append(index)
            position = result.position
        else:
            position = place_best_candidate(
                layout.positions, candidate_count, min_radius, max_radius, rng
            )
        layout.positions.append(position)

    logger.info(
        "Placed items",
        strategy=strategy,
        count=count,
        degraded=len(layout.degraded_indices),
    )
    return layout
