"""
Range mapping and bounded uniform sampling.

Every distribution in py_scatter is composed from these two primitives:
:func:`map_value` rescales a value linearly between ranges, and
:func:`sample_in_range` draws a uniform value with explicit control over
whether the range boundaries may be returned.
"""

import sys
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np

from ..utils.random import RandomSource, resolve_prng

Range = Tuple[float, float]

EPSILON = sys.float_info.epsilon


class InvalidRangeError(ValueError):
    """Raised when a range minimum exceeds its maximum."""


class InvalidInclusionModeError(ValueError):
    """Raised for an inclusion mode outside the four recognised values."""


class InclusionMode(str, Enum):
    """Which boundaries of a range a sample may equal."""

    MIN = "min"  # [min, max)
    MAX = "max"  # (min, max]
    BOTH = "both"  # [min, max]
    NONE = "none"  # (min, max)

    @classmethod
    def parse(cls, value: Union["InclusionMode", str]) -> "InclusionMode":
        """Coerce a mode name to an :class:`InclusionMode`."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidInclusionModeError(f"Invalid inclusion range: {value!r}") from None


def map_value(value: float, old_range: Range, new_range: Range) -> float:
    """
    Map ``value`` linearly from ``old_range`` onto ``new_range``.

    A zero-width ``old_range`` yields ``inf`` or ``nan`` rather than an
    error; callers must pass non-degenerate ranges.

    Example:
        >>> map_value(0.5, (0, 1), (-1, 1))
        0.0
    """
    old_min, old_max = old_range
    new_min, new_max = new_range

    with np.errstate(divide="ignore", invalid="ignore"):
        t = np.float64(value - old_min) / np.float64(old_max - old_min)
        # Endpoints land exactly on new_min and new_max
        return float((1.0 - t) * new_min + t * new_max)


def validate_range(value_range: Range) -> Range:
    """Return ``value_range`` as floats, raising if ``min > max``."""
    lo, hi = value_range
    if lo > hi:
        raise InvalidRangeError(f"Invalid range: {lo} > {hi}")
    return float(lo), float(hi)


def tiny_offset(reference: float) -> float:
    """Smallest meaningful step away from ``reference``."""
    return EPSILON * max(1.0, abs(reference))


def sample_in_range(
    value_range: Range,
    inclusion: Union[InclusionMode, str] = InclusionMode.MIN,
    rng: Optional[RandomSource] = None,
) -> float:
    """
    Draw a uniform value from ``value_range``.

    Args:
        value_range: (min, max) pair, min <= max
        inclusion: Boundary inclusion, one of "min", "max", "both", "none"
        rng: Random source, defaults to the shared generator

    Returns:
        Random float honouring the inclusion mode

    Raises:
        InvalidRangeError: If min > max, or min == max for "none"
        InvalidInclusionModeError: If the inclusion mode is not recognised
    """
    lo, hi = validate_range(value_range)
    mode = InclusionMode.parse(inclusion)
    u = resolve_prng(rng).random()

    if mode is InclusionMode.MAX:
        return hi - u * (hi - lo)

    if mode is InclusionMode.NONE:
        adjusted_lo = lo + tiny_offset(lo)
        adjusted_hi = hi - tiny_offset(hi)
        if lo == hi:
            raise InvalidRangeError(f"Empty open interval: ({lo}, {hi})")
        if adjusted_lo > adjusted_hi:
            # Interval narrower than the offsets; its midpoint is still inside
            return lo + (hi - lo) / 2
        return adjusted_lo + u * (adjusted_hi - adjusted_lo)

    # MIN and BOTH share the draw; BOTH reaches max only through rounding
    return lo + u * (hi - lo)
