"""Shared test fixtures."""

import matplotlib
import pytest

from py_scatter.core.alea_prng import AleaPRNG

matplotlib.use("Agg")


class FixedRandom:
    """Random source replaying a fixed sequence of draws."""

    def __init__(self, values):
        self.values = list(values)
        self.index = 0

    def random(self):
        value = self.values[self.index % len(self.values)]
        self.index += 1
        return value


@pytest.fixture
def rng():
    """Seeded generator for reproducible tests."""
    return AleaPRNG("py_scatter_test")


@pytest.fixture
def fixed_random():
    """Factory for sources replaying given values."""
    return FixedRandom
