"""Tests for overlap-aware placement."""

import math

import numpy as np
import pytest

from py_scatter.core import placement
from py_scatter.core.alea_prng import AleaPRNG
from py_scatter.core.distributions import Position2D
from py_scatter.core.placement import (
    PlacementLayout,
    PlacementResult,
    find_position_brute_force,
    has_overlap_with_placed,
    nearest_distance,
    place_best_candidate,
    place_brute_force,
    place_items,
)


class RecordingLogger:
    """Stand-in for the module logger that keeps warning calls."""

    def __init__(self):
        self.warnings = []

    def warning(self, event, **kwargs):
        self.warnings.append((event, kwargs))

    def info(self, event, **kwargs):
        pass


class TestOverlap:
    """Test the overlap predicate."""

    def test_no_placed_positions(self):
        assert not has_overlap_with_placed(Position2D(0, 0), [], 1.0)

    def test_overlap_below_min_distance(self):
        placed = [Position2D(0.0, 0.0), Position2D(5.0, 5.0)]
        assert has_overlap_with_placed(Position2D(0.5, 0.0), placed, 1.0)

    def test_touching_is_not_overlap(self):
        assert not has_overlap_with_placed(Position2D(1.0, 0.0), [Position2D(0.0, 0.0)], 1.0)

    def test_nearest_distance(self):
        placed = [Position2D(3.0, 4.0), Position2D(0.0, 2.0)]
        assert nearest_distance(Position2D(0.0, 0.0), placed) == pytest.approx(2.0)
        assert nearest_distance(Position2D(0.0, 0.0), []) == math.inf

    def test_nearest_distance_accepts_array(self):
        placed = np.array([[3.0, 4.0], [0.0, 2.0]])
        assert nearest_distance(Position2D(0.0, 0.0), placed) == pytest.approx(2.0)
        assert nearest_distance(Position2D(0.0, 0.0), np.empty((0, 2))) == math.inf


class TestBruteForce:
    """Test rejection-sampling placement."""

    def test_first_placement_accepted_immediately(self, rng):
        result = find_position_brute_force([], 0.5, 0.0, 1.0, rng)
        assert isinstance(result, PlacementResult)
        assert not result.degraded
        assert result.attempts == 1
        assert math.hypot(*result.position) <= 1.0 + 1e-9

    def test_does_not_mutate_placed(self, rng):
        placed = [Position2D(0.0, 0.0), Position2D(2.0, 0.0)]
        snapshot = list(placed)
        place_brute_force(placed, 0.5, 0.0, 5.0, rng)
        assert placed == snapshot

    def test_accepts_array_of_placed(self, rng):
        placed = np.array([[0.0, 0.0], [1.0, 1.0]])
        position = place_brute_force(placed, 0.25, 0.0, 5.0, rng)
        assert math.hypot(*position) <= 5.0 + 1e-9
        assert not has_overlap_with_placed(position, placed, 0.5)

    def test_result_respects_min_distance(self, rng):
        placed = [Position2D(0.0, 0.0)]
        result = find_position_brute_force(placed, 0.5, 0.0, 3.0, rng)
        assert not result.degraded
        assert nearest_distance(result.position, placed) >= 1.0

    def test_exhaustion_returns_degraded_position(self, rng, monkeypatch):
        recorder = RecordingLogger()
        monkeypatch.setattr(placement, "logger", recorder)

        # A single item of radius 10 covers the whole annulus
        placed = [Position2D(0.0, 0.0)]
        result = find_position_brute_force(placed, 10.0, 0.0, 1.0, rng, max_retries=25, item_index=3)

        assert result.degraded
        assert result.attempts == 25
        assert math.hypot(*result.position) <= 1.0 + 1e-9
        assert len(recorder.warnings) == 1
        event, fields = recorder.warnings[0]
        assert fields["item_index"] == 3
        assert fields["max_retries"] == 25
        assert fields["min_distance"] == 20.0

    def test_default_retry_budget(self, rng):
        result = find_position_brute_force([Position2D(0.0, 0.0)], 10.0, 0.0, 1.0, rng)
        assert result.degraded
        assert result.attempts == 100

    def test_invalid_retry_budget(self, rng):
        with pytest.raises(ValueError):
            find_position_brute_force([], 0.5, 0.0, 1.0, rng, max_retries=0)

    def test_sequential_layout_has_no_overlap(self, rng):
        layout = place_items(12, "brute-force", bounding_radius=0.5, min_radius=1.0, max_radius=8.0, rng=rng)
        assert len(layout.positions) == 12
        assert layout.degraded_indices == []
        assert layout.min_pairwise_distance() >= 1.0

    def test_three_items_in_unit_disc(self):
        successes = 0
        for seed in range(30):
            layout = place_items(
                3, "brute-force", bounding_radius=0.5, min_radius=0.0, max_radius=1.0, rng=AleaPRNG(seed)
            )
            if not layout.degraded_indices:
                successes += 1
                assert layout.min_pairwise_distance() >= 1.0
        assert successes >= 20


class TestBestCandidate:
    """Test Mitchell's best-candidate placement."""

    def test_first_placement_is_plain_sample(self, rng):
        position = place_best_candidate([], 10, 0.0, 5.0, rng)
        assert math.hypot(*position) <= 5.0 + 1e-9

    def test_first_placement_draws_once(self):
        prng = AleaPRNG("first")
        place_best_candidate([], 50, 0.0, 5.0, prng)
        # One annulus sample: angle and radius
        assert prng.call_count == 2

    def test_zero_candidates(self, rng):
        assert math.hypot(*place_best_candidate([], 0, 0.0, 5.0, rng)) <= 5.0 + 1e-9
        placed = [Position2D(0.0, 0.0)]
        assert math.hypot(*place_best_candidate(placed, 0, 0.0, 5.0, rng)) <= 5.0 + 1e-9

    def test_negative_candidates_rejected(self, rng):
        with pytest.raises(ValueError):
            place_best_candidate([], -1, 0.0, 5.0, rng)

    def test_picks_farthest_candidate(self, fixed_random):
        # Candidates at angles 0 and π with radius 1; the placed item sits at (1, 0)
        source = fixed_random([0.0, 0.25, 0.5, 0.25])
        position = place_best_candidate([Position2D(1.0, 0.0)], 2, 0.0, 2.0, source)
        assert position.x == pytest.approx(-1.0)
        assert position.z == pytest.approx(0.0, abs=1e-12)

    def test_does_not_mutate_placed(self, rng):
        placed = [Position2D(0.0, 0.0)]
        place_best_candidate(placed, 10, 0.0, 5.0, rng)
        assert placed == [Position2D(0.0, 0.0)]

    def test_accepts_array_of_placed(self, rng):
        placed = np.array([[0.0, 0.0], [1.0, 1.0]])
        position = place_best_candidate(placed, 20, 0.0, 5.0, rng)
        assert math.hypot(*position) <= 5.0 + 1e-9
        assert nearest_distance(position, placed) > 0.0

    def test_empty_array_of_placed_draws_once(self):
        prng = AleaPRNG("empty")
        place_best_candidate(np.empty((0, 2)), 50, 0.0, 5.0, prng)
        assert prng.call_count == 2

    def test_deterministic_with_seed(self):
        placed = [Position2D(1.0, 1.0), Position2D(-2.0, 0.5)]
        a = place_best_candidate(placed, 15, 0.0, 4.0, AleaPRNG("bc"))
        b = place_best_candidate(placed, 15, 0.0, 4.0, AleaPRNG("bc"))
        assert a == b

    def test_more_candidates_improve_spacing(self):
        placed = [Position2D(0.0, 0.0), Position2D(2.0, 0.0), Position2D(-1.0, 2.0), Position2D(0.5, -2.5)]

        def mean_nearest(candidate_count):
            distances = [
                nearest_distance(place_best_candidate(placed, candidate_count, 0.0, 4.0, AleaPRNG(seed)), placed)
                for seed in range(200)
            ]
            return np.mean(distances)

        one, five, twenty = mean_nearest(1), mean_nearest(5), mean_nearest(20)
        assert one < five < twenty

    def test_layout_spacing_beats_plain_sampling(self):
        best = place_items(40, "best-candidate", min_radius=0.0, max_radius=5.0, candidate_count=20, rng=AleaPRNG("l"))
        plain = place_items(40, "best-candidate", min_radius=0.0, max_radius=5.0, candidate_count=1, rng=AleaPRNG("l"))
        assert best.min_pairwise_distance() > plain.min_pairwise_distance()


class TestPlaceItems:
    """Test the sequential placement loop."""

    def test_empty(self, rng):
        layout = place_items(0, rng=rng)
        assert layout.positions == []
        assert layout.as_array().shape == (0, 2)
        assert layout.min_pairwise_distance() == math.inf

    def test_unknown_strategy(self, rng):
        with pytest.raises(ValueError):
            place_items(3, "random-walk", rng=rng)

    def test_degraded_indices_recorded(self, rng):
        layout = place_items(3, "brute-force", bounding_radius=5.0, max_radius=1.0, rng=rng, max_retries=5)
        assert layout.degraded_indices == [1, 2]
        assert len(layout.positions) == 3

    def test_as_array(self, rng):
        layout = place_items(5, "best-candidate", max_radius=3.0, rng=rng)
        array = layout.as_array()
        assert array.shape == (5, 2)
        assert isinstance(layout, PlacementLayout)
        np.testing.assert_allclose(array[0], layout.positions[0])
