"""Command line entry point: generate galaxies, layouts and raw samples."""

import argparse
import json
import sys
from typing import List, Optional

import numpy as np
import structlog

from .config import settings
from .core.alea_prng import AleaPRNG
from .core.distributions import sample_annulus_position, sample_sphere_position
from .core.galaxy import JITTER_MODES, GalaxyConfig, generate_point_cloud
from .core.placement import STRATEGIES, place_items
from .logging_config import configure_logging

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-scatter", description="Procedural point sampling and placement"
    )
    parser.add_argument("--log-level", help="Override the configured log level")
    parser.add_argument("--log-format", choices=["plain", "json"], help="Log output format")
    subparsers = parser.add_subparsers(dest="command", required=True)

    galaxy = subparsers.add_parser("galaxy", help="Generate a spiral galaxy point cloud")
    galaxy.add_argument("--seed", default=settings.default_seed, help="Random seed")
    galaxy.add_argument("--count", type=int, default=settings.galaxy_default_count)
    galaxy.add_argument("--radius", type=float, default=5.0)
    galaxy.add_argument("--branches", type=int, default=3)
    galaxy.add_argument("--spin", type=float, default=1.0)
    galaxy.add_argument("--randomness", type=float, default=1.0)
    galaxy.add_argument("--randomness-power", type=float, default=2.5)
    galaxy.add_argument("--inside-color", default="#a0c0d6")
    galaxy.add_argument("--outside-color", default="#be7b73")
    galaxy.add_argument("--no-colors", action="store_true", help="Skip the color buffer")
    galaxy.add_argument("--jitter", choices=JITTER_MODES, default="axis")
    galaxy.add_argument("--output", help="Write position/color buffers to this .npz file")
    galaxy.add_argument("--preview", help="Write a PNG preview to this path")

    place = subparsers.add_parser("place", help="Place non-overlapping items in an annulus")
    place.add_argument("--seed", default=settings.default_seed, help="Random seed")
    place.add_argument("--count", type=int, default=10)
    place.add_argument("--strategy", choices=STRATEGIES, default="brute-force")
    place.add_argument("--bounding-radius", type=float, default=0.5)
    place.add_argument("--min-radius", type=float, default=0.0)
    place.add_argument("--max-radius", type=float, default=5.0)
    place.add_argument("--candidates", type=int, default=settings.best_candidate_count)
    place.add_argument("--max-retries", type=int, default=settings.placement_max_retries)
    place.add_argument("--output", help="Write the layout as JSON to this file")
    place.add_argument("--preview", help="Write a PNG preview to this path")

    sample = subparsers.add_parser("sample", help="Print raw annulus or sphere samples")
    sample.add_argument("shape", choices=["annulus", "sphere"])
    sample.add_argument("--seed", default=settings.default_seed, help="Random seed")
    sample.add_argument("--count", type=int, default=10)
    sample.add_argument("--min-radius", type=float, default=0.0)
    sample.add_argument("--max-radius", type=float, default=1.0)

    return parser


def run_galaxy(args: argparse.Namespace) -> dict:
    config = GalaxyConfig(
        count=args.count,
        radius=args.radius,
        branches=args.branches,
        spin=args.spin,
        randomness=args.randomness,
        randomness_power=args.randomness_power,
        inside_color=args.inside_color,
        outside_color=args.outside_color,
        with_colors=not args.no_colors,
        jitter=args.jitter,
    )
    cloud = generate_point_cloud(config, AleaPRNG(args.seed))

    if args.output:
        buffers = {"positions": cloud.positions}
        if cloud.colors is not None:
            buffers["colors"] = cloud.colors
        np.savez(args.output, **buffers)
    if args.preview:
        from .visualize import plot_point_cloud

        plot_point_cloud(cloud, args.preview)

    vertices = cloud.as_vertices()
    return {
        "seed": args.seed,
        "count": cloud.count,
        "has_colors": cloud.colors is not None,
        "bounds": {
            "min": vertices.min(axis=0).tolist() if cloud.count else None,
            "max": vertices.max(axis=0).tolist() if cloud.count else None,
        },
        "output": args.output,
    }


def run_place(args: argparse.Namespace) -> dict:
    layout = place_items(
        args.count,
        args.strategy,
        bounding_radius=args.bounding_radius,
        min_radius=args.min_radius,
        max_radius=args.max_radius,
        candidate_count=args.candidates,
        rng=AleaPRNG(args.seed),
        max_retries=args.max_retries,
    )
    if args.preview:
        from .visualize import plot_layout

        plot_layout(layout, args.preview, args.bounding_radius, args.min_radius, args.max_radius)

    min_distance = layout.min_pairwise_distance()
    result = {
        "seed": args.seed,
        "strategy": args.strategy,
        "positions": [{"x": x, "z": z} for x, z in layout.positions],
        "degraded_indices": layout.degraded_indices,
        "min_pairwise_distance": None if min_distance == float("inf") else min_distance,
    }
    if args.output:
        with open(args.output, "w") as f:
            json.dump(result, f, indent=2)
    return result


def run_sample(args: argparse.Namespace) -> dict:
    rng = AleaPRNG(args.seed)
    if args.shape == "annulus":
        points = [
            sample_annulus_position(args.min_radius, args.max_radius, rng)._asdict()
            for _ in range(args.count)
        ]
    else:
        points = [
            sample_sphere_position(args.min_radius, args.max_radius, rng)._asdict()
            for _ in range(args.count)
        ]
    return {"seed": args.seed, "shape": args.shape, "positions": points}


COMMANDS = {
    "galaxy": run_galaxy,
    "place": run_place,
    "sample": run_sample,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.log_format)

    try:
        result = COMMANDS[args.command](args)
    except ValueError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
