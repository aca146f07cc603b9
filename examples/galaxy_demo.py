"""
Example demonstrating galaxy generation and annulus placement.
"""

import numpy as np
import matplotlib.pyplot as plt
from py_scatter.core import (
    AleaPRNG,
    GalaxyConfig, generate_point_cloud,
    place_items,
)


def main():
    # Configuration
    seed = "galaxy_demo"
    rng = AleaPRNG(seed)

    config = GalaxyConfig(
        count=20_000,
        radius=5,
        branches=4,
        spin=1.2,
        randomness=0.8,
        randomness_power=3,
        inside_color="#ff6030",
        outside_color="#1b3984",
    )

    print("Generating galaxy...")
    cloud = generate_point_cloud(config, rng)
    vertices = cloud.as_vertices()
    print(f"  Points: {cloud.count}")
    print(f"  Mean distance from centre: {np.mean(np.hypot(vertices[:, 0], vertices[:, 2])):.2f}")

    # Scatter some planets around the galaxy without overlaps
    print("Placing planets...")
    brute = place_items(25, "brute-force", bounding_radius=0.4, min_radius=6, max_radius=9, rng=rng)
    best = place_items(25, "best-candidate", min_radius=6, max_radius=9, candidate_count=15, rng=rng)
    print(f"  Brute force: min spacing {brute.min_pairwise_distance():.2f}, "
          f"{len(brute.degraded_indices)} degraded")
    print(f"  Best candidate: min spacing {best.min_pairwise_distance():.2f}")

    fig, axes = plt.subplots(1, 2, figsize=(16, 8), facecolor="black")
    for ax, layout, title in zip(axes, (brute, best), ("Brute force", "Best candidate")):
        ax.set_facecolor("black")
        ax.scatter(vertices[:, 0], vertices[:, 2], c=cloud.colors.reshape(-1, 3), s=0.3)
        planets = layout.as_array()
        ax.scatter(planets[:, 0], planets[:, 1], c="white", s=40)
        ax.set_title(title, color="white")
        ax.set_aspect("equal")
        ax.set_axis_off()

    plt.tight_layout()
    plt.savefig("galaxy_demo.png", dpi=100, facecolor="black")
    print("Saved galaxy_demo.png")


if __name__ == "__main__":
    main()
