"""PNG previews of generated point clouds and placement layouts."""

from pathlib import Path
from typing import Union

import matplotlib

matplotlib.use("Agg")  # Headless backend for file output

import matplotlib.pyplot as plt  # noqa: E402
import structlog  # noqa: E402

from .core.galaxy import PointCloud  # noqa: E402
from .core.placement import PlacementLayout  # noqa: E402

logger = structlog.get_logger()


def plot_point_cloud(
    cloud: PointCloud,
    path: Union[str, Path],
    elevation: float = 35.0,
    azimuth: float = -60.0,
) -> Path:
    """
    Render a point cloud as a 3D scatter plot.

    Args:
        cloud: Generated cloud
        path: Output PNG path
        elevation: Camera elevation in degrees
        azimuth: Camera azimuth in degrees

    Returns:
        Path of the written image
    """
    path = Path(path)
    vertices = cloud.as_vertices()
    colors = cloud.colors.reshape(-1, 3) if cloud.colors is not None else "white"

    fig = plt.figure(figsize=(10, 10), facecolor="black")
    ax = fig.add_subplot(projection="3d", facecolor="black")
    # Renderer convention is y-up, matplotlib's is z-up
    ax.scatter(vertices[:, 0], vertices[:, 2], vertices[:, 1], c=colors, s=0.5, linewidths=0)
    extent = cloud.config.radius + cloud.config.randomness
    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_zlim(-extent, extent)
    ax.view_init(elev=elevation, azim=azimuth)
    ax.set_axis_off()

    fig.savefig(path, dpi=100, facecolor=fig.get_facecolor())
    plt.close(fig)
    logger.info("Wrote point cloud preview", path=str(path), count=cloud.count)
    return path


def plot_layout(
    layout: PlacementLayout,
    path: Union[str, Path],
    bounding_radius: float,
    min_radius: float,
    max_radius: float,
) -> Path:
    """
    Render placed items as circles inside their annulus.

    Degraded placements are drawn in red.
    """
    path = Path(path)
    degraded = set(layout.degraded_indices)

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.set_aspect("equal")
    limit = max_radius + bounding_radius
    ax.set_xlim(-limit, limit)
    ax.set_ylim(-limit, limit)

    ax.add_patch(plt.Circle((0, 0), max_radius, fill=False, linestyle="--", color="gray"))
    if min_radius > 0:
        ax.add_patch(plt.Circle((0, 0), min_radius, fill=False, linestyle="--", color="gray"))

    for index, (x, z) in enumerate(layout.positions):
        color = "tab:red" if index in degraded else "tab:blue"
        ax.add_patch(plt.Circle((x, z), bounding_radius, color=color, alpha=0.5))

    ax.set_xlabel("x")
    ax.set_ylabel("z")
    fig.savefig(path, dpi=100)
    plt.close(fig)
    logger.info("Wrote layout preview", path=str(path), count=len(layout.positions))
    return path
