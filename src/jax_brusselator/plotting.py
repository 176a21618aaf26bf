"""Heatmaps and animations of recorded trajectories."""

from typing import Optional, Tuple

import numpy as np
from matplotlib import pyplot as plt
from matplotlib.animation import FuncAnimation

from .solvers.trajectory import Trajectory


def _field_data(trajectory: Trajectory, field: str) -> np.ndarray:
    if field not in ("u", "v"):
        raise ValueError(f"field must be 'u' or 'v', got {field!r}")
    return np.asarray(trajectory.u if field == "u" else trajectory.v)


def _extent(trajectory: Trajectory):
    if trajectory.grid is None:
        return None
    (x_min, x_max), (y_min, y_max) = trajectory.grid.bounds
    return (x_min, x_max, y_min, y_max)


def plot_snapshot(
    trajectory: Trajectory,
    k: int = -1,
    field: str = "u",
    ax=None,
    clim: Optional[Tuple[float, float]] = None,
):
    """
    Draw the k-th snapshot of one field as a heatmap.

    Returns:
        The AxesImage
    """
    data = _field_data(trajectory, field)
    if ax is None:
        _, ax = plt.subplots()

    vmin, vmax = clim if clim is not None else (None, None)
    image = ax.imshow(
        data[k], origin="lower", extent=_extent(trajectory),
        vmin=vmin, vmax=vmax, cmap="viridis",
    )
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(f"{field} @ t={float(trajectory.t[k]):.2f}")
    ax.figure.colorbar(image, ax=ax)
    return image


def animate_trajectory(
    trajectory: Trajectory,
    field: str = "u",
    fps: int = 8,
    clim: Optional[Tuple[float, float]] = (0.0, 4.2),
) -> FuncAnimation:
    """
    Animate one field over all recorded snapshots.

    Save with e.g. `anim.save("u.mp4", fps=8)` (needs ffmpeg) or
    `anim.save("u.gif", writer="pillow")`.
    """
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")
    data = _field_data(trajectory, field)

    fig, ax = plt.subplots()
    image = plot_snapshot(trajectory, 0, field=field, ax=ax, clim=clim)

    def update(k):
        image.set_data(data[k])
        ax.set_title(f"{field} @ t={float(trajectory.t[k]):.2f}")
        return (image,)

    return FuncAnimation(fig, update, frames=len(trajectory), interval=1000 / fps, blit=False)
