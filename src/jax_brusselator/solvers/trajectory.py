"""Recorded solution of a two-field method-of-lines simulation."""

from typing import Iterator, Optional, Tuple

import jax.numpy as jnp
import numpy as np
from jax import Array

from .grid import Grid


class Trajectory:
    """
    Sequence of (time, u, v) snapshots produced by one simulation run.

    The arrays are JAX arrays and therefore immutable; the object exposes
    no way of modifying them after construction.

    Attributes:
        t: Sample times, shape (n_t,)
        y: Stacked states, shape (n_t, 2, N, N)
        grid: Grid the fields live on (optional)
    """

    __slots__ = ("_t", "_y", "_grid")

    def __init__(self, t: Array, y: Array, grid: Optional[Grid] = None):
        t = jnp.asarray(t)
        y = jnp.asarray(y)
        if t.ndim != 1:
            raise ValueError(f"t must be 1D, got shape {t.shape}")
        if y.ndim != 4 or y.shape[1] != 2:
            raise ValueError(f"y must have shape (n_t, 2, N, N), got {y.shape}")
        if y.shape[0] != t.shape[0]:
            raise ValueError(
                f"Got {t.shape[0]} sample times but {y.shape[0]} snapshots"
            )
        if grid is not None and y.shape[2:] != (grid.y.shape[0], grid.x.shape[0]):
            raise ValueError(
                f"Snapshot shape {y.shape[2:]} does not match the grid "
                f"({grid.y.shape[0]}, {grid.x.shape[0]})"
            )
        self._t = t
        self._y = y
        self._grid = grid

    @property
    def t(self) -> Array:
        return self._t

    @property
    def y(self) -> Array:
        return self._y

    @property
    def grid(self) -> Optional[Grid]:
        return self._grid

    @property
    def u(self) -> Array:
        """All u snapshots, shape (n_t, N, N)."""
        return self._y[:, 0]

    @property
    def v(self) -> Array:
        """All v snapshots, shape (n_t, N, N)."""
        return self._y[:, 1]

    def __len__(self) -> int:
        return self._t.shape[0]

    def __getitem__(self, k: int) -> Tuple[Array, Array, Array]:
        """Return the k-th (t, u, v) triple."""
        return self._t[k], self._y[k, 0], self._y[k, 1]

    def __iter__(self) -> Iterator[Tuple[Array, Array, Array]]:
        for k in range(len(self)):
            yield self[k]

    def __repr__(self) -> str:
        n_t, _, ny, nx = self._y.shape
        return (
            f"Trajectory(n_t={n_t}, grid={ny}x{nx}, "
            f"t=[{float(self._t[0]):.4g}, {float(self._t[-1]):.4g}])"
        )

    def index_of(self, time: float) -> int:
        """Index of the sample closest to `time`."""
        t = np.asarray(self._t)
        if not (t[0] - 1e-12 <= time <= t[-1] + 1e-12):
            raise ValueError(
                f"Time {time} is outside the recorded span [{t[0]}, {t[-1]}]"
            )
        return int(np.argmin(np.abs(t - time)))

    def at(self, time: float) -> Tuple[Array, Array, Array]:
        """Return the (t, u, v) sample closest to `time`."""
        return self[self.index_of(time)]

    def final(self) -> Tuple[Array, Array, Array]:
        return self[len(self) - 1]
