"""
Grids, boundary policies and initial states for 2D method-of-lines problems.

Fields live on an N x N lattice and are indexed as ``field[i, j]``, where
row ``i`` runs along y and column ``j`` runs along x. The two Brusselator
fields are stacked into one ``(2, N, N)`` state array so that every time
stepper can advance them with plain array arithmetic.
"""

import operator
from enum import IntEnum
from typing import NamedTuple, Tuple, Union

import jax.numpy as jnp
from jax import Array


class BCType(IntEnum):
    """
    Boundary policy used for neighbour lookups.

    Supported policies:
        CLAMPED: out-of-range indices are replaced by the nearest edge index
            (zero-gradient, Neumann-like).
        PERIODIC: out-of-range indices wrap modulo N.

    There is no default policy; see `as_bc_type`.
    """
    CLAMPED = 0
    PERIODIC = 1


def as_bc_type(value: Union[BCType, str]) -> BCType:
    """
    Validate a boundary policy.

    Args:
        value: A BCType member or its case-insensitive name
            ("clamped" or "periodic").

    Returns:
        The matching BCType.

    Raises:
        ValueError: If the value does not name a supported policy.
    """
    if isinstance(value, BCType):
        return value
    if isinstance(value, str):
        try:
            return BCType[value.strip().upper()]
        except KeyError:
            pass
    options = ", ".join(bc.name.lower() for bc in BCType)
    raise ValueError(
        f"Unsupported boundary condition type: {value!r} (expected one of: {options})"
    )


class Grid(NamedTuple):
    """
    Uniform N x N lattice over [x_min, x_max] x [y_min, y_max].

    Both end points are grid lines, so dx = (x_max - x_min) / (N - 1).
    """
    x: Array
    y: Array
    dx: float
    dy: float

    @property
    def n(self) -> int:
        return self.x.shape[0]

    @property
    def bounds(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        return (
            (float(self.x[0]), float(self.x[-1])),
            (float(self.y[0]), float(self.y[-1])),
        )

    def meshgrid(self) -> Tuple[Array, Array]:
        """Return (X, Y) with X[i, j] = x[j] and Y[i, j] = y[i]."""
        Y, X = jnp.meshgrid(self.y, self.x, indexing="ij")
        return X, Y


def create_grid(
    n: int,
    x_bounds: Tuple[float, float] = (0.0, 1.0),
    y_bounds: Tuple[float, float] = (0.0, 1.0),
) -> Grid:
    """
    Create a uniform 2D grid.

    Args:
        n: Number of grid lines per axis
        x_bounds: (x_min, x_max)
        y_bounds: (y_min, y_max)

    Returns:
        Grid with coordinate arrays of length n and spacings dx, dy

    Raises:
        ValueError: If n <= 1 or a bound pair is not strictly increasing.
    """
    try:
        n = operator.index(n)
    except TypeError:
        raise ValueError(f"Grid size must be an integer, got {n!r}") from None
    if n <= 1:
        raise ValueError(f"Grid size must be greater than 1, got {n}")

    x_min, x_max = (float(b) for b in x_bounds)
    y_min, y_max = (float(b) for b in y_bounds)
    if not x_min < x_max:
        raise ValueError(f"x bounds must be increasing, got ({x_min}, {x_max})")
    if not y_min < y_max:
        raise ValueError(f"y bounds must be increasing, got ({y_min}, {y_max})")

    dx = (x_max - x_min) / (n - 1)
    dy = (y_max - y_min) / (n - 1)
    x = jnp.linspace(x_min, x_max, n)
    y = jnp.linspace(y_min, y_max, n)

    return Grid(x=x, y=y, dx=dx, dy=dy)


def stack_fields(u: Array, v: Array) -> Array:
    """Pack the two fields into a single (2, N, N) state."""
    if u.shape != v.shape:
        raise ValueError(f"Field shapes differ: {u.shape} vs {v.shape}")
    return jnp.stack([u, v], axis=0)


def split_fields(y: Array) -> Tuple[Array, Array]:
    """Unpack a (2, N, N) state into (u, v)."""
    return y[0], y[1]


def brusselator_initial_state(grid: Grid, exponent: float = 1.0) -> Array:
    """
    Initial Brusselator fields.

        u0(x, y) = 22 (y (1 - y))^exponent
        v0(x, y) = 27 (x (1 - x))^exponent

    exponent=1 gives the plain parabolas; exponent=1.5 gives profiles
    with a vanishing slope at the edges.

    Args:
        grid: Grid to evaluate on
        exponent: Power applied to the parabolic profiles

    Returns:
        State of shape (2, N, N)

    Raises:
        ValueError: If exponent <= 0, or exponent != 1 on a grid reaching
            outside [0, 1] where a profile would be negative.
    """
    if not exponent > 0.0:
        raise ValueError(f"exponent must be positive, got {exponent}")

    X, Y = grid.meshgrid()
    u_profile = Y * (1.0 - Y)
    v_profile = X * (1.0 - X)
    if exponent != 1.0:
        # Fractional powers of negative values are NaN
        if bool(jnp.any(u_profile < 0.0)) or bool(jnp.any(v_profile < 0.0)):
            raise ValueError(
                f"exponent={exponent} needs grid bounds inside [0, 1], got "
                f"{grid.bounds}"
            )
        u_profile = u_profile ** exponent
        v_profile = v_profile ** exponent

    return stack_fields(22.0 * u_profile, 27.0 * v_profile)
