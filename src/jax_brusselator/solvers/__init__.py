"""
Method-of-lines PDE solvers

Hand-written finite difference discretisation of the 2D Brusselator
reaction-diffusion system, plus a driver that integrates it with the
time steppers in `jax_brusselator.integrate` and records a trajectory.
"""

from .grid import (
    BCType, as_bc_type, Grid, create_grid,
    stack_fields, split_fields, brusselator_initial_state
)
from .derivatives import (
    Neighbors, neighbor_index, neighbor_values,
    pad_field, d2__dx2_c, laplacian_2d
)
from .equations import (
    BrusselatorParams,
    brusselator_forcing, brusselator_diffusion, brusselator_reaction,
    brusselator_rhs, brusselator_jvp, brusselator_split
)
from .trajectory import Trajectory
from .driver import default_method, sample_times, simulate, simulate_brusselator

__all__ = [
    # Grid and state
    "BCType",
    "as_bc_type",
    "Grid",
    "create_grid",
    "stack_fields",
    "split_fields",
    "brusselator_initial_state",

    # Finite difference operators
    "Neighbors",
    "neighbor_index",
    "neighbor_values",
    "pad_field",
    "d2__dx2_c",
    "laplacian_2d",

    # Built-in equations
    "BrusselatorParams",
    "brusselator_forcing",
    "brusselator_diffusion",
    "brusselator_reaction",
    "brusselator_rhs",
    "brusselator_jvp",
    "brusselator_split",

    # Driver
    "Trajectory",
    "default_method",
    "sample_times",
    "simulate",
    "simulate_brusselator",
]
