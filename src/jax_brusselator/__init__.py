"""
JAX Brusselator

A JAX implementation of the 2D Brusselator reaction-diffusion system solved
by the method of lines, with fixed-step explicit, implicit and IMEX time
integration.

Main components:
- solvers: Grids, finite difference operators, right-hand sides and the driver
- integrate: Time integration methods
- data_utils: Saving and loading trajectories
- plotting: Heatmaps and animations
"""

import jax

# Double precision throughout
jax.config.update("jax_enable_x64", True)

from .solvers import (
    BCType,
    Grid,
    create_grid,
    brusselator_initial_state,
    laplacian_2d,
    BrusselatorParams,
    brusselator_rhs,
    Trajectory,
    simulate,
    simulate_brusselator,
)

# Time integration solvers
from .integrate import solve_ivp, solve_with_history, RK4, ForwardEuler, BackwardEuler, IMEX

__all__ = [
    # Method of lines
    "BCType",
    "Grid",
    "create_grid",
    "brusselator_initial_state",
    "laplacian_2d",
    "BrusselatorParams",
    "brusselator_rhs",
    "Trajectory",
    "simulate",
    "simulate_brusselator",

    # ODE integration methods
    "solve_ivp",
    "solve_with_history",
    "RK4",
    "ForwardEuler",
    "BackwardEuler",
    "IMEX",
]
