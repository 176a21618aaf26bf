"""
Run a method-of-lines simulation and record its trajectory.

The driver owns no numerics of its own: it validates the run configuration,
builds the sampling times and hands everything to `solve_with_history`.
"""

import math
from typing import Callable, Optional, Tuple

import jax.numpy as jnp
from jax import Array

from ..integrate import (
    solve_with_history, StepperProtocol, BackwardEuler, IMEX, NewtonRaphson, GMRES
)
from .grid import Grid, brusselator_initial_state
from .equations import BrusselatorParams, brusselator_rhs, brusselator_split
from .trajectory import Trajectory


def default_method() -> BackwardEuler:
    """Backward Euler with a matrix-free Newton-Krylov solve."""
    return BackwardEuler(
        root_finder=NewtonRaphson(tol=1e-8, maxiter=20, linsolver=GMRES(tol=1e-8, maxiter=100))
    )


def sample_times(t_span: Tuple[float, float], saveat: float) -> Array:
    """
    Output times t0, t0 + saveat, ... up to t_end.

    t_end is appended when it is not a whole number of intervals away from t0.
    """
    t_start, t_end = float(t_span[0]), float(t_span[1])
    if not t_start < t_end:
        raise ValueError(f"t_span must be increasing, got {t_span}")
    if not saveat > 0.0:
        raise ValueError(f"saveat must be positive, got {saveat}")

    n_intervals = math.floor((t_end - t_start) / saveat + 1e-9)
    times = [min(t_start + k * saveat, t_end) for k in range(n_intervals + 1)]
    if len(times) > 1 and t_end - times[-1] <= 1e-9 * max(1.0, abs(t_end)):
        times[-1] = t_end
    else:
        times.append(t_end)
    return jnp.asarray(times)


def simulate(
    fun: Callable,
    y0: Array,
    t_span: Tuple[float, float],
    saveat: float,
    method: Optional[StepperProtocol] = None,
    step_size: float = 1e-2,
    args: tuple = (),
    grid: Optional[Grid] = None,
    verbose: bool = False,
    check_finite: bool = True,
) -> Trajectory:
    """
    Integrate dy/dt = fun(t, y, *args) and record the state every `saveat`.

    Args:
        fun: Right-hand side (or IMEX dict) with signature (t, y, *args) -> dydt
        y0: Initial state, shape (2, N, N)
        t_span: (t_start, t_end)
        saveat: Sampling interval of the recorded trajectory
        method: Time stepper; defaults to `default_method()`
        step_size: Integrator step size
        args: Extra arguments passed to fun
        grid: Grid attached to the trajectory
        verbose: Print progress information
        check_finite: Abort with FloatingPointError when the solution blows up

    Returns:
        Trajectory sampled at `sample_times(t_span, saveat)`
    """
    y0 = jnp.asarray(y0)
    if y0.ndim != 3 or y0.shape[0] != 2:
        raise ValueError(f"Initial state must have shape (2, N, N), got {y0.shape}")
    if grid is not None and y0.shape[1:] != (grid.y.shape[0], grid.x.shape[0]):
        raise ValueError(f"Initial state shape {y0.shape} does not match the grid")
    if not step_size > 0.0:
        raise ValueError(f"step_size must be positive, got {step_size}")
    if method is None:
        method = default_method()
    if not isinstance(method, StepperProtocol):
        raise ValueError(f"method must implement step(), got {type(method).__name__}")

    t_eval = sample_times(t_span, saveat)

    t, y = solve_with_history(
        fun,
        (float(t_span[0]), float(t_span[1])),
        y0,
        method,
        step_size,
        t_eval=t_eval,
        args=args,
        verbose=verbose,
        check_finite=check_finite,
    )

    return Trajectory(t, y, grid=grid)


def simulate_brusselator(
    params: BrusselatorParams,
    t_span: Tuple[float, float] = (0.0, 11.5),
    saveat: float = 0.1,
    method: Optional[StepperProtocol] = None,
    step_size: float = 1e-2,
    exponent: float = 1.0,
    y0: Optional[Array] = None,
    verbose: bool = False,
) -> Trajectory:
    """
    Solve the Brusselator problem described by `params`.

    Example usage:
    ```python
    from jax_brusselator.solvers import (
        create_grid, BCType, BrusselatorParams, simulate_brusselator
    )

    grid = create_grid(32)
    params = BrusselatorParams(grid=grid, bc_type=BCType.CLAMPED)
    trajectory = simulate_brusselator(params, t_span=(0.0, 11.5), saveat=0.1)
    t, u, v = trajectory.at(5.0)
    ```

    Args:
        params: Problem parameters, including grid and boundary policy
        t_span: (t_start, t_end)
        saveat: Sampling interval
        method: Time stepper; defaults to `default_method()`
        step_size: Integrator step size
        exponent: Exponent of the initial profiles (ignored if y0 is given)
        y0: Optional initial state

    Returns:
        Trajectory of the run
    """
    if y0 is None:
        y0 = brusselator_initial_state(params.grid, exponent=exponent)

    fun = brusselator_split() if isinstance(method, IMEX) else brusselator_rhs

    return simulate(
        fun,
        y0,
        t_span,
        saveat,
        method=method,
        step_size=step_size,
        args=(params,),
        grid=params.grid,
        verbose=verbose,
    )
