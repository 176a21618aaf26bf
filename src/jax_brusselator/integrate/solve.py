import time
from typing import Optional, Tuple

import jax
from jax import Array
import jax.numpy as jnp

from .protocols import RHSFunction, StepperProtocol


def solve_ivp(
    fun: RHSFunction,
    t_span: Tuple[float, float],
    y0: Array,
    method: StepperProtocol,
    step_size: float,
    args: tuple = ()
) -> Tuple[Array, Array]:
    """
    Integrate dy/dt = fun(t, y, *args) from t_span[0] to t_span[1].

    Takes steps of `step_size`; the last step is shortened so that the
    returned time equals t_end. Runs as a single `lax.while_loop`, so the
    call can be jitted or differentiated like any other JAX function.

    Args:
        fun: Right-hand side, or a {'explicit', 'implicit'} dict for IMEX
        t_span: (t_start, t_end)
        y0: Initial state of any shape, e.g. (2, N, N)
        method: Stepper such as RK4() or BackwardEuler()
        step_size: Maximum step size
        args: Extra positional arguments for fun

    Returns:
        (t_end, y(t_end))

    Example:
    ```python
    from jax_brusselator.integrate import solve_ivp, BackwardEuler, NewtonRaphson, CG

    def decay(t, y, k):
        return -k * y

    method = BackwardEuler(root_finder=NewtonRaphson(linsolver=CG()))
    t, y = solve_ivp(decay, (0.0, 2.0), jnp.ones(3), method, 0.01, args=(0.5,))
    ```
    """
    y0 = jnp.asarray(y0)
    dtype = jnp.result_type(float, y0)
    t_start = jnp.asarray(t_span[0], dtype=dtype)
    t_end = jnp.asarray(t_span[1], dtype=dtype)
    h_max = jnp.asarray(step_size, dtype=dtype)

    def not_finished(carry):
        t, _ = carry
        return t < t_end

    def advance(carry):
        t, y = carry
        h = jnp.clip(t_end - t, 0.0, h_max)
        return t + h, method.step(fun, t, y, h, args).astype(dtype)

    return jax.lax.while_loop(not_finished, advance, (t_start, y0.astype(dtype)))


def _output_times(t_start: float, t_end: float, t_eval: Optional[Array]) -> Array:
    """Validated output times, always starting at t_start."""
    if t_eval is None:
        return jnp.array([t_start, t_end])

    t_eval = jnp.asarray(t_eval)
    if t_eval.ndim != 1 or t_eval.size == 0:
        raise ValueError("t_eval must be a non-empty 1D array")
    if bool(jnp.any(t_eval < t_start)) or bool(jnp.any(t_eval > t_end)):
        raise ValueError(f"t_eval must lie within [{t_start}, {t_end}]")
    if bool(jnp.any(jnp.diff(t_eval) < 0)):
        raise ValueError("t_eval must be sorted in increasing order")

    if float(t_eval[0]) != t_start:
        t_eval = jnp.concatenate([jnp.array([t_start]), t_eval])
    return t_eval


def solve_with_history(
    fun: RHSFunction,
    t_span: Tuple[float, float],
    y0: Array,
    method: StepperProtocol,
    step_size: float,
    t_eval: Optional[Array] = None,
    args: tuple = (),
    verbose: bool = False,
    check_finite: bool = False,
) -> Tuple[Array, Array]:
    """
    Integrate like `solve_ivp`, keeping the state at each time in `t_eval`.

    The interval is cut into chunks between consecutive output times and each
    chunk runs through one jitted `solve_ivp`. The Python loop over chunks
    means this function itself cannot be jitted.

    Args:
        fun, t_span, y0, method, step_size, args: As for `solve_ivp`
        t_eval: Sorted output times inside t_span. t_start is prepended if
            missing. Default: (t_start, t_end).
        verbose: Print the run configuration and timing
        check_finite: Raise FloatingPointError at the first output time
            whose state contains NaN or Inf

    Returns:
        t: Output times, shape (n_t,)
        y: States at those times, shape (n_t, *y0.shape)
    """
    t_start, t_end = float(t_span[0]), float(t_span[1])
    if not t_start < t_end:
        raise ValueError(f"t_span must be increasing, got {t_span}")
    if not step_size > 0.0:
        raise ValueError(f"step_size must be positive, got {step_size}")

    t_out = _output_times(t_start, t_end, t_eval)
    n_steps = int(jnp.ceil((t_end - t_start) / step_size))

    if verbose:
        print(f"Solving with {type(method).__name__}")
        print(f"Time: [{t_start}, {t_end}], dt={step_size}, ~{n_steps} steps")
        print(f"Saving {len(t_out)} snapshots")

    # Only the chunk bounds and the state are traced; fun, method and args
    # are closed over.
    advance_chunk = jax.jit(
        lambda t_a, t_b, y: solve_ivp(fun, (t_a, t_b), y, method, step_size, args)
    )

    y = jnp.asarray(y0)
    y = y.astype(jnp.result_type(float, y))
    ts = [jnp.asarray(t_start, dtype=y.dtype)]
    ys = [y]

    tic = time.time()
    for t_a, t_b in zip(t_out[:-1], t_out[1:]):
        t, y = advance_chunk(t_a, t_b, y)
        if check_finite and not bool(jnp.all(jnp.isfinite(y))):
            raise FloatingPointError(
                f"Non-finite values in the solution at t={float(t):.6g}"
            )
        ts.append(t)
        ys.append(y)
    elapsed = time.time() - tic

    if verbose:
        print(f"Completed in {elapsed:.3f}s ({n_steps / max(elapsed, 1e-12):.1f} steps/s)")

    return jnp.stack(ts), jnp.stack(ys)
