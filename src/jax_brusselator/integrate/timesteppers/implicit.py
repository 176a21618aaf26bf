"""Implicit one-step methods."""

from typing import Callable, Optional

from flax import nnx
import jax
from jax import Array
import jax.numpy as jnp

from ..protocols import RHSFunction, RootFinderProtocol
from ..rootfinders import NewtonRaphson


class BackwardEuler(nnx.Module):
    """
    Backward Euler: find y1 with y1 = y0 + h f(t0 + h, y1).

    Each step hands the residual

        R(y1) = y1 - y0 - h f(t0 + h, y1)

    to `root_finder`, starting from the forward Euler predictor. The Jacobian
    of R is I - h df/dy, where df/dy comes from

    - `jvp(t, y, v, *args) -> (df/dy) v` if given (e.g. `brusselator_jvp`),
    - `jac(t, y, *args) -> df/dy` as a (y.size, y.size) matrix if given,
      which pairs with `DirectDense`,
    - otherwise forward-mode autodiff of `fun`.

    Attributes:
        root_finder: Nonlinear solver (default: NewtonRaphson())
        jvp: Optional analytic Jacobian-vector product of fun
        jac: Optional dense Jacobian of fun
    """

    def __init__(
        self,
        root_finder: Optional[RootFinderProtocol] = None,
        jvp: Optional[Callable] = None,
        jac: Optional[Callable] = None,
    ):
        if jvp is not None and jac is not None:
            raise ValueError("BackwardEuler accepts jvp or jac, not both")
        self.root_finder = NewtonRaphson() if root_finder is None else root_finder
        self.jvp = jvp
        self.jac = jac

    def step(self, fun: RHSFunction, t: Array, y: Array, h: Array, args: tuple = ()) -> Array:
        t_next = t + h

        def residual(y_next):
            return y_next - y - h * fun(t_next, y_next, *args)

        predictor = y + h * fun(t, y, *args)

        if self.jac is not None:
            def residual_jacobian(y_next):
                df_dy = self.jac(t_next, y_next, *args)
                return jnp.eye(y_next.size, dtype=df_dy.dtype) - h * df_dy

            return self.root_finder(residual, predictor, jac_fn=residual_jacobian)

        if self.jvp is not None:
            def df_dy_times(y_next, v):
                return self.jvp(t_next, y_next, v, *args)
        else:
            def df_dy_times(y_next, v):
                f_next = lambda z: fun(t_next, z, *args)
                return jax.jvp(f_next, (y_next,), (v,))[1]

        def residual_jvp(y_next, v):
            return v - h * df_dy_times(y_next, v)

        return self.root_finder(residual, predictor, jvp_fn=residual_jvp)
