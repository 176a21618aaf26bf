"""Newton's method for the nonlinear systems of implicit time steps."""

from typing import Optional

from flax import nnx
import jax
from jax import Array
import jax.numpy as jnp

from ..linsolvers import LinearSolverProtocol, GMRES
from ..protocols import Operator, JVPFunction, JacobianFunction


def _report_nonconvergence(iterations, residual_norm, maxiter, tol):
    if iterations >= maxiter and residual_norm > tol:
        print(
            f"WARNING: Newton-Raphson stopped after {int(iterations)} iterations "
            f"with residual norm {float(residual_norm):.2e} (tol={float(tol):.1e})."
        )


class NewtonRaphson(nnx.Module):
    """
    Newton-Raphson iteration y <- y - J(y)^{-1} R(y).

    Iterates until |R(y)| <= tol or `maxiter` updates have been taken.
    Hitting `maxiter` is not an error: the last iterate is returned and a
    warning is printed from inside the compiled loop.

    Attributes:
        tol: Absolute tolerance on the 2-norm of the residual
        maxiter: Maximum number of Newton updates
        linsolver: Solver for the update equation J delta = -R (default: GMRES)
    """

    def __init__(
        self,
        tol: float = 1e-6,
        maxiter: int = 50,
        linsolver: Optional[LinearSolverProtocol] = None
    ):
        if not tol > 0.0:
            raise ValueError(f"tol must be positive, got {tol}")
        if maxiter < 1:
            raise ValueError(f"maxiter must be at least 1, got {maxiter}")
        self.tol = tol
        self.maxiter = maxiter
        self.linsolver = GMRES() if linsolver is None else linsolver

    def __call__(
        self,
        residual_fn: Operator,
        y_guess: Array,
        jvp_fn: Optional[JVPFunction] = None,
        jac_fn: Optional[JacobianFunction] = None,
    ) -> Array:
        """
        Solve residual_fn(y) = 0 starting from y_guess.

        Args:
            residual_fn: y -> R(y), same shape in and out
            y_guess: Starting iterate, any shape
            jvp_fn: (y, v) -> J(y) v
            jac_fn: y -> J(y) as a (y.size, y.size) matrix; the update is
                solved on the flattened residual and reshaped back

        Returns:
            Final iterate
        """
        if (jvp_fn is None) == (jac_fn is None):
            raise ValueError("Provide exactly one of jvp_fn or jac_fn")

        if jac_fn is not None:
            def newton_update(y, r):
                return self.linsolver(jac_fn(y), -r.ravel()).reshape(r.shape)
        else:
            def newton_update(y, r):
                return self.linsolver(lambda v: jvp_fn(y, v), -r)

        def keep_iterating(state):
            _, r, k = state
            return (jnp.linalg.norm(r) > self.tol) & (k < self.maxiter)

        def iterate(state):
            y, r, k = state
            y = y + newton_update(y, r)
            return y, residual_fn(y), k + 1

        y, r, k = jax.lax.while_loop(
            keep_iterating, iterate, (y_guess, residual_fn(y_guess), 0)
        )

        jax.debug.callback(
            _report_nonconvergence, k, jnp.linalg.norm(r), self.maxiter, self.tol
        )
        return y
