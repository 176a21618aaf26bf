"""Matrix-free Krylov solvers wrapping `jax.scipy.sparse.linalg`."""

from typing import Optional, Tuple, Union

from flax import nnx
from jax import Array
import jax.scipy.sparse.linalg as jax_sparse

from ..protocols import Operator


class _KrylovSolver(nnx.Module):
    """
    Common settings of the Krylov wrappers.

    Subclasses implement `_solve`, which returns `(x, info)` like the
    functions in `jax.scipy.sparse.linalg`. `tol` is relative to |b|.
    """

    def __init__(self, tol: float = 1e-6, maxiter: int = 100):
        if not tol > 0.0:
            raise ValueError(f"tol must be positive, got {tol}")
        if maxiter < 1:
            raise ValueError(f"maxiter must be at least 1, got {maxiter}")
        self.tol = tol
        self.maxiter = maxiter

    def _solve(self, A, b: Array, x0: Optional[Array]) -> Tuple[Array, None]:
        raise NotImplementedError

    def __call__(
        self,
        A: Union[Operator, Array],
        b: Array,
        x0: Optional[Array] = None
    ) -> Array:
        x, _ = self._solve(A, b, x0)
        return x


class GMRES(_KrylovSolver):
    """
    Restarted GMRES for general non-symmetric systems.

    This is the default inner solver of `NewtonRaphson`, since the
    Brusselator reaction Jacobian is not symmetric.

    Attributes:
        tol: Relative residual tolerance
        maxiter: Maximum number of restart cycles
        restart: Krylov subspace size per cycle
    """

    def __init__(self, tol: float = 1e-6, maxiter: int = 100, restart: int = 20):
        super().__init__(tol=tol, maxiter=maxiter)
        if restart < 1:
            raise ValueError(f"restart must be at least 1, got {restart}")
        self.restart = restart

    def _solve(self, A, b, x0):
        return jax_sparse.gmres(
            A, b, x0=x0, tol=self.tol, restart=self.restart, maxiter=self.maxiter
        )


class CG(_KrylovSolver):
    """
    Conjugate gradients.

    Requires a symmetric positive definite operator, which the implicit
    diffusion stage of `IMEX` provides: I - h alpha lap(.) with either
    boundary policy.
    """

    def _solve(self, A, b, x0):
        return jax_sparse.cg(A, b, x0=x0, tol=self.tol, maxiter=self.maxiter)


class BiCGStab(_KrylovSolver):
    """Stabilised biconjugate gradients for non-symmetric systems."""

    def _solve(self, A, b, x0):
        return jax_sparse.bicgstab(A, b, x0=x0, tol=self.tol, maxiter=self.maxiter)
