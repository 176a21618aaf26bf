"""Dense LU solve for small systems."""

from typing import Optional, Union

from flax import nnx
from jax import Array
import jax.numpy as jnp

from ..protocols import Operator


class DirectDense(nnx.Module):
    """
    Solve A x = b with `jax.numpy.linalg.solve`.

    A must be an explicit (b.size, b.size) matrix. For the Brusselator that
    matrix has (2 N^2)^2 entries, so this is only useful on coarse grids or
    as a reference for the Krylov solvers.
    """

    def __call__(
        self,
        A: Union[Operator, Array],
        b: Array,
        x0: Optional[Array] = None
    ) -> Array:
        if callable(A):
            raise TypeError(
                "DirectDense needs an explicit matrix; pass `jac` to BackwardEuler "
                "or use GMRES, CG or BiCGStab with a matrix-free operator"
            )
        A = jnp.asarray(A)
        if A.shape != (b.size, b.size):
            raise ValueError(
                f"Matrix of shape {A.shape} does not match a right-hand side of size {b.size}"
            )
        return jnp.linalg.solve(A, b.ravel()).reshape(b.shape)
