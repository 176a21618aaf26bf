"""
Interfaces between the time steppers, the root finders they call for
implicit stages, and the linear solvers used inside Newton iterations.

Any object with a matching method satisfies an interface; the concrete
classes in this package are `flax.nnx` modules but nothing depends on that.
"""

from typing import Callable, Optional, Protocol, TypeAlias, Union, runtime_checkable

from jax import Array

# dy/dt = fun(t, y, *args)
RHSFunction: TypeAlias = Callable[..., Array]

# x -> A x, for matrix-free solves
Operator: TypeAlias = Callable[[Array], Array]

# (y, v) -> J(y) v
JVPFunction: TypeAlias = Callable[[Array, Array], Array]

# y -> J(y) as a (y.size, y.size) matrix
JacobianFunction: TypeAlias = Callable[[Array], Array]


@runtime_checkable
class LinearSolverProtocol(Protocol):
    """
    Solves A x = b.

    When A is an operator, x and b share the shape of the integrated state,
    e.g. (2, N, N). When A is a dense matrix, b is a flat vector.
    """

    def __call__(
        self,
        A: Union[Operator, Array],
        b: Array,
        x0: Optional[Array] = None
    ) -> Array:
        ...


@runtime_checkable
class RootFinderProtocol(Protocol):
    """
    Solves R(y) = 0 from an initial guess.

    Exactly one of `jvp_fn` (matrix-free) or `jac_fn` (dense) describes the
    Jacobian of R.
    """

    def __call__(
        self,
        residual_fn: Operator,
        y_guess: Array,
        jvp_fn: Optional[JVPFunction] = None,
        jac_fn: Optional[JacobianFunction] = None,
    ) -> Array:
        ...


@runtime_checkable
class StepperProtocol(Protocol):
    """
    Advances dy/dt = fun(t, y, *args) from t to t + h.

    `t` and `h` arrive as 0-d arrays because steps run inside
    `jax.lax.while_loop`. Splitting schemes may accept a dict of
    right-hand sides instead of a single callable.
    """

    def step(
        self,
        fun: RHSFunction,
        t: Array,
        y: Array,
        h: Array,
        args: tuple = ()
    ) -> Array:
        ...
