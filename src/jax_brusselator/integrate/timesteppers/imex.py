"""Implicit-explicit splitting."""

from typing import Callable, Dict, Optional, Tuple, Union

from flax import nnx
from jax import Array
import jax.numpy as jnp

from ..protocols import RHSFunction, StepperProtocol
from .explicit import ForwardEuler
from .implicit import BackwardEuler


def _no_explicit_part(t, y, *args):
    return jnp.zeros_like(y)


class IMEX(nnx.Module):
    """
    First-order splitting of dy/dt = f_E(t, y) + f_I(t, y).

    A step applies the explicit stepper to f_E and then the implicit stepper
    to f_I, starting from the explicit result:

        y* = explicit.step(f_E, t, y, h)
        y1 = implicit.step(f_I, t, y*, h)

    With the defaults this is y1 = y + h f_E(t, y) + h f_I(t + h, y1).

    `fun` is a dict {'explicit': f_E, 'implicit': f_I}, which is what
    `jax_brusselator.solvers.brusselator_split()` returns (reaction explicit,
    diffusion implicit). A plain callable is taken as f_I with f_E = 0.

    Example:
        ```python
        from jax_brusselator.integrate import solve_ivp, IMEX, RK4, BackwardEuler
        from jax_brusselator.solvers import brusselator_split

        method = IMEX(implicit=BackwardEuler(), explicit=RK4())
        t, y = solve_ivp(brusselator_split(), (0.0, 1.0), y0, method, 1e-2, (params,))
        ```
    """

    def __init__(
        self,
        implicit: Optional[StepperProtocol] = None,
        explicit: Optional[StepperProtocol] = None,
    ):
        self.implicit = BackwardEuler() if implicit is None else implicit
        self.explicit = ForwardEuler() if explicit is None else explicit

    @staticmethod
    def split(fun: Union[RHSFunction, Dict[str, Callable]]) -> Tuple[Callable, Callable]:
        """Return (f_E, f_I) for a split dict or a plain callable."""
        if not isinstance(fun, dict):
            return _no_explicit_part, fun
        missing = [key for key in ('explicit', 'implicit') if key not in fun]
        if missing:
            raise ValueError(
                f"IMEX right-hand side is missing {missing}; got keys {sorted(fun)}"
            )
        return fun['explicit'], fun['implicit']

    def step(
        self,
        fun: Union[RHSFunction, Dict[str, Callable]],
        t: Array,
        y: Array,
        h: Array,
        args: tuple = ()
    ) -> Array:
        f_explicit, f_implicit = self.split(fun)
        y_star = self.explicit.step(f_explicit, t, y, h, args)
        return self.implicit.step(f_implicit, t, y_star, h, args)
