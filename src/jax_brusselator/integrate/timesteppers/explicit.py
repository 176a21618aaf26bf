"""Explicit one-step methods."""

from flax import nnx
from jax import Array

from ..protocols import RHSFunction


class ForwardEuler(nnx.Module):
    """
    y1 = y0 + h f(t0, y0).

    First order. For the Brusselator the diffusion term limits the step to
    about h < min(dx, dy)**2 / (4 alpha).
    """

    def step(self, fun: RHSFunction, t: Array, y: Array, h: Array, args: tuple = ()) -> Array:
        return y + h * fun(t, y, *args)


class RK4(nnx.Module):
    """
    Classical fourth-order Runge-Kutta.

    Every stage evaluates `fun` on a freshly built input, so stage
    derivatives are independent arrays.
    """

    def step(self, fun: RHSFunction, t: Array, y: Array, h: Array, args: tuple = ()) -> Array:
        half = 0.5 * h
        k1 = fun(t, y, *args)
        k2 = fun(t + half, y + half * k1, *args)
        k3 = fun(t + half, y + half * k2, *args)
        k4 = fun(t + h, y + h * k3, *args)
        return y + h * (k1 + 2.0 * (k2 + k3) + k4) / 6.0
