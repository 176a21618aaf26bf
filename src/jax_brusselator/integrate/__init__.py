"""
Fixed-step time integration for JAX arrays of any shape.

Steppers (explicit, implicit, IMEX) plug into `solve_ivp`; implicit steppers
delegate to a root finder, which in turn uses a linear solver.
"""

from .protocols import StepperProtocol, RootFinderProtocol, LinearSolverProtocol

from .solve import solve_ivp, solve_with_history

from .timesteppers import ForwardEuler, RK4, BackwardEuler, IMEX

from .rootfinders import NewtonRaphson

from .linsolvers import GMRES, CG, BiCGStab, DirectDense

__all__ = [
    # Interfaces
    'StepperProtocol',
    'RootFinderProtocol',
    'LinearSolverProtocol',

    # Drivers
    'solve_ivp',
    'solve_with_history',

    # Steppers
    'ForwardEuler',
    'RK4',
    'BackwardEuler',
    'IMEX',

    # Root finders
    'NewtonRaphson',

    # Linear solvers
    'GMRES',
    'CG',
    'BiCGStab',
    'DirectDense',
]
