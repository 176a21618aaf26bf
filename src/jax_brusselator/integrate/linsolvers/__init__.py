"""Linear solvers for the Newton systems of implicit steppers."""

from ..protocols import LinearSolverProtocol
from .direct import DirectDense
from .krylov import GMRES, CG, BiCGStab


__all__ = [
    "LinearSolverProtocol",
    "DirectDense",
    "GMRES",
    "CG",
    "BiCGStab",
]
