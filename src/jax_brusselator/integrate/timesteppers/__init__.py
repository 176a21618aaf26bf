"""One-step time integration schemes."""

from ..protocols import StepperProtocol
from .explicit import ForwardEuler, RK4
from .implicit import BackwardEuler
from .imex import IMEX

__all__ = [
    'StepperProtocol',
    'ForwardEuler',
    'RK4',
    'BackwardEuler',
    'IMEX',
]
