"""Root finders for implicit time steps."""

from ..protocols import RootFinderProtocol
from .newtonraphson import NewtonRaphson


__all__ = [
    "RootFinderProtocol",
    "NewtonRaphson",
]
