"""
Built-in PDEs

Right-hand sides for method-of-lines problems. All functions follow the
integrator interface:
- fun(t, y, params) -> dy/dt
- jvp(t, y, w, params) -> (d fun / dy) @ w
"""

from .brusselator import (
    BrusselatorParams,
    brusselator_forcing,
    brusselator_diffusion,
    brusselator_reaction,
    brusselator_rhs,
    brusselator_jvp,
    brusselator_split,
)

__all__ = [
    "BrusselatorParams",
    "brusselator_forcing",
    "brusselator_diffusion",
    "brusselator_reaction",
    "brusselator_rhs",
    "brusselator_jvp",
    "brusselator_split",
]
