"""Water mass constants and the compressibility curve.

A full water cell holds ``MAX_MASS``.  Cells lower in a column may hold
slightly more, which is what drives pressure flow back upwards.
"""

from __future__ import annotations

MAX_MASS = 10.0
MAX_COMPRESS = 0.3
MIN_MASS = 0.01
MIN_FLOW = 0.5
MAX_FLOW = 3.0
FLOW_SMOOTH = 0.75
PRESSURE_SMOOTH = 0.8


def get_flow(mass: float, dest_mass: float) -> float:
    """Return the mass the lower of two stacked cells should settle at.

    Args:
        mass: Mass of the upper cell.
        dest_mass: Mass of the lower cell.

    Returns:
        Target mass for the lower cell.  Up to one full cell of water
        all of it goes down; under heavier load the lower cell holds a
        little more than ``MAX_MASS``, growing with the total.
    """
    total = mass + dest_mass
    if total <= MAX_MASS:
        return MAX_MASS
    if total < 2.0 * MAX_MASS + MAX_COMPRESS:
        return (MAX_MASS**2 + total * MAX_COMPRESS) / (MAX_MASS + MAX_COMPRESS)
    return (total + MAX_COMPRESS) / 2.0


def damp(flow: float, smoothing: float = FLOW_SMOOTH) -> float:
    """Scale down flows above ``MIN_FLOW`` to reduce jitter."""
    if flow > MIN_FLOW:
        return flow * smoothing
    return flow


def clamp(flow: float, upper: float) -> float:
    """Clamp ``flow`` into ``[0, upper]``."""
    return max(0.0, min(flow, upper))
