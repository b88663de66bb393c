"""Sand rule — granular settling.

A grain falls straight down into vacuum or water, otherwise slides
down one diagonal.  When both diagonals are open the side is picked at
random so piles do not lean.  Target cells are checked in the scratch
buffer, so two grains never land on the same slot in one pass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sandgrid.materials.water import displace_water
from sandgrid.world.cell import MaterialKind

if TYPE_CHECKING:
    from numpy.random import Generator

    from sandgrid.world.grid import Grid


def _open(grid: Grid, x: int, y: int) -> bool:
    return grid.scratch_at(x, y).kind.is_fluid_target


def _slide(grid: Grid, x: int, y: int, dx: int) -> None:
    """Move the grain at ``(x, y)`` down-diagonally towards ``dx``."""
    target = grid.scratch_at(x + dx, y + 1)
    if target.kind is MaterialKind.NONE or (
        target.kind is MaterialKind.WATER and displace_water(grid, x + dx, y + 1)
    ):
        grid.scratch_at(x, y).set(MaterialKind.NONE)
        target.set(MaterialKind.SAND)


def update_sand(grid: Grid, rng: Generator) -> None:
    """Apply one sand pass over every interior cell.

    Args:
        grid: Grid whose scratch buffer receives the moves.
        rng: Generator used to break ties between the two diagonals.
    """
    for x, y in grid.interior():
        if grid.get(x, y).kind is not MaterialKind.SAND:
            continue

        below = grid.scratch_at(x, y + 1)
        if below.kind.is_fluid_target:
            here = grid.scratch_at(x, y)
            here.set(below.kind, below.mass)
            below.set(MaterialKind.SAND)
            continue

        left = _open(grid, x - 1, y + 1) and _open(grid, x - 1, y)
        right = _open(grid, x + 1, y + 1) and _open(grid, x + 1, y)
        if left and right:
            _slide(grid, x, y, 1 if rng.random() < 0.5 else -1)
        elif left:
            _slide(grid, x, y, -1)
        elif right:
            _slide(grid, x, y, 1)
