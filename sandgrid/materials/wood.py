"""Wood rule — wood drops one row into vacuum."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sandgrid.world.cell import MaterialKind

if TYPE_CHECKING:
    from sandgrid.world.grid import Grid


def update_wood(grid: Grid) -> None:
    """Apply one wood pass over every interior cell.

    Wood only falls here.  Floating upwards is handled by the water rule.
    """
    for x, y in grid.interior():
        if grid.get(x, y).kind is not MaterialKind.WOOD:
            continue
        if grid.get(x, y + 1).kind is MaterialKind.NONE:
            grid.scratch_at(x, y).set(MaterialKind.NONE)
            grid.scratch_at(x, y + 1).set(MaterialKind.WOOD)
