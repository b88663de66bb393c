"""Fire rule — dripping flames and wood ignition.

A flame with vacuum below drips down one row.  Otherwise it burns out
into smoke and sets fire to any wood in its 4-neighbourhood.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sandgrid.world.cell import MaterialKind

if TYPE_CHECKING:
    from sandgrid.world.grid import Grid

SMOKE_MASS = 1.0
DARK_SMOKE_MASS = 2.0

_CARDINALS: tuple[tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


def update_fire(grid: Grid) -> None:
    """Apply one fire pass over every interior cell."""
    for x, y in grid.interior():
        kind = grid.get(x, y).kind
        if not kind.is_fire:
            continue

        if grid.get(x, y + 1).kind is MaterialKind.NONE:
            grid.scratch_at(x, y + 1).set(MaterialKind.FIRE_NORMAL)
            grid.scratch_at(x, y).set(MaterialKind.NONE)
            continue

        if kind is MaterialKind.FIRE_BURN:
            grid.scratch_at(x, y).set(MaterialKind.DARK_SMOKE, DARK_SMOKE_MASS)
        else:
            grid.scratch_at(x, y).set(MaterialKind.SMOKE, SMOKE_MASS)

        for dx, dy in _CARDINALS:
            neighbour = grid.scratch_at(x + dx, y + dy)
            if neighbour.kind is MaterialKind.WOOD:
                neighbour.set(MaterialKind.FIRE_BURN)
