"""Smoke rule — rising, decaying gas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sandgrid.world.cell import MaterialKind

if TYPE_CHECKING:
    from sandgrid.world.grid import Grid

SMOKE_DECAY = 0.01


def update_smoke(grid: Grid) -> None:
    """Apply one smoke pass over every interior cell.

    Smoke loses ``SMOKE_DECAY`` mass per pass and rises one row when the
    cell above is vacuum.  Smoke that runs out of mass disappears.
    """
    for x, y in grid.interior():
        cell = grid.get(x, y)
        if not cell.kind.is_smoke:
            continue

        mass = cell.mass - SMOKE_DECAY
        if grid.get(x, y - 1).kind is MaterialKind.NONE:
            grid.scratch_at(x, y).set(MaterialKind.NONE)
            dest = grid.scratch_at(x, y - 1)
        else:
            dest = grid.scratch_at(x, y)

        if mass <= 0.0:
            dest.set(MaterialKind.NONE)
        else:
            dest.set(cell.kind, mass)
