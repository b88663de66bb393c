"""Water rule — mass-conserving fluid flow.

Every water cell carries a continuous mass.  Each pass moves mass
downwards first, then sideways, then upwards under pressure, reading
masses from the current buffer and accumulating transfers into the
scratch buffer.  Wood touching the water is floated upwards when the
column above it has room.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sandgrid.materials.flow import (
    MAX_COMPRESS,
    MAX_FLOW,
    MAX_MASS,
    MIN_FLOW,
    MIN_MASS,
    PRESSURE_SMOOTH,
    clamp,
    damp,
    get_flow,
)
from sandgrid.world.cell import MaterialKind

if TYPE_CHECKING:
    from sandgrid.world.grid import Grid

_DISPLACE_ORDER: tuple[tuple[int, int], ...] = ((0, -1), (1, 0), (-1, 0), (0, 1))


def displace_water(grid: Grid, x: int, y: int) -> bool:
    """Push the whole mass of scratch cell ``(x, y)`` into a neighbour.

    Neighbours are tried up, right, left, down; the first one holding
    vacuum or water receives the mass and becomes water.

    Returns:
        True if the mass found a destination, False if boxed in.
    """
    source = grid.scratch_at(x, y)
    for dx, dy in _DISPLACE_ORDER:
        dest = grid.scratch_at(x + dx, y + dy)
        if dest.kind.is_fluid_target:
            dest.kind = MaterialKind.WATER
            dest.mass += source.mass
            source.mass = 0.0
            return True
    return False


def wood_stuck(grid: Grid, x: int, y: int) -> int | None:
    """Find where a wood column resting above row ``y`` could float to.

    Scans the scratch buffer upwards from ``y - 1`` through contiguous
    wood.

    Returns:
        Row of the first vacuum or water cell above the wood, or None
        when the column is capped by anything else.
    """
    for row in range(y - 1, -1, -1):
        kind = grid.scratch_at(x, row).kind
        if kind is MaterialKind.WOOD:
            continue
        if kind.is_fluid_target:
            return row
        break
    return None


def lift_wood(grid: Grid, x: int, y: int, top: int) -> None:
    """Move the wood at ``(x, y)`` to row ``top`` of the same column.

    Whatever fluid sat at ``top`` drops into the slot the wood left.
    """
    landing = grid.scratch_at(x, top)
    grid.scratch_at(x, y).set(landing.kind, landing.mass)
    landing.set(MaterialKind.WOOD)


def _transfer(grid: Grid, x: int, y: int, nx: int, ny: int, flow: float) -> None:
    source = grid.scratch_at(x, y)
    dest = grid.scratch_at(nx, ny)
    source.mass -= flow
    dest.mass += flow


def _flow_sideways(
    grid: Grid,
    x: int,
    y: int,
    dx: int,
    remaining: float,
) -> float | None:
    """Spread mass into the horizontal neighbour at ``x + dx``.

    Returns:
        The mass left in the cell, or None when a stuck wood column
        ends this cell's update.
    """
    neighbour = grid.get(x + dx, y)
    accepted = neighbour.kind.is_fluid_target or (
        dx > 0 and neighbour.kind is MaterialKind.WOOD
    )
    if not accepted:
        return remaining

    flow = clamp(damp((remaining - neighbour.mass) / 3.0), min(MAX_FLOW, remaining))

    if flow > 0.0 and grid.scratch_at(x + dx, y).kind is MaterialKind.WOOD:
        beyond = grid.scratch_at(x + 2 * dx, y)
        if beyond.kind is MaterialKind.NONE:
            beyond.set(MaterialKind.WOOD)
        else:
            top = wood_stuck(grid, x + dx, y)
            if top is None:
                return None
            lift_wood(grid, x + dx, y, top)

    _transfer(grid, x, y, x + dx, y, flow)
    dest = grid.scratch_at(x + dx, y)
    if dest.mass > MIN_MASS:
        dest.kind = MaterialKind.WATER
    return remaining - flow


def _update_cell(grid: Grid, x: int, y: int) -> None:
    cell = grid.get(x, y)
    remaining = cell.mass
    if remaining < MIN_MASS:
        # only the cell's own mass evaporates, not what was poured in
        here = grid.scratch_at(x, y)
        here.mass -= remaining
        if here.mass <= MIN_MASS:
            here.set(MaterialKind.NONE)
        return

    below = grid.get(x, y + 1)
    if below.kind.is_fluid_target:
        flow = damp(get_flow(cell.mass, below.mass) - below.mass)
        flow = clamp(flow, min(MAX_FLOW, remaining))
        _transfer(grid, x, y, x, y + 1, flow)
        remaining -= flow
        if grid.scratch_at(x, y + 1).mass > MIN_MASS:
            grid.scratch_at(x, y + 1).kind = MaterialKind.WATER

    if remaining < MIN_FLOW:
        return

    if below.kind is not MaterialKind.WATER or below.mass >= MAX_MASS:
        for dx in (1, -1):
            result = _flow_sideways(grid, x, y, dx, remaining)
            if result is None:
                return
            remaining = result
            if remaining < MIN_FLOW:
                return

    above = grid.get(x, y - 1)
    if not (above.kind.is_fluid_target or above.kind is MaterialKind.WOOD):
        return
    if remaining <= MAX_MASS + MAX_COMPRESS:
        return
    if grid.scratch_at(x, y - 1).kind is MaterialKind.WOOD:
        top = wood_stuck(grid, x, y)
        if top is None:
            return
        lift_wood(grid, x, y - 1, top)

    flow = damp(remaining - get_flow(cell.mass, above.mass), PRESSURE_SMOOTH)
    flow = clamp(flow, min(MAX_FLOW, remaining))
    _transfer(grid, x, y, x, y - 1, flow)
    if grid.scratch_at(x, y - 1).mass >= MIN_MASS:
        grid.scratch_at(x, y - 1).kind = MaterialKind.WATER


def update_water(grid: Grid) -> None:
    """Apply one water pass over every interior cell."""
    for x, y in grid.interior():
        if grid.get(x, y).kind is MaterialKind.WATER:
            _update_cell(grid, x, y)
