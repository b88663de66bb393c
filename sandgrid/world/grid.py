"""Grid — the double-buffered spatial container for the simulation.

The Grid owns two equally sized ``n x n`` buffers of cells.  ``current``
holds the state every rule reads from; ``scratch`` receives the writes of
the rule being applied.  Between phases the buffers are swapped.

The outermost ring of cells is always Dirt.  Rules only visit interior
cells and rely on that ring to keep their ``±1`` neighbour reads inside
the grid.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from numpy.random import Generator

from sandgrid.world.cell import Cell, MaterialKind

logger = logging.getLogger(__name__)

_NEIGHBOURHOOD: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (1, -1),
    (1, 0),
    (1, 1),
    (0, -1),
    (0, 1),
)

MIN_SIZE = 3


def _make_buffer(size: int) -> list[list[Cell]]:
    return [[Cell(x=x, y=y) for x in range(size)] for y in range(size)]


@dataclass
class Grid:
    """A square grid with a current and a scratch buffer.

    Attributes:
        size: Side length of the grid, border included.
        current: Buffer holding the committed state, indexed ``[y][x]``.
        scratch: Buffer receiving the writes of the active phase.
    """

    size: int
    current: list[list[Cell]] = field(init=False, repr=False)
    scratch: list[list[Cell]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Allocate both buffers and lay down the border."""
        if self.size < MIN_SIZE:
            msg = f"grid size must be at least {MIN_SIZE}, got {self.size}"
            raise ValueError(msg)
        self.current = _make_buffer(self.size)
        self.scratch = _make_buffer(self.size)
        self.add_border()

    # -- bounds ---------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def in_interior(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` is inside the border ring."""
        return 0 < x < self.size - 1 and 0 < y < self.size - 1

    def interior(self) -> Iterator[tuple[int, int]]:
        """Yield ``(x, y)`` for every interior cell in row-major order."""
        for y in range(1, self.size - 1):
            for x in range(1, self.size - 1):
                yield x, y

    def get(self, x: int, y: int) -> Cell:
        """Return the current-buffer cell at ``(x, y)``.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.size}x{self.size}"
            raise IndexError(msg)
        return self.current[y][x]

    def scratch_at(self, x: int, y: int) -> Cell:
        """Return the scratch-buffer cell at ``(x, y)``.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.size}x{self.size}"
            raise IndexError(msg)
        return self.scratch[y][x]

    # -- buffer management ----------------------------------------------

    def reset_scratch(self) -> None:
        """Make the scratch buffer a full copy of the current buffer."""
        for src_row, dst_row in zip(self.current, self.scratch):
            for src, dst in zip(src_row, dst_row):
                dst.kind = src.kind
                dst.mass = src.mass

    def swap(self) -> None:
        """Exchange the current and scratch buffers."""
        self.current, self.scratch = self.scratch, self.current

    # -- terrain --------------------------------------------------------

    def add_border(self) -> None:
        """Overwrite the outer ring of the current buffer with Dirt."""
        last = self.size - 1
        for i in range(self.size):
            for x, y in ((i, 0), (i, last), (0, i), (last, i)):
                self.current[y][x].set(MaterialKind.DIRT)

    def clear(self) -> None:
        """Reset every cell to vacuum, then restore the border."""
        for row in self.current:
            for cell in row:
                cell.set(MaterialKind.NONE)
        self.add_border()

    def randomize(self, rng: Generator, threshold: float) -> None:
        """Fill the grid with uncorrelated noise.

        Each cell independently becomes Dirt with probability
        ``threshold`` and vacuum otherwise.  Callers usually follow this
        with a few :meth:`smooth` passes to get cave-like terrain.

        Args:
            rng: Seeded random generator.
            threshold: Probability of a cell becoming Dirt.
        """
        if not 0.0 <= threshold <= 1.0:
            msg = f"threshold must be in [0, 1], got {threshold}"
            raise ValueError(msg)
        draws = rng.random((self.size, self.size))
        for y, row in enumerate(self.current):
            for x, cell in enumerate(row):
                if draws[y, x] < threshold:
                    cell.set(MaterialKind.DIRT)
                else:
                    cell.set(MaterialKind.NONE)
        self.add_border()

    def smooth(self) -> None:
        """Run one majority-rule relaxation pass over Dirt and vacuum.

        Cells holding any other material are left untouched.  For the
        rest, Dirt neighbours in the 8-neighbourhood are counted, with
        positions off the grid counting as Dirt: more than four turns the
        cell to Dirt, fewer than four to vacuum, exactly four keeps it.
        """
        self.reset_scratch()
        for y, row in enumerate(self.current):
            for x, cell in enumerate(row):
                if cell.kind not in (MaterialKind.DIRT, MaterialKind.NONE):
                    continue
                solid = 0
                for dy, dx in _NEIGHBOURHOOD:
                    nx, ny = x + dx, y + dy
                    if not self.in_bounds(nx, ny):
                        solid += 1
                    elif self.current[ny][nx].kind is MaterialKind.DIRT:
                        solid += 1
                if solid > 4:
                    self.scratch[y][x].set(MaterialKind.DIRT)
                elif solid < 4:
                    self.scratch[y][x].set(MaterialKind.NONE)
        self.swap()

    # -- queries --------------------------------------------------------

    def count(self, kind: MaterialKind) -> int:
        """Return how many current cells hold ``kind``."""
        return sum(1 for row in self.current for cell in row if cell.kind is kind)

    def total_mass(self, kind: MaterialKind = MaterialKind.WATER) -> float:
        """Return the summed mass of all current cells holding ``kind``."""
        return sum(
            cell.mass for row in self.current for cell in row if cell.kind is kind
        )
