"""SimulationEngine — the throttled tick loop and paint/query surface.

Owns the grid and the random generator and advances the world in the
canonical phase order:

1. Sand
2. Water
3. Fire
4. Smoke
5. Wood

Before each phase the scratch buffer is reset to a copy of the current
buffer, so a rule only writes the cells it changes; after the phase the
buffers are swapped.  No phase sees another phase's in-progress writes.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.random import Generator

from sandgrid.materials.fire import update_fire
from sandgrid.materials.sand import update_sand
from sandgrid.materials.smoke import update_smoke
from sandgrid.materials.water import update_water
from sandgrid.materials.wood import update_wood
from sandgrid.simulation.config import SimulationConfig
from sandgrid.world.cell import Cell, MaterialKind
from sandgrid.world.grid import Grid

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

WATER_SEED_MASS = 1.0
WATER_POUR_MASS = 2.0


def fps_to_interval_ms(fps: float) -> int:
    """Convert a tick rate into a whole-millisecond tick interval.

    Raises:
        ValueError: If ``fps`` is not positive.
    """
    if fps <= 0:
        msg = f"fps must be positive, got {fps}"
        raise ValueError(msg)
    nanos = int(1e9 / fps)
    return nanos // 1_000_000


@dataclass
class SimulationEngine:
    """Drives the grid forward and exposes painting and queries.

    Attributes:
        config: Loaded simulation configuration.
        clock: Monotonic time source in seconds.
        grid: The double-buffered cell grid.
        rng: Seeded random generator shared by sand and terrain.
        tick_count: Number of ticks executed so far.
    """

    config: SimulationConfig = field(default_factory=SimulationConfig)
    clock: Callable[[], float] = time.monotonic
    grid: Grid = field(init=False)
    rng: Generator = field(init=False)
    tick_count: int = field(init=False, default=0)
    _interval_ms: int = field(init=False, repr=False)
    _last_tick: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Build the grid and RNG from config."""
        self.rng = np.random.default_rng(self.config.seed)
        self.grid = Grid(size=self.config.grid_size)
        self._interval_ms = fps_to_interval_ms(self.config.fps)
        self._last_tick = self.clock()
        if self.config.generate_on_start:
            self.generate_terrain()

    @classmethod
    def with_size(cls, size: int, seed: int | None = 42) -> SimulationEngine:
        """Build an engine for a ``size x size`` grid with default settings."""
        return cls(config=SimulationConfig(seed=seed, grid_size=size))

    # -- timing ---------------------------------------------------------

    @property
    def interval_ms(self) -> int:
        """Minimum wall-clock gap between two ticks, in milliseconds."""
        return self._interval_ms

    def set_tick_rate(self, fps: int) -> None:
        """Change the target ticks per second.

        Raises:
            ValueError: If ``fps`` is not positive.
        """
        self._interval_ms = fps_to_interval_ms(fps)
        self.config.fps = fps
        logger.info("tick rate set to %d fps (%d ms)", fps, self._interval_ms)

    def tick(self, now: float | None = None) -> bool:
        """Run one tick if the configured interval has elapsed.

        Args:
            now: Current time in seconds; read from ``clock`` if omitted.

        Returns:
            True if a tick was executed.
        """
        if now is None:
            now = self.clock()
        elapsed_ms = int((now - self._last_tick) * 1000)
        if elapsed_ms < self._interval_ms:
            return False
        self._last_tick = now
        self.step()
        return True

    def step(self) -> None:
        """Advance the simulation by one tick, ignoring the throttle."""
        grid = self.grid
        phases: tuple[Callable[[], None], ...] = (
            lambda: update_sand(grid, self.rng),
            lambda: update_water(grid),
            lambda: update_fire(grid),
            lambda: update_smoke(grid),
            lambda: update_wood(grid),
        )
        for phase in phases:
            grid.reset_scratch()
            phase()
            grid.swap()
        self.tick_count += 1
        logger.debug("tick %d done", self.tick_count)

    def run(self, ticks: int) -> None:
        """Run a fixed number of unthrottled ticks.

        Args:
            ticks: Number of ticks to advance.
        """
        for _ in range(ticks):
            self.step()

    # -- terrain --------------------------------------------------------

    def add_border(self) -> None:
        self.grid.add_border()

    def clear(self) -> None:
        """Empty the grid, keeping the border."""
        self.grid.clear()
        logger.info("grid cleared")

    def randomize(self, threshold: float | None = None) -> None:
        """Fill the grid with random Dirt noise.

        Args:
            threshold: Dirt probability per cell; defaults to the config.
        """
        if threshold is None:
            threshold = self.config.threshold
        self.grid.randomize(self.rng, threshold)
        logger.info("grid randomised with threshold %.2f", threshold)

    def smooth(self) -> None:
        """Apply one majority-rule smoothing pass."""
        self.grid.smooth()
        logger.info("grid smoothed")

    def generate_terrain(self) -> None:
        """Randomise, then smooth ``config.smooth_passes`` times."""
        self.randomize()
        for _ in range(self.config.smooth_passes):
            self.grid.smooth()
        logger.info(
            "terrain generated with %d smoothing passes",
            self.config.smooth_passes,
        )

    # -- paint / query --------------------------------------------------

    def dimensions(self) -> int:
        """Return the grid side length."""
        return self.grid.size

    def place(self, x: int, y: int, kind: MaterialKind) -> bool:
        """Paint ``kind`` into the interior cell ``(x, y)``.

        Water seeds a droplet on vacuum and adds more mass to existing
        water; it does not cover other materials.  Any other kind
        overwrites the cell.

        Args:
            x: Column index.
            y: Row index.
            kind: Material to paint.

        Returns:
            True if the cell changed, False for border or out-of-range
            coordinates and for water painted onto a non-water solid.

        Raises:
            TypeError: If ``kind`` is not a MaterialKind.
        """
        if not isinstance(kind, MaterialKind):
            msg = f"kind must be a MaterialKind, got {type(kind).__name__}"
            raise TypeError(msg)
        if not self.grid.in_interior(x, y):
            return False

        cell = self.grid.get(x, y)
        if kind is not MaterialKind.WATER:
            cell.set(kind)
        elif cell.kind is MaterialKind.NONE:
            cell.set(MaterialKind.WATER, WATER_SEED_MASS)
        elif cell.kind is MaterialKind.WATER:
            cell.mass += WATER_POUR_MASS
        else:
            return False
        return True

    def cell_at(self, x: int, y: int) -> Cell:
        """Return a copy of the current cell at ``(x, y)``.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        return self.grid.get(x, y).copy()

    def count(self, kind: MaterialKind) -> int:
        return self.grid.count(kind)

    def total_water_mass(self) -> float:
        return self.grid.total_mass(MaterialKind.WATER)

    def snapshot(self) -> list[list[MaterialKind]]:
        """Return the material kinds of the current buffer, row by row."""
        return [[cell.kind for cell in row] for row in self.grid.current]

    def rows(self) -> list[list[tuple[MaterialKind, float]]]:
        """Return ``(kind, mass)`` for every current cell, row by row."""
        return [[(cell.kind, cell.mass) for cell in row] for row in self.grid.current]
