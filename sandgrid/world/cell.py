"""Cell — a single tile in the simulation grid.

Each cell holds a material kind and a continuous mass.  Mass is only
meaningful for water and the two smoke kinds; every other kind carries
``0.0`` by convention.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class MaterialKind(Enum):
    """Material occupying a cell, in declaration order."""

    NONE = auto()
    WATER = auto()
    DIRT = auto()
    SAND = auto()
    WOOD = auto()
    FIRE_NORMAL = auto()
    FIRE_BURN = auto()
    SMOKE = auto()
    DARK_SMOKE = auto()

    @property
    def is_fluid_target(self) -> bool:
        """Return True for cells that sand and water may move into."""
        return self in (MaterialKind.NONE, MaterialKind.WATER)

    @property
    def is_fire(self) -> bool:
        return self in (MaterialKind.FIRE_NORMAL, MaterialKind.FIRE_BURN)

    @property
    def is_smoke(self) -> bool:
        return self in (MaterialKind.SMOKE, MaterialKind.DARK_SMOKE)


@dataclass
class Cell:
    """A single tile in the grid.

    Attributes:
        x: Column position.
        y: Row position.
        kind: Material currently in the cell.
        mass: Fluid mass (water, smoke, dark smoke only).
    """

    x: int
    y: int
    kind: MaterialKind = MaterialKind.NONE
    mass: float = 0.0

    def copy(self) -> Cell:
        """Return an independent copy of this cell."""
        return Cell(x=self.x, y=self.y, kind=self.kind, mass=self.mass)

    def set(self, kind: MaterialKind, mass: float = 0.0) -> None:
        """Overwrite kind and mass in place."""
        self.kind = kind
        self.mass = mass
