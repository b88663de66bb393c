"""Config — load simulation parameters from YAML files.

Grid size, tick rate, terrain generation and display settings live in
YAML and are parsed into a typed dataclass here.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay (None for OS entropy).
        grid_size: Side length of the square grid, border included.
        fps: Target ticks per second.
        threshold: Probability of Dirt per cell when randomising terrain.
        smooth_passes: Smoothing passes applied by terrain generation.
        generate_on_start: Generate cave terrain when the engine is built.
        block_size: Pixel size of one cell in the viewer.
        use_wave_shift: Draw partially filled water cells lowered.
    """

    seed: int | None = 42
    grid_size: int = 100
    fps: int = 60
    threshold: float = 0.5
    smooth_passes: int = 5
    generate_on_start: bool = False
    block_size: int = 5
    use_wave_shift: bool = False

    def __post_init__(self) -> None:
        """Reject values the engine cannot run with."""
        if self.grid_size < 3:
            msg = f"grid_size must be at least 3, got {self.grid_size}"
            raise ValueError(msg)
        if self.fps <= 0:
            msg = f"fps must be positive, got {self.fps}"
            raise ValueError(msg)
        if not 0.0 <= self.threshold <= 1.0:
            msg = f"threshold must be in [0, 1], got {self.threshold}"
            raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If a value is out of range.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            grid_size=data.get("grid_size", cls.grid_size),
            fps=data.get("fps", cls.fps),
            threshold=data.get("threshold", cls.threshold),
            smooth_passes=data.get("smooth_passes", cls.smooth_passes),
            generate_on_start=data.get(
                "generate_on_start",
                cls.generate_on_start,
            ),
            block_size=data.get("block_size", cls.block_size),
            use_wave_shift=data.get("use_wave_shift", cls.use_wave_shift),
        )
