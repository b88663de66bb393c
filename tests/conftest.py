"""Shared fixtures for the sandgrid test suite."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest
from numpy.random import Generator

from sandgrid.simulation.config import SimulationConfig
from sandgrid.simulation.engine import SimulationEngine
from sandgrid.world.grid import Grid

PhaseRunner = Callable[[Grid, Callable[[Grid], None]], None]


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_grid() -> Grid:
    """A 7x7 grid (5x5 interior) for fast tests."""
    return Grid(size=7)


@pytest.fixture
def small_engine() -> SimulationEngine:
    """A seeded engine over a 7x7 grid."""
    return SimulationEngine(config=SimulationConfig(seed=12345, grid_size=7))


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def run_phase() -> PhaseRunner:
    """Run a single material rule the way the engine does."""

    def _run(grid: Grid, rule: Callable[[Grid], None]) -> None:
        grid.reset_scratch()
        rule(grid)
        grid.swap()

    return _run
