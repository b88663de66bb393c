"""Entry point for ``python -m sandgrid``.

Loads the default YAML config, builds a simulation engine, and opens a
Pygame window to paint and watch materials.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from sandgrid.simulation.config import SimulationConfig
from sandgrid.simulation.engine import SimulationEngine
from sandgrid.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main() -> None:
    """Parse CLI args, create engine, launch renderer."""
    parser = argparse.ArgumentParser(
        prog="sandgrid",
        description="sandgrid - falling sand materials simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--block-size",
        type=int,
        default=None,
        help="Pixel size per grid cell (overrides config)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=None,
        help="Simulation ticks per second (overrides config)",
    )
    parser.add_argument(
        "--generate",
        action="store_true",
        help="Generate cave terrain before starting",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args()
    if args.block_size is not None and args.block_size <= 0:
        parser.error("--block-size must be positive")

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    if args.fps is not None:
        config.fps = args.fps
    if args.generate:
        config.generate_on_start = True
    engine = SimulationEngine(config=config)

    block_size = config.block_size
    if args.block_size is not None:
        block_size = args.block_size

    renderer = PygameRenderer(
        engine=engine,
        block_size=block_size,
        use_wave_shift=config.use_wave_shift,
    )
    renderer.run()


if __name__ == "__main__":
    main()
