"""Pygame 2D viewer and painter for the sandgrid simulation.

Draws every cell as a filled square, lets the mouse paint the selected
material, and drives ``SimulationEngine.tick`` once per frame so the
engine's own throttle decides when the world advances.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import pygame

from sandgrid.materials.flow import MAX_MASS
from sandgrid.world.cell import MaterialKind

if TYPE_CHECKING:
    from sandgrid.simulation.engine import SimulationEngine

MIN_DRAW = 0.1

_PANEL_BG = (40, 40, 40)
_TEXT = (220, 220, 220)

KIND_COLOURS: dict[MaterialKind, tuple[int, int, int]] = {
    MaterialKind.NONE: (255, 255, 255),
    MaterialKind.DIRT: (0, 0, 0),
    MaterialKind.WATER: (0, 0, 255),
    MaterialKind.SAND: (255, 215, 0),
    MaterialKind.WOOD: (165, 42, 42),
    MaterialKind.FIRE_NORMAL: (255, 128, 128),
    MaterialKind.FIRE_BURN: (139, 0, 0),
    MaterialKind.SMOKE: (160, 160, 160),
    MaterialKind.DARK_SMOKE: (96, 96, 96),
}


def wave_shift(mass: float) -> float:
    """Return the fraction of a cell a water surface is lowered by."""
    return min(max(1.0 - mass / MAX_MASS, 0.0), 1.0)


class PygameRenderer:
    """Renders a SimulationEngine into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        block_size: Pixel size of each grid cell.
        selected: Material painted by the left mouse button.
        screen: The Pygame display surface.
    """

    _PAINT_KEYS: ClassVar[dict[int, MaterialKind]] = {
        pygame.K_1: MaterialKind.WATER,
        pygame.K_2: MaterialKind.SAND,
        pygame.K_3: MaterialKind.DIRT,
        pygame.K_4: MaterialKind.WOOD,
        pygame.K_5: MaterialKind.FIRE_NORMAL,
        pygame.K_6: MaterialKind.SMOKE,
        pygame.K_0: MaterialKind.NONE,
    }

    def __init__(
        self,
        engine: SimulationEngine,
        block_size: int = 5,
        *,
        use_wave_shift: bool = False,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The simulation engine to render.
            block_size: Pixel width/height per grid cell.
            use_wave_shift: Lower partially filled water surfaces.
        """
        self.engine = engine
        self.block_size = block_size
        self.use_wave_shift = use_wave_shift
        self.selected = MaterialKind.WATER

        side = engine.dimensions() * block_size
        self._panel_width = 200
        pygame.init()
        self.screen = pygame.display.set_mode((side + self._panel_width, side))
        pygame.display.set_caption("sandgrid")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = False

    def run(self, fps: int = 60) -> None:
        """Main loop: handle events, tick the engine, render.

        Args:
            fps: Display refresh rate.
        """
        while self.running:
            self.clock.tick(fps)
            self._handle_events()
            if pygame.mouse.get_pressed()[0]:
                self._paint(pygame.mouse.get_pos())
            if not self.paused:
                self.engine.tick()
            self._draw()

        pygame.quit()

    def _paint(self, pos: tuple[int, int]) -> None:
        x, y = pos[0] // self.block_size, pos[1] // self.block_size
        self.engine.place(x, y, self.selected)

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key in self._PAINT_KEYS:
                    self.selected = self._PAINT_KEYS[event.key]
                elif event.key == pygame.K_c:
                    self.engine.clear()
                elif event.key == pygame.K_r:
                    self.engine.randomize()
                elif event.key == pygame.K_s:
                    self.engine.smooth()
                elif event.key == pygame.K_g:
                    self.engine.generate_terrain()
                elif event.key == pygame.K_w:
                    self.use_wave_shift = not self.use_wave_shift
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self.engine.set_tick_rate(min(240, self.engine.config.fps + 10))
                elif event.key == pygame.K_MINUS:
                    self.engine.set_tick_rate(max(1, self.engine.config.fps - 10))

    def _draw(self) -> None:
        """Render one frame."""
        self._draw_cells()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_cells(self) -> None:
        bs = self.block_size
        rows = self.engine.rows()
        for y, row in enumerate(rows):
            for x, (kind, mass) in enumerate(row):
                pygame.draw.rect(
                    self.screen,
                    KIND_COLOURS[kind],
                    (x * bs, y * bs, bs, bs),
                )
                if kind is not MaterialKind.WATER or mass <= MIN_DRAW:
                    continue
                # Water under water is always drawn full height.
                if not self.use_wave_shift or rows[y - 1][x][0] is MaterialKind.WATER:
                    continue
                drop = int(bs * wave_shift(mass))
                pygame.draw.rect(
                    self.screen,
                    KIND_COLOURS[MaterialKind.NONE],
                    (x * bs, y * bs, bs, drop),
                )

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = self.engine.dimensions() * self.block_size
        pygame.draw.rect(
            self.screen,
            _PANEL_BG,
            (panel_x, 0, self._panel_width, self.screen.get_height()),
        )
        lines = [
            f"Tick: {self.engine.tick_count}",
            f"Rate: {self.engine.config.fps} t/s",
            f"{'PAUSED' if self.paused else 'RUNNING'}",
            f"Paint: {self.selected.name.lower()}",
            f"Water: {self.engine.total_water_mass():.1f}",
            "",
            "--- Controls ---",
            "1-6/0: material",
            "C: clear  R: random",
            "S: smooth  G: generate",
            "W: wave shift",
            "SPACE: pause",
            "+/-: rate",
            "ESC: quit",
        ]
        y = 10
        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x + 10, y))
            y += 18
