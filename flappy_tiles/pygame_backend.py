"""pygame window that draws the game as a grid of character tiles."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import pygame

from .config import GameConfig, RenderingConfig
from .console import BASE_LAYER, SPRITE_LAYER, Color
from .driver import FrameDriver
from .errors import BackendError
from .input import InputProvider, KeyboardInput
from .state import GameState

logger = logging.getLogger(__name__)


@dataclass
class Tile:
    glyph: str
    fg: Color
    bg: Optional[Color]


@dataclass
class Sprite:
    x: float
    y: float
    glyph: str
    fg: Color


class TileConsole:
    """Two-layer tile buffer blitted onto a pygame surface on ``present``."""

    def __init__(self, surface: pygame.Surface, columns: int, rows: int, render: RenderingConfig) -> None:
        self.surface = surface
        self.columns = columns
        self.rows = rows
        self.cfg = render
        self.tile_size = render.tile_size
        self.font = self._load_font(render)
        self.sprite_font = self._load_font(render, scale=2)
        self.background: Color = render.black
        self.tiles: dict[tuple[int, int], Tile] = {}
        self.sprites: list[Sprite] = []
        self.active = BASE_LAYER
        self._glyph_cache: dict[tuple[str, Color, int], pygame.Surface] = {}

    @staticmethod
    def _load_font(render: RenderingConfig, scale: int = 1) -> pygame.font.Font:
        size = render.font_size * scale
        if render.font_name:
            if pygame.font.match_font(render.font_name) is not None:
                return pygame.font.SysFont(render.font_name, size)
            logger.warning("Font %r unavailable, using the default font", render.font_name)
        return pygame.font.Font(None, size)

    def set_active_console(self, index: int) -> None:
        self.active = index

    def cls(self) -> None:
        if self.active == SPRITE_LAYER:
            self.sprites.clear()
            return
        self.tiles.clear()
        self.background = self.cfg.black

    def cls_bg(self, color: Color) -> None:
        self.cls()
        if self.active == BASE_LAYER:
            self.background = color

    def set(self, x: int, y: int, fg: Color, bg: Color, glyph: str) -> None:
        if 0 <= x < self.columns and 0 <= y < self.rows:
            self.tiles[(x, y)] = Tile(glyph, fg, bg)

    def set_sprite(self, x: float, y: float, fg: Color, bg: Color, glyph: str) -> None:
        self.sprites.append(Sprite(x, y, glyph, fg))

    def print(self, x: int, y: int, text: str) -> None:
        for offset, char in enumerate(text):
            self.set(x + offset, y, self.cfg.text_color, self.cfg.black, char)

    def print_color_centered(self, y: int, fg: Color, bg: Color, text: str) -> None:
        start = (self.columns - len(text)) // 2
        for offset, char in enumerate(text):
            self.set(start + offset, y, fg, bg, char)

    def _glyph(self, glyph: str, fg: Color, font: pygame.font.Font, scale: int) -> pygame.Surface:
        key = (glyph, fg, scale)
        cached = self._glyph_cache.get(key)
        if cached is None:
            cached = font.render(glyph, True, fg)
            self._glyph_cache[key] = cached
        return cached

    def present(self) -> None:
        """Draw both layers onto the surface and flip the display."""
        size = self.tile_size
        self.surface.fill(self.background)
        for (x, y), tile in self.tiles.items():
            rect = pygame.Rect(x * size, y * size, size, size)
            if tile.bg is not None:
                pygame.draw.rect(self.surface, tile.bg, rect)
            text = self._glyph(tile.glyph, tile.fg, self.font, 1)
            self.surface.blit(text, text.get_rect(center=rect.center))
        for sprite in self.sprites:
            text = self._glyph(sprite.glyph, sprite.fg, self.sprite_font, 2)
            self.surface.blit(text, (int(sprite.x * size), int(sprite.y * size)))
        pygame.display.flip()


class PygameApp:
    """Window set-up and frame loop for the pygame backend."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        state: Optional[GameState] = None,
        input_provider: Optional[InputProvider] = None,
    ) -> None:
        self.config = config or GameConfig()
        try:
            pygame.init()
            pygame.font.init()
            self.screen = pygame.display.set_mode(self.config.window_size)
            pygame.display.set_caption(self.config.render.title)
            self.console = TileConsole(
                self.screen,
                self.config.playfield.width,
                self.config.playfield.height,
                self.config.render,
            )
        except (pygame.error, OSError) as exc:
            pygame.quit()
            raise BackendError(f"Could not open the game window: {exc}") from exc

        self.clock = pygame.time.Clock()
        self.state = state or GameState(self.config)
        self.driver = FrameDriver(self.state, self.console, input_provider or KeyboardInput())
        logger.info("pygame window opened at %dx%d", *self.config.window_size)

    def run(self) -> None:
        try:
            while self.driver.running:
                frame_time_ms = self.clock.tick(self.config.target_fps)
                if self.driver.step(float(frame_time_ms)):
                    self.console.present()
        finally:
            pygame.quit()
            logger.info("pygame window closed")
