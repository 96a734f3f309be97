"""Text terminal backend built on blessed."""

from __future__ import annotations

import logging
import time
from typing import Optional

from blessed import Terminal
from blessed.keyboard import Keystroke

from .config import GameConfig, RenderingConfig
from .console import BASE_LAYER, SPRITE_LAYER, Color, Key
from .driver import FrameDriver
from .errors import BackendError
from .input import InputProvider
from .state import GameState

logger = logging.getLogger(__name__)

TERMINAL_BINDINGS: dict[str, Key] = {
    " ": Key.FLAP,
    "p": Key.PLAY,
    "q": Key.QUIT,
}


def key_from_keystroke(keystroke: Keystroke) -> Optional[Key]:
    """Translate a blessed keystroke into a game key."""
    if not keystroke:
        return None
    if keystroke.is_sequence:
        return Key.QUIT if keystroke.name == "KEY_ESCAPE" else None
    return TERMINAL_BINDINGS.get(str(keystroke).lower())


class TerminalInput(InputProvider):
    """Drains pending keystrokes and keeps the latest mapped one."""

    def __init__(self, term: Terminal) -> None:
        self.term = term
        self.closed = False

    def poll(self) -> Optional[Key]:
        latest: Optional[Key] = None
        keystroke = self.term.inkey(timeout=0)
        while keystroke:
            key = key_from_keystroke(keystroke)
            if key is not None:
                latest = key
            keystroke = self.term.inkey(timeout=0)
        return latest


class TerminalConsole:
    """Tile buffer rendered as coloured text, one full frame per ``present``."""

    def __init__(self, term: Terminal, columns: int, rows: int, render: RenderingConfig) -> None:
        self.term = term
        self.columns = columns
        self.rows = rows
        self.cfg = render
        self.background: Color = render.black
        self.tiles: dict[tuple[int, int], tuple[str, Color, Color]] = {}
        self.sprites: list[tuple[int, int, str, Color]] = []
        self.active = BASE_LAYER

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
            self.tiles[(x, y)] = (glyph, fg, bg)

    def set_sprite(self, x: float, y: float, fg: Color, bg: Color, glyph: str) -> None:
        self.sprites.append((int(x), int(y), glyph, fg))

    def print(self, x: int, y: int, text: str) -> None:
        for offset, char in enumerate(text):
            self.set(x + offset, y, self.cfg.text_color, self.cfg.black, char)

    def print_color_centered(self, y: int, fg: Color, bg: Color, text: str) -> None:
        start = (self.columns - len(text)) // 2
        for offset, char in enumerate(text):
            self.set(start + offset, y, fg, bg, char)

    def compose(self) -> list[str]:
        """Return the escape-coded text of every row."""
        term = self.term
        cells = dict(self.tiles)
        for x, y, glyph, fg in self.sprites:
            if 0 <= x < self.columns and 0 <= y < self.rows:
                cells[(x, y)] = (glyph, fg, self.background)
        blank_bg = term.on_color_rgb(*self.background)
        lines = []
        for y in range(self.rows):
            parts = []
            for x in range(self.columns):
                cell = cells.get((x, y))
                if cell is None:
                    parts.append(blank_bg + " ")
                    continue
                glyph, fg, bg = cell
                parts.append(term.color_rgb(*fg) + term.on_color_rgb(*bg) + glyph)
            lines.append("".join(parts) + term.normal)
        return lines

    def present(self) -> None:
        frame = "".join(self.term.move_xy(0, y) + line for y, line in enumerate(self.compose()))
        print(frame, end="", flush=True)


class TerminalApp:
    """Terminal set-up and fixed-rate frame loop for the blessed backend."""

    def __init__(self, config: Optional[GameConfig] = None, state: Optional[GameState] = None) -> None:
        self.config = config or GameConfig()
        self.term = Terminal()
        playfield = self.config.playfield
        if not self.term.is_a_tty:
            raise BackendError("The terminal backend needs an interactive terminal")
        if self.term.width < playfield.width or self.term.height < playfield.height:
            raise BackendError(
                f"Terminal too small: {self.term.width}x{self.term.height}. "
                f"Minimum: {playfield.width}x{playfield.height}"
            )
        self.console = TerminalConsole(self.term, playfield.width, playfield.height, self.config.render)
        self.state = state or GameState(self.config)
        self.driver = FrameDriver(self.state, self.console, TerminalInput(self.term))

    def run(self) -> None:
        frame_seconds = 1.0 / max(1, self.config.target_fps)
        term = self.term
        with term.fullscreen(), term.cbreak(), term.hidden_cursor():
            logger.info("Terminal backend started at %dx%d", term.width, term.height)
            print(term.home + term.clear, end="", flush=True)
            last_time = time.perf_counter()
            while self.driver.running:
                now = time.perf_counter()
                elapsed_ms = (now - last_time) * 1000.0
                last_time = now
                if self.driver.step(elapsed_ms):
                    self.console.present()
                remaining = frame_seconds - (time.perf_counter() - now)
                if remaining > 0.001:
                    time.sleep(remaining)
            print(term.normal, end="", flush=True)
        logger.info("Terminal backend stopped")
