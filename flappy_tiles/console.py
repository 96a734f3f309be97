"""Tile console interface shared by the game core and the backends."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Protocol

Color = tuple[int, int, int]

BASE_LAYER = 0
SPRITE_LAYER = 1


class Key(enum.Enum):
    """Discrete key events the game reacts to."""

    FLAP = "flap"
    PLAY = "play"
    QUIT = "quit"


class Console(Protocol):
    """Output sink for a grid of character tiles.

    Layer 0 holds the play field and text; layer 1 holds the player sprite,
    which may sit at a fractional row.
    """

    def set_active_console(self, index: int) -> None:
        """Direct subsequent draw calls to the given layer."""

    def cls(self) -> None:
        """Clear the active layer."""

    def cls_bg(self, color: Color) -> None:
        """Clear the active layer and fill it with a background colour."""

    def set(self, x: int, y: int, fg: Color, bg: Color, glyph: str) -> None:
        """Draw a single glyph at a tile position."""

    def set_sprite(self, x: float, y: float, fg: Color, bg: Color, glyph: str) -> None:
        """Draw a glyph at a possibly fractional tile position."""

    def print(self, x: int, y: int, text: str) -> None:
        """Draw text starting at a tile position in the default colour."""

    def print_color_centered(self, y: int, fg: Color, bg: Color, text: str) -> None:
        """Draw text horizontally centred on a row."""


@dataclass
class FrameContext:
    """Everything a single tick sees from, and hands back to, the frame driver."""

    console: Console
    frame_time_ms: float = 0.0
    key: Optional[Key] = None
    quitting: bool = False
