"""Configuration data structures for the flappy tile game."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class FieldConfig:
    """Size of the play field in tiles."""

    width: int = 40
    height: int = 25


@dataclass(frozen=True)
class PhysicsConfig:
    """Tunable physics parameters for the player."""

    frame_duration_ms: float = 60.0  # physics step cadence
    gravity: float = 0.4  # velocity added per step
    max_gravity: float = 2.0  # gravity stops accumulating above this
    jump_force: float = 2.5  # flap sets velocity to -jump_force
    horizontal_velocity: int = 1  # tiles scrolled per step


@dataclass(frozen=True)
class ObstacleConfig:
    """Parameters governing obstacle generation."""

    gap_margin: int = 10  # gap centre stays this far from either edge
    max_size: int = 20  # gap height at score 0
    min_size: int = 2


@dataclass(frozen=True)
class RenderingConfig:
    """Visual parameters shared by the console backends."""

    title: str = "Flappy Tiles"
    tile_size: int = 16  # pixels per tile in the pygame window
    font_size: int = 16
    font_name: Optional[str] = None  # None picks pygame's default font
    player_frames: tuple[str, ...] = ("@", "o", "O", "0", "O", "o")
    pipe_glyph: str = "|"
    floor_glyph: str = "#"
    background_color: tuple[int, int, int] = (0, 0, 128)  # navy
    player_color: tuple[int, int, int] = (255, 255, 0)
    pipe_color: tuple[int, int, int] = (128, 128, 128)
    floor_color: tuple[int, int, int] = (128, 128, 128)
    text_color: tuple[int, int, int] = (255, 255, 255)
    title_color: tuple[int, int, int] = (0, 255, 255)
    option_color: tuple[int, int, int] = (0, 255, 0)
    death_color: tuple[int, int, int] = (255, 0, 0)
    black: tuple[int, int, int] = (0, 0, 0)


@dataclass(frozen=True)
class GameConfig:
    """High-level configuration of the game."""

    playfield: FieldConfig = field(default_factory=FieldConfig)
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    obstacles: ObstacleConfig = field(default_factory=ObstacleConfig)
    render: RenderingConfig = field(default_factory=RenderingConfig)
    target_fps: int = 60
    player_start_x: int = 5
    keep_score: bool = False  # carry the score across death-restarts

    @property
    def window_size(self) -> tuple[int, int]:
        tile = self.render.tile_size
        return (self.playfield.width * tile, self.playfield.height * tile)
