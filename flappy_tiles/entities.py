"""Simulation entities: the player sprite and the gapped obstacle."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from .config import FieldConfig, ObstacleConfig, PhysicsConfig, RenderingConfig
from .console import BASE_LAYER, SPRITE_LAYER, Console

logger = logging.getLogger(__name__)


class Player:
    """Handles the player's position and velocity."""

    def __init__(self, x: int, y: float, physics: Optional[PhysicsConfig] = None, frame_count: int = 6) -> None:
        self.cfg = physics or PhysicsConfig()
        self.x = x
        self.y = y
        self.velocity = 0.0
        self.frame = 0
        self.frame_count = max(1, frame_count)

    def gravity_and_move(self) -> None:
        """Advance the player by one physics step."""
        # Only accelerate while at or below the cap, so the last step may overshoot it.
        if self.velocity <= self.cfg.max_gravity:
            self.velocity += self.cfg.gravity
        self.y += self.velocity
        self.x += self.cfg.horizontal_velocity
        self.frame = (self.frame + 1) % self.frame_count
        if self.y < 0.0:
            self.y = 0.0

    def flap(self) -> None:
        self.velocity = -self.cfg.jump_force

    def render(self, console: Console, render: RenderingConfig) -> None:
        glyph = render.player_frames[self.frame % len(render.player_frames)]
        console.set_active_console(SPRITE_LAYER)
        console.cls()
        console.set_sprite(0.0, self.y, render.player_color, render.background_color, glyph)
        console.set_active_console(BASE_LAYER)


@dataclass
class Obstacle:
    """A wall with a single passable gap."""

    x: int
    gap_y: int
    size: int

    @classmethod
    def spawn(
        cls,
        x: int,
        score: int,
        config: Optional[ObstacleConfig] = None,
        playfield: Optional[FieldConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> "Obstacle":
        """Create an obstacle at ``x`` whose gap narrows as ``score`` grows."""
        cfg = config or ObstacleConfig()
        bounds = playfield or FieldConfig()
        source = rng or random
        gap_y = source.randrange(cfg.gap_margin, bounds.height - cfg.gap_margin)
        size = max(cfg.min_size, cfg.max_size - score)
        logger.debug("Spawned obstacle at x=%d gap_y=%d size=%d", x, gap_y, size)
        return cls(x=x, gap_y=gap_y, size=size)

    @property
    def half_size(self) -> int:
        return self.size // 2

    def hit_obstacle(self, player: Player, from_x: Optional[int] = None) -> bool:
        """Return True when the player strikes the wall around the gap.

        Without ``from_x`` only the column the player stands on counts. With
        ``from_x`` (the player's column before this tick's step) a column
        jumped over during the step counts too.
        """
        if from_x is None:
            in_column = self.x == player.x
        else:
            in_column = from_x < self.x <= player.x or self.x == player.x
        player_row = int(player.y)
        hit_top = player_row < self.gap_y - self.half_size
        hit_bottom = player_row > self.gap_y + self.half_size
        return in_column and (hit_top or hit_bottom)

    def render(self, console: Console, player: Player, playfield: FieldConfig, render: RenderingConfig) -> None:
        screen_x = self.x - player.x
        for y in range(0, self.gap_y - self.half_size):
            console.set(screen_x, y, render.pipe_color, render.black, render.pipe_glyph)
        for y in range(self.gap_y + self.half_size, playfield.height):
            console.set(screen_x, y, render.pipe_color, render.black, render.pipe_glyph)
