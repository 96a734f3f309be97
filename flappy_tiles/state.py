"""Game mode machine driving the per-frame simulation."""

from __future__ import annotations

import enum
import logging
import random
from typing import Callable, Optional

from .config import GameConfig
from .console import FrameContext, Key
from .entities import Obstacle, Player

logger = logging.getLogger(__name__)


class GameMode(enum.Enum):
    MENU = "menu"
    PLAYING = "playing"
    END = "end"


class GameState:
    """Owns the player, the obstacle and the score; advanced once per frame."""

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.mode = GameMode.MENU
        self.frame_time = 0.0
        self.score = 0
        self.player = self._new_player()
        self.obstacle = self._new_obstacle(self.config.playfield.width)
        self._handlers: dict[GameMode, Callable[[FrameContext], None]] = {
            GameMode.MENU: self.main_menu,
            GameMode.PLAYING: self.play,
            GameMode.END: self.dead,
        }

    def tick(self, ctx: FrameContext) -> None:
        """Run the handler for the current mode."""
        self._handlers[self.mode](ctx)

    def _new_player(self) -> Player:
        return Player(
            self.config.player_start_x,
            float(self.config.playfield.height // 2),
            self.config.physics,
            frame_count=len(self.config.render.player_frames),
        )

    def _new_obstacle(self, x: int) -> Obstacle:
        return Obstacle.spawn(x, self.score, self.config.obstacles, self.config.playfield, self.rng)

    def play(self, ctx: FrameContext) -> None:
        render = self.config.render
        playfield = self.config.playfield
        console = ctx.console
        start_x = self.player.x

        console.cls_bg(render.background_color)
        self.frame_time += ctx.frame_time_ms
        if self.frame_time > self.config.physics.frame_duration_ms:
            self.frame_time = 0.0
            self.player.gravity_and_move()
        if ctx.key is Key.FLAP:
            self.player.flap()

        self.player.render(console, render)
        self.obstacle.render(console, self.player, playfield, render)
        console.print(0, 0, "Press SPACE to flap")
        console.print(0, 1, f"Score: {self.score}")
        for floor_x in range(playfield.width):
            console.set(floor_x, playfield.height - 1, render.floor_color, render.background_color, render.floor_glyph)

        passed = self.obstacle
        if self.player.x > self.obstacle.x:
            self.score += 1
            self.obstacle = self._new_obstacle(playfield.width + self.player.x)

        # The passed obstacle is still checked so a multi-column step cannot skip its wall.
        crashed = passed.hit_obstacle(self.player, start_x)
        if passed is not self.obstacle:
            crashed = crashed or self.obstacle.hit_obstacle(self.player, start_x)
        if int(self.player.y) > playfield.height or crashed:
            self.mode = GameMode.END
            logger.info("Player died at x=%d with score %d", self.player.x, self.score)

    def main_menu(self, ctx: FrameContext) -> None:
        render = self.config.render
        console = ctx.console
        console.cls()
        console.print_color_centered(5, render.title_color, render.black, f"Welcome to {render.title}")
        console.print_color_centered(8, render.option_color, render.black, "(P) Play Game")
        console.print_color_centered(9, render.option_color, render.black, "(Q) Quit Game")
        if ctx.key is Key.PLAY:
            self.score = 0
            self.restart()
        elif ctx.key is Key.QUIT:
            ctx.quitting = True

    def dead(self, ctx: FrameContext) -> None:
        render = self.config.render
        console = ctx.console
        console.cls()
        console.print_color_centered(5, render.death_color, render.black, "You are dead!")
        console.print_color_centered(6, render.option_color, render.black, f"Final score: {self.score}")
        console.print_color_centered(8, render.option_color, render.black, "(P) Play Again")
        console.print_color_centered(9, render.option_color, render.black, "(Q) Quit Game")
        if ctx.key is Key.PLAY:
            self.restart()
        elif ctx.key is Key.QUIT:
            ctx.quitting = True

    def restart(self) -> None:
        """Start a new round from the initial player position."""
        if not self.config.keep_score:
            self.score = 0
        self.player = self._new_player()
        self.obstacle = self._new_obstacle(self.config.playfield.width)
        self.frame_time = 0.0
        self.mode = GameMode.PLAYING
        logger.info("Round started (score %d)", self.score)
