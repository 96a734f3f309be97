"""Backend-independent frame driver."""

from __future__ import annotations

import logging

from .console import Console, FrameContext
from .input import InputProvider
from .state import GameState

logger = logging.getLogger(__name__)


class FrameDriver:
    """Feeds one key and the elapsed time into the game state per frame."""

    def __init__(self, state: GameState, console: Console, input_provider: InputProvider) -> None:
        self.state = state
        self.console = console
        self.input_provider = input_provider
        self.running = True
        self.frames = 0

    def step(self, frame_time_ms: float) -> bool:
        """Advance one frame. Returns False once a quit was requested."""
        if not self.running:
            return False
        ctx = FrameContext(console=self.console, frame_time_ms=frame_time_ms, key=self.input_provider.poll())
        previous_mode = self.state.mode
        self.state.tick(ctx)
        self.frames += 1
        if self.state.mode is not previous_mode:
            logger.debug("Mode %s -> %s", previous_mode.value, self.state.mode.value)
        if ctx.quitting or self.input_provider.closed:
            logger.info("Quit requested after %d frames", self.frames)
            self.running = False
        return self.running

    def run_for(self, frames: int, frame_time_ms: float) -> int:
        """Step up to ``frames`` frames at a constant frame time; returns frames ticked."""
        ticked = 0
        while ticked < frames and self.running:
            self.step(frame_time_ms)
            ticked += 1
        return ticked
