"""Shared fixtures for the flappy tile tests."""

from __future__ import annotations

import random

import pytest

from flappy_tiles import FrameContext, GameConfig, GameState, Key


class RecordingConsole:
    """Console fake that records every draw call."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.active = 0

    def set_active_console(self, index: int) -> None:
        self.active = index
        self.calls.append(("layer", index))

    def cls(self) -> None:
        self.calls.append(("cls", self.active))

    def cls_bg(self, color) -> None:
        self.calls.append(("cls_bg", color))

    def set(self, x, y, fg, bg, glyph) -> None:
        self.calls.append(("set", x, y, glyph))

    def set_sprite(self, x, y, fg, bg, glyph) -> None:
        self.calls.append(("sprite", x, y, glyph))

    def print(self, x, y, text) -> None:
        self.calls.append(("print", x, y, text))

    def print_color_centered(self, y, fg, bg, text) -> None:
        self.calls.append(("centered", y, text))

    def texts(self) -> list[str]:
        return [call[-1] for call in self.calls if call[0] in ("print", "centered")]

    def glyphs_on_row(self, row: int) -> list[str]:
        return [call[3] for call in self.calls if call[0] == "set" and call[2] == row]


@pytest.fixture
def console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def state(config: GameConfig) -> GameState:
    return GameState(config, rng=random.Random(1234))


@pytest.fixture
def tick(state: GameState, console: RecordingConsole):
    """Run one tick of the fixture state and return the frame context."""

    def _tick(key: Key | None = None, frame_time_ms: float = 0.0) -> FrameContext:
        ctx = FrameContext(console=console, frame_time_ms=frame_time_ms, key=key)
        state.tick(ctx)
        return ctx

    return _tick
