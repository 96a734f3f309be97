"""Flappy tile game package."""

from .config import FieldConfig, GameConfig, ObstacleConfig, PhysicsConfig, RenderingConfig
from .console import Console, FrameContext, Key
from .driver import FrameDriver
from .entities import Obstacle, Player
from .errors import BackendError
from .input import KeyboardInput, ScriptedInput
from .pygame_backend import PygameApp, TileConsole
from .state import GameMode, GameState
from .terminal_backend import TerminalApp, TerminalConsole

__all__ = [
    "GameState",
    "GameMode",
    "Player",
    "Obstacle",
    "GameConfig",
    "FieldConfig",
    "PhysicsConfig",
    "ObstacleConfig",
    "RenderingConfig",
    "Console",
    "FrameContext",
    "Key",
    "FrameDriver",
    "KeyboardInput",
    "ScriptedInput",
    "PygameApp",
    "TileConsole",
    "TerminalApp",
    "TerminalConsole",
    "BackendError",
]
