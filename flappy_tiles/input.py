"""Input abstractions for the flappy tile game."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Optional, Protocol

import pygame

from .console import Key

PYGAME_BINDINGS: dict[int, Key] = {
    pygame.K_SPACE: Key.FLAP,
    pygame.K_p: Key.PLAY,
    pygame.K_q: Key.QUIT,
    pygame.K_ESCAPE: Key.QUIT,
}


class InputProvider(Protocol):
    """Interface for supplying one key event per frame to the game loop."""

    closed: bool

    def poll(self) -> Optional[Key]:
        """Return the key pressed since the previous poll, if any."""


def key_from_event(event: pygame.event.Event) -> Optional[Key]:
    """Translate a pygame event into a game key."""
    if event.type != pygame.KEYDOWN:
        return None
    return PYGAME_BINDINGS.get(event.key)


class KeyboardInput(InputProvider):
    """Default keyboard controller reading the pygame event queue."""

    def __init__(self) -> None:
        self.closed = False

    def poll(self) -> Optional[Key]:
        return self.consume(pygame.event.get())

    def consume(self, events: Iterable[pygame.event.Event]) -> Optional[Key]:
        """Pick the latest mapped key out of a batch of events."""
        latest: Optional[Key] = None
        for event in events:
            if event.type == pygame.QUIT:
                self.closed = True
                continue
            key = key_from_event(event)
            if key is not None:
                latest = key
        return latest


class ScriptedInput(InputProvider):
    """Replays a fixed sequence of keys, one per poll, then reports None."""

    def __init__(self, keys: Iterable[Optional[Key]]) -> None:
        self.closed = False
        self._keys: Deque[Optional[Key]] = deque(keys)

    def poll(self) -> Optional[Key]:
        if not self._keys:
            return None
        return self._keys.popleft()

    @property
    def exhausted(self) -> bool:
        return not self._keys
