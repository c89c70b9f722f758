from __future__ import annotations

import pygame

from tetris_sim.game import InputState


class KeyboardAdapter:
    """Samples the keyboard once per tick and turns levels into edges."""

    def __init__(self) -> None:
        self.state = InputState()
        self.quit_requested = False

    def poll(self) -> InputState:
        keys = pygame.key.get_pressed()
        if keys[pygame.K_ESCAPE]:
            self.quit_requested = True
        self.state = InputState.advance(
            self.state,
            left=bool(keys[pygame.K_LEFT]),
            right=bool(keys[pygame.K_RIGHT]),
            up=bool(keys[pygame.K_UP]),
            down=bool(keys[pygame.K_DOWN]),
            space=bool(keys[pygame.K_SPACE]),
        )
        return self.state
