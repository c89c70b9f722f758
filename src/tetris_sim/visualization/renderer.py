from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from tetris_sim.game import BUFFER_ROWS, HEIGHT, VISIBLE_HEIGHT, WIDTH, GameSnapshot, Phase


Color = Tuple[int, int, int]

HIGHLIGHT_COLOR: Color = (255, 255, 255)
PANEL_WIDTH_CELLS = 6


def _color_for_value(v: int) -> Color:
    palette = {
        0: (28, 28, 34),
        1: (45, 205, 223),   # I
        2: (247, 211, 8),    # O
        3: (173, 77, 156),   # T
        4: (66, 182, 66),    # S
        5: (239, 32, 41),    # Z
        6: (90, 101, 173),   # J
        7: (239, 121, 33),   # L
    }
    return palette.get(abs(int(v)), (200, 200, 200))


def _scale(color: Color, factor: float) -> Color:
    r, g, b = (min(255, int(c * factor)) for c in color)
    return r, g, b


class Renderer:
    """Draws a GameSnapshot; only the visible rows below the spawn buffer are shown."""

    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font: pygame.font.Font | None = None

    @property
    def window_size(self) -> Tuple[int, int]:
        width = self.margin * 3 + (WIDTH + PANEL_WIDTH_CELLS) * self.cell_size
        height = self.margin * 2 + VISIBLE_HEIGHT * self.cell_size
        return width, height

    def _cell_origin(self, row: int, col: int) -> Tuple[int, int]:
        x = self.margin + col * self.cell_size
        y = self.margin + (row - BUFFER_ROWS) * self.cell_size
        return x, y

    def _draw_cell(self, screen: pygame.Surface, row: int, col: int, value: int) -> None:
        if row < BUFFER_ROWS or row >= HEIGHT:
            return
        base = _color_for_value(value)
        light = _scale(base, 1.35)
        dark = _scale(base, 0.6)
        size = self.cell_size
        edge = max(1, size // 8)
        x, y = self._cell_origin(row, col)
        pygame.draw.rect(screen, dark, pygame.Rect(x, y, size, size))
        pygame.draw.rect(screen, light, pygame.Rect(x + edge, y, size - edge, size - edge))
        pygame.draw.rect(screen, base, pygame.Rect(x + edge, y + edge, size - edge * 2, size - edge * 2))

    def _draw_board(self, screen: pygame.Surface, grid: np.ndarray) -> None:
        for row in range(BUFFER_ROWS, HEIGHT):
            for col in range(WIDTH):
                self._draw_cell(screen, row, col, int(grid[row, col]))

    def _draw_highlight(self, screen: pygame.Surface, rows: np.ndarray) -> None:
        for row in np.flatnonzero(rows):
            if row < BUFFER_ROWS:
                continue
            x, y = self._cell_origin(int(row), 0)
            pygame.draw.rect(screen, HIGHLIGHT_COLOR, pygame.Rect(x, y, WIDTH * self.cell_size, self.cell_size))

    def _draw_panel(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        x0 = self.margin * 2 + WIDTH * self.cell_size
        lines = [
            f"Level  {snapshot.level}",
            f"Lines  {snapshot.line_count}",
            f"Points {snapshot.points}",
        ]
        for i, text in enumerate(lines):
            surf = self._font.render(text, True, (230, 230, 230))
            screen.blit(surf, (x0, self.margin + i * 30))
        if snapshot.phase is Phase.GAME_OVER:
            surf = self._font.render("GAME OVER", True, (255, 90, 90))
            screen.blit(surf, (x0, self.margin + len(lines) * 30 + 20))

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        screen.fill((10, 10, 14))
        self._draw_board(screen, snapshot.grid)
        for row, col, value in snapshot.piece.board_cells():
            self._draw_cell(screen, row, col, value)
        if snapshot.phase is Phase.LINE_CLEAR:
            self._draw_highlight(screen, snapshot.line_record.rows)
        self._draw_panel(screen, snapshot)
        pygame.display.flip()
