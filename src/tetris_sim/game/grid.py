from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .pieces import ActivePiece


WIDTH = 10
HEIGHT = 22
BUFFER_ROWS = 2
VISIBLE_HEIGHT = HEIGHT - BUFFER_ROWS


@dataclass
class LineClearRecord:
    """Rows found full when a line clear starts, consumed when it ends."""

    rows: np.ndarray = field(default_factory=lambda: np.zeros(HEIGHT, dtype=np.bool_))
    count: int = 0


class GameGrid:
    """Fixed WIDTH x HEIGHT board of locked cells.

    The grid uses 0 for empty cells and piece ids 1..7 for locked cells.
    Row 0 is the top; the first BUFFER_ROWS rows sit above the visible field.
    """

    def __init__(self) -> None:
        self.width = WIDTH
        self.height = HEIGHT
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def is_row_filled(self, row: int) -> bool:
        return bool(np.all(self.grid[row] != 0))

    def find_filled_rows(self) -> LineClearRecord:
        rows = np.all(self.grid != 0, axis=1)
        return LineClearRecord(rows=rows, count=int(rows.sum()))

    def compact(self, record: LineClearRecord) -> None:
        """Remove the flagged rows and drop everything above them."""
        if record.count == 0:
            return
        survivors = self.grid[~record.rows]
        new_rows = np.zeros((self.height - survivors.shape[0], self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, survivors))

    def is_piece_placement_valid(self, piece: ActivePiece) -> bool:
        for row, col, _ in piece.board_cells():
            if not self.is_inside(row, col):
                return False
            if self.grid[row, col] != 0:
                return False
        return True

    def merge(self, piece: ActivePiece) -> None:
        # Caller validates the placement first.
        for row, col, value in piece.board_cells():
            assert self.is_inside(row, col), f"merge outside the board at ({row}, {col})"
            self.grid[row, col] = value

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
