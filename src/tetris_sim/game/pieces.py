from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, Iterator, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7

    @classmethod
    def from_index(cls, index: int) -> "TetrominoType":
        """Map a catalog index in [0, 7) to its piece kind."""
        assert 0 <= index < len(cls), f"tetromino index out of range: {index}"
        return cls(index + 1)


@dataclass(frozen=True)
class Tetromino:
    """Square cell mask of one piece kind.

    Mask values are the piece id (1..7) so that merging writes the color
    straight into the board; 0 marks an empty cell.
    """

    kind: TetrominoType
    data: np.ndarray

    @property
    def side(self) -> int:
        return int(self.data.shape[0])

    def cell(self, row: int, col: int, rotation: int) -> int:
        return cell(self, row, col, rotation)

    def cells(self, rotation: int) -> Iterator[Tuple[int, int, int]]:
        """Yield ``(row, col, value)`` for every occupied cell of a rotation."""
        s = self.side
        for row in range(s):
            for col in range(s):
                value = cell(self, row, col, rotation)
                if value:
                    yield row, col, value


def cell(shape: Tetromino, row: int, col: int, rotation: int) -> int:
    """Mask value of ``shape`` at (row, col) after ``rotation`` clockwise turns."""
    s = shape.side
    data = shape.data
    if rotation == 0:
        return int(data[row, col])
    if rotation == 1:
        return int(data[s - 1 - col, row])
    if rotation == 2:
        return int(data[s - 1 - row, s - 1 - col])
    if rotation == 3:
        return int(data[col, s - 1 - row])
    raise AssertionError(f"rotation must be in 0..3, got {rotation}")


def _mask(kind: TetrominoType, rows: Tuple[Tuple[int, ...], ...]) -> Tetromino:
    data = np.array(rows, dtype=np.int8) * int(kind)
    assert data.shape[0] == data.shape[1]
    data.setflags(write=False)
    return Tetromino(kind=kind, data=data)


_CATALOG: Dict[TetrominoType, Tetromino] = {
    TetrominoType.I: _mask(TetrominoType.I, ((0, 0, 0, 0), (1, 1, 1, 1), (0, 0, 0, 0), (0, 0, 0, 0))),
    TetrominoType.O: _mask(TetrominoType.O, ((1, 1), (1, 1))),
    TetrominoType.T: _mask(TetrominoType.T, ((0, 0, 0), (1, 1, 1), (0, 1, 0))),
    TetrominoType.S: _mask(TetrominoType.S, ((0, 1, 1), (1, 1, 0), (0, 0, 0))),
    TetrominoType.Z: _mask(TetrominoType.Z, ((1, 1, 0), (0, 1, 1), (0, 0, 0))),
    TetrominoType.J: _mask(TetrominoType.J, ((1, 0, 0), (1, 1, 1), (0, 0, 0))),
    TetrominoType.L: _mask(TetrominoType.L, ((0, 0, 1), (1, 1, 1), (0, 0, 0))),
}


def tetromino(kind: TetrominoType) -> Tetromino:
    return _CATALOG[TetrominoType(kind)]


@dataclass(frozen=True)
class ActivePiece:
    kind: TetrominoType
    rotation: int = 0  # 0..3
    offset_row: int = 0
    offset_col: int = 0

    @property
    def shape(self) -> Tetromino:
        return tetromino(self.kind)

    def moved(self, drow: int = 0, dcol: int = 0) -> "ActivePiece":
        return replace(self, offset_row=self.offset_row + drow, offset_col=self.offset_col + dcol)

    def rotated(self, delta: int = 1) -> "ActivePiece":
        return replace(self, rotation=(self.rotation + delta) % 4)

    def board_cells(self) -> Iterator[Tuple[int, int, int]]:
        """Yield ``(board_row, board_col, value)`` for every occupied cell."""
        for row, col, value in self.shape.cells(self.rotation):
            yield self.offset_row + row, self.offset_col + col, value
