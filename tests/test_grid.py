from __future__ import annotations

import numpy as np
import pytest

from tetris_sim.game.grid import HEIGHT, WIDTH, GameGrid, LineClearRecord
from tetris_sim.game.pieces import ActivePiece, TetrominoType


def _random_grid(seed: int) -> GameGrid:
    rng = np.random.default_rng(seed)
    grid = GameGrid()
    grid.grid = rng.integers(0, 8, size=(HEIGHT, WIDTH), dtype=np.int8)
    return grid


def test_empty_board_has_no_filled_rows() -> None:
    record = GameGrid().find_filled_rows()
    assert record.count == 0
    assert record.rows.shape == (HEIGHT,)
    assert not record.rows.any()


def test_find_filled_rows_counts_full_rows_only() -> None:
    grid = GameGrid()
    grid.grid[21, :] = 3
    grid.grid[19, :] = 5
    grid.grid[20, :-1] = 1
    record = grid.find_filled_rows()
    assert record.count == 2
    assert np.flatnonzero(record.rows).tolist() == [19, 21]
    assert grid.is_row_filled(21)
    assert not grid.is_row_filled(20)


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_find_filled_rows_matches_row_scan(seed: int) -> None:
    grid = _random_grid(seed)
    grid.grid[np.arange(seed, HEIGHT, 5)] = 4
    expected = sum(1 for row in range(HEIGHT) if all(grid.grid[row, col] != 0 for col in range(WIDTH)))
    assert grid.find_filled_rows().count == expected


@pytest.mark.parametrize("marked", [[21], [0], [3, 10, 11, 21], list(range(HEIGHT))])
def test_compact_keeps_survivor_order_and_prepends_empty_rows(marked: list[int]) -> None:
    grid = _random_grid(7)
    before = grid.clone_state()
    rows = np.zeros(HEIGHT, dtype=np.bool_)
    rows[marked] = True

    grid.compact(LineClearRecord(rows=rows, count=len(marked)))

    k = len(marked)
    assert not grid.grid[:k].any()
    np.testing.assert_array_equal(grid.grid[k:], before[~rows])
    assert grid.grid.shape == (HEIGHT, WIDTH)


def test_compact_drops_rows_above_a_cleared_line() -> None:
    grid = GameGrid()
    grid.grid[21, :] = 1
    grid.grid[20, 0] = 2
    grid.grid[19, 3] = 6
    grid.compact(grid.find_filled_rows())
    assert grid.grid[21, 0] == 2
    assert grid.grid[20, 3] == 6
    assert int(np.count_nonzero(grid.grid)) == 2


def test_placement_rejects_every_out_of_bounds_side() -> None:
    grid = GameGrid()
    o = TetrominoType.O
    assert grid.is_piece_placement_valid(ActivePiece(o, 0, 0, 0))
    assert grid.is_piece_placement_valid(ActivePiece(o, 0, HEIGHT - 2, WIDTH - 2))
    assert not grid.is_piece_placement_valid(ActivePiece(o, 0, -1, 0))
    assert not grid.is_piece_placement_valid(ActivePiece(o, 0, HEIGHT - 1, 0))
    assert not grid.is_piece_placement_valid(ActivePiece(o, 0, 0, -1))
    assert not grid.is_piece_placement_valid(ActivePiece(o, 0, 0, WIDTH - 1))


def test_placement_only_checks_occupied_cells() -> None:
    grid = GameGrid()
    # The I mask's top row is empty, so an offset of -1 keeps the bar on row 0.
    assert grid.is_piece_placement_valid(ActivePiece(TetrominoType.I, 0, -1, 0))
    assert not grid.is_piece_placement_valid(ActivePiece(TetrominoType.I, 0, -2, 0))


def test_placement_rejects_overlap_with_locked_cells() -> None:
    grid = GameGrid()
    grid.grid[21, 6] = 2
    assert not grid.is_piece_placement_valid(ActivePiece(TetrominoType.I, 0, 20, 5))
    assert grid.is_piece_placement_valid(ActivePiece(TetrominoType.I, 0, 19, 5))


def test_merge_writes_piece_id() -> None:
    grid = GameGrid()
    grid.merge(ActivePiece(TetrominoType.T, 0, 19, 0))
    assert grid.grid[20, 0:3].tolist() == [3, 3, 3]
    assert grid.grid[21, 1] == 3
    assert int(np.count_nonzero(grid.grid)) == 4


def test_merge_outside_the_board_is_a_contract_violation() -> None:
    with pytest.raises(AssertionError):
        GameGrid().merge(ActivePiece(TetrominoType.O, 0, HEIGHT - 1, 0))
