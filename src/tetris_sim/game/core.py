from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Protocol

import numpy as np

from .grid import WIDTH, GameGrid, LineClearRecord
from .input import InputState
from .pieces import ActivePiece, TetrominoType
from .rules import ScoringRules, drop_interval


logger = logging.getLogger(__name__)

HIGHLIGHT_TIME = 0.5


class Phase(IntEnum):
    PLAY = 0
    LINE_CLEAR = 1
    GAME_OVER = 2


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int:
        ...


@dataclass
class GameConfig:
    start_level: int = 0
    random_seed: Optional[int] = None
    highlight_time: float = HIGHLIGHT_TIME

    def __post_init__(self) -> None:
        if self.start_level < 0:
            raise ValueError(f"start_level must be >= 0, got {self.start_level}")
        if self.highlight_time <= 0:
            raise ValueError(f"highlight_time must be positive, got {self.highlight_time}")


@dataclass
class GameState:
    grid: GameGrid
    piece: ActivePiece
    line_record: LineClearRecord = field(default_factory=LineClearRecord)
    phase: Phase = Phase.PLAY
    start_level: int = 0
    level: int = 0
    line_count: int = 0
    points: int = 0
    next_drop_time: float = 0.0
    time: float = 0.0
    highlight_end_time: float = 0.0


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view handed to the renderer after each tick."""

    grid: np.ndarray
    piece: ActivePiece
    phase: Phase
    line_record: LineClearRecord
    start_level: int
    level: int
    line_count: int
    points: int


class TetrisGame:
    """Tick-driven falling-block engine.

    The host samples the clock once per tick and calls ``update(input, now)``;
    the engine never reads time itself. Pieces lock as soon as a gravity step
    fails, and full rows stay highlighted for ``highlight_time`` seconds
    before they are removed and scored.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng: RandomSource = rng if rng is not None else random.Random(self.config.random_seed)
        self.state = GameState(grid=GameGrid(), piece=ActivePiece(kind=TetrominoType.I))
        self.reset()

    @property
    def grid(self) -> GameGrid:
        return self.state.grid

    @property
    def piece(self) -> ActivePiece:
        return self.state.piece

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def game_over(self) -> bool:
        return self.state.phase is Phase.GAME_OVER

    def reset(self, now: float = 0.0) -> None:
        s = self.state
        s.grid.reset()
        s.line_record = LineClearRecord()
        s.phase = Phase.PLAY
        s.start_level = self.config.start_level
        s.level = self.config.start_level
        s.line_count = 0
        s.points = 0
        s.time = now
        s.highlight_end_time = now
        s.next_drop_time = now + drop_interval(s.level)
        self._spawn_piece()

    def _spawn_piece(self) -> None:
        kind = TetrominoType.from_index(self.rng.randrange(len(TetrominoType)))
        self.spawn_kind(kind)

    def spawn_kind(self, kind: TetrominoType) -> None:
        """Place a fresh piece of ``kind`` at the spawn position."""
        s = self.state
        s.piece = ActivePiece(kind=TetrominoType(kind), rotation=0, offset_row=0, offset_col=WIDTH // 2)
        if not s.grid.is_piece_placement_valid(s.piece):
            s.phase = Phase.GAME_OVER
            logger.info(
                "Game over: %s cannot spawn (level=%d lines=%d points=%d)",
                s.piece.kind.name,
                s.level,
                s.line_count,
                s.points,
            )

    def _lock_piece(self) -> None:
        s = self.state
        assert s.phase is Phase.PLAY
        s.grid.merge(s.piece)
        logger.debug("Locked %s at row=%d col=%d", s.piece.kind.name, s.piece.offset_row, s.piece.offset_col)
        self._spawn_piece()

    def soft_drop(self) -> bool:
        """One gravity step. Returns False when the piece locked instead of moving."""
        s = self.state
        if s.phase is not Phase.PLAY:
            return False
        candidate = s.piece.moved(drow=1)
        if not s.grid.is_piece_placement_valid(candidate):
            self._lock_piece()
            return False
        s.piece = candidate
        s.next_drop_time = s.time + drop_interval(s.level)
        return True

    def hard_drop(self) -> int:
        rows = 0
        while self.soft_drop():
            rows += 1
        return rows

    def update(self, inp: InputState, now: float) -> None:
        s = self.state
        s.time = now
        if s.phase is Phase.PLAY:
            self._update_play(inp)
        elif s.phase is Phase.LINE_CLEAR:
            self._update_line_clear()

    def _update_play(self, inp: InputState) -> None:
        s = self.state

        candidate = s.piece
        if inp.dleft > 0:
            candidate = candidate.moved(dcol=-1)
        elif inp.dright > 0:
            candidate = candidate.moved(dcol=1)
        if inp.dup > 0:
            candidate = candidate.rotated(1)
        if s.grid.is_piece_placement_valid(candidate):
            s.piece = candidate

        if inp.ddown > 0:
            self.soft_drop()
        if inp.dspace > 0:
            self.hard_drop()

        while s.phase is Phase.PLAY and s.time >= s.next_drop_time:
            self.soft_drop()

        if s.phase is not Phase.PLAY:
            return
        record = s.grid.find_filled_rows()
        if record.count > 0:
            s.line_record = record
            s.phase = Phase.LINE_CLEAR
            s.highlight_end_time = s.time + self.config.highlight_time
            logger.debug("Line clear: rows=%s", np.flatnonzero(record.rows).tolist())

    def _update_line_clear(self) -> None:
        s = self.state
        if s.time < s.highlight_end_time:
            return
        record = s.line_record
        s.grid.compact(record)
        s.line_count += record.count
        s.points += self.rules.score(s.level, record.count)
        if s.line_count >= self.rules.lines_required(s.start_level, s.level):
            s.level += 1
            logger.info("Level up: level=%d lines=%d points=%d", s.level, s.line_count, s.points)
        s.phase = Phase.PLAY

    def snapshot(self) -> GameSnapshot:
        s = self.state
        record = LineClearRecord(rows=s.line_record.rows.copy(), count=s.line_record.count)
        return GameSnapshot(
            grid=s.grid.clone_state(),
            piece=s.piece,
            phase=s.phase,
            line_record=record,
            start_level=s.start_level,
            level=s.level,
            line_count=s.line_count,
            points=s.points,
        )
