"""Game module for tetris_sim.

Exports the simulation engine and supporting classes:
- Tetromino / TetrominoType / ActivePiece: piece catalog and rotation lookup
- GameGrid / LineClearRecord: board storage, collision and line compaction
- ScoringRules / drop_interval: points, level thresholds and gravity timing
- InputState: per-tick button levels and edges
- TetrisGame: phase state machine, spawn/drop/lock and scoring
"""

from .grid import BUFFER_ROWS, HEIGHT, VISIBLE_HEIGHT, WIDTH, GameGrid, LineClearRecord
from .input import InputState
from .pieces import ActivePiece, Tetromino, TetrominoType, cell, tetromino
from .rules import FRAMES_PER_DROP, ScoringRules, drop_interval
from .core import GameConfig, GameSnapshot, GameState, Phase, TetrisGame

__all__ = [
    "BUFFER_ROWS",
    "HEIGHT",
    "VISIBLE_HEIGHT",
    "WIDTH",
    "GameGrid",
    "LineClearRecord",
    "InputState",
    "ActivePiece",
    "Tetromino",
    "TetrominoType",
    "cell",
    "tetromino",
    "FRAMES_PER_DROP",
    "ScoringRules",
    "drop_interval",
    "GameConfig",
    "GameSnapshot",
    "GameState",
    "Phase",
    "TetrisGame",
]
