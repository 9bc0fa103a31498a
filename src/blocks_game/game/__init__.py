"""Game module for the falling-block engine.

Exports the simulation engine and supporting classes:
- GameGrid: Board model, collision test, merge and row clearing
- TetrominoType / CellValue: Piece kinds and cell tags
- PieceCursor / PieceQueue: Falling piece and the queued next piece
- ScoringRules: Row-clear table, drop points and level speed
- BlocksGame: Tick-driven engine and Playing/Paused/GameOver state machine
"""

from .grid import GameGrid
from .pieces import CellValue, TetrominoType, color_of, random_kind, rotate_shape, shape_for
from .cursor import PieceCursor, PieceQueue
from .rules import ScoringRules
from .core import Action, BlocksGame, Direction, GameConfig, GameState, Snapshot

__all__ = [
    "GameGrid",
    "CellValue",
    "TetrominoType",
    "color_of",
    "random_kind",
    "rotate_shape",
    "shape_for",
    "PieceCursor",
    "PieceQueue",
    "ScoringRules",
    "BlocksGame",
    "Action",
    "Direction",
    "GameConfig",
    "GameState",
    "Snapshot",
]
