from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

import numpy as np

from .cursor import PieceCursor, PieceQueue
from .grid import GameGrid
from .pieces import Shape, TetrominoType, rotate_shape, shape_for
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class GameState(Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Direction(Enum):
    CLOCKWISE = "cw"
    COUNTER_CLOCKWISE = "ccw"


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    PAUSE = 6
    RESET = 7
    NONE = 8


@dataclass
class GameConfig:
    cols: int = 13
    rows: int = 23
    cell_size: int = 20
    base_fall_interval: int = 10
    lock_delay: int = 2
    spawn_y: int = 0
    frame_ms: float = 1000.0 / 60.0
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.cols <= 0 or self.rows <= 0:
            raise ValueError(f"board must be at least 1x1 cells, got {self.cols}x{self.rows}")
        if self.base_fall_interval < 1:
            raise ValueError("base_fall_interval must be >= 1")
        if self.lock_delay < 0:
            raise ValueError("lock_delay must be >= 0")
        if not 0 <= self.spawn_y < self.rows:
            raise ValueError(f"spawn_y must lie inside the board, got {self.spawn_y}")
        if self.frame_ms <= 0:
            raise ValueError("frame_ms must be positive")

    @classmethod
    def from_pixels(cls, width: int, height: int, cell_size: int, **kwargs) -> "GameConfig":
        """Derive the cell grid from pixel geometry, e.g. ``from_pixels(260, 400, 10)``."""
        return cls(cols=width // cell_size, rows=height // cell_size, cell_size=cell_size, **kwargs)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the engine for renderers. All arrays are non-writeable copies."""

    board: np.ndarray
    piece: Optional[np.ndarray]
    piece_kind: Optional[TetrominoType]
    x: int
    y: int
    next_piece: Optional[np.ndarray]
    next_kind: Optional[TetrominoType]
    score: int
    level: float
    state: GameState
    game_time: int

    def overlay(self) -> np.ndarray:
        """Board with the active piece painted in; cells above row 0 are skipped."""
        state = self.board.copy()
        if self.piece is not None:
            rows, cols = state.shape
            for r, c in np.argwhere(self.piece != 0):
                by, bx = self.y + int(r), self.x + int(c)
                if 0 <= by < rows and 0 <= bx < cols:
                    state[by, bx] = self.piece[r, c]
        return state


class BlocksGame:
    """Falling-block engine driven by ``tick(now)``.

    Input mutators return ``True`` when they changed state and ``False`` when the
    request was rejected or ignored (paused, game over, blocked). They never raise
    for ordinary play.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.cols, self.config.rows)
        self.queue = PieceQueue(self.rng)
        self.state = GameState.PLAYING
        self.cursor: Optional[PieceCursor] = None
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.lock_delay = 0
        self.game_time = 0
        self._last_frame: Optional[float] = None
        self.reset()

    @property
    def level(self) -> float:
        # Derived from the line total so that ten single clears give exactly 1.0
        return self.lines_cleared_total / self.rules.lines_per_level

    def reset(self) -> None:
        self.grid.reset()
        self.queue.clear()
        self.cursor = None
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.lock_delay = 0
        self.game_time = 0
        self._last_frame = None
        self.state = GameState.PLAYING
        logger.info("game reset (%dx%d board)", self.grid.cols, self.grid.rows)
        self.ensure_active_piece()

    def toggle_pause(self) -> bool:
        if self.state is GameState.PLAYING:
            self.state = GameState.PAUSED
        elif self.state is GameState.PAUSED:
            self.state = GameState.PLAYING
            self._last_frame = None
        else:
            return False
        logger.debug("state -> %s", self.state.value)
        return True

    def ensure_active_piece(self) -> Optional[PieceCursor]:
        """Promote the queued next piece to the cursor when none is active.

        A spawn whose starting position is already blocked ends the game.
        """
        if self.cursor is not None or self.state is GameState.GAME_OVER:
            return self.cursor
        kind = self.queue.pop()
        self.cursor = PieceCursor.spawn(kind, self.grid.cols, self.config.spawn_y)
        self.lock_delay = 0
        next_kind = self.queue.peek()
        logger.debug("spawned %s at (%d, %d), next %s", kind.name, self.cursor.x, self.cursor.y, next_kind.name)
        if not self.grid.is_valid_position(self.cursor.shape, self.cursor.x, self.cursor.y):
            self._game_over("spawn position blocked")
        return self.cursor

    def _input_cursor(self) -> Optional[PieceCursor]:
        if self.state is not GameState.PLAYING:
            return None
        cursor = self.ensure_active_piece()
        if self.state is not GameState.PLAYING:
            return None
        return cursor

    def _shift(self, dx: int) -> bool:
        cursor = self._input_cursor()
        if cursor is None:
            return False
        new_x = cursor.pending_x + dx
        if not self.grid.is_valid_position(cursor.shape, new_x, cursor.y):
            return False
        cursor.pending_x = new_x
        return True

    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def move_down(self) -> bool:
        cursor = self._input_cursor()
        if cursor is None:
            return False
        new_y = cursor.y + 1
        if not self.grid.is_valid_position(cursor.shape, cursor.pending_x, new_y):
            return False
        cursor.y = new_y
        self.lock_delay = 0
        self.score += self.rules.soft_drop_points
        return True

    def hard_drop(self) -> bool:
        cursor = self._input_cursor()
        if cursor is None:
            return False
        # The staged column is the only one validated against the current shape
        cursor.commit()
        rows = 0
        while self.grid.is_valid_position(cursor.shape, cursor.x, cursor.y + rows + 1):
            rows += 1
        cursor.y += rows
        self.score += self.rules.hard_drop_points * rows
        self._lock()
        return True

    def rotate(self, direction: Direction = Direction.CLOCKWISE) -> bool:
        cursor = self._input_cursor()
        if cursor is None:
            return False
        rotated = rotate_shape(cursor.shape, clockwise=direction is Direction.CLOCKWISE)
        # No wall kicks: a blocked rotation is simply rejected
        if not self.grid.is_valid_position(rotated, cursor.pending_x, cursor.y):
            return False
        cursor.shape = rotated
        return True

    def step(self, action: Action) -> bool:
        if action == Action.LEFT:
            return self.move_left()
        if action == Action.RIGHT:
            return self.move_right()
        if action == Action.ROTATE_CW:
            return self.rotate(Direction.CLOCKWISE)
        if action == Action.ROTATE_CCW:
            return self.rotate(Direction.COUNTER_CLOCKWISE)
        if action == Action.SOFT_DROP:
            return self.move_down()
        if action == Action.HARD_DROP:
            return self.hard_drop()
        if action == Action.PAUSE:
            return self.toggle_pause()
        if action == Action.RESET:
            self.reset()
            return True
        return False

    def tick(self, now: float) -> bool:
        """Advance at most one logical step if a frame budget has elapsed since the last one.

        ``now`` is a monotonic timestamp in milliseconds. The anchor advances by one
        ``frame_ms`` per step; when more than one frame of backlog remains it snaps
        to ``now``, so skipped frames are dropped instead of replayed. A timestamp
        earlier than the anchor re-anchors the clock without stepping.
        """
        if self.state is not GameState.PLAYING:
            return False
        frame_ms = self.config.frame_ms
        if self._last_frame is None:
            self._last_frame = now
        else:
            elapsed = now - self._last_frame
            if elapsed < 0:
                self._last_frame = now
                return False
            if elapsed < frame_ms:
                return False
            self._last_frame += frame_ms
            if now - self._last_frame >= frame_ms:
                self._last_frame = now
        self.advance()
        return True

    def advance(self) -> None:
        """Run one logical step: commit, gravity, lock delay, row clear."""
        if self.state is not GameState.PLAYING:
            return
        self.game_time += 1
        cursor = self.ensure_active_piece()
        if cursor is None or self.state is not GameState.PLAYING:
            return
        cursor.commit()

        interval = self.rules.fall_interval(self.config.base_fall_interval, self.level)
        if self.game_time % interval == 0:
            self._fall(cursor)

        self._clear_rows()

    def _fall(self, cursor: PieceCursor) -> None:
        if self.grid.is_valid_position(cursor.shape, cursor.x, cursor.y + 1):
            cursor.y += 1
            self.lock_delay = 0
        elif cursor.y == self.config.spawn_y:
            self._game_over("piece blocked at spawn row")
        elif self.lock_delay >= self.config.lock_delay:
            self._lock()
        else:
            self.lock_delay += 1

    def _lock(self) -> None:
        assert self.cursor is not None
        cursor = self.cursor
        self.grid.merge(cursor.shape, cursor.x, cursor.y)
        self.pieces_locked += 1
        logger.debug("locked %s at (%d, %d)", cursor.kind.name, cursor.x, cursor.y)
        self.cursor = None
        self.lock_delay = 0
        # Rows completed by this piece go before the next spawn sees the board
        self._clear_rows()

    def _clear_rows(self) -> int:
        rows = self.grid.clear_full_rows()
        if rows:
            gained = self.rules.score_for_rows(rows, self.level)
            self.score += gained
            self.lines_cleared_total += rows
            logger.debug("cleared %d row(s) for %d points, level %.1f", rows, gained, self.level)
        return rows

    def _game_over(self, reason: str) -> None:
        self.state = GameState.GAME_OVER
        logger.info("game over: %s (score %d, lines %d)", reason, self.score, self.lines_cleared_total)

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def snapshot(self) -> Snapshot:
        piece = None
        kind = None
        x = y = 0
        if self.cursor is not None:
            piece = _readonly(self.cursor.shape)
            kind = self.cursor.kind
            x, y = self.cursor.x, self.cursor.y
        next_kind = self.queue.queued
        return Snapshot(
            board=self.grid.cells(),
            piece=piece,
            piece_kind=kind,
            x=x,
            y=y,
            next_piece=_readonly(shape_for(next_kind)) if next_kind is not None else None,
            next_kind=next_kind,
            score=self.score,
            level=self.level,
            state=self.state,
            game_time=self.game_time,
        )


def _readonly(shape: Shape) -> np.ndarray:
    arr = np.array(shape, copy=True)
    arr.setflags(write=False)
    return arr
