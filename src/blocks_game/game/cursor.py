from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from .pieces import Shape, TetrominoType, random_kind, shape_for


@dataclass(eq=False)
class PieceCursor:
    """The falling piece.

    ``x`` is the committed column used by gravity and hard drop. Horizontal input
    only stages ``pending_x``; ``commit()`` applies it at the start of each
    logical tick.
    """

    kind: TetrominoType
    shape: Shape
    x: int
    y: int
    pending_x: int

    @classmethod
    def spawn(cls, kind: TetrominoType, cols: int, spawn_y: int = 0) -> "PieceCursor":
        shape = shape_for(kind)
        x = (cols - shape.shape[1]) // 2
        return cls(kind=kind, shape=shape, x=x, y=spawn_y, pending_x=x)

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    def commit(self) -> None:
        self.x = self.pending_x


class PieceQueue:
    """Holds the single queued next piece, drawn independently of the cursor."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng
        self._next: Optional[TetrominoType] = None

    @property
    def queued(self) -> Optional[TetrominoType]:
        return self._next

    def peek(self) -> TetrominoType:
        if self._next is None:
            self._next = random_kind(self.rng)
        return self._next

    def pop(self) -> TetrominoType:
        kind = self.peek()
        self._next = None
        return kind

    def clear(self) -> None:
        self._next = None
