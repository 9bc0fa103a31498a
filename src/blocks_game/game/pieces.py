from __future__ import annotations

import random
from enum import IntEnum
from typing import Dict

import numpy as np


class CellValue(IntEnum):
    """Tag stored in every board and shape cell: empty or a piece color id."""

    EMPTY = 0
    J = 1
    L = 2
    Z = 3
    S = 4
    I = 5
    O = 6
    T = 7


class TetrominoType(IntEnum):
    J = 1
    L = 2
    Z = 3
    S = 4
    I = 5
    O = 6
    T = 7

    @property
    def color(self) -> CellValue:
        return CellValue(int(self))


Shape = np.ndarray


def _frozen(rows) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.J: _frozen([[0, 1, 0], [0, 1, 0], [1, 1, 0]]),
    TetrominoType.L: _frozen([[0, 2, 0], [0, 2, 0], [0, 2, 2]]),
    TetrominoType.Z: _frozen([[3, 3, 0], [0, 3, 3], [0, 0, 0]]),
    TetrominoType.S: _frozen([[0, 4, 4], [4, 4, 0], [0, 0, 0]]),
    TetrominoType.I: _frozen(
        [[0, 0, 5, 0], [0, 0, 5, 0], [0, 0, 5, 0], [0, 0, 5, 0]]
    ),
    TetrominoType.O: _frozen([[6, 6], [6, 6]]),
    TetrominoType.T: _frozen([[0, 7, 0], [7, 7, 7], [0, 0, 0]]),
}


def shape_for(kind: TetrominoType) -> Shape:
    return BASE_SHAPES[kind]


def rotate_shape(shape: Shape, clockwise: bool = True) -> Shape:
    """Return a new read-only shape turned by 90 degrees.

    Clockwise maps local ``(row, col)`` to ``(col, N - 1 - row)``; counter-clockwise
    is the inverse. The input array is never modified.
    """
    axes = (1, 0) if clockwise else (0, 1)
    rotated = np.rot90(shape, 1, axes=axes).copy()
    rotated.setflags(write=False)
    return rotated


def color_of(shape: Shape) -> CellValue:
    colors = np.unique(shape[shape != CellValue.EMPTY])
    if colors.size != 1:
        raise ValueError(f"shape must carry exactly one color id, got {colors.tolist()}")
    return CellValue(int(colors[0]))


def random_kind(rng: random.Random) -> TetrominoType:
    # Independent uniform draws, no bag
    return rng.choice(list(TetrominoType))
