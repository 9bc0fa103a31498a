from __future__ import annotations

import numpy as np

from .pieces import CellValue, Shape, color_of


class GameGrid:
    """Fixed-size playfield of placed cells.

    Row 0 is the top. Cells hold ``CellValue`` tags: ``EMPTY`` (0) or the color id
    of the piece that was merged there. Shape cells above row 0 are allowed and
    never compared against the grid, so a piece may hang partly off the top.
    """

    def __init__(self, cols: int, rows: int) -> None:
        self.cols = int(cols)
        self.rows = int(rows)
        if self.cols <= 0 or self.rows <= 0:
            raise ValueError(f"grid must be at least 1x1, got {self.cols}x{self.rows}")
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(CellValue.EMPTY)

    def is_valid_position(self, shape: Shape, x: int, y: int) -> bool:
        for row, col in np.argwhere(shape != CellValue.EMPTY):
            bx = x + int(col)
            by = y + int(row)
            if bx < 0 or bx >= self.cols or by >= self.rows:
                return False
            if by >= 0 and self.grid[by, bx] != CellValue.EMPTY:
                return False
        return True

    def merge(self, shape: Shape, x: int, y: int) -> None:
        """Write every non-empty shape cell into the grid at ``(x, y)``.

        Assumes the position was validated; an overlapping or out-of-bounds merge,
        or a shape carrying more than one color id, raises ``ValueError``.
        """
        color = color_of(shape)
        if not self.is_valid_position(shape, x, y):
            raise ValueError(f"cannot merge shape at ({x}, {y}): position is not valid")
        for row, col in np.argwhere(shape != CellValue.EMPTY):
            by = y + int(row)
            if by >= 0:
                self.grid[by, x + int(col)] = color

    def clear_full_rows(self) -> int:
        full_rows = np.where(np.all(self.grid != CellValue.EMPTY, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        kept = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.cols), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        return num

    def is_empty(self) -> bool:
        return not np.any(self.grid)

    def cells(self) -> np.ndarray:
        state = self.grid.copy()
        state.setflags(write=False)
        return state
