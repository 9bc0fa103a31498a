import numpy as np
import pytest

from blocks_game.game import GameGrid, TetrominoType, shape_for


O = shape_for(TetrominoType.O)
I = shape_for(TetrominoType.I)


def test_new_grid_is_empty():
    grid = GameGrid(13, 23)
    assert grid.grid.shape == (23, 13)
    assert grid.is_empty()


def test_bounds_checks():
    grid = GameGrid(10, 20)
    assert grid.is_valid_position(O, 0, 0)
    assert grid.is_valid_position(O, 8, 18)
    assert not grid.is_valid_position(O, -1, 0)
    assert not grid.is_valid_position(O, 9, 0)
    assert not grid.is_valid_position(O, 0, 19)


def test_empty_shape_columns_may_hang_outside():
    grid = GameGrid(10, 20)
    # I occupies only local column 2
    assert grid.is_valid_position(I, -2, 0)
    assert grid.is_valid_position(I, 7, 0)
    assert not grid.is_valid_position(I, 8, 0)


def test_no_lower_bound_above_top_row():
    grid = GameGrid(10, 20)
    assert grid.is_valid_position(O, 4, -1)
    assert grid.is_valid_position(I, 4, -10)


def test_occupied_cell_blocks():
    grid = GameGrid(10, 20)
    grid.grid[19, 5] = 3
    assert not grid.is_valid_position(O, 4, 18)
    assert grid.is_valid_position(O, 6, 18)


def test_is_valid_position_is_pure():
    grid = GameGrid(10, 20)
    grid.grid[10, 3] = 1
    before = grid.grid.copy()
    results = {grid.is_valid_position(O, 2, 9) for _ in range(5)}
    assert results == {False}
    assert np.array_equal(grid.grid, before)


def test_merge_writes_color():
    grid = GameGrid(10, 20)
    grid.merge(O, 3, 18)
    assert np.all(grid.grid[18:20, 3:5] == 6)
    assert int(np.count_nonzero(grid.grid)) == 4


def test_merge_drops_cells_above_top():
    grid = GameGrid(10, 20)
    grid.merge(O, 0, -1)
    assert np.all(grid.grid[0, 0:2] == 6)
    assert int(np.count_nonzero(grid.grid)) == 2


def test_merge_on_invalid_position_fails_fast():
    grid = GameGrid(10, 20)
    grid.merge(O, 0, 18)
    with pytest.raises(ValueError):
        grid.merge(O, 1, 18)


def test_merge_rejects_multicolor_shape():
    grid = GameGrid(10, 20)
    mixed = np.array([[1, 1], [2, 2]], dtype=np.int8)
    with pytest.raises(ValueError):
        grid.merge(mixed, 0, 0)
    assert grid.is_empty()


def test_clear_full_rows_shifts_content_down():
    grid = GameGrid(4, 5)
    grid.grid[1] = [1, 0, 0, 0]
    grid.grid[2] = [2, 2, 2, 2]
    grid.grid[3] = [0, 3, 0, 0]
    grid.grid[4] = [4, 4, 4, 4]
    assert grid.clear_full_rows() == 2
    assert grid.grid.shape == (5, 4)
    assert np.array_equal(grid.grid[0], [0, 0, 0, 0])
    assert np.array_equal(grid.grid[1], [0, 0, 0, 0])
    assert np.array_equal(grid.grid[2], [0, 0, 0, 0])
    assert np.array_equal(grid.grid[3], [1, 0, 0, 0])
    assert np.array_equal(grid.grid[4], [0, 3, 0, 0])


def test_clear_full_rows_keeps_rows_with_gaps():
    grid = GameGrid(4, 4)
    grid.grid[:] = 5
    grid.grid[:, 2] = 0
    before = grid.grid.copy()
    assert grid.clear_full_rows() == 0
    assert np.array_equal(grid.grid, before)


def test_clear_four_rows():
    grid = GameGrid(3, 6)
    grid.grid[2:6] = 1
    grid.grid[1, 0] = 2
    assert grid.clear_full_rows() == 4
    assert grid.grid.shape == (6, 3)
    assert grid.grid[5, 0] == 2
    assert int(np.count_nonzero(grid.grid)) == 1


def test_cells_is_read_only_copy():
    grid = GameGrid(4, 4)
    cells = grid.cells()
    with pytest.raises(ValueError):
        cells[0, 0] = 1
    grid.grid[0, 0] = 1
    assert cells[0, 0] == 0
