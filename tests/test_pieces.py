import random

import numpy as np
import pytest

from blocks_game.game import CellValue, TetrominoType, color_of, random_kind, rotate_shape, shape_for


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_four_clockwise_rotations_restore_shape(kind):
    shape = shape_for(kind)
    rotated = shape
    for _ in range(4):
        rotated = rotate_shape(rotated, clockwise=True)
    assert np.array_equal(rotated, shape)


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_counter_clockwise_undoes_clockwise(kind):
    shape = shape_for(kind)
    assert np.array_equal(rotate_shape(rotate_shape(shape), clockwise=False), shape)


def test_clockwise_maps_row_col_to_col_mirrored_row():
    shape = shape_for(TetrominoType.T)
    n = shape.shape[0]
    rotated = rotate_shape(shape)
    for row in range(n):
        for col in range(n):
            assert rotated[col, n - 1 - row] == shape[row, col]


def test_rotation_never_touches_catalog():
    before = shape_for(TetrominoType.L).copy()
    rotated = rotate_shape(shape_for(TetrominoType.L))
    assert np.array_equal(shape_for(TetrominoType.L), before)
    assert not rotated.flags.writeable
    with pytest.raises(ValueError):
        shape_for(TetrominoType.L)[0, 0] = 3


def test_catalog_geometry():
    sizes = {kind: shape_for(kind).shape for kind in TetrominoType}
    assert sizes[TetrominoType.I] == (4, 4)
    assert sizes[TetrominoType.O] == (2, 2)
    assert sum(1 for s in sizes.values() if s == (3, 3)) == 5
    for kind in TetrominoType:
        assert int(np.count_nonzero(shape_for(kind))) == 4


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_each_shape_has_its_own_color(kind):
    assert color_of(shape_for(kind)) == kind.color
    assert int(kind.color) == int(kind)


def test_color_of_rejects_mixed_shape():
    with pytest.raises(ValueError):
        color_of(np.array([[1, 2], [0, 0]], dtype=np.int8))
    with pytest.raises(ValueError):
        color_of(np.zeros((2, 2), dtype=np.int8))


def test_random_kind_is_seeded_and_covers_catalog():
    rng_a, rng_b = random.Random(7), random.Random(7)
    assert [random_kind(rng_a) for _ in range(20)] == [random_kind(rng_b) for _ in range(20)]
    rng = random.Random(0)
    seen = {random_kind(rng) for _ in range(500)}
    assert seen == set(TetrominoType)
    assert CellValue.EMPTY not in seen
