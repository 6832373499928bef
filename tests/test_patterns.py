import numpy as np
import pytest

from illness_ca.utils.board import Board, RuleParameters
from illness_ca.utils.patterns import get_all_patterns, get_pattern, place_pattern


def test_get_pattern_returns_copy():
    pattern = get_pattern('illed_cross')
    pattern[1, 1] = 0
    assert get_pattern('illed_cross')[1, 1] == 255


def test_unknown_pattern():
    with pytest.raises(ValueError):
        get_pattern('glider')


def test_all_patterns_are_bytes():
    for category in get_all_patterns().values():
        for pattern in category.values():
            assert pattern.dtype == np.uint8
            assert pattern.ndim == 2


def test_place_pattern_centered_and_cropped():
    grid = place_pattern((5, 5), get_pattern('infected_block'))
    assert np.array_equal(grid[1:4, 1:4], np.full((3, 3), 60))
    assert int(grid.sum()) == 9 * 60

    cropped = place_pattern((4, 4), get_pattern('infected_block'), position=(2, 2))
    assert int(cropped.sum()) == 4 * 60


def test_place_oversized_pattern_centered():
    grid = place_pattern((3, 3), get_pattern('outbreak'))
    assert np.array_equal(grid, get_pattern('outbreak')[1:4, 1:4])


def test_place_pattern_negative_position():
    grid = place_pattern((4, 4), get_pattern('infected_block'), position=(-1, -1))
    expected = np.zeros((4, 4), dtype=np.uint8)
    expected[:2, :2] = 60
    assert np.array_equal(grid, expected)


def test_place_pattern_fully_outside():
    grid = place_pattern((4, 4), get_pattern('infected_block'), position=(10, -10))
    assert not grid.any()


def test_illed_cross_clears_in_one_step():
    board = Board.from_array(place_pattern((9, 9), get_pattern('illed_cross')))
    board.step(RuleParameters(k1=2.0, k2=3.0, g=3))
    # illed cells reset; healthy cells with 3+ illed neighbors get infected
    assert board.value(4, 4) == 0
    assert board.value(3, 3) == 1
    assert board.value(5, 5) == 1
    assert board.value(4, 2) == 0
