import numpy as np
import pytest

from falling_block_rl.game import Board, Piece, PieceKind, render_text


def test_is_occupied():
    board = Board(25, 40)
    board.grid[39, 0] = int(PieceKind.T)
    assert board.is_occupied(0, 39)
    assert not board.is_occupied(1, 39)
    assert not board.is_occupied(0, -1)
    assert not board.is_occupied(-1, 39)
    assert not board.is_occupied(25, 0)


def test_fits_allows_rows_above_the_top():
    board = Board(25, 40)
    assert board.fits([(0, -3), (24, -1)])
    assert not board.fits([(-1, 0)])
    assert not board.fits([(25, 0)])
    assert not board.fits([(3, 40)])
    board.grid[5, 5] = 1
    assert not board.fits([(5, 5)])


def test_place_skips_cells_above_the_top():
    board = Board(25, 40)
    board.place(Piece(PieceKind.T, 0, -1))
    assert int(np.count_nonzero(board.grid)) == 3
    assert list(board.grid[0, :3]) == [3, 3, 3]


def test_clear_two_separated_rows():
    board = Board(6, 12)
    for row in range(12):
        board.grid[row, row % 6] = 2
    board.grid[5, :] = 1
    board.grid[7, :] = 1
    before = board.clone_state()

    assert board.clear_full_lines() == 2

    after = board.grid
    assert not after[0].any()
    assert not after[1].any()
    assert np.array_equal(after[2:7], before[0:5])
    assert np.array_equal(after[7], before[6])
    assert np.array_equal(after[8:], before[8:])
    assert after.shape == (12, 6)


def test_clear_four_rows():
    board = Board(25, 40)
    board.grid[36:40, :] = 1
    board.grid[35, 3] = 4
    assert board.clear_full_lines() == 4
    assert board.grid[39, 3] == 4
    assert int(np.count_nonzero(board.grid)) == 1


def test_clear_nothing():
    board = Board(25, 40)
    board.grid[39, 1:] = 1
    assert board.clear_full_lines() == 0
    assert int(np.count_nonzero(board.grid)) == 24


def test_board_features():
    board = Board(4, 6)
    assert board.get_max_height() == 0
    board.grid[3, 1] = 1
    assert board.get_max_height() == 3
    assert board.count_holes() == 2


def test_invalid_size():
    with pytest.raises(ValueError):
        Board(0, 10)


def test_render_text():
    board = Board(3, 2)
    board.grid[1, 0] = 1
    grid = board.clone_state()
    grid[0, 2] = -1
    assert render_text(grid) == "··░\n█··"
