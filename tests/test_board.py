from __future__ import annotations

import numpy as np
import pytest

from termtris.board import BOARD_H, BOARD_W, Board
from termtris.tetromino import PieceKind, piece_mask


I_FLAT = piece_mask(PieceKind.I, 0)  # occupies mask row 1, columns 0..3


def test_new_board_is_empty() -> None:
    board = Board()
    assert board.grid.shape == (BOARD_H, BOARD_W)
    assert all(cell is None for row in board.rows() for cell in row)


def test_cell_round_trips_piece_kind() -> None:
    board = Board()
    board.set_cell(5, 2, PieceKind.Z)
    assert board.cell(5, 2) is PieceKind.Z
    board.set_cell(5, 2, None)
    assert board.cell(5, 2) is None


def test_cell_access_out_of_bounds_raises() -> None:
    board = Board()
    with pytest.raises(IndexError):
        board.cell(BOARD_H, 0)
    with pytest.raises(IndexError):
        board.set_cell(0, -1, PieceKind.I)


def test_blocked_by_side_walls() -> None:
    board = Board()
    assert board.is_blocked(I_FLAT, -1, 5)
    assert not board.is_blocked(I_FLAT, 0, 5)
    assert not board.is_blocked(I_FLAT, 6, 5)
    assert board.is_blocked(I_FLAT, 7, 5)


def test_blocked_by_floor() -> None:
    board = Board()
    assert not board.is_blocked(I_FLAT, 0, BOARD_H - 2)
    assert board.is_blocked(I_FLAT, 0, BOARD_H - 1)


def test_blocked_by_occupied_cell() -> None:
    board = Board()
    board.set_cell(19, 3, PieceKind.T)
    assert board.is_blocked(I_FLAT, 0, 18)
    assert not board.is_blocked(I_FLAT, 4, 18)


def test_cells_above_board_ignore_occupancy_but_not_walls() -> None:
    board = Board()
    board.fill_row(0)
    # Mask row 1 lands on board row -1, above the filled row.
    assert not board.is_blocked(I_FLAT, 0, -2)
    assert board.is_blocked(I_FLAT, 0, -1)
    assert board.is_blocked(I_FLAT, -1, -5)
    assert board.is_blocked(I_FLAT, 7, -5)


def test_lock_writes_only_the_piece_cells() -> None:
    board = Board()
    board.set_cell(19, 0, PieceKind.S)
    before = board.grid.copy()
    mask = piece_mask(PieceKind.T, 0)

    written = board.lock(mask, PieceKind.T, 3, 10)

    assert written == 4
    covered = {(10, 4), (11, 3), (11, 4), (11, 5)}
    for row in range(BOARD_H):
        for col in range(BOARD_W):
            if (row, col) in covered:
                assert board.cell(row, col) is PieceKind.T
            else:
                assert board.grid[row, col] == before[row, col]


def test_lock_drops_cells_above_board() -> None:
    board = Board()
    written = board.lock(piece_mask(PieceKind.T, 0), PieceKind.T, 3, -1)
    assert written == 3
    assert [board.cell(0, c) for c in range(3, 6)] == [PieceKind.T] * 3


def test_clear_two_separate_rows_shifts_content_down() -> None:
    board = Board()
    board.fill_row(2)
    board.fill_row(5)
    markers = {
        (0, 0): PieceKind.I,
        (1, 1): PieceKind.J,
        (3, 3): PieceKind.L,
        (4, 4): PieceKind.O,
        (6, 6): PieceKind.S,
        (19, 9): PieceKind.Z,
    }
    for (row, col), kind in markers.items():
        board.set_cell(row, col, kind)

    assert board.full_rows() == [2, 5]
    assert board.clear_full_rows() == 2

    # Rows above row 2 fall two rows, rows between 2 and 5 fall one.
    assert board.cell(2, 0) is PieceKind.I
    assert board.cell(3, 1) is PieceKind.J
    assert board.cell(4, 3) is PieceKind.L
    assert board.cell(5, 4) is PieceKind.O
    assert board.cell(6, 6) is PieceKind.S
    assert board.cell(19, 9) is PieceKind.Z
    assert all(cell is None for cell in board.rows()[0])
    assert all(cell is None for cell in board.rows()[1])
    assert int(np.count_nonzero(board.grid)) == len(markers)


def test_clear_adjacent_rows_rechecks_same_index() -> None:
    board = Board()
    for row in range(16, 20):
        board.fill_row(row)
    board.set_cell(15, 7, PieceKind.L)
    assert board.clear_full_rows() == 4
    assert board.cell(19, 7) is PieceKind.L
    assert int(np.count_nonzero(board.grid)) == 1


def test_clear_whole_board() -> None:
    board = Board()
    for row in range(BOARD_H):
        board.fill_row(row)
    assert board.clear_full_rows() == BOARD_H
    assert not board.grid.any()


def test_no_full_rows_leaves_board_alone() -> None:
    board = Board()
    board.set_cell(19, 0, PieceKind.O)
    before = board.grid.copy()
    assert board.clear_full_rows() == 0
    assert np.array_equal(board.grid, before)


def test_copy_is_independent() -> None:
    board = Board()
    clone = board.copy()
    clone.set_cell(0, 0, PieceKind.I)
    assert board.cell(0, 0) is None
