"""Board representation for the playfield."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import Mask, PieceKind, mask_cells, piece_kind


# Dimensions of the playfield.  Not configurable.
BOARD_W = 10
BOARD_H = 20

Grid = NDArray[np.uint8]

# Grid storage: ``0`` is empty and ``kind + 1`` marks an occupied cell.  The
# offset never leaves this module; callers see ``Optional[PieceKind]``.
EMPTY = 0

Cell = Optional[PieceKind]


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((BOARD_H, BOARD_W), dtype=np.uint8)


def _decode(value: int) -> Cell:
    return None if value == EMPTY else PieceKind(value - 1)


class Board:
    """Fixed-size grid of locked cells, rows ordered top (0) to bottom."""

    width: int = BOARD_W
    height: int = BOARD_H

    def __init__(self, grid: Optional[Grid] = None) -> None:
        self.grid: Grid = create_empty_grid() if grid is None else grid

    def copy(self) -> "Board":
        """Return an independent copy of this board."""

        return Board(self.grid.copy())

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def cell(self, row: int, col: int) -> Cell:
        """Return the piece kind occupying ``(row, col)`` or ``None``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(row, col):
            return _decode(int(self.grid[row, col]))
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, kind: Cell) -> None:
        """Set ``(row, col)`` to ``kind`` (``None`` clears the cell).

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if not self.in_bounds(row, col):
            raise IndexError("Cell out of bounds")
        value = EMPTY if kind is None else piece_kind(kind) + 1
        self.grid[row, col] = np.uint8(value)

    def fill_row(self, row: int, kind: PieceKind = PieceKind.I) -> None:
        """Occupy every cell of ``row`` with ``kind``."""

        self.grid[row, :] = np.uint8(piece_kind(kind) + 1)

    def rows(self) -> Tuple[Tuple[Cell, ...], ...]:
        """Return an immutable view of the whole grid as option cells."""

        return tuple(tuple(_decode(int(v)) for v in row) for row in self.grid)

    def is_blocked(self, mask: Mask, x: int, y: int) -> bool:
        """Return ``True`` if ``mask`` placed with its top-left at ``(x, y)``
        collides.

        A cell collides when its column leaves ``[0, width)``, its row is at or
        below ``height``, or it lands on an occupied cell.  Rows above the
        board (negative) never collide with occupancy, which lets pieces
        spawn partly off the top; their columns are still checked.
        """

        for r, c in mask_cells(mask):
            row = y + r
            col = x + c
            if col < 0 or col >= self.width or row >= self.height:
                return True
            if row >= 0 and self.grid[row, col] != EMPTY:
                return True
        return False

    def lock(self, mask: Mask, kind: int, x: int, y: int) -> int:
        """Write ``mask`` into the grid as ``kind`` at ``(x, y)``.

        Cells outside the board, including those above the top row, are
        dropped.  Returns how many cells were written.
        """

        value = np.uint8(piece_kind(kind) + 1)
        written = 0
        for r, c in mask_cells(mask):
            row = y + r
            col = x + c
            if self.in_bounds(row, col):
                self.grid[row, col] = value
                written += 1
        return written

    def full_rows(self) -> list[int]:
        """Return the indices of completely occupied rows, top to bottom."""

        return [int(r) for r in np.flatnonzero(np.all(self.grid != EMPTY, axis=1))]

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Rows are scanned bottom to top.  A full row is removed by shifting
        every row above it down by one and emptying row ``0``; the same index
        is then examined again since new content moved into it.
        """

        cleared = 0
        row = self.height - 1
        while row >= 0:
            if np.all(self.grid[row] != EMPTY):
                cleared += 1
                self.grid[1 : row + 1] = self.grid[0:row].copy()
                self.grid[0] = EMPTY
                continue
            row -= 1
        return cleared
