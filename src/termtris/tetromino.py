"""Tetromino definitions and rotation.

Every shape is embedded top-left into a 4x4 frame so that a single generic
clockwise transform rotates all seven pieces, whatever their source footprint
(2x2 for ``O``, 3x3 for ``J``/``L``/``S``/``T``/``Z`` and 4x4 for ``I``).
"""

from __future__ import annotations

from enum import IntEnum
from functools import lru_cache
from typing import Dict, List

import numpy as np
from numpy.typing import NDArray

Mask = NDArray[np.bool_]

FRAME = 4


class PieceKind(IntEnum):
    """The seven tetromino kinds, identified by a stable small integer."""

    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    T = 5
    Z = 6


# Spawn orientation footprints.  ``X`` marks an occupied cell.
_SOURCE_SHAPES: Dict[PieceKind, List[str]] = {
    PieceKind.I: ["....", "XXXX", "....", "...."],
    PieceKind.J: ["X..", "XXX", "..."],
    PieceKind.L: ["..X", "XXX", "..."],
    PieceKind.O: ["XX", "XX"],
    PieceKind.S: [".XX", "XX.", "..."],
    PieceKind.T: [".X.", "XXX", "..."],
    PieceKind.Z: ["XX.", ".XX", "..."],
}


def _embed(rows: List[str]) -> Mask:
    """Return ``rows`` placed top-left in a cleared 4x4 frame."""

    mask = np.zeros((FRAME, FRAME), dtype=bool)
    for r, line in enumerate(rows):
        for c, ch in enumerate(line):
            mask[r, c] = ch == "X"
    return mask


def _frozen(mask: Mask) -> Mask:
    mask = np.array(mask, dtype=bool)
    mask.setflags(write=False)
    return mask


BASE_MASKS: Dict[PieceKind, Mask] = {
    kind: _frozen(_embed(rows)) for kind, rows in _SOURCE_SHAPES.items()
}


def rotate_clockwise(mask: Mask) -> Mask:
    """Return ``mask`` rotated 90 degrees clockwise.

    Implements ``new[r][c] = old[3 - c][r]``: flipping the rows and then
    transposing yields exactly that mapping.
    """

    return mask[::-1].T.copy()


def piece_kind(kind: int) -> PieceKind:
    """Return ``kind`` as a :class:`PieceKind`.

    Raises:
        ValueError: If ``kind`` is not one of the seven piece ids.
    """

    try:
        return PieceKind(kind)
    except ValueError:
        raise ValueError(f"Unknown piece kind: {kind!r}") from None


@lru_cache(maxsize=None)
def _rotated(kind: PieceKind, turns: int) -> Mask:
    mask = BASE_MASKS[kind]
    for _ in range(turns):
        mask = rotate_clockwise(mask)
    return _frozen(mask)


def piece_mask(kind: int, rotation: int = 0) -> Mask:
    """Return the read-only 4x4 occupancy mask for ``kind`` at ``rotation``.

    Parameters
    ----------
    kind:
        Piece id in ``0..6`` (or a :class:`PieceKind`).
    rotation:
        Number of clockwise quarter turns from the spawn orientation.  Any
        integer is accepted; negative values are normalised into ``0..3``
        before rotating.
    """

    return _rotated(piece_kind(kind), rotation % 4)


def mask_cells(mask: Mask) -> List[tuple[int, int]]:
    """Return the ``(row, col)`` offsets of the occupied cells in ``mask``."""

    rows, cols = np.nonzero(mask)
    return [(int(r), int(c)) for r, c in zip(rows, cols)]
