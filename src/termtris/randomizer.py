"""Sources for the next piece kind."""

from __future__ import annotations

import random
from typing import Iterable, Iterator, Optional, Protocol

from .tetromino import PieceKind, piece_kind


class PieceGenerator(Protocol):
    """Anything that hands out piece kinds one at a time."""

    def next_kind(self) -> PieceKind:
        ...


class RandomPieceGenerator:
    """Draw each kind independently and uniformly from the seven kinds."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def seed(self, seed: Optional[int]) -> None:
        self._random.seed(seed)

    def next_kind(self) -> PieceKind:
        return self._random.choice(list(PieceKind))


class SequencePieceGenerator:
    """Replay a fixed sequence of kinds, optionally cycling forever.

    Useful for tests and demos that need an exact spawn order.  A
    non-cycling sequence raises :class:`StopIteration` once exhausted.
    """

    def __init__(self, kinds: Iterable[int], *, cycle: bool = False) -> None:
        self._kinds = [piece_kind(k) for k in kinds]
        if not self._kinds:
            raise ValueError("Sequence must contain at least one piece kind")
        self._cycle = cycle
        self._iter: Iterator[PieceKind] = iter(self._kinds)

    def next_kind(self) -> PieceKind:
        try:
            return next(self._iter)
        except StopIteration:
            if not self._cycle:
                raise
            self._iter = iter(self._kinds)
            return next(self._iter)
