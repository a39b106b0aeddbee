"""Simulation driver gluing player commands and gravity to the game state.

One :class:`Engine` owns a session: the current :class:`GameState`, the
piece generator and the clock used for gravity.  Front-ends feed it decoded
commands, call :meth:`Engine.update` once per frame and draw from
:meth:`Engine.snapshot`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from .board import Cell
from .game_state import (
    Command,
    GameState,
    Outcome,
    StepResult,
    apply_command,
    apply_gravity,
    new_game,
)
from .randomizer import PieceGenerator, RandomPieceGenerator
from .tetromino import Mask, PieceKind, mask_cells
from .utils import gravity_interval


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Snapshot:
    """Read-only view of a session for renderers."""

    board: Tuple[Tuple[Cell, ...], ...]
    active_kind: PieceKind
    active_mask: Mask
    position: Tuple[int, int]  # (x, y) of the mask's top-left corner
    upcoming: PieceKind
    score: int
    level: int
    lines: int
    paused: bool
    game_over: bool
    gravity_interval: float

    @classmethod
    def of(cls, state: GameState) -> "Snapshot":
        piece = state.active
        return cls(
            board=state.board.rows(),
            active_kind=piece.kind,
            active_mask=piece.mask,
            position=(piece.x, piece.y),
            upcoming=state.upcoming,
            score=state.score,
            level=state.level,
            lines=state.lines,
            paused=state.paused,
            game_over=state.game_over,
            gravity_interval=gravity_interval(state.level),
        )

    def overlay(self) -> List[List[Cell]]:
        """Return the board rows with the active piece drawn in."""

        grid = [list(row) for row in self.board]
        x, y = self.position
        for r, c in mask_cells(self.active_mask):
            row, col = y + r, x + c
            if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
                grid[row][col] = self.active_kind
        return grid


class Engine:
    """Drive one play session from commands and elapsed time."""

    def __init__(
        self,
        generator: Optional[PieceGenerator] = None,
        *,
        clock: Optional[Callable[[], float]] = None,
        state: Optional[GameState] = None,
    ) -> None:
        self.generator = generator or RandomPieceGenerator()
        self._clock = clock or time.monotonic
        self.state = state if state is not None else new_game(self.generator)
        self._last_fall = self._clock()

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def paused(self) -> bool:
        return self.state.paused

    @property
    def gravity_interval(self) -> float:
        return gravity_interval(self.state.level)

    def reset_gravity_timer(self) -> None:
        self._last_fall = self._clock()

    def _commit(self, result: StepResult) -> StepResult:
        self.state = result.state
        if result.reset_gravity:
            self.reset_gravity_timer()
        if result.lines_cleared:
            LOGGER.debug(
                "Cleared %d row(s): score=%d lines=%d level=%d",
                result.lines_cleared,
                self.state.score,
                self.state.lines,
                self.state.level,
            )
        return result

    def handle(self, command: Command) -> StepResult:
        """Apply one decoded player command."""

        return self._commit(apply_command(self.state, command, self.generator))

    def handle_all(self, commands: Iterable[Command]) -> List[StepResult]:
        """Apply every pending command in order."""

        return [self.handle(command) for command in commands]

    def tick(self) -> StepResult:
        """Force a gravity tick regardless of elapsed time."""

        result = self._commit(apply_gravity(self.state, self.generator))
        if result.outcome is not Outcome.IGNORED:
            self.reset_gravity_timer()
        return result

    def update(self) -> Optional[StepResult]:
        """Run at most one gravity tick if its interval has elapsed.

        Returns the tick's result, or ``None`` when no tick was due.  Time
        keeps accruing while paused, so the first update after resuming may
        drop the piece straight away.
        """

        if self.state.game_over or self.state.paused:
            return None
        if self._clock() - self._last_fall < self.gravity_interval:
            return None
        return self.tick()

    def snapshot(self) -> Snapshot:
        return Snapshot.of(self.state)

    def frame(self, commands: Iterable[Command]) -> Snapshot:
        """Run one loop iteration: drain ``commands``, apply gravity, snapshot."""

        self.handle_all(commands)
        self.update()
        return self.snapshot()
