"""Game state container and its transitions.

The transitions are pure: each takes a :class:`GameState` and returns a
:class:`StepResult` holding a new state, leaving the input untouched.  The
only outside influence is the piece generator, which is passed in explicitly
so tests can supply an exact spawn order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import NamedTuple, Optional

from .board import BOARD_W, Board
from .randomizer import PieceGenerator
from .tetromino import FRAME, Mask, PieceKind, piece_mask
from .utils import level_for_lines, line_clear_score


LOGGER = logging.getLogger(__name__)

# Top-left of the 4x4 frame for a freshly spawned piece: centred
# horizontally, two rows above the visible board.
SPAWN_X = BOARD_W // 2 - FRAME // 2
SPAWN_Y = -2


class Command(Enum):
    """Decoded player commands accepted by the engine."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE = "rotate"
    HARD_DROP = "hard_drop"
    TOGGLE_PAUSE = "toggle_pause"
    QUIT = "quit"


class Outcome(Enum):
    """What a transition did to the state."""

    IGNORED = "ignored"
    REJECTED = "rejected"
    MOVED = "moved"
    ROTATED = "rotated"
    LOCKED = "locked"
    SPAWNED = "spawned"
    PAUSED = "paused"
    RESUMED = "resumed"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class ActivePiece:
    """The falling piece: kind, clockwise rotation and frame position."""

    kind: PieceKind
    rotation: int = 0
    x: int = SPAWN_X
    y: int = SPAWN_Y

    @property
    def mask(self) -> Mask:
        return piece_mask(self.kind, self.rotation)

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "ActivePiece":
        return replace(self, rotation=(self.rotation + 1) % 4)


@dataclass
class GameState:
    """State of one play session."""

    board: Board = field(default_factory=Board)
    active: Optional[ActivePiece] = None
    upcoming: PieceKind = PieceKind.I
    score: int = 0
    lines: int = 0
    paused: bool = False
    game_over: bool = False

    @property
    def level(self) -> int:
        return level_for_lines(self.lines)

    def copy(self) -> "GameState":
        """Return a copy whose board can be mutated independently."""

        return replace(self, board=self.board.copy())

    def fits(self, piece: ActivePiece) -> bool:
        return not self.board.is_blocked(piece.mask, piece.x, piece.y)


class StepResult(NamedTuple):
    state: GameState
    outcome: Outcome
    lines_cleared: int = 0
    reset_gravity: bool = False


def _blocked_out(board: Board, piece: ActivePiece) -> bool:
    # Cells above the board never collide, so a piece at SPAWN_Y always fits.
    # One row lower every mask first reaches row 0.
    return any(board.is_blocked(piece.mask, piece.x, y) for y in range(piece.y, piece.y + 2))


def _spawn(state: GameState, generator: PieceGenerator) -> bool:
    """Promote the upcoming kind in place; return ``False`` on block-out."""

    state.active = ActivePiece(state.upcoming)
    state.upcoming = generator.next_kind()
    if _blocked_out(state.board, state.active):
        state.game_over = True
        LOGGER.info("Game over: no room to spawn %s. Final score %d", state.active.kind.name, state.score)
        return False
    return True


def _lock(state: GameState, generator: PieceGenerator) -> int:
    """Lock the active piece in place, clear rows, score and respawn."""

    piece = state.active
    state.board.lock(piece.mask, piece.kind, piece.x, piece.y)
    cleared = state.board.clear_full_rows()
    LOGGER.debug("Locked %s at (%d, %d); cleared %d row(s)", piece.kind.name, piece.x, piece.y, cleared)
    if cleared:
        state.score += line_clear_score(cleared, state.level)
        state.lines += cleared
    _spawn(state, generator)
    return cleared


def _locked(state: GameState, generator: PieceGenerator) -> StepResult:
    new = state.copy()
    cleared = _lock(new, generator)
    outcome = Outcome.GAME_OVER if new.game_over else Outcome.LOCKED
    return StepResult(new, outcome, cleared, True)


def new_game(generator: PieceGenerator) -> GameState:
    """Start a session on an empty board with the first piece spawned."""

    state = GameState(upcoming=generator.next_kind())
    _spawn(state, generator)
    LOGGER.info("New game: first piece %s, next %s", state.active.kind.name, state.upcoming.name)
    return state


def spawn(state: GameState, generator: PieceGenerator) -> StepResult:
    """Replace the active piece with the upcoming one.

    Sets the terminal game-over flag when the new piece cannot enter the
    board.
    """

    if state.game_over:
        return StepResult(state, Outcome.IGNORED)
    new = state.copy()
    if _spawn(new, generator):
        return StepResult(new, Outcome.SPAWNED)
    return StepResult(new, Outcome.GAME_OVER)


def _shift(state: GameState, dx: int) -> StepResult:
    candidate = state.active.moved(dx, 0)
    if not state.fits(candidate):
        return StepResult(state, Outcome.REJECTED)
    return StepResult(replace(state, active=candidate), Outcome.MOVED)


def _rotate(state: GameState) -> StepResult:
    candidate = state.active.rotated()
    if not state.fits(candidate):
        return StepResult(state, Outcome.REJECTED)
    return StepResult(replace(state, active=candidate), Outcome.ROTATED)


def _soft_drop(state: GameState, generator: PieceGenerator) -> StepResult:
    candidate = state.active.moved(0, 1)
    if state.fits(candidate):
        return StepResult(replace(state, active=candidate), Outcome.MOVED, 0, True)
    return _locked(state, generator)


def _hard_drop(state: GameState, generator: PieceGenerator) -> StepResult:
    piece = state.active
    while state.fits(piece.moved(0, 1)):
        piece = piece.moved(0, 1)
    return _locked(replace(state, active=piece), generator)


def apply_command(state: GameState, command: Command, generator: PieceGenerator) -> StepResult:
    """Return the result of applying the player ``command`` to ``state``.

    Blocked moves and rotations are rejected without changing anything.
    While paused only :attr:`Command.TOGGLE_PAUSE` and :attr:`Command.QUIT`
    have an effect, and once the game is over nothing does.
    """

    if not isinstance(command, Command):
        raise TypeError(f"Expected a Command, got {command!r}")
    if state.game_over:
        return StepResult(state, Outcome.IGNORED)
    if command is Command.QUIT:
        LOGGER.info("Quit requested. Final score %d", state.score)
        return StepResult(replace(state, game_over=True), Outcome.GAME_OVER)
    if command is Command.TOGGLE_PAUSE:
        paused = not state.paused
        LOGGER.info("Paused" if paused else "Resumed")
        return StepResult(replace(state, paused=paused), Outcome.PAUSED if paused else Outcome.RESUMED)
    if state.paused:
        return StepResult(state, Outcome.IGNORED)

    if command is Command.MOVE_LEFT:
        return _shift(state, -1)
    if command is Command.MOVE_RIGHT:
        return _shift(state, 1)
    if command is Command.ROTATE:
        return _rotate(state)
    if command is Command.SOFT_DROP:
        return _soft_drop(state, generator)
    return _hard_drop(state, generator)


def apply_gravity(state: GameState, generator: PieceGenerator) -> StepResult:
    """Return the result of one gravity tick.

    The piece falls one row, or locks when it cannot.
    """

    if state.game_over or state.paused:
        return StepResult(state, Outcome.IGNORED)
    candidate = state.active.moved(0, 1)
    if state.fits(candidate):
        return StepResult(replace(state, active=candidate), Outcome.MOVED, 0, True)
    return _locked(state, generator)
