"""Falling-block puzzle engine with terminal and pygame front-ends."""

from .board import BOARD_H, BOARD_W, Board
from .tetromino import PieceKind, piece_mask, rotate_clockwise
from .randomizer import PieceGenerator, RandomPieceGenerator, SequencePieceGenerator
from .game_state import (
    ActivePiece,
    Command,
    GameState,
    Outcome,
    StepResult,
    apply_command,
    apply_gravity,
    new_game,
    spawn,
)
from .engine import Engine, Snapshot
from .keys import KeyDecoder
from .utils import gravity_interval, level_for_lines, line_clear_score

__all__ = [
    "BOARD_H",
    "BOARD_W",
    "Board",
    "PieceKind",
    "piece_mask",
    "rotate_clockwise",
    "PieceGenerator",
    "RandomPieceGenerator",
    "SequencePieceGenerator",
    "ActivePiece",
    "Command",
    "GameState",
    "Outcome",
    "StepResult",
    "apply_command",
    "apply_gravity",
    "new_game",
    "spawn",
    "Engine",
    "Snapshot",
    "KeyDecoder",
    "gravity_interval",
    "level_for_lines",
    "line_clear_score",
]
