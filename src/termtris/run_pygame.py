"""Simple pygame front-end for the engine.

Draws the same :class:`~termtris.engine.Snapshot` the terminal front-end
uses, in a window, with arrow keys or WASD for control.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import pygame

from .board import BOARD_H, BOARD_W, Cell
from .engine import Engine, Snapshot
from .game_state import Command
from .tetromino import PieceKind, mask_cells, piece_mask

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the side panel holding the preview and counters
PANEL_WIDTH = 6 * CELL_SIZE
# Frames per second to run the game loop at
FPS = 60

LOGGER = logging.getLogger(__name__)

SHAPE_COLORS: Dict[PieceKind, tuple[int, int, int]] = {
    PieceKind.I: (0, 255, 255),
    PieceKind.J: (0, 0, 255),
    PieceKind.L: (255, 165, 0),
    PieceKind.O: (255, 255, 0),
    PieceKind.S: (0, 255, 0),
    PieceKind.T: (128, 0, 128),
    PieceKind.Z: (255, 0, 0),
}
EMPTY_COLOR = (0, 0, 0)
GRID_COLOR = (50, 50, 50)
TEXT_COLOR = (230, 230, 230)

KEY_COMMANDS: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_a: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_d: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_s: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_w: Command.ROTATE,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_q: Command.QUIT,
    pygame.K_ESCAPE: Command.QUIT,
}


def commands_from_events(events) -> List[Command]:
    """Return the commands for the key presses in ``events``.

    Closing the window counts as quitting.
    """

    commands = []
    for event in events:
        if event.type == pygame.QUIT:
            commands.append(Command.QUIT)
        elif event.type == pygame.KEYDOWN and event.key in KEY_COMMANDS:
            commands.append(KEY_COMMANDS[event.key])
    return commands


def cell_color(cell: Cell) -> tuple[int, int, int]:
    return EMPTY_COLOR if cell is None else SHAPE_COLORS[cell]


def _draw_cell(screen: pygame.Surface, color, col: int, row: int, left: int = 0, top: int = 0) -> None:
    rect = pygame.Rect(left + col * CELL_SIZE, top + row * CELL_SIZE, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color, rect)
    pygame.draw.rect(screen, GRID_COLOR, rect, 1)


def draw_board(screen: pygame.Surface, snapshot: Snapshot) -> None:
    """Render the board with the active piece overlaid."""

    for r, row in enumerate(snapshot.overlay()):
        for c, cell in enumerate(row):
            _draw_cell(screen, cell_color(cell), c, r)


def draw_panel(screen: pygame.Surface, snapshot: Snapshot, font: pygame.font.Font) -> None:
    """Render the next-piece preview and the counters."""

    left = BOARD_W * CELL_SIZE + CELL_SIZE
    color = SHAPE_COLORS[snapshot.upcoming]
    for r, c in mask_cells(piece_mask(snapshot.upcoming)):
        _draw_cell(screen, color, c, r, left=left, top=CELL_SIZE)
    labels = [
        f"Score: {snapshot.score}",
        f"Level: {snapshot.level}",
        f"Lines: {snapshot.lines}",
    ]
    if snapshot.paused:
        labels.append("PAUSED")
    if snapshot.game_over:
        labels.append("GAME OVER")
    for i, text in enumerate(labels):
        surface = font.render(text, True, TEXT_COLOR)
        screen.blit(surface, (left, 6 * CELL_SIZE + i * CELL_SIZE))


class GameRunner:
    """Manage the window and game loop for one session."""

    def __init__(self, engine: Optional[Engine] = None) -> None:
        self.engine = engine or Engine()
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None

    def _draw(self, snapshot: Snapshot) -> None:
        self._screen.fill(EMPTY_COLOR)
        draw_board(self._screen, snapshot)
        draw_panel(self._screen, snapshot, self._font)
        pygame.display.set_caption(
            f"Tetris - {'Paused - ' if snapshot.paused else ''}Score: {snapshot.score}"
        )
        pygame.display.flip()

    def run(self) -> Snapshot:
        """Play until the game ends and return the final snapshot."""

        pygame.init()
        try:
            size = (BOARD_W * CELL_SIZE + PANEL_WIDTH, BOARD_H * CELL_SIZE)
            self._screen = pygame.display.set_mode(size)
            self._clock = pygame.time.Clock()
            self._font = pygame.font.Font(None, CELL_SIZE)
            LOGGER.info("Starting pygame session")

            while not self.engine.game_over:
                self._clock.tick(FPS)
                snapshot = self.engine.frame(commands_from_events(pygame.event.get()))
                self._draw(snapshot)
            final = self.engine.snapshot()
            self._draw(final)
            LOGGER.info("Game over. Final score %d", final.score)
            return final
        finally:
            pygame.quit()


def main() -> None:
    GameRunner().run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
