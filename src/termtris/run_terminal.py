"""Curses front-end for playing in a terminal.

Rendering is split into :func:`render_lines`, a pure function from a
:class:`~termtris.engine.Snapshot` to text, and :class:`TerminalRunner`,
which owns the curses screen, polls keys and paces frames.
"""

from __future__ import annotations

import curses
import logging
import time
from typing import Callable, List, Optional

from .board import Cell
from .engine import Engine, Snapshot
from .game_state import Command
from .keys import KeyDecoder
from .tetromino import piece_mask


LOGGER = logging.getLogger(__name__)

# One glyph per piece kind, indexed by kind id.
GLYPHS = "@#%*+xo"

CONTROLS = "Controls: a/d left-right, w rotate, s soft drop, space hard drop, p pause, q quit"
PAUSED_BANNER = "*** PAUSED - press 'p' to resume ***"

# Seconds slept between frames while playing and while paused.
FRAME_DELAY = 0.02
PAUSE_DELAY = 0.1


def glyph(cell: Cell) -> str:
    return " " if cell is None else GLYPHS[int(cell) % len(GLYPHS)]


def render_lines(snapshot: Snapshot) -> List[str]:
    """Return the text frame for ``snapshot``, one string per screen line."""

    grid = snapshot.overlay()
    width = len(grid[0])
    border = "+" + "-" * width + "+"
    lines = [border]
    lines.extend("|" + "".join(glyph(cell) for cell in row) + "|" for row in grid)
    lines.append(border)
    lines.append(f"Score: {snapshot.score}  Level: {snapshot.level}  Lines: {snapshot.lines}")
    lines.append("Next:")
    preview = piece_mask(snapshot.upcoming)
    for mask_row in preview:
        lines.append("".join(glyph(snapshot.upcoming) if filled else " " for filled in mask_row))
    lines.append(CONTROLS)
    if snapshot.paused:
        lines.append(PAUSED_BANNER)
    return lines


def game_over_message(snapshot: Snapshot) -> str:
    return f"GAME OVER! Final Score: {snapshot.score}"


class TerminalRunner:
    """Run an :class:`Engine` inside a curses screen until the game ends."""

    def __init__(
        self,
        engine: Engine,
        *,
        frame_delay: float = FRAME_DELAY,
        pause_delay: float = PAUSE_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.engine = engine
        self.frame_delay = frame_delay
        self.pause_delay = pause_delay
        self._sleep = sleep
        self._decoder = KeyDecoder()

    def poll(self, screen) -> List[Command]:
        """Drain every key currently waiting, without blocking."""

        codes = []
        while True:
            code = screen.getch()
            if code == -1:
                break
            codes.append(code)
        return self._decoder.decode(codes)

    def draw(self, screen, lines: List[str]) -> None:
        screen.erase()
        for row, line in enumerate(lines):
            try:
                screen.addstr(row, 0, line)
            except curses.error:
                # Terminal too small for the full frame; draw what fits.
                break
        screen.refresh()

    def _setup(self, screen) -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            LOGGER.debug("Terminal cannot hide the cursor")
        screen.nodelay(True)
        screen.keypad(True)

    def run(self, screen) -> Snapshot:
        """Play until quit or block-out and return the final snapshot."""

        self._setup(screen)
        engine = self.engine
        while not engine.game_over:
            engine.handle_all(self.poll(screen))
            if engine.paused:
                self.draw(screen, render_lines(engine.snapshot()))
                self._sleep(self.pause_delay)
                continue
            engine.update()
            self.draw(screen, render_lines(engine.snapshot()))
            self._sleep(self.frame_delay)
        return engine.snapshot()


def play(engine: Optional[Engine] = None, *, frame_delay: float = FRAME_DELAY) -> Snapshot:
    """Play a terminal session and print the final board on exit.

    ``curses.wrapper`` restores the terminal mode on every exit path,
    including exceptions raised by the loop.
    """

    runner = TerminalRunner(engine or Engine(), frame_delay=frame_delay)
    LOGGER.info("Starting terminal session")
    final = curses.wrapper(runner.run)
    print("\n".join(render_lines(final)))
    print(game_over_message(final))
    return final
