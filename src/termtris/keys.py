"""Translate raw key codes into engine commands.

Codes come from ``curses.getch`` one at a time.  With ``keypad`` enabled
curses reports arrows as ``KEY_*`` codes; terminals that bypass it send the
raw ``ESC [ A..D`` sequence instead, which :class:`KeyDecoder` reassembles.
"""

from __future__ import annotations

import curses
from typing import Dict, Iterable, List, Optional

from .game_state import Command


ESC = 27
CSI = ord("[")

KEY_COMMANDS: Dict[int, Command] = {
    ord("a"): Command.MOVE_LEFT,
    ord("A"): Command.MOVE_LEFT,
    ord("d"): Command.MOVE_RIGHT,
    ord("D"): Command.MOVE_RIGHT,
    ord("s"): Command.SOFT_DROP,
    ord("S"): Command.SOFT_DROP,
    ord("w"): Command.ROTATE,
    ord("W"): Command.ROTATE,
    ord(" "): Command.HARD_DROP,
    ord("p"): Command.TOGGLE_PAUSE,
    ord("P"): Command.TOGGLE_PAUSE,
    ord("q"): Command.QUIT,
    ord("Q"): Command.QUIT,
    curses.KEY_LEFT: Command.MOVE_LEFT,
    curses.KEY_RIGHT: Command.MOVE_RIGHT,
    curses.KEY_DOWN: Command.SOFT_DROP,
    curses.KEY_UP: Command.ROTATE,
}

# Final byte of ``ESC [ x`` arrow sequences.
ARROW_COMMANDS: Dict[int, Command] = {
    ord("A"): Command.ROTATE,
    ord("B"): Command.SOFT_DROP,
    ord("C"): Command.MOVE_RIGHT,
    ord("D"): Command.MOVE_LEFT,
}


class KeyDecoder:
    """Stateful decoder fed one key code at a time."""

    def __init__(self) -> None:
        self._pending: List[int] = []

    @property
    def pending(self) -> bool:
        return bool(self._pending)

    def feed(self, code: int) -> Optional[Command]:
        """Consume ``code`` and return the command it completes, if any.

        An incomplete escape sequence yields ``None`` until its last byte
        arrives.  Unknown keys are dropped.  An ``ESC`` not followed by ``[``
        is discarded: a second ``ESC`` starts a fresh sequence, any other key
        is decoded on its own.
        """

        if code == ESC:
            # A new escape always restarts the sequence.
            self._pending = [code]
            return None
        if self._pending:
            self._pending.append(code)
            if len(self._pending) == 2:
                if code == CSI:
                    return None
                self._pending.clear()
                return KEY_COMMANDS.get(code)
            self._pending.clear()
            return ARROW_COMMANDS.get(code)
        return KEY_COMMANDS.get(code)

    def decode(self, codes: Iterable[int]) -> List[Command]:
        """Decode a batch of codes, skipping those that map to nothing."""

        commands = []
        for code in codes:
            command = self.feed(code)
            if command is not None:
                commands.append(command)
        return commands
