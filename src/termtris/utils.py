"""Scoring, level and gravity helpers for the engine."""

from __future__ import annotations

import logging


LOGGER = logging.getLogger(__name__)

# Points for clearing 0..4 rows at once, multiplied by the current level.
LINE_SCORES = (0, 40, 100, 300, 1200)
MAX_SCORED_LINES = len(LINE_SCORES) - 1

LINES_PER_LEVEL = 10

BASE_GRAVITY_S = 0.8
GRAVITY_DECAY = 0.85
MIN_GRAVITY_S = 0.05


def level_for_lines(lines: int) -> int:
    """Return the level reached after clearing ``lines`` rows in total."""

    if lines < 0:
        raise ValueError("Line count cannot be negative")
    return 1 + lines // LINES_PER_LEVEL


def line_clear_score(cleared: int, level: int) -> int:
    """Return the points awarded for clearing ``cleared`` rows at ``level``.

    Only one to four simultaneous rows have a table entry.  Larger counts
    cannot happen with four-cell pieces; should one arrive anyway it is
    scored as four rows.
    """

    if cleared < 0:
        raise ValueError("Line count cannot be negative")
    if cleared > MAX_SCORED_LINES:
        LOGGER.warning("Cleared %d rows at once; scoring as %d", cleared, MAX_SCORED_LINES)
        cleared = MAX_SCORED_LINES
    return LINE_SCORES[cleared] * level


def gravity_interval(level: int) -> float:
    """Return the seconds between automatic drops at ``level``.

    Each level shortens the interval by a constant factor, down to a hard
    floor of :data:`MIN_GRAVITY_S`.
    """

    return max(MIN_GRAVITY_S, BASE_GRAVITY_S * (GRAVITY_DECAY ** (level - 1)))

