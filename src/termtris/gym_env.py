"""Gymnasium-compatible wrapper playing the engine with player commands.

Each step applies one action followed by one forced gravity tick, so an
episode advances at a fixed pace independent of wall-clock time.

Observation is a flat float32 vector:
  - board occupancy with the active piece overlaid (20x10=200)
  - active piece one-hot (7)
  - upcoming piece one-hot (7)

Reward is the score gained during the step.  The episode terminates when
the game is over.
"""

from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BOARD_H, BOARD_W
from .engine import Engine, Snapshot
from .game_state import Command
from .randomizer import RandomPieceGenerator
from .run_terminal import render_lines
from .tetromino import PieceKind


# Action index -> command; index 0 lets gravity act alone.
ACTIONS = (
    None,
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.ROTATE,
    Command.SOFT_DROP,
    Command.HARD_DROP,
)

OBS_SIZE = BOARD_H * BOARD_W + 2 * len(PieceKind)


def _fixed_clock() -> float:
    return 0.0


class TetrisCommandEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 60,
    }

    def __init__(self, *, max_steps: Optional[int] = None, render_mode: Optional[str] = "ansi") -> None:
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render mode: {render_mode!r}")
        self.action_space = spaces.Discrete(len(ACTIONS))
        self.observation_space = spaces.Box(low=0.0, high=1.0, shape=(OBS_SIZE,), dtype=np.float32)
        self.render_mode = render_mode
        self._generator = RandomPieceGenerator()
        self._engine: Optional[Engine] = None
        self._steps = 0
        self._max_steps = max_steps

    # ----------------------- Env API -----------------------
    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        if seed is not None:
            self._generator.seed(seed)
        self._engine = Engine(self._generator, clock=_fixed_clock)
        self._steps = 0
        snapshot = self._engine.snapshot()
        return self._convert_obs(snapshot), self._info(snapshot)

    def step(self, action: int):
        if self._engine is None:
            raise RuntimeError("Call reset() before step()")
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action!r}")
        score_before = self._engine.state.score
        command = ACTIONS[int(action)]
        if command is not None:
            self._engine.handle(command)
        self._engine.tick()
        self._steps += 1

        snapshot = self._engine.snapshot()
        reward = float(snapshot.score - score_before)
        terminated = snapshot.game_over
        truncated = self._max_steps is not None and self._steps >= self._max_steps
        return self._convert_obs(snapshot), reward, terminated, truncated, self._info(snapshot)

    def render(self):
        if self._engine is None:
            return ""
        return "\n".join(render_lines(self._engine.snapshot()))

    def close(self):
        return None

    # -------------------- Helpers -------------------------
    def _convert_obs(self, snapshot: Snapshot) -> np.ndarray:
        board = np.array(
            [[cell is not None for cell in row] for row in snapshot.overlay()], dtype=np.float32
        ).reshape(-1)
        active_oh = np.zeros((len(PieceKind),), dtype=np.float32)
        upcoming_oh = np.zeros((len(PieceKind),), dtype=np.float32)
        active_oh[int(snapshot.active_kind)] = 1.0
        upcoming_oh[int(snapshot.upcoming)] = 1.0
        return np.concatenate([board, active_oh, upcoming_oh], dtype=np.float32)

    def _info(self, snapshot: Snapshot) -> Dict:
        return {
            "score": snapshot.score,
            "lines": snapshot.lines,
            "level": snapshot.level,
        }
