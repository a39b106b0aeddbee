from __future__ import annotations

import numpy as np
import pytest

from termtris.gym_env import ACTIONS, OBS_SIZE, TetrisCommandEnv
from termtris.game_state import Command


HARD_DROP = ACTIONS.index(Command.HARD_DROP)


def test_reset_returns_observation_and_info() -> None:
    env = TetrisCommandEnv()
    obs, info = env.reset(seed=3)
    assert obs.shape == (OBS_SIZE,)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    # Active piece starts above the board, so the board part is empty.
    assert not obs[:200].any()
    assert obs[200:207].sum() == 1.0
    assert obs[207:].sum() == 1.0
    assert info == {"score": 0, "lines": 0, "level": 1}


def test_same_seed_same_episode() -> None:
    first = TetrisCommandEnv()
    second = TetrisCommandEnv()
    obs_a, _ = first.reset(seed=11)
    obs_b, _ = second.reset(seed=11)
    assert np.array_equal(obs_a, obs_b)
    for action in [1, 3, 5, 2, 5, 0, 4]:
        obs_a, *_ = first.step(action)
        obs_b, *_ = second.step(action)
        assert np.array_equal(obs_a, obs_b)


def test_hard_dropping_in_place_tops_out() -> None:
    env = TetrisCommandEnv()
    env.reset(seed=0)
    terminated = False
    for _ in range(100):
        _, reward, terminated, truncated, _ = env.step(HARD_DROP)
        assert reward == 0.0
        assert not truncated
        if terminated:
            break
    assert terminated


def test_max_steps_truncates() -> None:
    env = TetrisCommandEnv(max_steps=2)
    env.reset(seed=0)
    assert env.step(0)[3] is False
    assert env.step(0)[3] is True


def test_render_returns_text_frame() -> None:
    env = TetrisCommandEnv()
    env.reset(seed=0)
    frame = env.render()
    assert frame.splitlines()[0] == "+----------+"


def test_invalid_use_raises() -> None:
    env = TetrisCommandEnv()
    with pytest.raises(RuntimeError):
        env.step(0)
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step(len(ACTIONS))


def test_unsupported_render_mode_rejected() -> None:
    with pytest.raises(ValueError):
        TetrisCommandEnv(render_mode="human")
    assert TetrisCommandEnv(render_mode=None).render_mode is None
