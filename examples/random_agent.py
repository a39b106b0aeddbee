"""Play episodes of :class:`termtris.gym_env.TetrisCommandEnv` with random actions.

Run with::

    PYTHONPATH=src python examples/random_agent.py --episodes 5

Each finished episode is logged; a summary table is printed at the end.
"""

from __future__ import annotations

import argparse
import logging

from termtris.gym_env import TetrisCommandEnv


LOGGER = logging.getLogger(__name__)


def run_episode(env: TetrisCommandEnv, *, seed: int) -> dict[str, float | int]:
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    steps = 0
    terminated = truncated = False
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += reward
        steps += 1
    return {
        "seed": seed,
        "steps": steps,
        "reward": total_reward,
        "score": info["score"],
        "lines": info["lines"],
        "level": info["level"],
    }


def log_episode(result: dict[str, float | int], *, index: int) -> None:
    LOGGER.info(
        "Episode %d: steps=%d score=%d lines=%d level=%d",
        index,
        result["steps"],
        result["score"],
        result["lines"],
        result["level"],
    )


def print_summary(results: list[dict[str, float | int]]) -> None:
    if not results:
        print("No episodes played.")
        return
    header = f"{'Seed':>6}  {'Steps':>6}  {'Score':>7}  {'Lines':>5}  {'Level':>5}"
    print(header)
    print("-" * len(header))
    for row in results:
        print(
            f"{int(row['seed']):6d}  {int(row['steps']):6d}  {int(row['score']):7d}"
            f"  {int(row['lines']):5d}  {int(row['level']):5d}"
        )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--episodes", type=int, default=3, help="How many episodes to play.")
    parser.add_argument("--seed", type=int, default=0, help="Seed of the first episode.")
    parser.add_argument(
        "--max-steps",
        type=int,
        default=5000,
        help="Truncate episodes after this many steps (0 disables truncation).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    env = TetrisCommandEnv(max_steps=args.max_steps or None)
    results = []
    for index in range(args.episodes):
        result = run_episode(env, seed=args.seed + index)
        log_episode(result, index=index + 1)
        results.append(result)
    env.close()
    print_summary(results)


if __name__ == "__main__":
    main()
