

from __future__ import annotations

import argparse
import random

import gymnasium as gym
import numpy as np

import falling_block_rl.env  # noqa: F401  ensure registration
from falling_block_rl.game import render_text


def run_random(steps: int = 2000, seed: int | None = None, show_board: bool = False) -> float:
    rng = random.Random(seed)
    env = gym.make("FallingBlock-25x40-v0")
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Prefer actions that change the piece
        valid = np.flatnonzero(info["action_mask"])
        action = int(rng.choice(list(valid))) if valid.size > 0 else env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            print(f"Episode {episodes} score={info['score']} lines={info['lines_cleared']} level={info['level']}")
            if show_board:
                print(render_text(obs["board"]))
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episode(s)")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--show-board", action="store_true")
    args = p.parse_args()
    run_random(args.steps, args.seed, args.show_board)


if __name__ == "__main__":  # pragma: no cover
    main()
