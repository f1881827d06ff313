"""Gymnasium environments for Falling Block RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .falling_block_env import ENV_ACTIONS, FallingBlockEnv

# Register the default 25x40 falling-block environment
register(
    id="FallingBlock-25x40-v0",
    entry_point="falling_block_rl.env.falling_block_env:FallingBlockEnv",
)

__all__ = ["ENV_ACTIONS", "FallingBlockEnv"]
