

from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_block_rl.game import Action, GameConfig, GameSession, PieceKind, ScoringRules, SimulatedClock


# Gameplay actions exposed to agents; pausing is a human-only command
ENV_ACTIONS: Tuple[Action, ...] = (
    Action.NONE,
    Action.MOVE_LEFT,
    Action.MOVE_RIGHT,
    Action.SOFT_DROP,
    Action.ROTATE_CW,
    Action.ROTATE_CCW,
    Action.HARD_DROP,
    Action.HOLD,
)

PALETTE = {
    -1: (60, 90, 60),   # ghost
    0: (30, 30, 36),
    1: (0, 240, 240),   # I
    2: (240, 240, 0),   # O
    3: (160, 0, 240),   # T
    4: (0, 240, 0),     # S
    5: (240, 0, 0),     # Z
    6: (0, 0, 240),     # J
    7: (240, 160, 0),   # L
}


def _compute_action_mask(session: GameSession, now: float) -> np.ndarray:
    """True for each env action that would change the falling piece at `now`."""
    mask = np.zeros((len(ENV_ACTIONS),), dtype=np.bool_)
    mask[0] = True
    controller = session.controller
    piece = controller.current
    if piece is None or session.game_over or session.paused:
        return mask
    gate_open = session.input_gate_open(now)
    for i, action in enumerate(ENV_ACTIONS):
        if action == Action.MOVE_LEFT:
            mask[i] = gate_open and controller.is_valid(piece.moved(-1, 0))
        elif action == Action.MOVE_RIGHT:
            mask[i] = gate_open and controller.is_valid(piece.moved(1, 0))
        elif action == Action.SOFT_DROP:
            mask[i] = gate_open and controller.is_valid(piece.moved(0, 1))
        elif action == Action.ROTATE_CW:
            mask[i] = controller.rotation_target(True) is not None
        elif action == Action.ROTATE_CCW:
            mask[i] = controller.rotation_target(False) is not None
        elif action == Action.HARD_DROP:
            mask[i] = True
        elif action == Action.HOLD:
            mask[i] = controller.can_hold
    return mask


class FallingBlockEnv(gym.Env):
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None,
                 frame_time: float = 1.0 / 60.0,
                 max_episode_steps: int = 20000,
                 reward_weights: Optional[Dict[str, float]] = None) -> None:
        super().__init__()
        self.session = GameSession(config, rules)
        self.clock = SimulatedClock(frame_time=frame_time)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        self.reward_weights: Dict[str, float] = {
            "score": 0.01,       # per engine point gained
            "lines": 1.0,        # per line cleared
            "game_over": -5.0,   # once, on the terminal step
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        h, w = self.session.board.height, self.session.board.width
        k = self.session.config.preview_count
        n_kinds = len(PieceKind)

        # Kinds are 1..7, 0 means an empty hold slot
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-1, high=n_kinds, shape=(h, w), dtype=np.int8),
                "next": spaces.Box(low=1, high=n_kinds, shape=(k,), dtype=np.int8),
                "hold": spaces.Discrete(n_kinds + 1),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(ENV_ACTIONS))

        self._steps = 0
        self._last_obs: Optional[Dict[str, Any]] = None

    def _get_obs(self) -> Dict[str, Any]:
        held = self.session.held
        return {
            "board": self.session.display_grid().astype(np.int8),
            "next": np.array([int(kind) for kind in self.session.next_kinds()], dtype=np.int8),
            "hold": 0 if held is None else int(held),
            "can_hold": int(self.session.controller.can_hold),
        }

    def _get_info(self) -> Dict[str, Any]:
        board = self.session.board
        return {
            "action_mask": self.get_action_mask(),
            "score": self.session.score,
            "level": self.session.level,
            "lines_cleared": self.session.lines_cleared,
            "phase": self.session.phase.value,
            "max_height": board.get_max_height(),
            "holes": board.count_holes(),
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        # Evaluated at the time the next step will carry
        return _compute_action_mask(self.session, self.clock.now + self.clock.frame_time)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.session.queue.rng = random.Random(seed)
        self.session.reset()
        self.clock.reset()
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        action = ENV_ACTIONS[int(action)]
        score_before = self.session.score
        lines_before = self.session.lines_cleared

        now, dt = self.clock.advance()
        self.session.tick((action,), now, dt)
        self._steps += 1

        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(self.session.score - score_before),
            "lines": self.reward_weights["lines"] * float(self.session.lines_cleared - lines_before),
        }
        terminated = bool(self.session.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        if terminated:
            reward_components["game_over"] = self.reward_weights["game_over"]
        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._last_obs["board"] if self._last_obs is not None else self.session.display_grid()
            cell = 8
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = PALETTE[int(grid[y, x])]
            return img
        # human rendering delegated to the pygame front-end; noop
        return None

    def close(self) -> None:
        pass
