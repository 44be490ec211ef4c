from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_duel.game import Action, Cell, GameConfig, Match, Session
from block_duel.game.pieces import COLORS


PLAYABLE_ACTIONS = (
    Action.LEFT,
    Action.RIGHT,
    Action.ROTATE,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.NONE,
)
OPPONENT_POLICIES = ("random", "idle")


def _board_image(state: np.ndarray, cell: int) -> np.ndarray:
    h, w = state.shape
    img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
    for y in range(h):
        for x in range(w):
            v = abs(int(state[y, x]))
            color = COLORS.get(Cell(v), (30, 30, 36)) if v else (30, 30, 36)
            img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
    return img


class VersusEnv(gym.Env):
    """Agent plays seat 0 of a match against a scripted opponent in seat 1.

    Each step applies one command for each seat, advances a virtual clock by
    ``frame_ms`` and ticks gravity on both boards. Reward is the agent's score
    gain, plus ``win_reward`` or ``loss_reward`` on the step where a seat tops
    out. Further steps after termination return zero reward.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 opponent: str = "random",
                 frame_ms: float = 100.0,
                 max_episode_steps: int = 5000,
                 win_reward: float = 100.0,
                 loss_reward: float = -100.0) -> None:
        super().__init__()
        if opponent not in OPPONENT_POLICIES:
            raise ValueError(f"unknown opponent policy {opponent!r}, expected one of {OPPONENT_POLICIES}")
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.opponent = opponent
        self.frame_ms = float(frame_ms)
        self.max_episode_steps = int(max_episode_steps)
        self.win_reward = float(win_reward)
        self.loss_reward = float(loss_reward)

        rows, cols = self.config.rows, self.config.cols
        board_space = spaces.Box(low=-int(Cell.T), high=int(Cell.GARBAGE), shape=(rows, cols), dtype=np.int8)
        self.observation_space = spaces.Dict(
            {
                "board": board_space,
                "opponent_board": board_space,
                "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(1,), dtype=np.int64),
            }
        )
        self.action_space = spaces.Discrete(len(PLAYABLE_ACTIONS))

        self._now_ms = 0.0
        self._steps = 0
        self._finished = False
        self.match = Match(self.config, clock=self._clock)

    def _clock(self) -> float:
        return self._now_ms

    @property
    def agent(self) -> Session:
        return self.match.session(0)

    @property
    def rival(self) -> Session:
        return self.match.session(1)

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.agent.get_state().astype(np.int8),
            "opponent_board": self.rival.get_state().astype(np.int8),
            "score": np.array([self.agent.score], dtype=np.int64),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.agent.score,
            "opponent_score": self.rival.score,
            "lines_cleared_total": self.agent.lines_cleared_total,
            "garbage_sent": self.agent.garbage_sent,
            "garbage_received": self.agent.garbage_received,
            "winner": self.match.winner(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self._now_ms = 0.0
        self._steps = 0
        self._finished = False
        match_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.match = Match(self.config, seed=match_seed, clock=self._clock)
        return self._get_obs(), self._get_info()

    def _opponent_action(self) -> Action:
        if self.opponent == "idle":
            return Action.NONE
        return PLAYABLE_ACTIONS[int(self.np_random.integers(0, len(PLAYABLE_ACTIONS)))]

    def step(self, action: int):
        score_before = self.agent.score

        self.agent.step(PLAYABLE_ACTIONS[int(action)])
        self.rival.step(self._opponent_action())
        self._now_ms += self.frame_ms
        self.match.update(self._now_ms)
        self._steps += 1

        reward = float(self.agent.score - score_before)
        terminated = self.agent.game_over or self.rival.game_over
        # The outcome bonus is paid once; stepping a finished match yields nothing.
        if terminated and not self._finished:
            if self.agent.game_over:
                reward += self.loss_reward
            else:
                reward += self.win_reward
        self._finished = terminated
        truncated = not terminated and self._steps >= self.max_episode_steps

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            cell = 12
            left = _board_image(self.agent.get_state(), cell)
            right = _board_image(self.rival.get_state(), cell)
            gap = np.zeros((left.shape[0], cell, 3), dtype=np.uint8)
            return np.concatenate((left, gap, right), axis=1)
        # human rendering lives in block_duel.visualization; noop
        return None

    def close(self) -> None:
        pass
