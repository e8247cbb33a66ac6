"""
Gymnasium-compatible environment wrapper for Sokoban.

Wraps a ``GameSession`` and provides NumPy-based observations and action
masks suitable for agents and search.

Follows the Gymnasium API pattern:
  - reset()  -> (obs, info)
  - step(a)  -> (obs, reward, terminated, truncated, info)

Does NOT depend on the gymnasium package itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from sokoban.board import Board, display_board
from sokoban.encoder import NUM_PLANES, encode_board
from sokoban.game import LOST, WON, GameSession, Intent
from sokoban.levels import DEFAULT_LEVEL, load_level

# Action index -> intent.  Directions first so agents that never undo can
# use the first four actions only.
ACTIONS = (Intent.UP, Intent.DOWN, Intent.LEFT, Intent.RIGHT, Intent.UNDO)
ACTION_SPACE: int = len(ACTIONS)
UNDO_ACTION: int = ACTIONS.index(Intent.UNDO)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass
class EnvConfig:
    """Environment settings."""

    level: str = DEFAULT_LEVEL
    max_steps: int = 200          # truncate the episode after this many inputs
    allow_undo: bool = True
    win_reward: float = 1.0
    loss_reward: float = -1.0
    step_reward: float = 0.0      # added on every non-terminal input


# ---------------------------------------------------------------------------
# SokobanEnv
# ---------------------------------------------------------------------------

class SokobanEnv:
    """Gymnasium-style environment for a single Sokoban level.

    Observation
    -----------
    A ``(8, H, W)`` float32 tensor from ``encode_board``.

    Action Space
    ------------
    5 discrete actions: up, down, left, right, undo.  Undo is masked out
    when there is nothing to undo or when ``allow_undo`` is off.

    Rewards
    -------
    ``win_reward`` when the input wins the level, ``loss_reward`` when it
    drops the player into a hole, ``step_reward`` otherwise.
    """

    def __init__(self, config: Optional[EnvConfig] = None, board: Optional[Board] = None) -> None:
        self.config = config or EnvConfig()
        start = board if board is not None else load_level(self.config.level)
        self.session = GameSession(start)
        self.steps: int = 0
        self.action_space_n: int = ACTION_SPACE
        self.observation_shape: tuple = (NUM_PLANES, start.height, start.width)

    # ------------------------------------------------------------------
    # Gymnasium API: reset
    # ------------------------------------------------------------------

    def reset(self) -> tuple[np.ndarray, dict]:
        """Return to the level's starting board.

        Returns
        -------
        observation : np.ndarray
            Shape ``(8, H, W)``, dtype ``float32``.
        info : dict
            Contains ``'action_mask'`` and ``'score'``.
        """
        self.session.reset()
        self.steps = 0
        return encode_board(self.session.current), self._info()

    # ------------------------------------------------------------------
    # Gymnasium API: step
    # ------------------------------------------------------------------

    def step(self, action: int) -> tuple[np.ndarray, float, bool, bool, dict]:
        """Apply one input.

        Parameters
        ----------
        action : int
            An integer in ``[0, 5)``.

        Returns
        -------
        observation : np.ndarray
        reward : float
        terminated : bool
            ``True`` once the level is won or the player is lost.
        truncated : bool
            ``True`` once ``max_steps`` inputs have been played.
        info : dict
        """
        if not 0 <= action < ACTION_SPACE:
            raise ValueError(f"Action {action} is out of range 0..{ACTION_SPACE - 1}.")

        if self.done:
            obs = encode_board(self.session.current)
            return obs, 0.0, True, self.truncated, self._info()

        if self.get_action_mask()[action] != 1:
            raise ValueError(f"Illegal action {action} ({ACTIONS[action].value}).")

        self.session.handle(ACTIONS[action])
        self.steps += 1

        reward = self.config.step_reward
        outcome = self.session.outcome
        if outcome == WON:
            reward = self.config.win_reward
        elif outcome == LOST:
            reward = self.config.loss_reward

        obs = encode_board(self.session.current)
        return obs, float(reward), self.session.should_end(), self.truncated, self._info()

    # ------------------------------------------------------------------
    # Action mask
    # ------------------------------------------------------------------

    def get_action_mask(self) -> np.ndarray:
        """Return a ``(5,)`` float32 binary mask of legal actions."""
        mask = np.zeros(ACTION_SPACE, dtype=np.float32)
        if self.done:
            return mask
        mask[:UNDO_ACTION] = 1.0
        if self.config.allow_undo and self.session.can_undo():
            mask[UNDO_ACTION] = 1.0
        return mask

    def _info(self) -> dict:
        last = self.session.last_move
        return {
            "action_mask": self.get_action_mask(),
            "score": self.session.score,
            "outcome": self.session.outcome,
            "last_move": last.value if last is not None else None,
        }

    # ------------------------------------------------------------------
    # Properties (delegated to GameSession)
    # ------------------------------------------------------------------

    @property
    def truncated(self) -> bool:
        return self.steps >= self.config.max_steps

    @property
    def done(self) -> bool:
        """``True`` if the episode has ended or been truncated."""
        return self.session.should_end() or self.truncated

    @property
    def board(self) -> Board:
        return self.session.current

    # ------------------------------------------------------------------
    # Clone / render
    # ------------------------------------------------------------------

    def clone(self) -> SokobanEnv:
        """Return an independent copy of this environment (for search)."""
        new_env = SokobanEnv.__new__(SokobanEnv)
        new_env.config = self.config
        new_env.session = self.session.clone()
        new_env.steps = self.steps
        new_env.action_space_n = self.action_space_n
        new_env.observation_shape = self.observation_shape
        return new_env

    def render(self) -> str:
        """Return a text representation of the current board and print it."""
        return display_board(self.session.current)

    def __repr__(self) -> str:
        return f"SokobanEnv({self.session!r}, steps={self.steps})"


# ---------------------------------------------------------------------------
# Smoke-test utility
# ---------------------------------------------------------------------------

def play_random_game(seed: int | None = None, config: Optional[EnvConfig] = None) -> tuple[Optional[str], int]:
    """Play one episode with uniformly random legal actions.

    Returns
    -------
    outcome : str or None
        ``"won"``, ``"lost"``, or ``None`` if the episode was truncated.
    steps : int
        Number of inputs played.
    """
    rng = np.random.default_rng(seed)
    env = SokobanEnv(config)
    obs, info = env.reset()

    while not env.done:
        legal_actions = np.where(info["action_mask"] > 0)[0]
        action = rng.choice(legal_actions)
        obs, reward, terminated, truncated, info = env.step(int(action))

    return env.session.outcome, env.steps


if __name__ == "__main__":
    print("Running smoke test: play_random_game(seed=0) ...")
    outcome, steps = play_random_game(seed=0)
    print(f"Result: {outcome or 'truncated'} after {steps} inputs.")
