"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface over the Minefield engine, plus the
plain-text board format shared with the command line.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, BoardSnapshot, GameStatus, Minefield, EASY
from .tile import FlagState, MINE_MARKER


# ============================================================================
# Text Rendering
# ============================================================================

_FLAG_SYMBOLS = {
    FlagState.NONE: ".",
    FlagState.FLAGGED: "F",
    FlagState.QUESTIONED: "?",
}


def format_board(snapshot: BoardSnapshot, width: int) -> str:
    """
    Render a snapshot as rows of single-character tiles.

    Args:
        snapshot: Board snapshot to draw.
        width: Number of columns.

    Returns:
        One line per row, tiles separated by spaces.
    """
    lines = []
    for start in range(0, len(snapshot), width):
        row_str = ""
        for tile in snapshot.tiles[start:start + width]:
            if not tile.revealed:
                row_str += _FLAG_SYMBOLS[tile.flag]
            elif tile.display_value == MINE_MARKER:
                row_str += "*"
            elif not tile.display_value:
                row_str += " "
            else:
                row_str += tile.display_value
            row_str += " "
        lines.append(row_str)
    return "\n".join(lines)


# ============================================================================
# Rewards
# ============================================================================

REVEAL_REWARD = 1.0
WIN_REWARD = 10.0
MINE_PENALTY = -10.0
INVALID_PENALTY = -0.1

_OUTCOME_REWARDS = {
    GameStatus.PLAYING: REVEAL_REWARD,
    GameStatus.WON: WIN_REWARD,
    GameStatus.LOST: MINE_PENALTY,
}


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Single-board Minesweeper episodes for reinforcement learning.

    Each action is a tile id to reveal. Observations use the values of
    Minefield.get_observation: -1 hidden, -2 flagged, -3 questioned,
    0-8 for revealed counts and 9 for an exposed mine.

    Reveals score REVEAL_REWARD, WIN_REWARD or MINE_PENALTY depending
    on how the game stands afterwards. Actions that change nothing
    (revealed or marked tiles, or any action once the game is over)
    score INVALID_PENALTY.
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()

        self.config = config or EASY
        self.minefield = Minefield(self.config)
        self.render_mode = render_mode
        self.observation_space = spaces.Box(
            low=-3,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.tile_count)
        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new board.

        A seed makes the mine layout of this and later episodes
        reproducible.
        """
        super().reset(seed=seed)
        if seed is not None:
            self.minefield.rng = random.Random(seed)
        self.minefield.new_game()
        self._steps = 0
        return self.minefield.get_observation(), self._episode_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """Reveal the tile with id ``action``."""
        self._steps += 1
        reward = self._play(int(action))
        return (
            self.minefield.get_observation(),
            reward,
            not self.minefield.is_playing,
            False,
            self._episode_info(),
        )

    def _play(self, tile_id: int) -> float:
        if not self.minefield.is_playing:
            return INVALID_PENALTY
        tile = self.minefield.tile(tile_id)
        if tile is None or not tile.is_hidden:
            return INVALID_PENALTY
        status = self.minefield.reveal(tile_id).status
        return _OUTCOME_REWARDS[status]

    def _episode_info(self) -> Dict[str, Any]:
        return {
            "steps": self._steps,
            "revealed": len(self.minefield.revealed_ids),
            "total_safe": self.config.safe_tile_count,
            "game_state": self.minefield.status().name,
            "valid_actions": len(self.minefield.valid_actions()),
        }

    def render(self) -> Optional[str]:
        text = format_board(self.minefield.snapshot(), self.config.width)
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """Boolean mask over actions, True where a reveal would act."""
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.minefield.is_playing:
            mask[self.minefield.valid_actions()] = True
        return mask
