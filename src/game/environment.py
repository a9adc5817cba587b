"""
Gymnasium environment wrapper for Minesweeper.

Exposes a board through the standard Env interface so drivers and
observation-based agents can act on it with reveal and flag actions.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - -3 = questioned cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < cells reveals cell i; action i >= cells cycles the
        flag on cell i - cells.

    Rewards:
        Scored for external Env consumers such as learning agents. The
        bundled GameRunner only steps the env for guesses and ignores them.
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for a flag change
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(self.config)
        self.render_mode = render_mode
        self.num_cells = self.config.height * self.config.width

        self.observation_space = spaces.Box(
            low=-3,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )

        # Reveal actions followed by flag actions
        self.action_space = spaces.Discrete(2 * self.num_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.board.reset(seed=int(self.np_random.integers(0, 2**31 - 1)))
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Reveal or flag action index.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1

        if action < self.num_cells:
            reward = self._reveal_reward(int(action))
        else:
            reward = self._flag_reward(int(action) - self.num_cells)

        observation = self.board.get_observation()
        terminated = not self.board.is_playing

        return observation, reward, terminated, False, self._get_info()

    def _reveal_reward(self, index: int) -> float:
        """Reveal a cell and score the outcome."""
        if not self.board.reveal_at(index):
            return -0.1

        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0

        return 1.0

    def _flag_reward(self, index: int) -> float:
        """Cycle a flag; flags carry no reward of their own."""
        if not self.board.toggle_flag(index):
            return -0.1
        return 0.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.revealed_count,
            "flags": sum(1 for cell in self.board.cells if cell.is_flagged),
            "total_safe": self.num_cells - self.config.num_mines,
            "game_state": self.board.game_state.name,
            "valid_actions": len(self.board.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        symbols = {-1: ".", -2: "F", -3: "?", 9: "*", 0: " "}
        lines = []
        for row in self.board.get_observation():
            lines.append(
                " ".join(symbols.get(int(val), str(int(val))) for val in row)
            )
        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action. Reveals are valid on
            hidden unmarked cells, flag changes on any hidden cell.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.board.is_playing:
            return mask
        for index in self.board.get_valid_actions():
            mask[index] = True
        for cell in self.board.cells:
            if cell.is_hidden:
                mask[self.num_cells + cell.index] = True
        return mask
