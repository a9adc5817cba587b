"""
Random agent for Minesweeper.

Picks a hidden cell uniformly at random. Used as the guess when the
deduction agent cannot prove any move.
"""
from typing import Optional

import numpy as np

from .base_agent import BaseAgent


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """Agent that selects reveal actions uniformly at random."""

    def __init__(
        self,
        board_height: int = 9,
        board_width: int = 9,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the random agent.

        Args:
            board_height: Number of rows in the board.
            board_width: Number of columns in the board.
            seed: Random seed for reproducibility.
        """
        super().__init__(board_height, board_width)
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select a random valid cell.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of cells that may be revealed.

        Returns:
            Random cell index from valid actions.

        Raises:
            ValueError: If no cell can be revealed.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.flatnonzero(valid_actions)

        if len(valid_indices) == 0:
            raise ValueError("No valid actions to choose from")

        return int(self.rng.choice(valid_indices))
