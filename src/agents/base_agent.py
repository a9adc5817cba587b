"""
Base agent interface for observation-based Minesweeper agents.

Defines the abstract interface for agents that choose a cell from the
board observation alone, such as the guessing fallback used when
deduction runs dry.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for observation-based agents.

    Subclasses implement select_action to choose which cell to reveal
    based on the current observation.
    """

    def __init__(self, board_height: int, board_width: int) -> None:
        """
        Initialize the agent.

        Args:
            board_height: Number of rows in the board.
            board_width: Number of columns in the board.
        """
        self.board_height = board_height
        self.board_width = board_width
        self.total_cells = board_height * board_width

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select a cell to reveal based on the current observation.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of cells that may be revealed.

        Returns:
            Cell index (row * width + col).
        """

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat cell index to (row, col) position."""
        return action // self.board_width, action % self.board_width

    def position_to_action(self, row: int, col: int) -> int:
        """Convert (row, col) position to flat cell index."""
        return row * self.board_width + col

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get valid reveal mask from observation.

        Args:
            observation: 2D array of cell states.

        Returns:
            Boolean mask where True = hidden unmarked cell.
        """
        return observation.flatten() == -1

    def reset(self) -> None:
        """Reset agent state for new game."""
