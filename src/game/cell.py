"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their visibility,
flag marker and content (mine/number), plus the fixed set of neighbor
indices established when the board is created.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Visibility of a cell. Only ever moves from HIDDEN to REVEALED."""

    HIDDEN = auto()
    REVEALED = auto()


class FlagState(Enum):
    """Player marker on a hidden cell."""

    NONE = auto()
    FLAGGED = auto()
    QUESTIONED = auto()


_NEXT_FLAG = {
    FlagState.NONE: FlagState.FLAGGED,
    FlagState.FLAGGED: FlagState.QUESTIONED,
    FlagState.QUESTIONED: FlagState.NONE,
}


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        index: Row-major position on the board, stable for the cell's lifetime.
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visibility (hidden or revealed).
        flag: Marker placed by the player or an agent.
        neighbors: Indices of adjacent cells.
    """

    index: int = 0
    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN
    flag: FlagState = FlagState.NONE
    neighbors: FrozenSet[int] = field(default_factory=frozenset, repr=False)

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was revealed, False if already revealed or
            carrying a flag or question mark.
        """
        if self.state != CellState.HIDDEN or self.flag != FlagState.NONE:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Cycle the marker: none -> flagged -> questioned -> none.

        Returns:
            True if the marker changed, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        self.flag = _NEXT_FLAG[self.flag]
        return True

    def clear_flag(self) -> bool:
        """Remove any marker. Returns False if cell is revealed."""
        if self.state == CellState.REVEALED:
            return False
        self.flag = FlagState.NONE
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden (flagged or not)."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.flag == FlagState.FLAGGED

    @property
    def is_questioned(self) -> bool:
        """Check if cell carries a question mark."""
        return self.flag == FlagState.QUESTIONED

    def to_observation(self) -> int:
        """
        Convert cell to observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Questioned cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            if self.flag == FlagState.FLAGGED:
                return -2
            if self.flag == FlagState.QUESTIONED:
                return -3
            return -1
        if self.is_mine:
            return 9
        return self.adjacent_mines
