"""
Board module for Minesweeper game.

Implements the game board with mine placement, cell revealing,
flagging and game state management. Cells are addressed by a
row-major index (row * width + col); row/column helpers are kept
for callers that think in positions.
"""
import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, List, Optional, Sequence, Set, Tuple

import numpy as np

from .cell import Cell, CellState, FlagState


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

# Layout characters accepted by Board.from_layout
LAYOUT_MINE = "*"
LAYOUT_FLAGGED_MINE = "F"
LAYOUT_HIDDEN = "."
LAYOUT_REVEALED = "#"


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the cells, mine placement, revealing logic,
    and win/lose conditions.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    seed: Optional[int] = None
    _cells: List[Cell] = field(default_factory=list, repr=False)
    _game_state: GameState = GameState.PLAYING
    _first_click: bool = True
    _cells_revealed: int = 0
    _rng: random.Random = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Initialize the cells after dataclass creation."""
        self._rng = random.Random(self.seed)
        self._init_cells()

    @classmethod
    def from_layout(cls, rows: Sequence[str]) -> "Board":
        """
        Build a board with a fixed mine layout.

        Characters:
            '*': hidden mine
            'F': flagged mine
            '.': hidden safe cell
            '#': revealed safe cell

        Revealed cells are set directly without cascading, so any
        partially played position can be described.

        Raises:
            ValueError: If rows are ragged or contain unknown characters.
        """
        if not rows or any(len(row) != len(rows[0]) for row in rows):
            raise ValueError("Layout rows must be non-empty and equal length")
        valid = {LAYOUT_MINE, LAYOUT_FLAGGED_MINE, LAYOUT_HIDDEN, LAYOUT_REVEALED}
        for row in rows:
            unknown = set(row) - valid
            if unknown:
                raise ValueError(f"Unknown layout characters: {sorted(unknown)}")

        num_mines = sum(
            row.count(LAYOUT_MINE) + row.count(LAYOUT_FLAGGED_MINE) for row in rows
        )
        board = cls(BoardConfig(len(rows[0]), len(rows), num_mines))
        board._first_click = False

        for row_index, row in enumerate(rows):
            for col_index, char in enumerate(row):
                cell = board._cells[board.index_of(row_index, col_index)]
                if char in (LAYOUT_MINE, LAYOUT_FLAGGED_MINE):
                    cell.is_mine = True
                if char == LAYOUT_FLAGGED_MINE:
                    cell.flag = FlagState.FLAGGED

        board._calculate_adjacent_mines()

        for row_index, row in enumerate(rows):
            for col_index, char in enumerate(row):
                if char == LAYOUT_REVEALED:
                    board._cells[board.index_of(row_index, col_index)].reveal()
                    board._cells_revealed += 1

        board._check_win_condition()
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_cells(self) -> None:
        """Create empty cells with their fixed neighbor sets."""
        self._cells = [
            Cell(index=index, neighbors=self._compute_neighbors(index))
            for index in range(self.config.width * self.config.height)
        ]

    def _place_mines(self, start: int) -> None:
        """
        Place mines randomly, keeping the start cell mine-free.

        The start cell's neighborhood is kept clear as well whenever the
        board has enough room, so the opening move uncovers an area.

        Args:
            start: Index of the first revealed cell.
        """
        positions = self._get_valid_mine_positions(start)
        mine_positions = self._rng.sample(positions, self.config.num_mines)
        for index in mine_positions:
            self._cells[index].is_mine = True

    def _get_valid_mine_positions(self, start: int) -> List[int]:
        """Get all valid positions for mine placement."""
        exclude: Set[int] = {start}
        total_cells = len(self._cells)
        if total_cells - len(self._cells[start].neighbors) - 1 >= self.config.num_mines:
            exclude |= self._cells[start].neighbors
        return [index for index in range(total_cells) if index not in exclude]

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for cell in self._cells:
            if not cell.is_mine:
                cell.adjacent_mines = sum(
                    1 for neighbor in cell.neighbors if self._cells[neighbor].is_mine
                )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _compute_neighbors(self, index: int) -> FrozenSet[int]:
        """
        Get valid neighboring cell indices.

        Args:
            index: Index of center cell.

        Returns:
            Indices of the up to eight in-bounds neighbors.
        """
        row, col = self.position_of(index)
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append(self.index_of(new_row, new_col))
        return frozenset(neighbors)

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def _is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._cells)

    def index_of(self, row: int, col: int) -> int:
        """Convert (row, col) position to cell index."""
        return row * self.config.width + col

    def position_of(self, index: int) -> Tuple[int, int]:
        """Convert cell index to (row, col) position."""
        return index // self.config.width, index % self.config.width

    def get_neighbors(self, index: int) -> FrozenSet[int]:
        """Fixed adjacency of a cell; out-of-bounds positions are excluded."""
        return self._cells[index].neighbors

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal_at(self, index: int) -> bool:
        """
        Reveal the cell at the given index.

        On first click, places mines avoiding this cell.
        If cell is empty (0 adjacent mines), reveals neighbors.
        If cell is a mine, game is lost.

        Args:
            index: Cell index to reveal.

        Returns:
            True if reveal was successful, False otherwise.
        """
        if not self._can_reveal(index):
            return False

        if self._first_click:
            self._handle_first_click(index)

        return self._reveal_cell(index)

    def reveal(self, row: int, col: int) -> bool:
        """Reveal a cell by (row, col) position."""
        if not self._is_valid_position(row, col):
            return False
        return self.reveal_at(self.index_of(row, col))

    def _can_reveal(self, index: int) -> bool:
        """Check if a cell can be revealed."""
        if self._game_state != GameState.PLAYING:
            return False
        if not self._is_valid_index(index):
            return False
        cell = self._cells[index]
        return cell.state == CellState.HIDDEN and cell.flag == FlagState.NONE

    def _handle_first_click(self, index: int) -> None:
        """Handle first click: place mines and calculate counts."""
        self._first_click = False
        self._place_mines(index)
        self._calculate_adjacent_mines()

    def _reveal_cell(self, index: int) -> bool:
        """Reveal a single cell and flood-fill from empty cells."""
        cell = self._cells[index]
        if not cell.reveal():
            return False

        self._cells_revealed += 1

        if cell.is_mine:
            self._game_state = GameState.LOST
            return True

        if cell.adjacent_mines == 0:
            self._reveal_neighbors(index)

        self._check_win_condition()
        return True

    def _reveal_neighbors(self, index: int) -> None:
        """Breadth-first reveal of the empty region around a cell."""
        queue = deque([index])
        while queue:
            current = queue.popleft()
            for neighbor_index in self._cells[current].neighbors:
                neighbor = self._cells[neighbor_index]
                if neighbor.is_mine or not neighbor.reveal():
                    continue
                self._cells_revealed += 1
                if neighbor.adjacent_mines == 0:
                    queue.append(neighbor_index)

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are revealed."""
        if self._game_state != GameState.PLAYING:
            return
        non_mine_cells = len(self._cells) - self.config.num_mines
        if self._cells_revealed >= non_mine_cells:
            self._game_state = GameState.WON

    def toggle_flag(self, index: int) -> bool:
        """
        Cycle the marker on a cell.

        Args:
            index: Cell index.

        Returns:
            True if the marker changed, False otherwise.
        """
        if self._game_state != GameState.PLAYING:
            return False
        if not self._is_valid_index(index):
            return False
        return self._cells[index].toggle_flag()

    def flag(self, row: int, col: int) -> bool:
        """Cycle the marker on a cell by (row, col) position."""
        if not self._is_valid_position(row, col):
            return False
        return self.toggle_flag(self.index_of(row, col))

    def clear_flag(self, index: int) -> bool:
        """Remove any marker from a cell. Safe on revealed cells."""
        if not self._is_valid_index(index):
            return False
        return self._cells[index].clear_flag()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def cells(self) -> Sequence[Cell]:
        """All cells in index order."""
        return tuple(self._cells)

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells."""
        return self._cells_revealed

    @property
    def hidden_count(self) -> int:
        """Number of cells still hidden."""
        return len(self._cells) - self._cells_revealed

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    def cell_at(self, index: int) -> Cell:
        """Get cell by index."""
        return self._cells[index]

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._cells[self.index_of(row, col)]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                -3 = questioned
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.array(
            [cell.to_observation() for cell in self._cells], dtype=np.int8
        )
        return obs.reshape(self.config.height, self.config.width)

    def get_valid_actions(self) -> List[int]:
        """
        Get list of cells that can be revealed.

        Returns:
            Indices of hidden cells without a marker.
        """
        return [
            cell.index for cell in self._cells
            if cell.state == CellState.HIDDEN and cell.flag == FlagState.NONE
        ]

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset board to initial state for new game."""
        if seed is not None:
            self.seed = seed
            self._rng = random.Random(seed)
        self._init_cells()
        self._game_state = GameState.PLAYING
        self._first_click = True
        self._cells_revealed = 0
