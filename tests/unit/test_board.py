"""
Unit tests for Board class.

Tests board initialization, fixed layouts, neighbor queries, game
mechanics, win/lose conditions, and observation generation.
"""
import pytest
import numpy as np
from game import Board, BoardConfig, GameState, FlagState


def count_mines(board: Board) -> int:
    return sum(1 for cell in board.cells if cell.is_mine)


# ============================================================================
# Board Configuration Tests
# ============================================================================

class TestBoardConfig:
    """Test board configuration validation."""

    def test_valid_config_creation(self, valid_config: BoardConfig) -> None:
        """Valid configuration should be created successfully."""
        assert valid_config.width == 9
        assert valid_config.height == 9
        assert valid_config.num_mines == 10

    def test_zero_width_raises_error(self) -> None:
        """Width of 0 should raise ValueError."""
        with pytest.raises(ValueError, match="dimensions must be positive"):
            BoardConfig(0, 9, 10)

    def test_negative_mines_raises_error(self) -> None:
        """Negative mine count should raise ValueError."""
        with pytest.raises(ValueError, match="cannot be negative"):
            BoardConfig(9, 9, -1)

    def test_too_many_mines_raises_error(self) -> None:
        """Too many mines should raise ValueError."""
        with pytest.raises(ValueError, match="Too many mines"):
            BoardConfig(3, 3, 9)


# ============================================================================
# Board Initialization Tests
# ============================================================================

class TestBoardInitialization:
    """Test board creation and initial state."""

    def test_new_board_is_playing(self, default_board: Board) -> None:
        """New board should be in playing state."""
        assert default_board.game_state == GameState.PLAYING
        assert default_board.is_playing is True

    def test_new_board_all_cells_hidden(self, default_board: Board) -> None:
        """All cells should be hidden on new board."""
        assert all(cell.is_hidden for cell in default_board.cells)
        assert default_board.revealed_count == 0
        assert default_board.hidden_count == 81

    def test_mines_not_placed_before_first_click(
        self, default_board: Board
    ) -> None:
        """Mines should not be placed until first reveal."""
        assert count_mines(default_board) == 0

    def test_cells_are_indexed_row_major(self, default_board: Board) -> None:
        """Cell index is row * width + col."""
        assert default_board.get_cell(2, 3).index == 21
        assert default_board.index_of(2, 3) == 21
        assert default_board.position_of(21) == (2, 3)


# ============================================================================
# Neighbor Tests
# ============================================================================

class TestNeighbors:
    """Test fixed adjacency."""

    def test_corner_has_three_neighbors(self, default_board: Board) -> None:
        assert default_board.get_neighbors(0) == {1, 9, 10}

    def test_edge_has_five_neighbors(self, default_board: Board) -> None:
        assert len(default_board.get_neighbors(4)) == 5

    def test_center_has_eight_neighbors(self, default_board: Board) -> None:
        center = default_board.index_of(4, 4)
        neighbors = default_board.get_neighbors(center)
        assert len(neighbors) == 8
        assert center not in neighbors

    def test_neighbors_do_not_wrap_rows(self, default_board: Board) -> None:
        """The last cell of a row is not adjacent to the next row's first."""
        assert 9 not in default_board.get_neighbors(8)


# ============================================================================
# Fixed Layout Tests
# ============================================================================

class TestFromLayout:
    """Test deterministic board construction."""

    def test_layout_places_mines_and_hints(self) -> None:
        board = Board.from_layout([
            "*..",
            "...",
        ])
        assert board.config.num_mines == 1
        assert board.cell_at(0).is_mine is True
        assert board.cell_at(1).adjacent_mines == 1
        assert board.cell_at(2).adjacent_mines == 0
        assert board.cell_at(4).adjacent_mines == 1

    def test_layout_reveals_without_cascade(self) -> None:
        """A revealed zero in a layout does not uncover its neighbors."""
        board = Board.from_layout([
            "*..",
            "..#",
        ])
        assert board.cell_at(5).is_revealed is True
        assert board.cell_at(2).is_hidden is True
        assert board.revealed_count == 1

    def test_layout_flagged_mine(self) -> None:
        board = Board.from_layout(["F#."])
        assert board.cell_at(0).is_mine is True
        assert board.cell_at(0).flag == FlagState.FLAGGED

    def test_layout_mines_are_fixed(self) -> None:
        """Revealing on a layout board never moves the mines."""
        board = Board.from_layout(["*..", "..."])
        board.reveal_at(5)
        assert [cell.index for cell in board.cells if cell.is_mine] == [0]

    def test_ragged_layout_raises_error(self) -> None:
        with pytest.raises(ValueError, match="equal length"):
            Board.from_layout(["..", "..."])

    def test_unknown_character_raises_error(self) -> None:
        with pytest.raises(ValueError, match="Unknown layout"):
            Board.from_layout([".x."])


# ============================================================================
# First Click Tests
# ============================================================================

class TestFirstClick:
    """Test first click behavior."""

    def test_first_click_places_mines(self, default_board: Board) -> None:
        """First reveal should place mines."""
        default_board.reveal(0, 0)
        assert count_mines(default_board) == default_board.config.num_mines

    def test_first_click_never_hits_mine(self) -> None:
        """First click should never hit a mine."""
        for seed in range(50):
            board = Board(seed=seed)
            board.reveal(4, 4)
            assert board.is_lost is False

    def test_first_click_neighborhood_is_clear(
        self, seeded_board: Board
    ) -> None:
        """The opening cell's neighbors are kept mine-free when there is room."""
        start = seeded_board.index_of(4, 4)
        seeded_board.reveal_at(start)
        assert seeded_board.cell_at(start).adjacent_mines == 0
        for neighbor in seeded_board.get_neighbors(start):
            assert seeded_board.cell_at(neighbor).is_mine is False

    def test_crowded_board_only_protects_start(self) -> None:
        """Without room for the neighborhood only the start cell is kept clear."""
        board = Board(BoardConfig(3, 3, 8), seed=0)
        board.reveal(1, 1)
        assert board.cell_at(4).is_mine is False
        assert count_mines(board) == 8

    def test_same_seed_same_layout(self) -> None:
        first = Board(seed=42)
        second = Board(seed=42)
        first.reveal(4, 4)
        second.reveal(4, 4)
        assert [c.is_mine for c in first.cells] == [c.is_mine for c in second.cells]


# ============================================================================
# Reveal Tests
# ============================================================================

class TestReveal:
    """Test cell revealing behavior."""

    def test_reveal_returns_true_on_success(self, default_board: Board) -> None:
        assert default_board.reveal(0, 0) is True
        assert default_board.get_cell(0, 0).is_revealed is True

    def test_reveal_same_cell_twice_returns_false(
        self, default_board: Board
    ) -> None:
        default_board.reveal(0, 0)
        assert default_board.reveal(0, 0) is False

    def test_reveal_invalid_position_returns_false(
        self, default_board: Board
    ) -> None:
        assert default_board.reveal(-1, 0) is False
        assert default_board.reveal(0, 100) is False
        assert default_board.reveal_at(81) is False

    def test_reveal_flagged_cell_returns_false(
        self, default_board: Board
    ) -> None:
        default_board.flag(0, 0)
        assert default_board.reveal(0, 0) is False


# ============================================================================
# Cascade Reveal Tests
# ============================================================================

class TestCascadeReveal:
    """Test empty cell cascade behavior."""

    def test_empty_cell_reveals_neighbors(self, empty_board: Board) -> None:
        """Revealing empty cell should cascade to the whole board."""
        empty_board.reveal(2, 2)
        assert all(cell.is_revealed for cell in empty_board.cells)
        assert empty_board.is_won is True

    def test_cascade_stops_at_numbered_cells(self) -> None:
        """Cascade uncovers the numbered border but never the mine."""
        board = Board.from_layout([
            "....",
            "....",
            "...*",
        ])
        board.reveal(0, 0)
        assert board.cell_at(11).is_hidden is True
        assert board.revealed_count == 11
        assert board.is_won is True

    def test_cascade_skips_flagged_cells(self) -> None:
        board = Board(BoardConfig(3, 3, 0))
        board.flag(0, 0)
        board.reveal(2, 2)
        assert board.get_cell(0, 0).is_hidden is True
        assert board.revealed_count == 8


# ============================================================================
# Flag Tests
# ============================================================================

class TestFlag:
    """Test flagging behavior."""

    def test_flag_cycles_markers(self, default_board: Board) -> None:
        """Flags cycle through flagged, questioned and back to none."""
        cell = default_board.get_cell(0, 0)
        default_board.flag(0, 0)
        assert cell.is_flagged is True
        default_board.flag(0, 0)
        assert cell.is_questioned is True
        default_board.flag(0, 0)
        assert cell.flag == FlagState.NONE

    def test_flag_revealed_cell_fails(self, default_board: Board) -> None:
        default_board.reveal(0, 0)
        assert default_board.flag(0, 0) is False

    def test_clear_flag(self, default_board: Board) -> None:
        default_board.toggle_flag(5)
        assert default_board.clear_flag(5) is True
        assert default_board.cell_at(5).flag == FlagState.NONE

    def test_clear_flag_on_revealed_cell_is_safe(self) -> None:
        board = Board.from_layout(["*#"])
        assert board.clear_flag(1) is False
        assert board.cell_at(1).is_revealed is True


# ============================================================================
# Win/Lose Condition Tests
# ============================================================================

class TestGameEndConditions:
    """Test win and lose conditions."""

    def test_reveal_mine_loses_game(self) -> None:
        board = Board.from_layout(["*..", "...", "..."])
        board.reveal(0, 0)
        assert board.is_lost is True

    def test_reveal_all_safe_cells_wins(self) -> None:
        board = Board.from_layout(["*.", ".."])
        for index in (1, 2):
            board.reveal_at(index)
            assert board.is_playing is True
        board.reveal_at(3)
        assert board.is_won is True

    def test_cannot_act_after_game_over(self) -> None:
        board = Board.from_layout(["*..", "...", "..."])
        board.reveal(0, 0)
        assert board.reveal(2, 2) is False
        assert board.toggle_flag(8) is False

    def test_fully_revealed_layout_is_won(self) -> None:
        board = Board.from_layout(["*#", "##"])
        assert board.is_won is True


# ============================================================================
# Observation Tests
# ============================================================================

class TestObservation:
    """Test observation array."""

    def test_observation_shape_matches_board(self) -> None:
        board = Board(BoardConfig(5, 3, 2))
        assert board.get_observation().shape == (3, 5)

    def test_new_board_observation_all_hidden(
        self, default_board: Board
    ) -> None:
        assert np.all(default_board.get_observation() == -1)

    def test_observation_dtype_is_int8(self, default_board: Board) -> None:
        assert default_board.get_observation().dtype == np.int8

    def test_markers_in_observation(self, default_board: Board) -> None:
        default_board.flag(0, 0)
        default_board.flag(0, 1)
        default_board.flag(0, 1)
        obs = default_board.get_observation()
        assert obs[0, 0] == -2
        assert obs[0, 1] == -3

    def test_revealed_cell_shows_count(self) -> None:
        board = Board.from_layout(["*#"])
        assert board.get_observation()[0, 1] == 1


# ============================================================================
# Valid Actions Tests
# ============================================================================

class TestValidActions:
    """Test valid action enumeration."""

    def test_new_board_has_all_cells_as_valid(
        self, default_board: Board
    ) -> None:
        assert default_board.get_valid_actions() == list(range(81))

    def test_revealed_and_marked_cells_not_valid(self) -> None:
        board = Board.from_layout(["*#.."])
        board.toggle_flag(2)
        assert board.get_valid_actions() == [0, 3]


# ============================================================================
# Reset Tests
# ============================================================================

class TestReset:
    """Test board reset functionality."""

    def test_reset_restores_hidden_board(self, default_board: Board) -> None:
        default_board.reveal(0, 0)
        default_board.reset()
        assert default_board.is_playing is True
        assert all(cell.is_hidden for cell in default_board.cells)
        assert count_mines(default_board) == 0

    def test_reset_with_seed_reproduces_layout(self) -> None:
        board = Board()
        board.reset(seed=9)
        board.reveal(4, 4)
        first = [c.is_mine for c in board.cells]
        board.reset(seed=9)
        board.reveal(4, 4)
        assert [c.is_mine for c in board.cells] == first
