"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game import Board, BoardConfig, Cell
from agents import DeductionAgent, SolverConfig


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board()


@pytest.fixture
def seeded_board() -> Board:
    """Create a reproducible beginner board."""
    return Board(BoardConfig(9, 9, 10), seed=1234)


@pytest.fixture
def small_board() -> Board:
    """Create a small 3x3 board with 1 mine for testing."""
    return Board(BoardConfig(3, 3, 1))


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


# ============================================================================
# Position Fixtures
#
# Layout legend: '*' hidden mine, 'F' flagged mine, '.' hidden safe cell,
# '#' revealed safe cell.
# ============================================================================

@pytest.fixture
def saturated_board() -> Board:
    """A revealed 2 whose only two hidden neighbors are both mines."""
    return Board.from_layout(["*#*."])


@pytest.fixture
def known_mine_board() -> Board:
    """
    A revealed 1 with three hidden neighbors, one of which another
    sensor proves to be a mine.
    """
    return Board.from_layout([
        "*#.",
        "##.",
        "###",
    ])


@pytest.fixture
def fifty_fifty_board() -> Board:
    """Two sensors that cannot tell which of two cells is the mine."""
    return Board.from_layout([
        "##",
        "*.",
    ])


@pytest.fixture
def excess_board() -> Board:
    """Overlapping sensors where the larger needs exactly one more mine."""
    return Board.from_layout([
        "*.*",
        "###",
    ])


@pytest.fixture
def excess_mismatch_board() -> Board:
    """Overlapping sensors whose exclusive cells outnumber the extra need."""
    return Board.from_layout([
        "**.",
        ".##",
        "###",
    ])


# ============================================================================
# Agent Fixtures
# ============================================================================

@pytest.fixture
def strict_config() -> SolverConfig:
    """Configuration that fails loudly on any unsound deduction."""
    return SolverConfig(check_soundness=True, strict=True, seed=0)


@pytest.fixture
def make_agent(strict_config: SolverConfig):
    """Factory for strict agents bound to a board."""
    def _make(board: Board) -> DeductionAgent:
        return DeductionAgent(board, strict_config)
    return _make


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
