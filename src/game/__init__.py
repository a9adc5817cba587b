"""
Minesweeper game module.

Provides core game logic including board management and cell state.
"""
from .cell import Cell, CellState, FlagState
from .board import Board, BoardConfig, GameState, BEGINNER, INTERMEDIATE, EXPERT
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "FlagState",
    "Board",
    "BoardConfig",
    "GameState",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "MinesweeperEnv",
]
