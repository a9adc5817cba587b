"""
Turn driver module for the deduction agent.

Provides game sessions, batch evaluation and statistics.
"""
from .session import (
    PlayConfig,
    GameStats,
    PlayStats,
    GameRunner,
)

__all__ = [
    "PlayConfig",
    "GameStats",
    "PlayStats",
    "GameRunner",
]
