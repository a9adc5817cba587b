"""
Minesweeper AI agents module.

Provides agents for playing Minesweeper:
- DeductionAgent: Provably sound single-cell and pairwise-overlap deduction
- RandomAgent: Uniform random guessing for positions deduction cannot solve
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .deduction_agent import (
    Action,
    ActionKind,
    DeductionAgent,
    DeductionResult,
    Sensor,
    SolverConfig,
    SoundnessError,
)

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "Action",
    "ActionKind",
    "DeductionAgent",
    "DeductionResult",
    "Sensor",
    "SolverConfig",
    "SoundnessError",
]
