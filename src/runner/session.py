"""
Turn driver for the deduction agent.

Plays whole games by calling DeductionAgent.take_turn until the board
is finished or nothing more can be deduced, optionally falling back to
a random guess, and aggregates statistics over many games.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union
import json
import logging
import time

import numpy as np

from agents.deduction_agent import ActionKind, DeductionAgent, SolverConfig
from agents.random_agent import RandomAgent
from game.board import BoardConfig
from game.environment import MinesweeperEnv


logger = logging.getLogger(__name__)


# ============================================================================
# Play Configuration
# ============================================================================

@dataclass
class PlayConfig:
    """Configuration for playing games with the deduction agent."""

    # Board settings
    board_height: int = 9
    board_width: int = 9
    num_mines: int = 10

    # Turn pacing
    delay: float = 0.0
    max_turns: int = 10000

    # Guess when deduction runs dry instead of stopping
    allow_guessing: bool = False

    # Soundness checking
    check_soundness: bool = True
    strict: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.delay < 0:
            raise ValueError("Delay cannot be negative")
        if self.max_turns < 1:
            raise ValueError("max_turns must be positive")

    @property
    def board_config(self) -> BoardConfig:
        return BoardConfig(
            width=self.board_width,
            height=self.board_height,
            num_mines=self.num_mines,
        )


# ============================================================================
# Play Statistics
# ============================================================================

OUTCOME_WON = "won"
OUTCOME_LOST = "lost"
OUTCOME_STUCK = "stuck"


@dataclass
class GameStats:
    """Statistics for a single game."""

    turns: int = 0
    reveals: int = 0
    flags: int = 0
    guesses: int = 0
    mines_confirmed: int = 0
    revealed_cells: int = 0
    outcome: str = OUTCOME_STUCK

    @property
    def won(self) -> bool:
        return self.outcome == OUTCOME_WON


@dataclass
class PlayStats:
    """Accumulated statistics over many games."""

    games: int = 0
    wins: int = 0
    losses: int = 0
    stuck: int = 0
    total_turns: int = 0
    total_guesses: int = 0
    outcomes: List[str] = field(default_factory=list)

    def add(self, game: GameStats) -> None:
        """Fold one game's result into the totals."""
        self.games += 1
        self.total_turns += game.turns
        self.total_guesses += game.guesses
        self.outcomes.append(game.outcome)
        if game.outcome == OUTCOME_WON:
            self.wins += 1
        elif game.outcome == OUTCOME_LOST:
            self.losses += 1
        else:
            self.stuck += 1

    @property
    def win_rate(self) -> float:
        if not self.games:
            return 0.0
        return self.wins / self.games

    @property
    def stuck_rate(self) -> float:
        if not self.games:
            return 0.0
        return self.stuck / self.games

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "games": self.games,
            "wins": self.wins,
            "losses": self.losses,
            "stuck": self.stuck,
            "win_rate": self.win_rate,
            "stuck_rate": self.stuck_rate,
            "avg_turns": self.total_turns / self.games if self.games else 0.0,
            "total_guesses": self.total_guesses,
        }


# ============================================================================
# Game Runner
# ============================================================================

TurnCallback = Callable[[MinesweeperEnv, DeductionAgent], None]


class GameRunner:
    """
    Drives deduction sessions over fresh boards.

    One DeductionAgent is created per game and discarded when the game
    ends. Turns are taken synchronously, with an optional delay between
    them for visualization.
    """

    def __init__(
        self,
        config: Optional[PlayConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the runner.

        Args:
            config: Play configuration.
            render_mode: Render mode passed to the environment.
        """
        self.config = config or PlayConfig()
        self.env = MinesweeperEnv(
            config=self.config.board_config, render_mode=render_mode
        )
        self.stats = PlayStats()

    def play_game(
        self,
        seed: Optional[int] = None,
        callback: Optional[TurnCallback] = None,
    ) -> GameStats:
        """
        Play one game to completion.

        Args:
            seed: Seed for the board and both agents.
            callback: Called with (env, agent) after every move.

        Returns:
            Statistics for the game.
        """
        self.env.reset(seed=seed)
        agent = DeductionAgent(
            self.env.board,
            SolverConfig(
                check_soundness=self.config.check_soundness,
                strict=self.config.strict,
                seed=seed,
            ),
        )
        guesser = RandomAgent(
            self.config.board_height, self.config.board_width, seed=seed
        )
        stats = GameStats()
        board = self.env.board

        while board.is_playing and stats.turns < self.config.max_turns:
            if agent.take_turn():
                if agent.last_action.kind == ActionKind.FLAG:
                    stats.flags += 1
                else:
                    stats.reveals += 1
            elif self.config.allow_guessing:
                if not self._guess(agent, guesser):
                    break
                stats.guesses += 1
            else:
                break

            stats.turns += 1
            if callback:
                callback(self.env, agent)
            if self.config.delay:
                time.sleep(self.config.delay)

        stats.mines_confirmed = len(agent.confirmed_mines)
        stats.revealed_cells = board.revealed_count
        if board.is_won:
            stats.outcome = OUTCOME_WON
        elif board.is_lost:
            stats.outcome = OUTCOME_LOST

        logger.info(
            "Game finished %s after %d turn(s), %d guess(es)",
            stats.outcome, stats.turns, stats.guesses,
        )
        self.stats.add(stats)
        return stats

    def _guess(self, agent: DeductionAgent, guesser: RandomAgent) -> bool:
        """Reveal a random hidden cell that is not a confirmed mine."""
        num_cells = self.env.num_cells
        mask = self.env.get_action_mask()[:num_cells].copy()
        if agent.confirmed_mines:
            mask[list(agent.confirmed_mines)] = False
        if not np.any(mask):
            return False

        observation = self.env.board.get_observation()
        index = guesser.select_action(observation, mask)
        logger.debug("Guessing cell %d", index)
        self.env.step(index)
        return True

    def evaluate(
        self,
        num_games: int = 100,
        seed: Optional[int] = None,
    ) -> PlayStats:
        """
        Play a batch of games.

        Args:
            num_games: Number of games to play.
            seed: Base seed; game i uses seed + i.

        Returns:
            Statistics for the batch.
        """
        batch = PlayStats()
        for game in range(num_games):
            game_seed = None if seed is None else seed + game
            batch.add(self.play_game(seed=game_seed))
        return batch

    def save_stats(self, path: Union[str, Path]) -> None:
        """Save accumulated statistics to JSON."""
        stats_file = Path(path)
        stats_file.parent.mkdir(parents=True, exist_ok=True)
        with open(stats_file, "w") as f:
            json.dump(self.stats.to_dict(), f, indent=2)
