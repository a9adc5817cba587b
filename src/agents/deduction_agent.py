"""
Deduction agent for Minesweeper.

Plays one board by logical constraint propagation over the revealed
hints. Every queued reveal is provably safe and every queued flag is
provably a mine; when nothing can be proven the turn fails instead of
guessing, and the caller decides what to do next.
"""
import logging
from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import AbstractSet, Deque, Dict, FrozenSet, List, Optional, Set

import numpy as np

from game.board import Board
from game.cell import FlagState


logger = logging.getLogger(__name__)


# ============================================================================
# Errors and Configuration
# ============================================================================

class SoundnessError(AssertionError):
    """A deduction contradicted the board's ground truth."""


@dataclass
class SolverConfig:
    """
    Configuration for a deduction session.

    Attributes:
        check_soundness: Compare every queued action with the board's
            ground truth before accepting it.
        strict: Raise SoundnessError on a violation instead of logging
            it and refusing the action.
        seed: Seed for the first-move generator.
    """

    check_soundness: bool = True
    strict: bool = False
    seed: Optional[int] = None


# ============================================================================
# Session Types
# ============================================================================

class ActionKind(Enum):
    """Kinds of move the agent applies to the board."""

    REVEAL = auto()
    FLAG = auto()


@dataclass(frozen=True)
class Action:
    """A move applied to the board."""

    kind: ActionKind
    index: int


@dataclass
class DeductionResult:
    """Cells newly queued by one deduction pass."""

    mines: List[int] = field(default_factory=list)
    safe: List[int] = field(default_factory=list)

    @property
    def found_any(self) -> bool:
        return bool(self.mines or self.safe)


@dataclass(frozen=True)
class Sensor:
    """
    A revealed cell with a positive hint and at least one hidden neighbor.

    For example, a revealed "2" touching hidden cells {A, B, C} where A is
    a known mine still needs one more mine among {B, C}.
    """

    index: int
    hint: int
    hidden: FrozenSet[int]

    def unknown(self, known_mines: AbstractSet[int]) -> FrozenSet[int]:
        """Hidden neighbors not yet proven to be mines."""
        return self.hidden - known_mines

    def need(self, known_mines: AbstractSet[int]) -> int:
        """Mines still owed among the unknown neighbors."""
        return self.hint - len(self.hidden & known_mines)


# ============================================================================
# Deduction Agent
# ============================================================================

class DeductionAgent:
    """
    Agent that deduces provably safe cells and provably mined cells.

    Strategy per turn:
        1. Apply one queued action (reveals before flags).
        2. If nothing was queued, run a deduction pass and try again.
        3. If still nothing, report failure; the board needs a guess.

    A deduction pass works over the sensor cells:
        A. A sensor whose hidden neighbor count equals its hint has a
           mine under every hidden neighbor.
        B. A sensor whose known mines already account for its hint has
           only safe cells among the rest of its hidden neighbors.
        C. Only when B finds nothing: pairs of sensors sharing unknown
           cells are compared by set difference to find safe cells and
           mines that neither sensor proves alone.

    The agent owns its session state and is bound to one board for the
    lifetime of one game.
    """

    def __init__(
        self,
        board: Board,
        config: Optional[SolverConfig] = None,
    ) -> None:
        """
        Initialize the agent.

        Args:
            board: Board to play.
            config: Session configuration.
        """
        self.board = board
        self.config = config or SolverConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.pending_reveals: Deque[int] = deque()
        self.pending_flags: Deque[int] = deque()
        self._confirmed_mines: Set[int] = set()
        self.initialized = False
        self.last_action: Optional[Action] = None

    @property
    def confirmed_mines(self) -> FrozenSet[int]:
        """Cells proven to be mines. Only ever grows during a session."""
        return frozenset(self._confirmed_mines)

    # ========================================================================
    # Turn Handling
    # ========================================================================

    def take_turn(self) -> bool:
        """
        Apply one action to the board.

        Returns:
            True if a reveal or flag was applied, False if the game is
            over or no action can be deduced.
        """
        if not self.board.is_playing:
            return False

        if not self.initialized and self.board.revealed_count == 0:
            self.initialized = True
            return self._pick_first_point()

        self.initialized = True

        if self._take_queued_action():
            return True

        self.deduce()

        if self._take_queued_action():
            return True

        logger.info(
            "No deducible moves left, %d mine(s) confirmed",
            len(self._confirmed_mines),
        )
        return False

    def _pick_first_point(self) -> bool:
        """Reveal a random cell in the middle third of the board."""
        height, width = self.board.height, self.board.width
        row = height // 3 + int(self.rng.integers(max(height // 3, 1)))
        col = width // 3 + int(self.rng.integers(max(width // 3, 1)))
        index = self.board.index_of(row, col)

        logger.debug("Opening at (%d, %d)", row, col)
        self.last_action = Action(ActionKind.REVEAL, index)
        return self.board.reveal_at(index)

    def _take_queued_action(self) -> bool:
        """Apply the next valid queued reveal, else the next queued flag."""
        while self.pending_reveals:
            index = self.pending_reveals.popleft()
            cell = self.board.cell_at(index)
            if cell.is_revealed:
                logger.debug("Dropping queued reveal of visible cell %d", index)
                continue
            if cell.flag != FlagState.NONE:
                logger.warning("Clearing stale marker on safe cell %d", index)
                self.board.clear_flag(index)
            self.board.reveal_at(index)
            self.last_action = Action(ActionKind.REVEAL, index)
            return True

        while self.pending_flags:
            index = self.pending_flags.popleft()
            cell = self.board.cell_at(index)
            if cell.is_revealed:
                logger.debug("Dropping queued flag on visible cell %d", index)
                continue
            if cell.flag != FlagState.NONE:
                logger.warning("Duplicate flag on cell %d, clearing first", index)
                self.board.clear_flag(index)
            self.board.toggle_flag(index)
            self.last_action = Action(ActionKind.FLAG, index)
            return True

        return False

    # ========================================================================
    # Deduction Pass
    # ========================================================================

    def deduce(self) -> DeductionResult:
        """
        Run one deduction pass and queue everything it proves.

        Returns:
            The newly queued mines and safe cells.
        """
        sensors = self._find_sensors()
        result = DeductionResult()

        result.mines.extend(self._find_known_mines(sensors))
        result.safe.extend(self._find_safe_cells(sensors))

        if not result.safe:
            overlap = self._find_overlap_moves(sensors)
            result.mines.extend(overlap.mines)
            result.safe.extend(overlap.safe)

        logger.debug(
            "Deduction pass over %d sensor(s): %d safe, %d mine(s)",
            len(sensors), len(result.safe), len(result.mines),
        )
        return result

    def _find_sensors(self) -> List[Sensor]:
        """Collect revealed hint cells that still touch hidden cells."""
        sensors = []
        for cell in self.board.cells:
            if not cell.is_revealed or cell.is_mine or cell.adjacent_mines == 0:
                continue
            hidden = frozenset(
                index for index in cell.neighbors
                if self.board.cell_at(index).is_hidden
            )
            if hidden:
                sensors.append(Sensor(cell.index, cell.adjacent_mines, hidden))
        return sensors

    def _find_known_mines(self, sensors: List[Sensor]) -> List[int]:
        """Phase A: every hidden neighbor of a saturated sensor is a mine."""
        found = []
        for sensor in sensors:
            if len(sensor.hidden) != sensor.hint:
                continue
            for index in sorted(sensor.hidden):
                if self._queue_mine(index):
                    found.append(index)
        return found

    def _find_safe_cells(self, sensors: List[Sensor]) -> List[int]:
        """Phase B: known mines use up the hint, the rest is safe."""
        found = []
        for sensor in sensors:
            unknown = sensor.unknown(self._confirmed_mines)
            if len(sensor.hidden) - len(unknown) != sensor.hint:
                continue
            for index in sorted(unknown):
                if self._queue_safe(index):
                    found.append(index)
        return found

    def _find_overlap_moves(self, sensors: List[Sensor]) -> DeductionResult:
        """
        Phase C: compare pairs of sensors that share unknown cells.

        For a test sensor T and another sensor V sharing unknown cells:
            - If V needs as many mines as T and the shared cells are all
              of T's unknown cells, V's other unknown cells are safe.
            - If V needs more than T and V has exactly (V.need - T.need)
              unknown cells outside the shared region, those are mines.

        Example:
            T: {X, Y} needs 1
            V: {X, Y, Z} needs 2
            -> Z must be a mine
        """
        result = DeductionResult()
        known = frozenset(self._confirmed_mines)
        open_sensors = [s for s in sensors if len(s.hidden) > s.hint]

        touching: Dict[int, List[Sensor]] = defaultdict(list)
        for sensor in open_sensors:
            for index in sensor.unknown(known):
                touching[index].append(sensor)

        for test in open_sensors:
            test_unknown = test.unknown(known)
            test_need = test.need(known)
            if not test_unknown or not 0 <= test_need <= len(test_unknown):
                continue

            for other in self._overlapping_sensors(test, test_unknown, touching):
                other_unknown = other.unknown(known)
                other_need = other.need(known)
                if not 0 <= other_need <= len(other_unknown):
                    continue

                shared = test_unknown & other_unknown
                exclusive = other_unknown - shared

                if other_need == test_need and shared == test_unknown:
                    for index in sorted(exclusive):
                        if self._queue_safe(index):
                            result.safe.append(index)
                elif (
                    other_need > test_need
                    and len(exclusive) == other_need - test_need
                ):
                    for index in sorted(exclusive):
                        if self._queue_mine(index):
                            result.mines.append(index)

        if result.mines:
            logger.debug("Overlap deduction added %d mine(s)", len(result.mines))
        return result

    @staticmethod
    def _overlapping_sensors(
        test: Sensor,
        test_unknown: FrozenSet[int],
        touching: Dict[int, List[Sensor]],
    ) -> List[Sensor]:
        """Other sensors sharing at least one unknown cell with test."""
        found: Dict[int, Sensor] = {}
        for index in test_unknown:
            for sensor in touching[index]:
                if sensor.index != test.index:
                    found[sensor.index] = sensor
        return [found[key] for key in sorted(found)]

    # ========================================================================
    # Queue Bookkeeping
    # ========================================================================

    def _queue_mine(self, index: int) -> bool:
        """Record a proven mine and queue it for flagging."""
        if index in self._confirmed_mines:
            return False
        if not self._verify(index, expect_mine=True):
            return False
        self._confirmed_mines.add(index)
        if index not in self.pending_flags:
            self.pending_flags.append(index)
        return True

    def _queue_safe(self, index: int) -> bool:
        """Queue a proven safe cell for reveal."""
        if index in self._confirmed_mines or index in self.pending_reveals:
            return False
        if not self._verify(index, expect_mine=False):
            return False
        self.pending_reveals.append(index)
        return True

    def _verify(self, index: int, expect_mine: bool) -> bool:
        """Check a conclusion against ground truth when enabled."""
        if not self.config.check_soundness:
            return True
        if self.board.cell_at(index).is_mine == expect_mine:
            return True

        kind = "mine" if expect_mine else "safe"
        message = f"Unsound deduction: cell {index} proven {kind}"
        if self.config.strict:
            raise SoundnessError(message)
        logger.error("%s, refusing action", message)
        return False

    def reset(self) -> None:
        """Discard the session, e.g. after the board was reset."""
        self.pending_reveals.clear()
        self.pending_flags.clear()
        self._confirmed_mines.clear()
        self.initialized = False
        self.last_action = None
