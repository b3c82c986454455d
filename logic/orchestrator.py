"""
Turn-taking for TicTacToe.
Alternates between the two players, applies moves to the board, and stops
when the game is won or drawn.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Tuple, Union
from dataclasses import dataclass

from .ai_player import AIPlayer
from .config import GameConfig
from .errors import InvalidMove, PreconditionViolation, SearchInProgress
from .game_state import Board, PlayerAssignment, PlayerRole, Side
from .move_validator import MoveValidator
from .win_checker import Outcome, WinChecker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AwaitingMove:
    """The game is waiting for `side` to move."""
    side: Side


@dataclass(frozen=True)
class GameOver:
    """The game has ended. Only new_game() leaves this state."""
    outcome: Outcome


GamePhase = Union[AwaitingMove, GameOver]


@dataclass(frozen=True)
class Move:
    """A move applied to the board."""
    side: Side
    cell: int
    role: PlayerRole
    move_number: int        # 0-8, in order of play


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a game for rendering."""
    board: Tuple[Optional[Side], ...]
    phase: GamePhase
    assignment: PlayerAssignment

    @property
    def is_game_over(self) -> bool:
        return isinstance(self.phase, GameOver)


class GameController:
    """
    The turn-taking state machine.

    States:
    - AwaitingMove(side): waiting for a human move or an automated search
    - GameOver(outcome): the game ended, see new_game()

    Player one always plays FIRST and moves first. At most one automated
    search runs at a time, and the board is not touched until it returns.
    """

    def __init__(
        self,
        assignment: Optional[PlayerAssignment] = None,
        ai: Optional[AIPlayer] = None
    ):
        """
        Initialize the controller and start a game.

        Args:
            assignment: Roles for both players (default: human first).
            ai: Search engine for computer turns.
        """
        self.board = Board()
        self.ai = ai or AIPlayer()
        self.win_checker = WinChecker()
        self.validator = MoveValidator()

        self.assignment = assignment or PlayerAssignment()
        self.phase: GamePhase = AwaitingMove(Side.FIRST)
        self.history: List[Move] = []

        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending: Optional[Future] = None
        self._lock = threading.Lock()

        self.new_game(self.assignment)

    # ==================== GAME LIFECYCLE ====================

    def new_game(self, assignment: Optional[PlayerAssignment] = None):
        """
        Reset the board and give the move to player one.

        Args:
            assignment: New roles, or None to keep the current ones.
        """
        self._check_no_search()

        if assignment is not None:
            self.assignment = assignment

        self.board.reset()
        self.history = []
        self.phase = AwaitingMove(Side.FIRST)

        logger.info(
            "New game: player 1 (%s) is %s, player 2 (%s) is %s",
            Side.FIRST.mark, self.assignment.player_one.value,
            Side.SECOND.mark, self.assignment.player_two.value
        )

    def close(self):
        """Wait for any running search and shut the worker down."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ==================== QUERIES ====================

    @property
    def is_game_over(self) -> bool:
        return isinstance(self.phase, GameOver)

    @property
    def active_side(self) -> Optional[Side]:
        """Side to move, or None once the game is over."""
        if isinstance(self.phase, AwaitingMove):
            return self.phase.side
        return None

    def active_role(self) -> Optional[PlayerRole]:
        """Role of the side to move, or None once the game is over."""
        side = self.active_side
        return None if side is None else self.assignment.role_for(side)

    def is_computer_turn(self) -> bool:
        return self.active_role() == PlayerRole.COMPUTER

    @property
    def search_in_progress(self) -> bool:
        return self._pending is not None

    def current_state(self) -> GameSnapshot:
        """Board snapshot plus the current phase, for rendering."""
        return GameSnapshot(
            board=self.board.snapshot(),
            phase=self.phase,
            assignment=self.assignment
        )

    # ==================== MOVES ====================

    def submit_human_move(self, cell: int) -> Outcome:
        """
        Apply a move chosen by a human.

        Args:
            cell: Cell index (0-8).

        Returns:
            The outcome after the move.

        Raises:
            InvalidMove: The game is over, it is the computer's turn, or the
                cell is out of range or occupied. The board is unchanged.
        """
        self._check_no_search()

        result = self.validator.validate_move(self.board, cell, self.is_game_over)
        if not result.is_valid:
            raise InvalidMove(result.error_message, cell)

        turn = self.validator.validate_turn(self.assignment, self.active_side, PlayerRole.HUMAN)
        if not turn.is_valid:
            raise InvalidMove(turn.error_message, cell)

        return self._apply_move(cell, PlayerRole.HUMAN)

    def request_automated_move(self) -> Tuple[int, Outcome]:
        """
        Compute and apply the computer's move, blocking until it is done.

        Returns:
            (cell, outcome) for the move that was played.

        Raises:
            InvalidMove: The game is over or the side to move is human.
        """
        future = self.request_automated_move_async()
        return self.complete_automated_move(future)

    def request_automated_move_async(self) -> Future:
        """
        Start the computer's search on the worker thread.

        The search runs on a copy of the board. Until the returned future
        is passed to complete_automated_move(), every call that changes the
        game raises SearchInProgress.

        Returns:
            A future resolving to (cell, value).
        """
        with self._lock:
            if self._pending is not None:
                raise SearchInProgress("An automated move is already being computed")

            self._check_computer_turn()

            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=GameConfig.MAX_SEARCH_WORKERS,
                    thread_name_prefix="negamax"
                )

            side = self.active_side
            logger.debug("Computer (%s) is thinking...", side.mark)
            self._pending = self._executor.submit(self.ai.best_move, self.board.copy(), side)
            return self._pending

    def complete_automated_move(self, future: Future) -> Tuple[int, Outcome]:
        """
        Wait for a search started by request_automated_move_async() and
        apply its move.

        Returns:
            (cell, outcome) for the move that was played.
        """
        with self._lock:
            if future is not self._pending:
                raise PreconditionViolation("Future does not belong to the running search")

            try:
                cell, value = future.result()
            finally:
                self._pending = None

            if not self.board.is_empty(cell):
                raise PreconditionViolation(f"Search proposed occupied cell {cell}")

            logger.debug("Computer picked cell %d (value %d)", cell, value)
            return cell, self._apply_move(cell, PlayerRole.COMPUTER)

    def play_automated_turns(self) -> List[Tuple[int, Outcome]]:
        """
        Play computer moves until a human must move or the game ends.

        Returns:
            (cell, outcome) for each computer move played.
        """
        played = []
        while self.is_computer_turn():
            played.append(self.request_automated_move())
        return played

    # ==================== INTERNALS ====================

    def _apply_move(self, cell: int, role: PlayerRole) -> Outcome:
        """Place the active side's mark and advance the state machine."""
        side = self.active_side
        self.board.place(cell, side)
        self.history.append(Move(side, cell, role, len(self.history)))

        outcome = self.win_checker.evaluate(self.board)
        logger.info("%s (%s) played cell %d -> %s", side.mark, role.value, cell, outcome)

        if outcome.is_terminal:
            self.phase = GameOver(outcome)
        else:
            self.phase = AwaitingMove(side.opposite())
        return outcome

    def _check_computer_turn(self):
        if self.is_game_over:
            raise InvalidMove("Game is already over!")

        turn = self.validator.validate_turn(self.assignment, self.active_side, PlayerRole.COMPUTER)
        if not turn.is_valid:
            raise InvalidMove(turn.error_message)

    def _check_no_search(self):
        if self._pending is not None:
            raise SearchInProgress("Board is locked while the computer is thinking")
