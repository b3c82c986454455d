"""
AI player for TicTacToe.
Uses an exhaustive Negamax search to choose the best move.
"""

import logging
from typing import List, Tuple

from .config import GameConfig
from .errors import PreconditionViolation
from .game_state import Board, Side
from .win_checker import Outcome, OutcomeStatus, WinChecker

logger = logging.getLogger(__name__)


class SearchFrame:
    """
    Stack of the speculative moves made during a search.

    Every push is paired with exactly one pop, in LIFO order, so the stack
    is empty before and after a top-level search.
    """

    def __init__(self, limit: int = GameConfig.SEARCH_STACK_LIMIT):
        self.limit = limit
        self._moves: List[Tuple[int, Side]] = []

    @property
    def depth(self) -> int:
        return len(self._moves)

    def push(self, board: Board, cell: int, side: Side):
        """Place a speculative mark and remember it."""
        if len(self._moves) >= self.limit:
            raise PreconditionViolation(f"Search stack overflow at depth {self.limit}")
        board.place(cell, side)
        self._moves.append((cell, side))

    def pop(self, board: Board) -> Tuple[int, Side]:
        """Undo the most recent speculative mark."""
        if not self._moves:
            raise PreconditionViolation("Search stack underflow")
        cell, side = self._moves.pop()
        board.clear(cell)
        return cell, side


class AIPlayer:
    """
    An AI that plays TicTacToe using Negamax.

    Negamax relies on the zero-sum identity: the value of a position for
    the opponent is the negation of its value for the side to move. The
    search is exhaustive, with no pruning and no cache, and only tells
    wins (+1), draws (0) and losses (-1) apart.
    """

    def __init__(self):
        self.win_checker = WinChecker()
        self.frame = SearchFrame()

        # Keep track of how many positions we've evaluated (for debugging)
        self.nodes_evaluated = 0

    def best_move(self, board: Board, side_to_move: Side) -> Tuple[int, int]:
        """
        Get the best move for the side to move.

        The board is used as scratch space during the search and is
        restored before returning.

        Args:
            board: Current board. Must have an Ongoing outcome.
            side_to_move: Side the move is computed for.

        Returns:
            (cell_index, value) where value is +1, 0 or -1 for side_to_move.
            Ties go to the lowest cell index.
        """
        if board.empty_count() == 0:
            raise PreconditionViolation("best_move called on a full board")
        if self.win_checker.evaluate(board).is_terminal:
            raise PreconditionViolation("best_move called on a finished game")
        self._check_frame_empty("before")

        self.nodes_evaluated = 0
        best_cell = -1
        best_value = GameConfig.LOSS_SCORE - 1

        for cell in range(GameConfig.NUM_CELLS):
            if not board.is_empty(cell):
                continue

            self.frame.push(board, cell, side_to_move)
            value = -self._negamax(board, side_to_move.opposite())
            self.frame.pop(board)

            if value > best_value:
                best_value = value
                best_cell = cell

        self._check_frame_empty("after")

        logger.debug(
            "AI evaluated %d positions for %s. Best move: %d (score: %d)",
            self.nodes_evaluated, side_to_move.mark, best_cell, best_value
        )
        return best_cell, best_value

    def negamax(self, board: Board, side_to_move: Side) -> int:
        """
        Game-theoretic value of a position for the side to move.
        Works on terminal boards too.
        """
        self._check_frame_empty("before")
        self.nodes_evaluated = 0
        value = self._negamax(board, side_to_move)
        self._check_frame_empty("after")
        return value

    def _negamax(self, board: Board, side_to_move: Side) -> int:
        """
        Recursive step of the search.

        Args:
            board: Position to evaluate, restored before returning.
            side_to_move: Side whose point of view the value is from.

        Returns:
            +1 win, 0 draw, -1 loss.
        """
        self.nodes_evaluated += 1

        outcome = self.win_checker.evaluate(board)
        if outcome.is_terminal:
            return self._score(outcome, side_to_move)

        best_value = GameConfig.LOSS_SCORE - 1
        opponent = side_to_move.opposite()

        for cell in range(GameConfig.NUM_CELLS):
            if not board.is_empty(cell):
                continue

            self.frame.push(board, cell, side_to_move)
            value = -self._negamax(board, opponent)
            self.frame.pop(board)

            if value > best_value:
                best_value = value

        return best_value

    @staticmethod
    def _score(outcome: Outcome, side_to_move: Side) -> int:
        """Score a terminal outcome from the point of view of side_to_move."""
        if outcome.status == OutcomeStatus.DRAWN:
            return GameConfig.DRAW_SCORE
        if outcome.winner == side_to_move:
            return GameConfig.WIN_SCORE
        return GameConfig.LOSS_SCORE

    def _check_frame_empty(self, when: str):
        if self.frame.depth != 0:
            raise PreconditionViolation(
                f"Search stack holds {self.frame.depth} moves {when} search"
            )

    def get_move_suggestion(self, board: Board, side_to_move: Side) -> str:
        """
        Get a human-readable move suggestion.

        Returns:
            A string describing the suggested move.
        """
        cell, value = self.best_move(board, side_to_move)
        row, col = divmod(cell, GameConfig.BOARD_SIZE)
        verdict = {1: "wins", 0: "draws", -1: "loses"}[value]
        return f"Place {side_to_move.mark} at cell {cell} (row {row}, col {col}); best play {verdict}"
