"""
Win checker for TicTacToe.
Classifies a board as ongoing, won by one side, or drawn.
"""

from enum import Enum
from typing import Optional, Tuple
from dataclasses import dataclass

import numpy as np

from .config import GameConfig
from .game_state import Board, Side


class OutcomeStatus(Enum):
    ONGOING = "ongoing"
    WON = "won"
    DRAWN = "drawn"


@dataclass(frozen=True)
class Outcome:
    """
    Result of evaluating a board. Always recomputed from the cells,
    never stored as separate game state.
    """
    status: OutcomeStatus
    winner: Optional[Side] = None

    @classmethod
    def ongoing(cls) -> "Outcome":
        return ONGOING

    @classmethod
    def drawn(cls) -> "Outcome":
        return DRAWN

    @classmethod
    def won(cls, side: Side) -> "Outcome":
        return WON_BY[side]

    @property
    def is_terminal(self) -> bool:
        """True once the game is won or drawn."""
        return self.status != OutcomeStatus.ONGOING

    @property
    def is_draw(self) -> bool:
        return self.status == OutcomeStatus.DRAWN

    def __str__(self) -> str:
        if self.status == OutcomeStatus.WON:
            return f"Won({self.winner.mark})"
        return self.status.value.capitalize()


ONGOING = Outcome(OutcomeStatus.ONGOING)
DRAWN = Outcome(OutcomeStatus.DRAWN)
WON_BY = {side: Outcome(OutcomeStatus.WON, side) for side in Side}


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 cells of the same side in a row
    (horizontally, vertically, or diagonally)
    """

    # All possible winning lines, checked in this order
    WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
        # Rows
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        # Columns
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        # Diagonals
        (0, 4, 8),
        (2, 4, 6),
    )

    _LINE_INDEX = np.array(WINNING_LINES, dtype=np.intp)

    def _completed_lines(self, board: Board) -> np.ndarray:
        """Indices into WINNING_LINES of every line held by a single side."""
        lines = board.cells[self._LINE_INDEX]
        complete = (
            (lines[:, 0] != GameConfig.EMPTY_CODE)
            & (lines[:, 0] == lines[:, 1])
            & (lines[:, 1] == lines[:, 2])
        )
        return np.flatnonzero(complete)

    def evaluate(self, board: Board) -> Outcome:
        """
        Classify the board.

        Args:
            board: The board to inspect. It is not modified.

        Returns:
            Won(side) for the first completed line, Drawn if the board is
            full, Ongoing otherwise.
        """
        completed = self._completed_lines(board)
        if completed.size:
            first_cell = self.WINNING_LINES[completed[0]][0]
            return Outcome.won(Side(int(board.cells[first_cell])))

        if board.empty_count() == 0:
            return Outcome.drawn()

        return Outcome.ongoing()

    def winning_line(self, board: Board) -> Optional[Tuple[int, int, int]]:
        """
        Get the winning line if there is one.

        Returns:
            The first completed line as a triple of cell indices, or None.
        """
        completed = self._completed_lines(board)
        if completed.size:
            return self.WINNING_LINES[completed[0]]
        return None

    def winners(self, board: Board) -> set:
        """Every side holding a completed line. More than one means an illegal board."""
        return {
            Side(int(board.cells[self.WINNING_LINES[i][0]]))
            for i in self._completed_lines(board)
        }
