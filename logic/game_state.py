"""
Board state for TicTacToe.
Tracks the 9 cells, the number of empty cells, and who plays which side.
"""

from enum import Enum
from typing import Iterable, List, Optional, Tuple
from dataclasses import dataclass

import numpy as np

from .config import GameConfig
from .errors import PreconditionViolation


class Side(Enum):
    """The two marks placed on the board."""
    FIRST = GameConfig.FIRST_CODE
    SECOND = GameConfig.SECOND_CODE

    def opposite(self) -> "Side":
        """Get the opposite side."""
        return Side.SECOND if self == Side.FIRST else Side.FIRST

    @property
    def mark(self) -> str:
        """Mark drawn for this side ("O" or "X")."""
        return GameConfig.FIRST_MARK if self == Side.FIRST else GameConfig.SECOND_MARK

    @property
    def player_number(self) -> int:
        """1 for the player who moves first, 2 otherwise."""
        return self.value


class PlayerRole(Enum):
    """Who decides the moves for a side."""
    HUMAN = "human"
    COMPUTER = "computer"


@dataclass(frozen=True)
class PlayerAssignment:
    """
    Roles of player one (FIRST, always moves first) and player two (SECOND).
    """
    player_one: PlayerRole = PlayerRole.HUMAN
    player_two: PlayerRole = PlayerRole.COMPUTER

    def role_for(self, side: Side) -> PlayerRole:
        """Get the role playing the given side."""
        return self.player_one if side == Side.FIRST else self.player_two

    @property
    def computer_enabled(self) -> bool:
        """True if at least one side is played by the computer."""
        return PlayerRole.COMPUTER in (self.player_one, self.player_two)

    @classmethod
    def human_first(cls) -> "PlayerAssignment":
        return cls(PlayerRole.HUMAN, PlayerRole.COMPUTER)

    @classmethod
    def computer_first(cls) -> "PlayerAssignment":
        return cls(PlayerRole.COMPUTER, PlayerRole.HUMAN)

    @classmethod
    def human_vs_human(cls) -> "PlayerAssignment":
        return cls(PlayerRole.HUMAN, PlayerRole.HUMAN)

    @classmethod
    def computer_vs_computer(cls) -> "PlayerAssignment":
        return cls(PlayerRole.COMPUTER, PlayerRole.COMPUTER)


class Board:
    """
    The 3x3 board, stored row-major as 9 cells:

        0 1 2
        3 4 5
        6 7 8

    Each cell holds EMPTY_CODE or the value of a Side. The empty-cell count
    is kept next to the cells and always equals the number of empty cells.
    """

    def __init__(self):
        self.cells = np.full(GameConfig.NUM_CELLS, GameConfig.EMPTY_CODE, dtype=np.int8)
        self._empty = GameConfig.NUM_CELLS

    @classmethod
    def from_cells(cls, cells: Iterable[Optional[Side]]) -> "Board":
        """
        Build a board from 9 entries, each a Side or None for empty.

        Args:
            cells: Cell contents in row-major order.

        Returns:
            A new Board.
        """
        cells = list(cells)
        if len(cells) != GameConfig.NUM_CELLS:
            raise ValueError(f"Expected {GameConfig.NUM_CELLS} cells, got {len(cells)}")

        board = cls()
        for index, side in enumerate(cells):
            if side is not None:
                board.place(index, side)
        return board

    def is_empty(self, cell: int) -> bool:
        """True if the cell holds no mark."""
        return bool(self.cells[cell] == GameConfig.EMPTY_CODE)

    def place(self, cell: int, side: Side):
        """
        Mark an empty cell with a side.

        Args:
            cell: Cell index (0-8).
            side: Side placing the mark.
        """
        if not self.is_empty(cell):
            raise PreconditionViolation(f"Cell {cell} is already occupied")

        self.cells[cell] = side.value
        self._empty -= 1

    def clear(self, cell: int):
        """Set a marked cell back to empty."""
        if self.is_empty(cell):
            raise PreconditionViolation(f"Cell {cell} is already empty")

        self.cells[cell] = GameConfig.EMPTY_CODE
        self._empty += 1

    def empty_count(self) -> int:
        """Number of cells still empty."""
        return self._empty

    def empty_cells(self) -> List[int]:
        """Indices of all empty cells, in increasing order."""
        return np.flatnonzero(self.cells == GameConfig.EMPTY_CODE).tolist()

    def side_at(self, cell: int) -> Optional[Side]:
        """Get the side that marked a cell, or None if it is empty."""
        code = int(self.cells[cell])
        return None if code == GameConfig.EMPTY_CODE else Side(code)

    def snapshot(self) -> Tuple[Optional[Side], ...]:
        """Immutable copy of the cells, for rendering and comparison."""
        return tuple(self.side_at(cell) for cell in range(GameConfig.NUM_CELLS))

    def as_grid(self) -> np.ndarray:
        """Copy of the cell codes as a 3x3 array."""
        return self.cells.reshape(GameConfig.BOARD_SIZE, GameConfig.BOARD_SIZE).copy()

    def reset(self):
        """Empty every cell for a new game."""
        self.cells.fill(GameConfig.EMPTY_CODE)
        self._empty = GameConfig.NUM_CELLS

    def copy(self) -> "Board":
        """Create a deep copy of the board."""
        new_board = Board()
        new_board.cells = self.cells.copy()
        new_board._empty = self._empty
        return new_board

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells))

    def __repr__(self) -> str:
        marks = "".join(
            side.mark if side is not None else "." for side in self.snapshot()
        )
        return f"Board('{marks}')"

    def render(self) -> str:
        """Plain-text picture of the board with cell numbers on empty cells."""
        rows = []
        for row in range(GameConfig.BOARD_SIZE):
            cells = []
            for col in range(GameConfig.BOARD_SIZE):
                index = row * GameConfig.BOARD_SIZE + col
                side = self.side_at(index)
                cells.append(side.mark if side is not None else str(index))
            rows.append(" " + " | ".join(cells) + " ")
        return "\n---+---+---\n".join(rows)
