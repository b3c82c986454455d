"""
Move validator for TicTacToe.
Validates that moves follow the rules.
"""

from numbers import Integral
from typing import Optional, List
from dataclasses import dataclass

from .config import GameConfig
from .game_state import Board, PlayerAssignment, PlayerRole, Side


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Game must not be over
    2. Cell must be on the board (0-8)
    3. Can only place on empty cells
    """

    def validate_move(
        self,
        board: Board,
        cell: int,
        is_game_over: bool = False
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            board: Current board.
            cell: Cell to place a mark on (0-8).
            is_game_over: True if the game has already ended.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if game is over
        if is_game_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        # Check if cell is in valid range
        if isinstance(cell, bool) or not isinstance(cell, Integral) or not (0 <= cell < GameConfig.NUM_CELLS):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid cell {cell!r}. Must be 0-{GameConfig.NUM_CELLS - 1}."
            )

        # Check if cell is empty
        if not board.is_empty(cell):
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {cell} is already occupied by {board.side_at(cell).mark}"
            )

        return ValidationResult(is_valid=True)

    def validate_turn(
        self,
        assignment: PlayerAssignment,
        side: Side,
        expected_role: PlayerRole
    ) -> ValidationResult:
        """
        Check that the active side is played by the expected role.

        Args:
            assignment: Roles for the current game.
            side: The side whose turn it is.
            expected_role: Role the caller is acting for.

        Returns:
            ValidationResult.
        """
        actual_role = assignment.role_for(side)
        if actual_role != expected_role:
            return ValidationResult(
                is_valid=False,
                error_message=f"It is {side.mark}'s turn, played by the {actual_role.value}"
            )
        return ValidationResult(is_valid=True)

    def get_valid_moves(self, board: Board, is_game_over: bool = False) -> List[int]:
        """
        Get all valid moves for the side to move.

        Returns:
            List of empty cell indices, or an empty list once the game is over.
        """
        if is_game_over:
            return []
        return board.empty_cells()
