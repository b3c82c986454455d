"""Tests for the board, win checker and move validator."""

import numpy as np
import pytest

from logic.errors import PreconditionViolation
from logic.game_state import Board, PlayerAssignment, PlayerRole, Side
from logic.move_validator import MoveValidator
from logic.win_checker import Outcome, OutcomeStatus, WinChecker

F = Side.FIRST
S = Side.SECOND
_ = None


def test_new_board_is_empty():
    board = Board()
    assert board.empty_count() == 9
    assert board.empty_cells() == list(range(9))
    assert all(board.is_empty(cell) for cell in range(9))
    assert board.snapshot() == (None,) * 9


def test_place_and_clear_keep_empty_count():
    board = Board()
    board.place(4, F)
    board.place(0, S)

    assert board.is_empty(4) is False
    assert board.side_at(4) == F
    assert board.side_at(0) == S
    assert board.empty_count() == 7
    assert board.empty_cells() == [1, 2, 3, 5, 6, 7, 8]

    board.clear(4)
    assert board.is_empty(4) is True
    assert board.empty_count() == 8


def test_place_on_occupied_cell_is_a_precondition_violation():
    board = Board()
    board.place(2, F)

    with pytest.raises(PreconditionViolation):
        board.place(2, S)

    assert board.side_at(2) == F
    assert board.empty_count() == 8


def test_clear_empty_cell_is_a_precondition_violation():
    with pytest.raises(AssertionError):
        Board().clear(3)


def test_from_cells_and_as_grid():
    board = Board.from_cells([F, S, _, _, F, _, _, _, S])
    assert board.empty_count() == 5
    np.testing.assert_array_equal(
        board.as_grid(),
        np.array([[1, 2, 0], [0, 1, 0], [0, 0, 2]], dtype=np.int8),
    )
    assert repr(board) == "Board('OX..O...X')"


def test_from_cells_requires_nine_cells():
    with pytest.raises(ValueError):
        Board.from_cells([F, S])


def test_copy_is_independent():
    board = Board.from_cells([F, _, _, _, _, _, _, _, _])
    clone = board.copy()
    clone.place(8, S)

    assert board.is_empty(8)
    assert board.empty_count() == 8
    assert clone.empty_count() == 7
    assert board != clone


def test_reset_empties_the_board():
    board = Board.from_cells([F, S, F, S, F, S, _, _, _])
    board.reset()
    assert board == Board()
    assert board.empty_count() == 9


def test_render_numbers_empty_cells():
    board = Board.from_cells([F, _, _, _, S, _, _, _, _])
    lines = board.render().splitlines()
    assert lines[0] == " O | 1 | 2 "
    assert lines[2] == " 3 | X | 5 "


def test_side_opposite_and_marks():
    assert F.opposite() == S
    assert S.opposite() == F
    assert F.mark == "O"
    assert S.mark == "X"
    assert F.player_number == 1
    assert S.player_number == 2


def test_assignment_roles():
    assignment = PlayerAssignment.computer_first()
    assert assignment.role_for(F) == PlayerRole.COMPUTER
    assert assignment.role_for(S) == PlayerRole.HUMAN
    assert assignment.computer_enabled
    assert not PlayerAssignment.human_vs_human().computer_enabled


# ==================== WIN CHECKER ====================

@pytest.mark.parametrize("line", WinChecker.WINNING_LINES)
def test_every_line_wins(line):
    cells = [_] * 9
    for cell in line:
        cells[cell] = S
    board = Board.from_cells(cells)

    checker = WinChecker()
    assert checker.evaluate(board) == Outcome.won(S)
    assert checker.winning_line(board) == line


def test_winning_lines_order():
    assert WinChecker.WINNING_LINES == (
        (0, 1, 2), (3, 4, 5), (6, 7, 8),
        (0, 3, 6), (1, 4, 7), (2, 5, 8),
        (0, 4, 8), (2, 4, 6),
    )


def test_ongoing_board():
    board = Board.from_cells([F, S, _, _, F, _, _, _, _])
    outcome = WinChecker().evaluate(board)
    assert outcome == Outcome.ongoing()
    assert outcome.status == OutcomeStatus.ONGOING
    assert not outcome.is_terminal
    assert outcome.winner is None


def test_full_board_without_line_is_drawn():
    board = Board.from_cells([
        F, S, F,
        F, S, S,
        S, F, F,
    ])
    outcome = WinChecker().evaluate(board)
    assert outcome == Outcome.drawn()
    assert outcome.is_terminal
    assert outcome.is_draw


def test_win_on_full_board_beats_draw():
    board = Board.from_cells([
        F, F, F,
        S, S, F,
        S, F, S,
    ])
    assert WinChecker().evaluate(board) == Outcome.won(F)


def test_first_line_in_order_decides_winner():
    # Illegal board with two completed lines: rows are checked first
    board = Board.from_cells([
        S, S, S,
        _, _, _,
        F, F, F,
    ])
    checker = WinChecker()
    assert checker.evaluate(board) == Outcome.won(S)
    assert checker.winners(board) == {F, S}


def test_columns_are_checked_before_diagonals():
    board = Board.from_cells([
        F, F, _,
        _, F, _,
        _, F, F,
    ])
    assert WinChecker().winning_line(board) == (1, 4, 7)


def test_evaluate_is_idempotent_and_does_not_mutate():
    board = Board.from_cells([F, S, F, _, S, _, _, _, _])
    before = board.snapshot()
    checker = WinChecker()

    assert checker.evaluate(board) == checker.evaluate(board)
    assert board.snapshot() == before
    assert board.empty_count() == 5


def test_last_cell_centre():
    # Centre is the only empty cell
    drawn = Board.from_cells([
        F, S, F,
        S, _, F,
        S, F, S,
    ])
    checker = WinChecker()
    assert checker.evaluate(drawn) == Outcome.ongoing()
    drawn.place(4, F)
    assert checker.evaluate(drawn) == Outcome.drawn()

    won = Board.from_cells([
        F, S, F,
        S, _, S,
        F, S, F,
    ])
    assert checker.evaluate(won) == Outcome.ongoing()
    won.place(4, F)
    assert checker.evaluate(won) == Outcome.won(F)


def test_outcome_str():
    assert str(Outcome.won(S)) == "Won(X)"
    assert str(Outcome.drawn()) == "Drawn"
    assert str(Outcome.ongoing()) == "Ongoing"


# ==================== MOVE VALIDATOR ====================

def test_validator_accepts_empty_cell():
    result = MoveValidator().validate_move(Board(), 4)
    assert result.is_valid
    assert result.error_message is None


@pytest.mark.parametrize("cell", [-1, 9, "4", 1.0, True])
def test_validator_rejects_bad_cells(cell):
    result = MoveValidator().validate_move(Board(), cell)
    assert not result.is_valid
    assert "Invalid cell" in result.error_message


def test_validator_rejects_occupied_cell():
    board = Board.from_cells([_, _, _, _, S, _, _, _, _])
    result = MoveValidator().validate_move(board, 4)
    assert not result.is_valid
    assert result.error_message == "Cell 4 is already occupied by X"


def test_validator_rejects_moves_after_game_over():
    validator = MoveValidator()
    result = validator.validate_move(Board(), 0, is_game_over=True)
    assert not result.is_valid
    assert validator.get_valid_moves(Board(), is_game_over=True) == []


def test_validate_turn():
    validator = MoveValidator()
    assignment = PlayerAssignment.human_first()
    assert validator.validate_turn(assignment, F, PlayerRole.HUMAN).is_valid
    result = validator.validate_turn(assignment, S, PlayerRole.HUMAN)
    assert not result.is_valid
    assert "computer" in result.error_message
