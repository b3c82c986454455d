"""Tests for the turn-taking state machine."""

import pytest

from logic.ai_player import AIPlayer
from logic.errors import InvalidMove, PreconditionViolation, SearchInProgress
from logic.game_state import PlayerAssignment, PlayerRole, Side
from logic.orchestrator import AwaitingMove, GameController, GameOver
from logic.win_checker import Outcome

F = Side.FIRST
S = Side.SECOND


@pytest.fixture
def controller():
    game = GameController(PlayerAssignment.human_vs_human())
    yield game
    game.close()


def test_initial_state(controller):
    state = controller.current_state()
    assert state.board == (None,) * 9
    assert state.phase == AwaitingMove(F)
    assert not state.is_game_over
    assert controller.active_role() == PlayerRole.HUMAN


def test_turns_alternate(controller):
    assert controller.submit_human_move(4) == Outcome.ongoing()
    assert controller.phase == AwaitingMove(S)
    controller.submit_human_move(0)
    assert controller.phase == AwaitingMove(F)

    assert [(m.side, m.cell) for m in controller.history] == [(F, 4), (S, 0)]
    assert [m.move_number for m in controller.history] == [0, 1]


def test_win_ends_the_game(controller):
    for cell in (0, 3, 1, 4):
        controller.submit_human_move(cell)
    outcome = controller.submit_human_move(2)

    assert outcome == Outcome.won(F)
    assert controller.phase == GameOver(Outcome.won(F))
    assert controller.active_side is None
    assert controller.active_role() is None

    with pytest.raises(InvalidMove):
        controller.submit_human_move(8)
    assert controller.board.is_empty(8)


def test_occupied_cell_is_rejected_and_board_unchanged(controller):
    controller.submit_human_move(4)
    before = controller.current_state()

    with pytest.raises(InvalidMove) as excinfo:
        controller.submit_human_move(4)

    assert excinfo.value.cell == 4
    assert "occupied" in excinfo.value.reason
    assert controller.current_state() == before


def test_out_of_range_cell_is_rejected(controller):
    with pytest.raises(InvalidMove):
        controller.submit_human_move(9)
    assert controller.board.empty_count() == 9


def test_new_game_resets(controller):
    for cell in (0, 3, 1, 4, 2):
        controller.submit_human_move(cell)
    assert controller.is_game_over

    controller.new_game(PlayerAssignment.human_first())
    assert controller.phase == AwaitingMove(F)
    assert controller.board.empty_count() == 9
    assert controller.history == []
    assert controller.assignment == PlayerAssignment.human_first()


def test_human_move_rejected_on_computer_turn():
    with GameController(PlayerAssignment.human_first()) as game:
        game.submit_human_move(4)
        assert game.is_computer_turn()

        with pytest.raises(InvalidMove):
            game.submit_human_move(0)
        assert game.board.empty_count() == 8


def test_automated_move_rejected_on_human_turn(controller):
    with pytest.raises(InvalidMove):
        controller.request_automated_move()
    assert controller.board.empty_count() == 9


def test_automated_move_rejected_after_game_over():
    with GameController(PlayerAssignment.human_vs_human()) as game:
        for cell in (0, 3, 1, 4, 2):
            game.submit_human_move(cell)
        game.assignment = PlayerAssignment.computer_vs_computer()
        with pytest.raises(InvalidMove):
            game.request_automated_move()


def test_computer_answers_human():
    with GameController(PlayerAssignment.human_first()) as game:
        game.submit_human_move(0)
        cell, outcome = game.request_automated_move()

        assert game.board.side_at(cell) == S
        assert outcome == Outcome.ongoing()
        assert game.phase == AwaitingMove(F)
        assert game.history[-1].role == PlayerRole.COMPUTER


def test_computer_takes_the_win():
    with GameController(PlayerAssignment.human_vs_human()) as game:
        for cell in (8, 0, 7, 1, 3):
            game.submit_human_move(cell)

        # Hand X over to the computer: it completes the top row
        game.assignment = PlayerAssignment.human_first()
        cell, outcome = game.request_automated_move()

        assert cell == 2
        assert outcome == Outcome.won(S)
        assert game.phase == GameOver(Outcome.won(S))


def test_async_search_is_single_flight_and_locks_the_board():
    with GameController(PlayerAssignment.human_first()) as game:
        game.submit_human_move(4)
        before = game.current_state()

        future = game.request_automated_move_async()
        assert game.search_in_progress

        with pytest.raises(SearchInProgress):
            game.request_automated_move_async()
        with pytest.raises(SearchInProgress):
            game.submit_human_move(0)
        with pytest.raises(SearchInProgress):
            game.new_game()
        assert game.current_state() == before

        cell, outcome = game.complete_automated_move(future)
        assert not game.search_in_progress
        assert game.board.side_at(cell) == S
        assert outcome == Outcome.ongoing()
        assert game.phase == AwaitingMove(F)


def test_complete_requires_the_pending_future():
    with GameController(PlayerAssignment.human_first()) as game:
        game.submit_human_move(4)
        future = game.request_automated_move_async()
        game.complete_automated_move(future)

        with pytest.raises(PreconditionViolation):
            game.complete_automated_move(future)


def test_human_first_against_computer_is_drawn():
    """Human opens in the centre then follows the best move each turn."""
    advisor = AIPlayer()
    with GameController(PlayerAssignment.human_first()) as game:
        human_moves = 0
        game.submit_human_move(4)
        human_moves += 1

        while not game.is_game_over:
            if game.is_computer_turn():
                game.request_automated_move()
            else:
                cell, _ = advisor.best_move(game.board.copy(), game.active_side)
                game.submit_human_move(cell)
                human_moves += 1

        assert human_moves == 5
        assert game.board.empty_count() == 0
        assert game.phase == GameOver(Outcome.drawn())


def test_computer_vs_computer_is_drawn():
    with GameController(PlayerAssignment.computer_vs_computer()) as game:
        played = game.play_automated_turns()

        assert len(played) == 9
        assert played[-1][1] == Outcome.drawn()
        assert game.phase == GameOver(Outcome.drawn())
        assert all(m.role == PlayerRole.COMPUTER for m in game.history)
