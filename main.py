"""
Main entry point for TicTacToe.

Runs the curses UI by default, or a line-based console game with --console.
Both front ends drive the same GameController:
- Human moves are submitted as cell numbers (0-8)
- Computer moves come from the Negamax search
"""

import argparse
import logging
import sys
import time
from typing import Callable, Optional

from logic.errors import InvalidMove
from logic.game_state import PlayerAssignment
from logic.orchestrator import GameController

from terminal.config import TerminalConfig
from terminal.messages import menu_lines, parse_menu_choice, result_message, turn_message

logger = logging.getLogger(__name__)


class ConsoleGame:
    """
    Line-based TicTacToe.

    Game flow:
    1. Pick the players from the menu (or --mode)
    2. Humans type a cell number, computers search for the best cell
    3. Repeat until someone wins or it's a draw
    4. Offer another game
    """

    def __init__(
        self,
        assignment: Optional[PlayerAssignment] = None,
        computer_delay: float = TerminalConfig.COMPUTER_MOVE_DELAY_S,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print
    ):
        self.fixed_assignment = assignment
        self.computer_delay = computer_delay
        self.input = input_fn
        self.output = output_fn
        self.controller = GameController(assignment)

    def choose_players(self) -> PlayerAssignment:
        """Show the menu until a valid choice is entered."""
        for line in menu_lines():
            self.output(line)

        while True:
            choice = self.input(TerminalConfig.MENU_PROMPT + " ")
            assignment = parse_menu_choice(choice)
            if assignment is not None:
                return assignment
            self.output(f"'{choice}' is not a menu choice.")

    def play(self, assignment: PlayerAssignment) -> str:
        """
        Play one game to the end.

        Returns:
            The result message.
        """
        self.controller.new_game(assignment)

        while not self.controller.is_game_over:
            self.output("")
            self.output(self.controller.board.render())
            side = self.controller.active_side
            self.output(turn_message(side, assignment))

            if self.controller.is_computer_turn():
                cell, _ = self.controller.request_automated_move()
                time.sleep(self.computer_delay)
                self.output(f"Computer plays {side.mark} at cell {cell}")
            else:
                self._human_turn()

        self.output("")
        self.output(self.controller.board.render())
        message = result_message(self.controller.phase.outcome, assignment)
        self.output(message)
        return message

    def _human_turn(self):
        """Ask for a cell until a valid one is entered."""
        while True:
            text = self.input("Cell (0-8, ? for a hint): ").strip()
            if text == "?":
                board = self.controller.board.copy()
                self.output(self.controller.ai.get_move_suggestion(board, self.controller.active_side))
                continue

            try:
                cell = int(text)
            except ValueError:
                self.output(f"'{text}' is not a cell number.")
                continue

            try:
                self.controller.submit_human_move(cell)
                return
            except InvalidMove as e:
                self.output(e.reason)

    def run(self):
        """Play games until the player declines another one."""
        try:
            while True:
                assignment = self.fixed_assignment or self.choose_players()
                self.play(assignment)
                again = self.input("Play again? [y/N] ").strip().lower()
                if again not in ("y", "yes"):
                    break
        finally:
            self.controller.close()


def setup_logging(level: str, log_file: Optional[str] = None):
    """Configure the root logger."""
    kwargs = {"filename": log_file} if log_file else {"stream": sys.stderr}
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        **kwargs
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TicTacToe with a Negamax opponent")
    parser.add_argument(
        "--mode",
        choices=sorted(TerminalConfig.MENU_CHOICES),
        help="Skip the menu: 1 human first, 2 computer first, 3 human vs human, 4 computer vs computer"
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Play in line-based console mode instead of full screen"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=TerminalConfig.COMPUTER_MOVE_DELAY_S,
        help="Seconds to pause before showing a computer move"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Shortcut for --log-level DEBUG"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help=f"Log file (full-screen mode defaults to {TerminalConfig.LOG_FILE})"
    )
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    level = "DEBUG" if args.verbose else args.log_level
    log_file = args.log_file
    if log_file is None and not args.console:
        log_file = TerminalConfig.LOG_FILE
    setup_logging(level, log_file)

    assignment = parse_menu_choice(args.mode) if args.mode else None

    try:
        if args.console:
            ConsoleGame(assignment, computer_delay=args.delay).run()
        else:
            from ui import TicTacToeUI
            TicTacToeUI(assignment, computer_delay=args.delay).run()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")

    return 0


if __name__ == "__main__":
    sys.exit(main())
