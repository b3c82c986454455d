"""
TicTacToe terminal UI
A full-screen interface for TicTacToe using curses.

Shows:
- Start menu (who plays first, human or computer on each side)
- The 3x3 grid with O and X glyphs
- A cursor moved with the arrow keys, Enter to place
- The result of the game
"""

import curses
import logging
import time
from typing import Optional

from logic.config import GameConfig
from logic.game_state import PlayerAssignment, Side
from logic.errors import InvalidMove
from logic.orchestrator import GameController, GameOver

from terminal.config import TerminalConfig
from terminal.cursor import GridCursor
from terminal.glyphs import GLYPH_SIZE, glyph_for
from terminal.messages import menu_lines, parse_menu_choice, result_message, turn_message

logger = logging.getLogger(__name__)


class QuitGame(Exception):
    """Raised when the player presses a quit key."""


class TicTacToeUI:
    """
    Main UI class for TicTacToe in a terminal.
    """

    def __init__(
        self,
        assignment: Optional[PlayerAssignment] = None,
        computer_delay: float = TerminalConfig.COMPUTER_MOVE_DELAY_S
    ):
        """
        Initialize the UI.

        Args:
            assignment: Roles to play with; None shows the menu before each game.
            computer_delay: Seconds to wait before showing a computer move.
        """
        self.fixed_assignment = assignment
        self.computer_delay = computer_delay
        self.controller = GameController(assignment)
        self.cursor = GridCursor.at_cell(TerminalConfig.START_CELL)
        self.stdscr = None

    # ==================== GEOMETRY ====================

    def _cell_center(self, cell: int):
        """Screen (y, x) of the centre of a cell."""
        row, col = divmod(cell, GameConfig.BOARD_SIZE)
        ctr_y = curses.LINES // 8
        ctr_x = curses.COLS // 6
        return (row * 2 + 1) * ctr_y, (col * 2 + 1) * ctr_x

    def _addstr(self, y: int, x: int, text: str, attr: int = curses.A_NORMAL):
        """Write text, ignoring anything that falls off a small screen."""
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            pass

    # ==================== DRAWING ====================

    def _draw_board(self):
        """Draw the empty grid."""
        self.stdscr.clear()
        grid_x = curses.COLS // 3
        grid_y = curses.LINES // 4

        for i in range(1, 3 * grid_x):
            for y in (1, grid_y, 2 * grid_y, 3 * grid_y):
                self._addstr(y, i, "-")

        for i in range(1, 3 * grid_y):
            for x in (1, grid_x, 2 * grid_x, 3 * grid_x):
                self._addstr(i, x, "|")

    def _draw_mark(self, cell: int, side: Side, attr: int = curses.A_NORMAL):
        """Draw the glyph of a side centred on a cell."""
        ctr_y, ctr_x = self._cell_center(cell)
        top = ctr_y - GLYPH_SIZE // 2
        left = ctr_x - GLYPH_SIZE // 2
        for offset, line in enumerate(glyph_for(side)):
            self._addstr(top + offset, left, line, attr)

    def _draw_status(self, text: str):
        self.stdscr.move(curses.LINES - 1, 0)
        self.stdscr.clrtoeol()
        self._addstr(curses.LINES - 1, 1, text)

    def _move_cursor(self):
        y, x = self._cell_center(self.cursor.cell)
        try:
            self.stdscr.move(y, x)
        except curses.error:
            pass

    # ==================== MENU ====================

    def _show_menu(self) -> PlayerAssignment:
        """Show the start menu until a valid choice is made."""
        self.stdscr.clear()
        top = curses.LINES // 2
        left = max(curses.COLS // 2 - 13, 0)
        for offset, line in enumerate(menu_lines()):
            self._addstr(top + offset, left, line)
        self._addstr(curses.LINES - 1, 1, TerminalConfig.MENU_PROMPT)

        while True:
            key = self.stdscr.getch()
            if key in TerminalConfig.QUIT_KEYS:
                raise QuitGame()
            if 0 <= key < 256:
                assignment = parse_menu_choice(chr(key))
                if assignment is not None:
                    self._addstr(curses.LINES - 1, len(TerminalConfig.MENU_PROMPT) + 2, chr(key))
                    self.stdscr.refresh()
                    time.sleep(TerminalConfig.MENU_DELAY_S)
                    return assignment

    # ==================== TURNS ====================

    def _human_move(self):
        """Let a human pick a cell; occupied cells are ignored."""
        side = self.controller.active_side
        self._draw_status(turn_message(side, self.controller.assignment))

        while True:
            self._move_cursor()
            key = self.stdscr.getch()

            if key in TerminalConfig.QUIT_KEYS:
                raise QuitGame()
            elif key == curses.KEY_LEFT:
                self.cursor.left()
            elif key == curses.KEY_RIGHT:
                self.cursor.right()
            elif key == curses.KEY_UP:
                self.cursor.up()
            elif key == curses.KEY_DOWN:
                self.cursor.down()
            elif key in TerminalConfig.SELECT_KEYS:
                try:
                    self.controller.submit_human_move(self.cursor.cell)
                except InvalidMove as e:
                    logger.debug("Rejected human move: %s", e.reason)
                    continue
                self._draw_mark(self.cursor.cell, side)
                return

    def _computer_move(self):
        """Run the search on the worker thread and show the result."""
        side = self.controller.active_side
        self._draw_status(turn_message(side, self.controller.assignment))
        self.stdscr.refresh()

        started = time.monotonic()
        future = self.controller.request_automated_move_async()
        cell, _ = self.controller.complete_automated_move(future)

        remaining = self.computer_delay - (time.monotonic() - started)
        if remaining > 0:
            time.sleep(remaining)

        self.cursor = GridCursor.at_cell(cell)
        self._draw_mark(cell, side)

    def _play_one_game(self, assignment: PlayerAssignment):
        self.controller.new_game(assignment)
        self.cursor = GridCursor.at_cell(TerminalConfig.START_CELL)
        self._draw_board()

        while not self.controller.is_game_over:
            if self.controller.is_computer_turn():
                self._computer_move()
            else:
                self._human_move()
            self._move_cursor()
            self.stdscr.refresh()

        self._show_result()

    def _show_result(self):
        """Show the final result and wait for a key."""
        phase = self.controller.phase
        assert isinstance(phase, GameOver)

        line = self.controller.win_checker.winning_line(self.controller.board)
        if line is not None:
            for cell in line:
                self._draw_mark(cell, phase.outcome.winner, curses.A_REVERSE)
        self.stdscr.refresh()
        time.sleep(TerminalConfig.RESULT_DELAY_S)

        message = result_message(phase.outcome, self.controller.assignment)
        logger.info("Game over: %s", message)

        self.stdscr.clear()
        self._addstr(curses.LINES // 2, max(curses.COLS // 2 - 20, 0), message)
        self._addstr(curses.LINES - 1, 1, TerminalConfig.CONTINUE_PROMPT)
        self.stdscr.refresh()
        if self.stdscr.getch() in TerminalConfig.QUIT_KEYS:
            raise QuitGame()

    # ==================== MAIN LOOP ====================

    def _main(self, stdscr):
        self.stdscr = stdscr
        curses.noecho()
        curses.cbreak()
        stdscr.keypad(True)

        try:
            while True:
                assignment = self.fixed_assignment or self._show_menu()
                self._play_one_game(assignment)
        except QuitGame:
            logger.info("Game quit by user.")
        finally:
            self.controller.close()

    def run(self):
        """Run the UI until the player quits."""
        curses.wrapper(self._main)
