"""
Terminal configuration for TicTacToe.
Delays, key bindings, and menu text for the curses and console front ends.
"""

import curses

from logic.game_state import PlayerAssignment


class TerminalConfig:
    """
    Configuration class for the terminal front end.
    Change these values to taste!
    """

    # ==================== TIMING ====================
    # Pause before a computer move is shown, so it can be followed
    COMPUTER_MOVE_DELAY_S = 1.0
    # Pause after a menu choice and after the final move
    MENU_DELAY_S = 1.0
    RESULT_DELAY_S = 1.0

    # ==================== KEYS ====================
    QUIT_KEYS = (curses.KEY_F1, ord("q"))
    SELECT_KEYS = (ord("\n"), ord("\r"), curses.KEY_ENTER)

    # Cursor starts on the centre cell
    START_CELL = 4

    # ==================== MENU ====================
    MENU_CHOICES = {
        "1": ("Human plays first", PlayerAssignment.human_first()),
        "2": ("Computer plays first", PlayerAssignment.computer_first()),
        "3": ("Human vs Human", PlayerAssignment.human_vs_human()),
        "4": ("Computer vs Computer", PlayerAssignment.computer_vs_computer()),
    }

    MENU_FOOTER = [
        "F1 to Quit.",
        "",
        "Player 1 is O. Player 2 is X.",
        "",
        "Arrow keys to navigate.",
        "Enter key to make selection",
    ]

    MENU_PROMPT = "Please pick a choice:"
    CONTINUE_PROMPT = "Press any key to continue"

    # ==================== LOGGING ====================
    # curses owns the screen, so logs go to a file in that mode
    LOG_FILE = "tictactoe.log"
