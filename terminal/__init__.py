"""
Terminal module for TicTacToe.
Configuration, glyphs, cursor and messages for the text front ends.
"""

from .config import TerminalConfig
from .cursor import GridCursor
from .glyphs import CIRCLE, CROSS, glyph_for
from .messages import menu_lines, parse_menu_choice, result_message, turn_message
