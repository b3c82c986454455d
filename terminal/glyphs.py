"""
Glyphs drawn in the board cells.
"""

from typing import List

from logic.game_state import Side

# Both glyphs are 9x9 and centred on the cell
CROSS = [
    "\\       /",
    " \\     / ",
    "  \\   /  ",
    "   \\ /   ",
    "    X    ",
    "   / \\   ",
    "  /   \\  ",
    " /     \\ ",
    "/       \\",
]

CIRCLE = [
    "  ooooo  ",
    " o     o ",
    "o       o",
    "o       o",
    "o       o",
    "o       o",
    "o       o",
    " o     o ",
    "  ooooo  ",
]

GLYPH_SIZE = 9


def glyph_for(side: Side) -> List[str]:
    """Player 1 (FIRST) draws a circle, player 2 a cross."""
    return CIRCLE if side == Side.FIRST else CROSS
