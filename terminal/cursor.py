"""
Cell cursor for keyboard navigation.
"""

from dataclasses import dataclass

from logic.config import GameConfig


@dataclass
class GridCursor:
    """
    Row and column of the highlighted cell. Moving off an edge wraps
    around to the opposite edge.
    """
    row: int = 1
    col: int = 1

    @classmethod
    def at_cell(cls, cell: int) -> "GridCursor":
        row, col = divmod(cell, GameConfig.BOARD_SIZE)
        return cls(row, col)

    @property
    def cell(self) -> int:
        """Cell index (0-8) under the cursor."""
        return self.row * GameConfig.BOARD_SIZE + self.col

    def move(self, d_row: int, d_col: int):
        self.row = (self.row + d_row) % GameConfig.BOARD_SIZE
        self.col = (self.col + d_col) % GameConfig.BOARD_SIZE

    def left(self):
        self.move(0, -1)

    def right(self):
        self.move(0, 1)

    def up(self):
        self.move(-1, 0)

    def down(self):
        self.move(1, 0)
