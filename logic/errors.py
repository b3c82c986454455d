"""
Exceptions raised by the game core.
"""


class GameError(Exception):
    """Base class for errors the caller is expected to recover from."""


class InvalidMove(GameError):
    """
    A move was rejected: the cell is occupied or out of range, the game is
    over, or it is not a human's turn. The board is left unchanged.
    """

    def __init__(self, reason: str, cell: int = None):
        super().__init__(reason)
        self.reason = reason
        self.cell = cell


class SearchInProgress(GameError):
    """The board was touched while an automated move was being computed."""


class PreconditionViolation(AssertionError):
    """
    A programming error inside the core, e.g. searching a finished board.
    Never caught by the core itself.
    """
