"""
Game configuration for TicTacToe.
Board geometry, marks and search limits.
"""


class GameConfig:
    """
    Configuration class for the game core.
    These values are shared by every game in the process.
    """

    # ==================== BOARD SETTINGS ====================
    # TicTacToe is a 3x3 grid
    BOARD_SIZE = 3
    NUM_CELLS = BOARD_SIZE * BOARD_SIZE  # 9

    # Cell codes stored in the board array
    EMPTY_CODE = 0
    FIRST_CODE = 1
    SECOND_CODE = 2

    # Player 1 is O, player 2 is X
    FIRST_MARK = "O"
    SECOND_MARK = "X"

    # ==================== SEARCH SETTINGS ====================
    # A speculative move per empty cell at most
    SEARCH_STACK_LIMIT = NUM_CELLS

    # Negamax scores from the point of view of the side to move
    WIN_SCORE = 1
    DRAW_SCORE = 0
    LOSS_SCORE = -1

    # Only one search may run at a time
    MAX_SEARCH_WORKERS = 1
