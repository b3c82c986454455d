"""
Logic module for TicTacToe.
Handles board state, rules, turn-taking, and the Negamax opponent.
"""

from .config import GameConfig
from .errors import GameError, InvalidMove, PreconditionViolation, SearchInProgress
from .game_state import Board, PlayerAssignment, PlayerRole, Side
from .move_validator import MoveValidator, ValidationResult
from .win_checker import Outcome, OutcomeStatus, WinChecker
from .ai_player import AIPlayer, SearchFrame
from .orchestrator import AwaitingMove, GameController, GameOver, GameSnapshot, Move

__version__ = "1.0.0"
