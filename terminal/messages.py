"""
Text shown to the players.
"""

from typing import List, Optional

from logic.game_state import PlayerAssignment, PlayerRole, Side
from logic.win_checker import Outcome

from .config import TerminalConfig


def menu_lines() -> List[str]:
    """Lines of the start menu, choices first."""
    lines = [f"{key}) {label}" for key, (label, _) in TerminalConfig.MENU_CHOICES.items()]
    return lines + TerminalConfig.MENU_FOOTER


def parse_menu_choice(choice: str) -> Optional[PlayerAssignment]:
    """
    Map a menu key to player roles.

    Returns:
        The PlayerAssignment, or None if the key is not a menu choice.
    """
    entry = TerminalConfig.MENU_CHOICES.get(choice.strip())
    return entry[1] if entry else None


def result_message(outcome: Outcome, assignment: PlayerAssignment) -> str:
    """
    Message for a finished game, worded for who played whom.

    Args:
        outcome: Terminal outcome of the game.
        assignment: Roles that played the game.
    """
    if outcome.is_draw:
        return "Draw! Try again."
    if not outcome.is_terminal:
        return "Game in progress"

    winner = outcome.winner
    number = winner.player_number
    other = winner.opposite().player_number
    winner_role = assignment.role_for(winner)
    same_roles = assignment.player_one == assignment.player_two

    if winner_role == PlayerRole.HUMAN:
        if same_roles:
            return f"Player {number} win! Player {other} suck."
        return f"You beat the computer! Victory for you, Player {number}."

    if same_roles:
        return f"Computer {number} beat computer {other}!!!"
    return "You got beaten by a computer. You lose!"


def turn_message(side: Side, assignment: PlayerAssignment) -> str:
    """Status line for the side to move."""
    role = assignment.role_for(side)
    if role == PlayerRole.COMPUTER:
        return f"Player {side.player_number} ({side.mark}): computer is thinking..."
    return f"Player {side.player_number} ({side.mark}): your move"
