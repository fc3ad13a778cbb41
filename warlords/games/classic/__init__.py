"""
Classic - The standard two-player board.

Each player has:
- A face-down deck, shuffled at game start
- A hand, filled by the initial deal and one draw per turn
- Four minion piles holding at most one minion each
- A warlord pile; the warlord's death loses the game
- A cemetery for dead cards

Edge rules gate drawing to the Draw phase, deploying to the Main
phase and attacking to the Battle phase.
"""

from .cards import CLASSIC_CARDS, ClassicCard, cards_for
from .board import create_classic_config, player_pile_ids, MINION_PILES
from .setup import create_initial_state, setup_classic_game

__all__ = [
    "CLASSIC_CARDS",
    "ClassicCard",
    "cards_for",
    "create_classic_config",
    "player_pile_ids",
    "MINION_PILES",
    "create_initial_state",
    "setup_classic_game",
]
