"""
Classic Game Setup - Creates the initial snapshot.

Warlords start in their warlord piles, everything else in the
owner's deck. Decks are shuffled and hands dealt by the controller
(initial_shuffle / initial_moves), not here.
"""

from __future__ import annotations

from ...engine_core.state import GameState, PileState, TableauState, Phase
from ...game_config.definitions import GameConfig
from .board import PLAYERS, create_classic_config, player_pile_ids


def create_initial_state(config: GameConfig) -> GameState:
    """
    Build the game-start snapshot for a classic configuration.

    Args:
        config: Configuration created by create_classic_config()

    Returns:
        GameState in the Draw phase with player 1 to move
    """
    piles: dict[str, PileState] = {}
    for pile in config.piles:
        piles[pile.id] = PileState(show_back=pile.show_back, unfolded=pile.unfolded)

    for number in PLAYERS:
        ids = player_pile_ids(number)
        prefix = f"p{number}-"
        for card in config.cards:
            if not card.id.startswith(prefix):
                continue
            target = ids["warlord"] if card.category == "warlord" else ids["deck"]
            piles[target].cards.append(card.id)

    tableaux = {
        tableau.id: TableauState(piles=list(tableau.piles)) for tableau in config.tableaux
    }
    return GameState(
        tableaux=tableaux,
        piles=piles,
        player1_turn=True,
        phase=Phase.DRAW,
    )


def setup_classic_game() -> tuple[GameConfig, GameState]:
    """Fresh classic configuration plus its initial snapshot."""
    config = create_classic_config()
    return config, create_initial_state(config)
