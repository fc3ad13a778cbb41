"""
State Query Helpers - Pure lookups over a snapshot.

None of these mutate the state they are given.
"""

from __future__ import annotations

from .errors import NotFound
from .state import (
    GameState,
    PileState,
    Phase,
    PLAYER_1,
    PLAYER_2,
    PLAYER1_TABLEAU,
    PLAYER2_TABLEAU,
)


_PILE_PREFIX = {PLAYER_1: "player1", PLAYER_2: "player2"}


def get_pile_state(state: GameState, pile_id: str) -> PileState:
    """Get a pile by id, raising NotFound if absent."""
    if pile_id in state.piles:
        return state.piles[pile_id]
    raise NotFound("Pile", pile_id)


def get_pile_owner(state: GameState, pile_id: str) -> str:
    """
    Get the player owning a pile.

    Scans player 1's tableau first, then player 2's.
    Raises NotFound for a pile in neither tableau.
    """
    for tableau_id, player in ((PLAYER1_TABLEAU, PLAYER_1), (PLAYER2_TABLEAU, PLAYER_2)):
        tableau = state.tableaux.get(tableau_id)
        if tableau is not None and pile_id in tableau.piles:
            return player
    raise NotFound("Pile", pile_id)


def is_player1_turn(state: GameState) -> bool:
    return state.player1_turn


def get_turn_player(state: GameState) -> str:
    return PLAYER_1 if state.player1_turn else PLAYER_2


def get_current_phase(state: GameState) -> Phase:
    return state.phase


def opponent_of(player: str) -> str:
    if player == PLAYER_1:
        return PLAYER_2
    if player == PLAYER_2:
        return PLAYER_1
    raise NotFound("Player", player)


def cemetery_pile_for(player: str) -> str:
    """Pile id of a player's cemetery (e.g. player1Cemetery)."""
    if player not in _PILE_PREFIX:
        raise NotFound("Player", player)
    return f"{_PILE_PREFIX[player]}Cemetery"


def warlord_pile_for(player: str) -> str:
    """Pile id of a player's warlord pile (e.g. player1Warlord)."""
    if player not in _PILE_PREFIX:
        raise NotFound("Player", player)
    return f"{_PILE_PREFIX[player]}Warlord"


def is_warlord_pile(pile_id: str) -> bool:
    return pile_id in (warlord_pile_for(PLAYER_1), warlord_pile_for(PLAYER_2))


def count_cards(state: GameState) -> int:
    """Total number of cards across all piles."""
    return sum(pile.count for pile in state.piles.values())
