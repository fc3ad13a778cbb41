"""
Classic Board - Piles, tableaux, edge rules and the initial deal.
"""

from __future__ import annotations

from ...engine_core.state import PLAYER_1, PLAYER_2
from ...game_config.definitions import (
    GameConfig,
    InitialMove,
    PileDefinition,
    TableauDefinition,
)
from .cards import cards_for


MINION_PILES = 4
OPENING_HAND = 4

PLAYERS = {1: PLAYER_1, 2: PLAYER_2}


def player_pile_ids(player_number: int) -> dict[str, str]:
    """Pile ids for one player keyed by role."""
    prefix = f"player{player_number}"
    piles = {
        "deck": f"{prefix}Deck",
        "hand": f"{prefix}Hand",
        "warlord": f"{prefix}Warlord",
        "cemetery": f"{prefix}Cemetery",
    }
    for index in range(MINION_PILES):
        piles[f"minion{index}"] = f"{prefix}Minion{index}"
    return piles


def _attack_rules(player: str) -> list[str]:
    """Cards in this player's piles may only be attacked by the opponent in Battle."""
    return [
        "getStatePhase() == 'BattlePhase'",
        f"getPileOwner(from) != '{player}'",
        "not hasEnded()",
    ]


def _player_piles(player_number: int) -> list[PileDefinition]:
    player = PLAYERS[player_number]
    ids = player_pile_ids(player_number)
    own_turn = f"getTurnPlayer() == '{player}'"

    piles = [
        PileDefinition(
            id=ids["deck"],
            name=f"{player} Deck",
            incoming=["false"],
            initial_shuffle=True,
            show_back=True,
        ),
        PileDefinition(
            id=ids["hand"],
            name=f"{player} Hand",
            incoming=[
                own_turn,
                f"move.from == '{ids['deck']}'",
                "getStatePhase() == 'DrawPhase'",
                "not hasDrawn()",
                "move.amount == 1",
            ],
            unfolded=True,
            sort=True,
        ),
    ]
    for index in range(MINION_PILES):
        piles.append(
            PileDefinition(
                id=ids[f"minion{index}"],
                name=f"{player} Minion {index + 1}",
                incoming=[
                    own_turn,
                    f"move.from == '{ids['hand']}'",
                    "getStatePhase() == 'MainPhase'",
                    "toPile.cards.length < 1",
                    "getCard(card).category == 'minion'",
                ],
                incoming_attack=_attack_rules(player),
            )
        )
    piles.append(
        PileDefinition(
            id=ids["warlord"],
            name=f"{player} Warlord",
            incoming=["false"],
            incoming_attack=_attack_rules(player),
        )
    )
    piles.append(
        PileDefinition(
            id=ids["cemetery"],
            name=f"{player} Cemetery",
            incoming=["false"],
        )
    )
    return piles


def create_classic_config() -> GameConfig:
    """
    Create the classic two-player configuration.

    Each call returns fresh card records, so health is not shared
    between configurations.
    """
    cards = cards_for(1) + cards_for(2)
    piles = _player_piles(1) + _player_piles(2)
    tableaux = [
        TableauDefinition(
            id=f"player{number}Tableau",
            name=f"{player} Tableau",
            piles=list(player_pile_ids(number).values()),
        )
        for number, player in PLAYERS.items()
    ]
    initial_moves = [
        InitialMove(
            from_pile=player_pile_ids(number)["deck"],
            to_pile=player_pile_ids(number)["hand"],
            amount=OPENING_HAND,
        )
        for number in PLAYERS
    ]
    return GameConfig(cards=cards, piles=piles, tableaux=tableaux, initial_moves=initial_moves)
