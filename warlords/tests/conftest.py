"""
Pytest fixtures for Warlords tests.
"""

import pytest

from ..engine_core.state import GameState, PileState, TableauState, Phase
from ..game_config.definitions import (
    CardDefinition,
    GameConfig,
    PileDefinition,
    TableauDefinition,
)
from ..games.classic import setup_classic_game


PLAYER1_PILES = [
    "player1Deck",
    "player1Hand",
    "player1Minion0",
    "player1Minion1",
    "player1Warlord",
    "player1Cemetery",
]
PLAYER2_PILES = [pile.replace("player1", "player2") for pile in PLAYER1_PILES]


def build_state(
    cards_by_pile: dict[str, list[str]],
    phase: Phase = Phase.MAIN,
    player1_turn: bool = True,
) -> GameState:
    """A duel board with the given pile contents."""
    piles = {
        pile_id: PileState(cards=list(cards_by_pile.get(pile_id, [])))
        for pile_id in PLAYER1_PILES + PLAYER2_PILES
    }
    return GameState(
        tableaux={
            "player1Tableau": TableauState(piles=list(PLAYER1_PILES)),
            "player2Tableau": TableauState(piles=list(PLAYER2_PILES)),
        },
        piles=piles,
        phase=phase,
        player1_turn=player1_turn,
    )


def card(card_id: str, attack: int, health: int, category: str = "minion") -> CardDefinition:
    return CardDefinition(
        id=card_id,
        name=card_id,
        category=category,
        attack_value=attack,
        health_value=health,
        original_health_value=health,
    )


@pytest.fixture
def duel_config() -> GameConfig:
    """Small configuration with cards tuned for combat tests."""
    cards = [
        card("p1-knight", 3, 5),
        card("p2-imp", 4, 2),
        card("p1-ogre", 5, 4),
        card("p2-ogre", 5, 4),
        card("p1-lord", 2, 10, "warlord"),
        card("p2-lord", 1, 1, "warlord"),
    ]
    cards += [card(f"p1-{name}", 1, 1) for name in "abcde"]
    cards += [card(f"p2-{name}", 1, 1) for name in "xy"]
    return GameConfig(
        cards=cards,
        piles=[
            PileDefinition(id=pile_id, name=pile_id)
            for pile_id in PLAYER1_PILES + PLAYER2_PILES
        ],
        tableaux=[
            TableauDefinition(id="player1Tableau", piles=list(PLAYER1_PILES)),
            TableauDefinition(id="player2Tableau", piles=list(PLAYER2_PILES)),
        ],
    )


@pytest.fixture
def duel_state() -> GameState:
    """Battle-phase board, player 1 to act."""
    return build_state(
        {
            "player1Deck": ["p1-a", "p1-b", "p1-c", "p1-d", "p1-e"],
            "player1Minion0": ["p1-knight"],
            "player1Minion1": ["p1-ogre"],
            "player1Warlord": ["p1-lord"],
            "player2Hand": ["p2-x", "p2-y"],
            "player2Minion0": ["p2-imp"],
            "player2Minion1": ["p2-ogre"],
            "player2Warlord": ["p2-lord"],
        },
        phase=Phase.BATTLE,
    )


@pytest.fixture
def classic():
    """Fresh classic configuration and initial snapshot."""
    return setup_classic_game()
