"""
Game State - The snapshot every state-changer reads and produces.

Design principles:
- Immutable-per-step: make() always returns a fresh snapshot
- Explicit cloning: no container is shared between two snapshots
- Serializable: see game_config.loader for the JSON codec
- Health is NOT here: card health lives on the registry records
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


PLAYER_1 = "Player 1"
PLAYER_2 = "Player 2"
DRAW = "DRAW"

PLAYER1_TABLEAU = "player1Tableau"
PLAYER2_TABLEAU = "player2Tableau"


class Phase(Enum):
    """Turn phases, advanced by the controller."""
    DRAW = "DrawPhase"
    MAIN = "MainPhase"
    BATTLE = "BattlePhase"
    END = "EndPhase"

    def next(self) -> Phase:
        order = list(Phase)
        return order[(order.index(self) + 1) % len(order)]


@dataclass
class TableauState:
    """Ordered pile ids belonging to one player's half of the board."""
    piles: list[str] = field(default_factory=list)

    def copy(self) -> TableauState:
        return TableauState(piles=list(self.piles))


@dataclass
class PileState:
    """
    An ordered pile of card ids.

    The tail of `cards` is the top of the pile.
    """
    cards: list[str] = field(default_factory=list)
    is_shuffling: bool = False
    show_back: bool = False
    unfolded: bool = False
    has_acted: bool = False

    # Result of the most recent inbound operation (UI feedback)
    last_incoming_move_validity: bool = True
    last_incoming_attack_validity: bool = True

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def top_card(self) -> str | None:
        return self.cards[-1] if self.cards else None

    def contains(self, card_id: str) -> bool:
        return card_id in self.cards

    def copy(self) -> PileState:
        return PileState(
            cards=list(self.cards),
            is_shuffling=self.is_shuffling,
            show_back=self.show_back,
            unfolded=self.unfolded,
            has_acted=self.has_acted,
            last_incoming_move_validity=self.last_incoming_move_validity,
            last_incoming_attack_validity=self.last_incoming_attack_validity,
        )


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    Produced once at game start and afterwards only by
    StateChanger.make(). Card health is intentionally kept
    outside the snapshot on the card registry.
    """
    tableaux: dict[str, TableauState] = field(default_factory=dict)
    piles: dict[str, PileState] = field(default_factory=dict)

    allow_invalid_moves: bool = False
    player1_turn: bool = True
    phase: Phase = Phase.DRAW
    has_drawn: bool = False

    ended: bool = False
    winner: str | None = None

    def all_card_ids(self) -> list[str]:
        """Every card id on the board, pile by pile."""
        return [card for pile in self.piles.values() for card in pile.cards]

    def end_game(self, winner: str):
        """Mark the game as finished."""
        self.ended = True
        self.winner = winner

    def clone(self) -> GameState:
        """Structural copy sharing no containers with this snapshot."""
        return self._copy_with()

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            tableaux=kwargs.get(
                "tableaux",
                {key: tableau.copy() for key, tableau in self.tableaux.items()},
            ),
            piles=kwargs.get(
                "piles",
                {key: pile.copy() for key, pile in self.piles.items()},
            ),
            allow_invalid_moves=kwargs.get("allow_invalid_moves", self.allow_invalid_moves),
            player1_turn=kwargs.get("player1_turn", self.player1_turn),
            phase=kwargs.get("phase", self.phase),
            has_drawn=kwargs.get("has_drawn", self.has_drawn),
            ended=kwargs.get("ended", self.ended),
            winner=kwargs.get("winner", self.winner),
        )
