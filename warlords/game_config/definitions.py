"""
Game configuration - the static registry of cards, piles and tableaux.

Loaded once at process start. Structural fields are read-only for the
engine; CardDefinition.health_value is the one field combat writes to,
and it is shared by every snapshot of the game.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core.errors import NotFound


@dataclass
class CardDefinition:
    """A card record. Health persists across snapshots."""
    id: str
    name: str = ""
    rank: str = ""
    category: str = ""
    url: str = ""
    attack_value: int = 0
    health_value: int = 0
    original_health_value: int = 0

    def reset_health(self):
        self.health_value = self.original_health_value

    @property
    def is_alive(self) -> bool:
        return self.health_value > 0


@dataclass
class PileDefinition:
    """
    A pile's configuration.

    `incoming` holds the rule expressions checked when cards are moved
    onto this pile, `incoming_attack` those checked when a card in this
    pile is attacked.
    """
    id: str
    name: str = ""
    incoming: list[str] = field(default_factory=list)
    incoming_attack: list[str] = field(default_factory=list)
    initial_shuffle: bool = False
    show_back: bool = False
    allow_show_front: bool = False
    unfolded: bool = False
    sort: bool = False


@dataclass
class TableauDefinition:
    """A named group of piles, one per player."""
    id: str
    name: str = ""
    piles: list[str] = field(default_factory=list)


@dataclass
class InitialMove:
    """A scripted deal performed at game start. Moves `amount` cards or one `card`."""
    from_pile: str
    to_pile: str
    amount: int = 0
    card: str | None = None

    @property
    def subject(self) -> str | int:
        if self.amount and self.amount > 0:
            return self.amount
        return self.card or 0


@dataclass
class GameConfig:
    """
    Complete static configuration for a game.

    The engine looks cards and piles up here when resolving combat
    and when rules call getCard()/getPile().
    """
    cards: list[CardDefinition] = field(default_factory=list)
    piles: list[PileDefinition] = field(default_factory=list)
    tableaux: list[TableauDefinition] = field(default_factory=list)
    initial_moves: list[InitialMove] = field(default_factory=list)

    def __post_init__(self):
        self._reindex()

    def _reindex(self):
        self._card_index = {card.id: card for card in self.cards}
        self._pile_index = {pile.id: pile for pile in self.piles}

    def get_card(self, card_id: str | None) -> CardDefinition:
        """Get a card record by id, raising NotFound if absent."""
        card = self._card_index.get(card_id)
        if card is None and len(self._card_index) != len(self.cards):
            self._reindex()
            card = self._card_index.get(card_id)
        if card is None:
            raise NotFound("Card", card_id)
        return card

    def get_pile(self, pile_id: str | None) -> PileDefinition:
        """Get a pile definition by id, raising NotFound if absent."""
        pile = self._pile_index.get(pile_id)
        if pile is None and len(self._pile_index) != len(self.piles):
            self._reindex()
            pile = self._pile_index.get(pile_id)
        if pile is None:
            raise NotFound("Pile", pile_id)
        return pile

    def get_tableau(self, tableau_id: str) -> TableauDefinition:
        for tableau in self.tableaux:
            if tableau.id == tableau_id:
                return tableau
        raise NotFound("Tableau", tableau_id)

    def incoming_rules(self, pile_id: str) -> list[str]:
        """Move rules on a pile's incoming edge (empty for unknown piles)."""
        try:
            return list(self.get_pile(pile_id).incoming)
        except NotFound:
            return []

    def incoming_attack_rules(self, pile_id: str) -> list[str]:
        """Attack rules on a pile's incoming edge (empty for unknown piles)."""
        try:
            return list(self.get_pile(pile_id).incoming_attack)
        except NotFound:
            return []

    def reset_health(self):
        """Restore every card to its original health."""
        for card in self.cards:
            card.reset_health()
