"""
Classic Cards - The mirrored starter decks.

Both players get the same roster: one warlord and twelve minions.
Card ids are prefixed with the player ("p1-", "p2-") so every card
is unique on the board.
"""

from dataclasses import dataclass

from ...game_config.definitions import CardDefinition


@dataclass
class ClassicCard:
    """
    A roster entry. Gets converted to one CardDefinition per player.
    """
    key: str
    name: str
    rank: str
    category: str
    attack: int
    health: int

    def to_card_definition(self, player_number: int) -> CardDefinition:
        return CardDefinition(
            id=f"p{player_number}-{self.key}",
            name=self.name,
            rank=self.rank,
            category=self.category,
            url=self.key,
            attack_value=self.attack,
            health_value=self.health,
            original_health_value=self.health,
        )


CLASSIC_CARDS = [
    ClassicCard("warlord", "Iron Warlord", "legendary", "warlord", 3, 20),
    ClassicCard("squire", "Squire", "common", "minion", 1, 2),
    ClassicCard("archer", "Archer", "common", "minion", 2, 1),
    ClassicCard("spearman", "Spearman", "common", "minion", 2, 2),
    ClassicCard("shieldbearer", "Shieldbearer", "common", "minion", 1, 4),
    ClassicCard("scout", "Scout", "common", "minion", 1, 1),
    ClassicCard("knight", "Knight", "rare", "minion", 3, 3),
    ClassicCard("crossbowman", "Crossbowman", "rare", "minion", 3, 2),
    ClassicCard("berserker", "Berserker", "rare", "minion", 4, 2),
    ClassicCard("paladin", "Paladin", "epic", "minion", 3, 5),
    ClassicCard("war_mage", "War Mage", "epic", "minion", 5, 2),
    ClassicCard("giant", "Hill Giant", "epic", "minion", 4, 6),
    ClassicCard("dragon", "Young Dragon", "legendary", "minion", 6, 5),
]


def cards_for(player_number: int) -> list[CardDefinition]:
    """Card records for one player's deck and warlord."""
    return [card.to_card_definition(player_number) for card in CLASSIC_CARDS]
