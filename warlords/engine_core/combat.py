"""
Combat Resolver - Simultaneous damage between two cards.

Both cards deal damage computed from their pre-attack values.
Health is written back to the card records (not the snapshot) and
is never clamped, so damage accumulates over a card's lifetime.
"""

from __future__ import annotations
from enum import IntEnum
from typing import TYPE_CHECKING

from .errors import UnresolvedOutcome

if TYPE_CHECKING:
    from ..game_config.definitions import CardDefinition


class CombatOutcome(IntEnum):
    """Who died in a fight."""
    NO_DEATH = -1
    BOTH_DIE = 0
    ATTACKER_DIES = 1
    DEFENDER_DIES = 2


def classify(attacker_health: int, defender_health: int) -> CombatOutcome:
    """Classify post-damage health values into an outcome."""
    if attacker_health > 0 and defender_health > 0:
        return CombatOutcome.NO_DEATH
    if attacker_health <= 0 and defender_health <= 0:
        return CombatOutcome.BOTH_DIE
    if attacker_health <= 0:
        return CombatOutcome.ATTACKER_DIES
    return CombatOutcome.DEFENDER_DIES


def preview_attack(attacker: CardDefinition, defender: CardDefinition) -> CombatOutcome:
    """Outcome an attack would have, without touching health."""
    return classify(
        attacker.health_value - defender.attack_value,
        defender.health_value - attacker.attack_value,
    )


def resolve_attack(attacker: CardDefinition, defender: CardDefinition) -> CombatOutcome:
    """
    Apply one exchange of damage and report who died.

    Mutates both card records in place.
    """
    attacker_damage = defender.attack_value
    defender_damage = attacker.attack_value
    attacker.health_value -= attacker_damage
    defender.health_value -= defender_damage
    return classify(attacker.health_value, defender.health_value)


def as_outcome(code: int) -> CombatOutcome:
    """Convert a raw outcome code, failing hard on anything undefined."""
    try:
        return CombatOutcome(code)
    except ValueError:
        raise UnresolvedOutcome(f"Attack resolution not determined: {code!r}") from None
