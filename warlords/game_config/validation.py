"""
Config Validation - Structural checks for configurations and snapshots.

Validates that:
1. Ids are unique (cards, piles)
2. References are valid (tableau piles, initial moves)
3. Edge rules parse
4. Snapshot invariants hold (one pile per card, known piles, winner set)
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field

from ..engine_core.errors import EngineError
from ..engine_core.expression import RuleSyntaxError, parse_rule
from ..engine_core.queries import cemetery_pile_for, warlord_pile_for
from ..engine_core.state import (
    GameState,
    PLAYER_1,
    PLAYER_2,
    DRAW,
    PLAYER1_TABLEAU,
    PLAYER2_TABLEAU,
)
from .definitions import GameConfig


class ConfigValidationError(EngineError):
    """Raised when a configuration fails validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Config validation failed with {len(errors)} error(s)")


class StateValidationError(EngineError):
    """Raised when a snapshot violates the state invariants."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"State validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _duplicates(ids: list[str]) -> list[str]:
    return sorted(key for key, count in Counter(ids).items() if count > 1)


def validate_config(config: GameConfig) -> ValidationResult:
    """
    Validate a game configuration.

    Returns ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    card_ids = [card.id for card in config.cards]
    pile_ids = [pile.id for pile in config.piles]
    known_cards = set(card_ids)
    known_piles = set(pile_ids)

    for card_id in _duplicates(card_ids):
        errors.append(f"Duplicate card id '{card_id}'")
    for pile_id in _duplicates(pile_ids):
        errors.append(f"Duplicate pile id '{pile_id}'")

    for card in config.cards:
        if not card.id:
            errors.append("Card has empty ID")
        if card.attack_value < 0:
            warnings.append(f"Card '{card.id}' has negative attack value")
        if card.original_health_value <= 0:
            warnings.append(f"Card '{card.id}' starts with no health")

    for pile in config.piles:
        if not pile.id:
            errors.append("Pile has empty ID")
        for rule in pile.incoming + pile.incoming_attack:
            try:
                parse_rule(rule)
            except RuleSyntaxError as e:
                errors.append(f"Pile '{pile.id}': {e}")

    for tableau in config.tableaux:
        for pile_id in tableau.piles:
            if pile_id not in known_piles:
                errors.append(f"Tableau '{tableau.id}' references unknown pile '{pile_id}'")

    for index, move in enumerate(config.initial_moves):
        for pile_id in (move.from_pile, move.to_pile):
            if pile_id not in known_piles:
                errors.append(f"Initial move {index} references unknown pile '{pile_id}'")
        if move.card and move.card not in known_cards:
            errors.append(f"Initial move {index} references unknown card '{move.card}'")
        if not move.card and move.amount <= 0:
            errors.append(f"Initial move {index} has no card and no amount")

    # Piles the engine addresses by name
    tableau_ids = {tableau.id for tableau in config.tableaux}
    for tableau_id in (PLAYER1_TABLEAU, PLAYER2_TABLEAU):
        if tableau_id not in tableau_ids:
            warnings.append(f"No tableau '{tableau_id}' - pile ownership will not resolve")
    for player in (PLAYER_1, PLAYER_2):
        for pile_id in (warlord_pile_for(player), cemetery_pile_for(player)):
            if pile_id not in known_piles:
                warnings.append(f"No pile '{pile_id}' - combat cannot resolve for {player}")

    if not config.cards:
        warnings.append("No cards defined - config may be incomplete")

    return ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)


def validate_state(state: GameState, config: GameConfig | None = None) -> ValidationResult:
    """
    Validate a snapshot's invariants, optionally against a configuration.
    """
    errors: list[str] = []
    warnings: list[str] = []

    for tableau_id, tableau in state.tableaux.items():
        for pile_id in tableau.piles:
            if pile_id not in state.piles:
                errors.append(f"Tableau '{tableau_id}' references unknown pile '{pile_id}'")

    for card_id in _duplicates(state.all_card_ids()):
        errors.append(f"Card '{card_id}' is in more than one place")

    if state.ended and state.winner not in (PLAYER_1, PLAYER_2, DRAW):
        errors.append(f"Game has ended with invalid winner {state.winner!r}")
    if not state.ended and state.winner is not None:
        warnings.append(f"Winner {state.winner!r} set on a game that has not ended")

    if config is not None:
        known_cards = {card.id for card in config.cards}
        known_piles = {pile.id for pile in config.piles}
        for pile_id, pile in state.piles.items():
            if pile_id not in known_piles:
                warnings.append(f"Pile '{pile_id}' has no configuration")
            for card_id in pile.cards:
                if card_id not in known_cards:
                    errors.append(f"Pile '{pile_id}' holds unknown card '{card_id}'")

    return ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)
