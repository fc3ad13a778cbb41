"""
Attack - One card fights another; dead cards go to their cemeteries.

Outcome handling:
- NO_DEATH: nothing moves
- BOTH_DIE: both cards go to their owners' cemeteries
- ATTACKER_DIES / DEFENDER_DIES: the dead card goes to its owner's cemetery
A warlord dying ends the game. The attacking pile has acted in every case.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from .changer import StateChanger, config_or_empty, rules_pass
from .combat import CombatOutcome, as_outcome, resolve_attack
from .errors import InvalidOperation
from .expression import RuleContext
from .queries import (
    cemetery_pile_for,
    get_pile_owner,
    get_pile_state,
    get_turn_player,
    is_warlord_pile,
    opponent_of,
)
from .state import GameState, DRAW

if TYPE_CHECKING:
    from ..game_config.definitions import GameConfig


logger = logging.getLogger(__name__)


class Attack(StateChanger):
    """Attack a card in another pile with a card from one of your piles."""

    def __init__(
        self,
        from_pile: str,
        to_pile: str,
        attacking_card: str,
        defending_card: str,
        manual: bool,
        config: GameConfig,
        incoming_rules: list[str] | None = None,
    ):
        self.from_pile = from_pile
        self.to_pile = to_pile
        self.attacking_card = attacking_card or ""
        self.defending_card = defending_card or ""
        self.manual = manual
        self.config = config
        self.incoming_rules = list(incoming_rules or [])

    def __repr__(self) -> str:
        return (
            f"Attack({self.from_pile!r}:{self.attacking_card!r} -> "
            f"{self.to_pile!r}:{self.defending_card!r})"
        )

    def _check(self, state: GameState) -> bool:
        if get_pile_owner(state, self.from_pile) != get_turn_player(state):
            return self._reject(f"Pile {self.from_pile} does not belong to the turn player")

        from_pile = get_pile_state(state, self.from_pile)
        to_pile = get_pile_state(state, self.to_pile)

        if from_pile.has_acted:
            return self._reject(f"Pile {self.from_pile} has already acted this turn")

        if not self.attacking_card or not self.defending_card:
            return self._reject("There is no attacker or defender")

        if not from_pile.contains(self.attacking_card):
            return self._reject(f"Pile {self.from_pile} does not have card {self.attacking_card}")

        if not to_pile.contains(self.defending_card):
            return self._reject(f"Pile {self.to_pile} does not have card {self.defending_card}")

        if self.manual and self.incoming_rules:
            context = RuleContext.for_attack(
                state,
                config_or_empty(self.config),
                self.from_pile,
                self.to_pile,
                self.attacking_card,
                self.defending_card,
            )
            return rules_pass(self.incoming_rules, context)

        return True

    def make(self, state: GameState) -> GameState:
        new_state = state.clone()

        attacker_owner = get_pile_owner(new_state, self.from_pile)
        defender_owner = opponent_of(attacker_owner)
        attacker = self.config.get_card(self.attacking_card)
        defender = self.config.get_card(self.defending_card)
        # Everything that can fail runs before health is written
        for pile_id, card_id in (
            (self.from_pile, self.attacking_card),
            (self.to_pile, self.defending_card),
        ):
            if not get_pile_state(new_state, pile_id).contains(card_id):
                raise InvalidOperation(f"Pile {pile_id} does not have card {card_id}")
        get_pile_state(new_state, cemetery_pile_for(attacker_owner))
        get_pile_state(new_state, cemetery_pile_for(defender_owner))

        outcome = as_outcome(resolve_attack(attacker, defender))
        logger.debug("%s resolved as %s", self, outcome.name)

        attacker_died = outcome in (CombatOutcome.BOTH_DIE, CombatOutcome.ATTACKER_DIES)
        defender_died = outcome in (CombatOutcome.BOTH_DIE, CombatOutcome.DEFENDER_DIES)

        if attacker_died:
            self._bury(new_state, self.from_pile, self.attacking_card, attacker_owner)
        if defender_died:
            self._bury(new_state, self.to_pile, self.defending_card, defender_owner)

        warlord_attacker_died = attacker_died and is_warlord_pile(self.from_pile)
        warlord_defender_died = defender_died and is_warlord_pile(self.to_pile)
        if warlord_attacker_died and warlord_defender_died:
            new_state.end_game(DRAW)
        elif warlord_attacker_died:
            new_state.end_game(defender_owner)
        elif warlord_defender_died:
            new_state.end_game(attacker_owner)

        new_state.piles[self.from_pile].has_acted = True
        return new_state

    @staticmethod
    def _bury(state: GameState, pile_id: str, card_id: str, owner: str):
        """Move a dead card from its pile to its owner's cemetery."""
        cards = state.piles[pile_id].cards
        cards.pop(cards.index(card_id))
        state.piles[cemetery_pile_for(owner)].cards.append(card_id)
