"""
Move - Transfer a specific card, or the top N cards, between piles.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .changer import StateChanger, config_or_empty, rules_pass
from .expression import RuleContext
from .queries import get_pile_state
from .state import GameState, Phase

if TYPE_CHECKING:
    from ..game_config.definitions import GameConfig


class Move(StateChanger):
    """
    Move cards from one pile onto another.

    `subject` is either a card id (move exactly that card) or a
    positive count (move that many cards off the top, keeping
    their order). Manual moves are checked against `incoming_rules`.
    """

    def __init__(
        self,
        from_pile: str,
        to_pile: str,
        subject: str | int,
        manual: bool = True,
        incoming_rules: list[str] | None = None,
        config: GameConfig | None = None,
    ):
        self.from_pile = from_pile
        self.to_pile = to_pile
        if isinstance(subject, bool):
            raise TypeError("Move subject must be a card id or a card count")
        if isinstance(subject, int):
            self.amount = subject
            self.card = ""
        else:
            self.card = subject or ""
            self.amount = 1 if self.card else 0
        self.manual = manual
        self.incoming_rules = list(incoming_rules or [])
        self.config = config

    def __repr__(self) -> str:
        what = repr(self.card) if self.card else self.amount
        return f"Move({self.from_pile!r} -> {self.to_pile!r}, {what})"

    @property
    def is_card_move(self) -> bool:
        return bool(self.card)

    def _check(self, state: GameState) -> bool:
        from_pile = get_pile_state(state, self.from_pile)
        get_pile_state(state, self.to_pile)

        if not self.card and self.amount <= 0:
            return self._reject("Move has no card")

        if self.is_card_move:
            if not from_pile.contains(self.card):
                return self._reject(f"Pile {self.from_pile} does not have card {self.card}")
        elif from_pile.count < self.amount:
            return self._reject(
                f"Pile {self.from_pile} does not have enough cards to move {self.amount}"
            )

        if self.manual and self.incoming_rules:
            context = RuleContext.for_move(
                state,
                config_or_empty(self.config),
                self.from_pile,
                self.to_pile,
                self.amount,
                self.card,
            )
            return rules_pass(self.incoming_rules, context)

        return True

    def make(self, state: GameState) -> GameState:
        new_state = state.clone()
        if self.manual and new_state.phase == Phase.DRAW and self.from_pile != self.to_pile:
            new_state.has_drawn = True

        source = new_state.piles[self.from_pile].cards
        if self.is_card_move:
            source.pop(source.index(self.card))
            moved = [self.card]
        else:
            split = len(source) - self.amount
            moved = source[split:]
            del source[split:]
        new_state.piles[self.to_pile].cards.extend(moved)

        return new_state
