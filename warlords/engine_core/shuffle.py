"""
Shuffle - Uniform random permutation of one pile.

The controller may render animate() before committing make().
"""

from __future__ import annotations
import random

from .changer import StateChanger
from .queries import get_pile_state
from .state import GameState


def fisher_yates(cards: list[str], rng: random.Random | random.SystemRandom) -> list[str]:
    """Shuffle a list in place; every permutation is equally likely."""
    index = len(cards)
    while index > 1:
        swap = rng.randrange(index)
        index -= 1
        cards[index], cards[swap] = cards[swap], cards[index]
    return cards


class Shuffle(StateChanger):
    """Shuffle the cards of a pile."""

    def __init__(self, pile: str, rng: random.Random | None = None):
        self.pile = pile
        self.rng = rng or random.Random()

    def __repr__(self) -> str:
        return f"Shuffle({self.pile!r})"

    def _check(self, state: GameState) -> bool:
        pile = get_pile_state(state, self.pile)
        if pile.is_empty:
            return self._reject(f"Pile {self.pile} has no cards!")
        return True

    def animate(self, state: GameState) -> GameState:
        """Cosmetic pre-commit snapshot: flags the pile, keeps its order."""
        new_state = state.clone()
        get_pile_state(new_state, self.pile).is_shuffling = True
        return new_state

    def make(self, state: GameState) -> GameState:
        new_state = state.clone()
        pile = get_pile_state(new_state, self.pile)
        pile.is_shuffling = False
        fisher_yates(pile.cards, self.rng)
        return new_state
