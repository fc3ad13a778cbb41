"""
Tests for the Shuffle state-changer.
"""

import random
from collections import Counter

from ..engine_core.shuffle import Shuffle, fisher_yates
from .conftest import build_state


class TestShuffleValidity:
    def test_empty_pile_is_invalid(self, duel_state):
        assert not Shuffle("player1Hand").is_valid(duel_state)

    def test_missing_pile_is_invalid(self, duel_state):
        assert not Shuffle("nowhere").is_valid(duel_state)

    def test_non_empty_pile_is_valid(self, duel_state):
        assert Shuffle("player1Deck").is_valid(duel_state)


class TestShuffleMake:
    def test_animate_keeps_order(self, duel_state):
        shuffle = Shuffle("player1Deck", rng=random.Random(3))
        animated = shuffle.animate(duel_state)

        pile = animated.piles["player1Deck"]
        assert pile.is_shuffling
        assert pile.cards == duel_state.piles["player1Deck"].cards
        assert not duel_state.piles["player1Deck"].is_shuffling

    def test_make_is_a_permutation(self, duel_state):
        shuffle = Shuffle("player1Deck", rng=random.Random(11))
        animated = shuffle.animate(duel_state)
        shuffled = shuffle.make(animated)

        pile = shuffled.piles["player1Deck"]
        assert not pile.is_shuffling
        assert sorted(pile.cards) == sorted(duel_state.piles["player1Deck"].cards)
        assert duel_state.piles["player1Deck"].cards == ["p1-a", "p1-b", "p1-c", "p1-d", "p1-e"]

    def test_other_piles_untouched(self, duel_state):
        shuffled = Shuffle("player1Deck", rng=random.Random(5)).make(duel_state)
        for pile_id, pile in duel_state.piles.items():
            if pile_id != "player1Deck":
                assert shuffled.piles[pile_id] == pile

    def test_single_card_pile(self):
        state = build_state({"player1Deck": ["only"]})
        shuffled = Shuffle("player1Deck").make(state)
        assert shuffled.piles["player1Deck"].cards == ["only"]


class TestFisherYates:
    def test_all_permutations_roughly_uniform(self):
        """6000 shuffles of three cards: each of the 6 orders near 1000."""
        rng = random.Random(1234)
        counts = Counter(
            tuple(fisher_yates(["a", "b", "c"], rng)) for _ in range(6000)
        )
        assert len(counts) == 6
        for count in counts.values():
            assert 800 <= count <= 1200
