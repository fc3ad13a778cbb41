"""
Tests for the classic game content.
"""

from ..game_config import validate_config, validate_state
from ..games.classic import (
    CLASSIC_CARDS,
    MINION_PILES,
    cards_for,
    create_classic_config,
    player_pile_ids,
)


class TestClassicConfig:
    def test_config_is_valid(self, classic):
        config, _ = classic
        result = validate_config(config)
        assert result.valid, result.errors
        assert result.warnings == []

    def test_roster(self):
        warlords = [card for card in CLASSIC_CARDS if card.category == "warlord"]
        assert len(warlords) == 1
        assert len(CLASSIC_CARDS) == 13

    def test_card_ids_are_per_player(self):
        ids = [card.id for card in cards_for(1) + cards_for(2)]
        assert len(ids) == len(set(ids)) == 26
        assert "p1-warlord" in ids
        assert "p2-warlord" in ids

    def test_pile_ids(self):
        ids = player_pile_ids(2)
        assert ids["deck"] == "player2Deck"
        assert ids["cemetery"] == "player2Cemetery"
        assert ids[f"minion{MINION_PILES - 1}"] == "player2Minion3"

    def test_fresh_cards_per_config(self):
        first = create_classic_config()
        second = create_classic_config()
        first.get_card("p1-warlord").health_value = 1
        assert second.get_card("p1-warlord").health_value == 20

    def test_attack_rules_on_fighting_piles(self, classic):
        config, _ = classic
        assert config.incoming_attack_rules("player2Warlord")
        assert config.incoming_attack_rules("player1Minion0")
        assert config.incoming_attack_rules("player1Hand") == []


class TestClassicSetup:
    def test_initial_placement(self, classic):
        config, state = classic

        assert state.piles["player1Warlord"].cards == ["p1-warlord"]
        assert state.piles["player2Warlord"].cards == ["p2-warlord"]
        assert state.piles["player1Deck"].count == 12
        assert state.piles["player2Deck"].count == 12
        assert state.piles["player1Hand"].is_empty
        assert state.piles["player1Deck"].show_back
        assert validate_state(state, config).valid

    def test_initial_turn(self, classic):
        _, state = classic
        assert state.player1_turn
        assert state.phase.value == "DrawPhase"
        assert not state.ended
        assert set(state.tableaux) == {"player1Tableau", "player2Tableau"}
