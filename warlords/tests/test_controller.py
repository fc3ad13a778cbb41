"""
Tests for the game controller driving a classic game.
"""

import random

import pytest

from ..engine_core.state import Phase, PLAYER_1
from ..session import GameController


@pytest.fixture
def controller(classic):
    config, state = classic
    return GameController(config, state, allow_invalid_moves=False, rng=random.Random(42))


@pytest.fixture
def dealt(controller):
    """Decks shuffled and opening hands dealt."""
    controller.initial_shuffle()
    controller.initial_moves()
    return controller


def advance_to(controller, phase):
    while controller.state.phase != phase:
        controller.change_phase()


class TestSetup:
    def test_initial_shuffle(self, controller):
        before = sorted(controller.state.piles["player1Deck"].cards)
        results = controller.initial_shuffle()

        assert len(results) == 2
        assert all(result.success for result in results)
        assert sorted(controller.state.piles["player1Deck"].cards) == before

    def test_initial_moves_deal_hands(self, dealt):
        state = dealt.state
        assert state.piles["player1Hand"].count == 4
        assert state.piles["player2Hand"].count == 4
        assert state.piles["player1Deck"].count == 8
        assert not state.has_drawn


class TestTurn:
    def test_draw_once(self, dealt):
        result = dealt.make_move("player1Deck", "player1Hand", 1)
        assert result.success
        assert result.valid
        assert dealt.state.has_drawn
        assert dealt.state.piles["player1Hand"].count == 5

        second = dealt.make_move("player1Deck", "player1Hand", 1)
        assert not second.success
        assert second.error_code == "INVALID_OPERATION"
        assert dealt.state.piles["player1Hand"].count == 5
        assert not dealt.state.piles["player1Hand"].last_incoming_move_validity

    def test_cannot_draw_for_opponent(self, dealt):
        result = dealt.make_move("player2Deck", "player2Hand", 1)
        assert not result.success
        assert dealt.state.piles["player2Hand"].count == 4

    def test_phase_cycle(self, dealt):
        assert dealt.change_phase() == Phase.MAIN
        assert dealt.change_phase() == Phase.BATTLE
        assert dealt.change_phase() == Phase.END
        assert dealt.change_phase() == Phase.DRAW
        assert not dealt.state.player1_turn

    def test_deploy_minion(self, dealt):
        advance_to(dealt, Phase.MAIN)
        hand = dealt.state.piles["player1Hand"].cards
        first, second = hand[0], hand[1]

        assert dealt.make_move("player1Hand", "player1Minion0", first).success
        assert dealt.state.piles["player1Minion0"].cards == [first]

        blocked = dealt.make_move("player1Hand", "player1Minion0", second)
        assert not blocked.success
        assert dealt.make_move("player1Hand", "player1Minion1", second).success

    def test_cannot_deploy_outside_main(self, dealt):
        card_id = dealt.state.piles["player1Hand"].cards[0]
        assert not dealt.make_move("player1Hand", "player1Minion0", card_id).success

    def test_attack_warlord(self, dealt):
        advance_to(dealt, Phase.MAIN)
        card_id = dealt.state.piles["player1Hand"].cards[0]
        dealt.make_move("player1Hand", "player1Minion0", card_id)
        advance_to(dealt, Phase.BATTLE)

        attack_value = dealt.config.get_card(card_id).attack_value
        result = dealt.make_attack("player1Minion0", "player2Warlord", card_id)

        assert result.success
        assert any(change.startswith("Outcome: ") for change in result.changes)
        assert dealt.config.get_card("p2-warlord").health_value == 20 - attack_value
        assert dealt.state.piles["player2Warlord"].last_incoming_attack_validity

        again = dealt.make_attack("player1Minion0", "player2Warlord", card_id)
        assert not again.success
        assert not dealt.state.piles["player2Warlord"].last_incoming_attack_validity

    def test_end_of_turn_resets_acted(self, dealt):
        advance_to(dealt, Phase.MAIN)
        card_id = dealt.state.piles["player1Hand"].cards[0]
        dealt.make_move("player1Hand", "player1Minion0", card_id)
        advance_to(dealt, Phase.BATTLE)
        dealt.make_attack("player1Minion0", "player2Warlord", card_id)

        advance_to(dealt, Phase.END)
        dealt.change_phase()

        assert dealt.state.phase == Phase.DRAW
        assert not dealt.state.player1_turn
        assert not dealt.state.has_drawn
        assert not any(pile.has_acted for pile in dealt.state.piles.values())

    def test_change_turn(self, dealt):
        dealt.make_move("player1Deck", "player1Hand", 1)
        dealt.change_turn()
        assert not dealt.state.player1_turn
        assert dealt.make_move("player2Deck", "player2Hand", 1).success

    def test_drop_card_dispatch(self, dealt):
        advance_to(dealt, Phase.MAIN)
        card_id = dealt.state.piles["player1Hand"].cards[0]

        moved = dealt.drop_card("player1Hand", "player1Minion0", card_id)
        assert moved.success
        assert moved.changes[0].startswith("Move(")

        advance_to(dealt, Phase.BATTLE)
        attacked = dealt.drop_card("player1Minion0", "player2Warlord", card_id)
        assert attacked.changes[0].startswith("Attack(")


class TestWinning:
    def test_killing_warlord_ends_game(self, duel_config, duel_state):
        controller = GameController(duel_config, duel_state, allow_invalid_moves=False)
        result = controller.make_attack("player1Minion0", "player2Warlord", "p1-knight")

        assert result.success
        assert "Winner: Player 1" in result.changes
        assert controller.state.ended
        assert controller.state.winner == PLAYER_1

        over = controller.make_attack("player1Minion1", "player2Minion1", "p1-ogre")
        assert over.error_code == "GAME_OVER"

    def test_default_defender_is_bottom_card(self, duel_config, duel_state):
        state = duel_state.clone()
        state.piles["player2Hand"].cards = ["p2-y"]
        state.piles["player2Minion0"].cards = ["p2-imp", "p2-x"]
        controller = GameController(duel_config, state, allow_invalid_moves=False)

        controller.make_attack("player1Minion0", "player2Minion0", "p1-knight")

        assert controller.state.piles["player2Cemetery"].cards == ["p2-imp"]


class TestDebugControls:
    def test_bypass_commits_invalid_move(self, dealt):
        assert dealt.toggle_invalid_moves() is True

        result = dealt.make_move("player2Deck", "player2Hand", 1)

        assert result.success
        assert not result.valid
        assert dealt.state.piles["player2Hand"].count == 5
        assert not dealt.state.piles["player2Hand"].last_incoming_move_validity
        assert dealt.toggle_invalid_moves() is False

    def test_bypass_handler_error(self, dealt):
        dealt.toggle_invalid_moves()
        result = dealt.make_move("player1Deck", "player1Hand", "not-a-card")
        assert not result.success
        assert result.error_code == "HANDLER_ERROR"

    def test_bypass_failed_attack_keeps_health(self, duel_config, duel_state):
        controller = GameController(duel_config, duel_state, allow_invalid_moves=True)
        before = controller.state

        result = controller.make_attack("player1Minion0", "player2Minion0", "p1-ogre", "p2-ogre")

        assert result.error_code == "HANDLER_ERROR"
        assert controller.state.piles == before.piles
        assert duel_config.get_card("p1-ogre").health_value == 4
        assert duel_config.get_card("p2-ogre").health_value == 4

    def test_clear_validity_flags(self, dealt):
        dealt.make_move("player2Deck", "player2Hand", 1)
        assert not dealt.state.piles["player2Hand"].last_incoming_move_validity

        dealt.clear_validity_flags()

        for pile in dealt.state.piles.values():
            assert pile.last_incoming_move_validity
            assert pile.last_incoming_attack_validity

    def test_restart(self, dealt):
        advance_to(dealt, Phase.MAIN)
        card_id = dealt.state.piles["player1Hand"].cards[0]
        dealt.make_move("player1Hand", "player1Minion0", card_id)
        advance_to(dealt, Phase.BATTLE)
        dealt.make_attack("player1Minion0", "player2Warlord", card_id)

        dealt.restart()

        assert dealt.state.phase == Phase.DRAW
        assert dealt.state.piles["player1Hand"].is_empty
        assert dealt.state.piles["player1Deck"].count == 12
        assert dealt.config.get_card("p2-warlord").health_value == 20


class TestShuffleAnimation:
    def test_begin_and_finish(self, controller):
        shuffle = controller.begin_shuffle("player1Deck")
        assert shuffle is not None
        assert controller.state.piles["player1Deck"].is_shuffling

        result = controller.finish_shuffle(shuffle)

        assert result.success
        assert not controller.state.piles["player1Deck"].is_shuffling

    def test_empty_pile_cannot_shuffle(self, controller):
        assert controller.begin_shuffle("player1Hand") is None
        assert not controller.shuffle("player1Hand").success
