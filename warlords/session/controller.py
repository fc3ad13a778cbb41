"""
Game Controller - Drives the engine the way a UI would.

The controller is the only place that commits snapshots:
1. Build a state-changer from the player's input
2. Check is_valid() against the current snapshot
3. Commit make() (or skip it), recording feedback on the target pile
4. Advance phases and turns

It never sleeps: Shuffle's animate/make pair is split into
begin_shuffle()/finish_shuffle() so the caller chooses the delay.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
import logging
import random
import threading

from ..config import WARLORDS_ALLOW_INVALID_MOVES
from ..engine_core.attack import Attack
from ..engine_core.changer import StateChanger
from ..engine_core.combat import preview_attack
from ..engine_core.errors import UnresolvedOutcome
from ..engine_core.move import Move
from ..engine_core.queries import get_turn_player
from ..engine_core.shuffle import Shuffle
from ..engine_core.state import GameState, Phase

if TYPE_CHECKING:
    from ..game_config.definitions import GameConfig


logger = logging.getLogger(__name__)


@dataclass
class ChangeResult:
    """
    Result of submitting an operation.

    `valid` is what is_valid() said; `success` is whether a new
    snapshot was committed (invalid operations still commit while
    invalid moves are allowed).
    """
    success: bool
    valid: bool
    new_state: GameState | None = None
    error: str | None = None
    error_code: str | None = None
    changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(
        cls, error: str, error_code: str | None = None, state: GameState | None = None
    ) -> ChangeResult:
        return cls(success=False, valid=False, new_state=state, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls, state: GameState, valid: bool = True, changes: list[str] | None = None
    ) -> ChangeResult:
        return cls(success=True, valid=valid, new_state=state, changes=changes or [])


class GameController:
    """
    Owns the authoritative snapshot of one game.

    Usage:
        config, state = setup_classic_game()
        controller = GameController(config, state)
        controller.initial_shuffle()
        controller.initial_moves()
        controller.make_move("player1Deck", "player1Hand", 1)
        controller.change_phase()

    Operations are serialized with a lock because combat writes
    card health on the shared registry.
    """

    def __init__(
        self,
        config: GameConfig,
        initial_state: GameState,
        allow_invalid_moves: bool | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config
        self.rng = rng or random.Random()
        if allow_invalid_moves is None:
            allow_invalid_moves = initial_state.allow_invalid_moves or WARLORDS_ALLOW_INVALID_MOVES
        self._initial_state = initial_state._copy_with(allow_invalid_moves=allow_invalid_moves)
        self.state = self._initial_state.clone()
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def make_move(
        self,
        from_pile: str,
        to_pile: str,
        subject: str | int,
        manual: bool = True,
    ) -> ChangeResult:
        """Move a card (by id) or the top N cards onto another pile."""
        move = Move(
            from_pile,
            to_pile,
            subject,
            manual=manual,
            incoming_rules=self.config.incoming_rules(to_pile),
            config=self.config,
        )
        return self._apply(move, to_pile, "last_incoming_move_validity")

    def make_attack(
        self,
        from_pile: str,
        to_pile: str,
        attacking_card: str,
        defending_card: str | None = None,
    ) -> ChangeResult:
        """
        Attack a card in `to_pile`. Without an explicit defender the
        bottom card of the target pile defends.
        """
        if defending_card is None:
            target = self.state.piles.get(to_pile)
            defending_card = target.cards[0] if target and target.cards else ""
        attack = Attack(
            from_pile,
            to_pile,
            attacking_card,
            defending_card,
            manual=True,
            config=self.config,
            incoming_rules=self.config.incoming_attack_rules(to_pile),
        )
        return self._apply(attack, to_pile, "last_incoming_attack_validity")

    def drop_card(self, from_pile: str, to_pile: str, card_id: str) -> ChangeResult:
        """
        A card released over a pile: an attack during the Battle phase
        when it lands on another pile, a move otherwise.
        """
        if self.state.phase == Phase.BATTLE and from_pile != to_pile:
            return self.make_attack(from_pile, to_pile, card_id)
        return self.make_move(from_pile, to_pile, card_id)

    def begin_shuffle(self, pile_id: str) -> Shuffle | None:
        """Commit the animated snapshot; returns the shuffle to finish later."""
        with self._lock:
            shuffle = Shuffle(pile_id, rng=self.rng)
            if not shuffle.is_valid(self.state):
                return None
            self.state = shuffle.animate(self.state)
            return shuffle

    def finish_shuffle(self, shuffle: Shuffle) -> ChangeResult:
        return self._apply(shuffle)

    def shuffle(self, pile_id: str) -> ChangeResult:
        """Shuffle a pile without an animation step."""
        return self._apply(Shuffle(pile_id, rng=self.rng))

    def initial_shuffle(self) -> list[ChangeResult]:
        """Shuffle every pile configured with initial_shuffle."""
        return [
            self.shuffle(pile.id)
            for pile in self.config.piles
            if pile.initial_shuffle and pile.id in self.state.piles
        ]

    def initial_moves(self) -> list[ChangeResult]:
        """Perform the configured deal. Moves that are not valid are skipped."""
        results = []
        for initial in self.config.initial_moves:
            move = Move(initial.from_pile, initial.to_pile, initial.subject, manual=False)
            with self._lock:
                if move.is_valid(self.state):
                    self.state = move.make(self.state)
                    results.append(ChangeResult.success_with_state(self.state, changes=[repr(move)]))
                else:
                    results.append(ChangeResult.failure(f"{move!r} is not valid", "INVALID_MOVE"))
        return results

    def _apply(
        self,
        changer: StateChanger,
        target_pile: str | None = None,
        validity_field: str | None = None,
    ) -> ChangeResult:
        with self._lock:
            if self.state.ended:
                return ChangeResult.failure("Game is over - no operations allowed", "GAME_OVER")

            valid = changer.is_valid(self.state)
            if not valid and not self.state.allow_invalid_moves:
                self.state = self._with_validity(self.state, target_pile, validity_field, False)
                logger.info("Rejected %r", changer)
                return ChangeResult.failure(f"{changer!r} is not valid", "INVALID_OPERATION", self.state)

            changes = [repr(changer)]
            try:
                if isinstance(changer, Attack):
                    outcome = preview_attack(
                        self.config.get_card(changer.attacking_card),
                        self.config.get_card(changer.defending_card),
                    )
                    changes.append(f"Outcome: {outcome.name}")
                new_state = changer.make(self.state)
            except UnresolvedOutcome:
                raise
            except Exception as e:
                logger.warning("Could not apply %r: %s", changer, e)
                return ChangeResult.failure(str(e), "HANDLER_ERROR", self.state)

            self.state = self._with_validity(new_state, target_pile, validity_field, valid)
            logger.info("Applied %r (valid=%s)", changer, valid)
            if self.state.ended:
                logger.info("Game over, winner: %s", self.state.winner)
                changes.append(f"Winner: {self.state.winner}")
            return ChangeResult.success_with_state(self.state, valid=valid, changes=changes)

    @staticmethod
    def _with_validity(
        state: GameState, pile_id: str | None, validity_field: str | None, valid: bool
    ) -> GameState:
        if pile_id is None or validity_field is None or pile_id not in state.piles:
            return state
        if getattr(state.piles[pile_id], validity_field) == valid:
            return state
        new_state = state.clone()
        setattr(new_state.piles[pile_id], validity_field, valid)
        return new_state

    # -------------------------------------------------------------------------
    # Turn structure
    # -------------------------------------------------------------------------

    def change_phase(self) -> Phase:
        """Advance Draw -> Main -> Battle -> End; End hands the turn over."""
        with self._lock:
            if self.state.phase == Phase.END:
                self._next_turn()
            else:
                self.state = self.state._copy_with(phase=self.state.phase.next())
            logger.info("Phase is now %s (%s)", self.state.phase.value, get_turn_player(self.state))
            return self.state.phase

    def change_turn(self):
        """Hand the turn to the other player immediately."""
        with self._lock:
            self._next_turn()
            logger.info("Turn passes to %s", get_turn_player(self.state))

    def _next_turn(self):
        new_state = self.state._copy_with(
            player1_turn=not self.state.player1_turn,
            has_drawn=False,
            phase=Phase.DRAW,
        )
        for pile in new_state.piles.values():
            pile.has_acted = False
        self.state = new_state

    # -------------------------------------------------------------------------
    # Debug / housekeeping
    # -------------------------------------------------------------------------

    def clear_validity_flags(self):
        """Reset the per-pile feedback flags after the UI has shown them."""
        with self._lock:
            new_state = self.state.clone()
            for pile in new_state.piles.values():
                pile.last_incoming_move_validity = True
                pile.last_incoming_attack_validity = True
            self.state = new_state

    def toggle_invalid_moves(self) -> bool:
        with self._lock:
            self.state = self.state._copy_with(
                allow_invalid_moves=not self.state.allow_invalid_moves
            )
            return self.state.allow_invalid_moves

    def restart(self):
        """Back to the initial snapshot, with every card at full health."""
        with self._lock:
            self.state = self._initial_state.clone()
            self.config.reset_health()
            logger.info("Game restarted")
