"""
State-Changer - The contract shared by Shuffle, Move and Attack.

Usage:
    changer = Move("player1Deck", "player1Hand", 1, manual=True)
    if changer.is_valid(state):
        state = changer.make(state)

is_valid() is a pure predicate that never raises; make() assumes the
predicate held for the same snapshot and does not re-check it.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
import logging

from .expression import RuleContext, check_rules

if TYPE_CHECKING:
    from .state import GameState
    from ..game_config.definitions import GameConfig


logger = logging.getLogger(__name__)


class StateChanger(ABC):
    """Interface for every operation that produces a new snapshot."""

    def is_valid(self, state: GameState) -> bool:
        """Check the operation against a snapshot. Failures become False."""
        try:
            return self._check(state)
        except Exception as e:
            logger.debug("%s invalid: %s", self, e)
            return False

    @abstractmethod
    def _check(self, state: GameState) -> bool:
        """Validity checks. May raise; is_valid() converts that to False."""

    @abstractmethod
    def make(self, state: GameState) -> GameState:
        """Return the next snapshot. Only call after is_valid() returned True."""

    def _reject(self, reason: str) -> bool:
        logger.debug("%s invalid: %s", self, reason)
        return False


def rules_pass(rules: list[str], context: RuleContext) -> bool:
    """Evaluate an edge's rule list with AND semantics."""
    passed = check_rules(rules, context)
    if not passed:
        logger.debug("Edge rules rejected operation: %s", rules)
    return passed


def config_or_empty(config: GameConfig | None) -> GameConfig:
    """Rules still run without a configuration; card/pile lookups then fail."""
    if config is not None:
        return config
    from ..game_config.definitions import GameConfig
    return GameConfig()
