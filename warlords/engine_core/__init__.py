"""
Engine Core - Rule-driven state transitions for the card game.

The engine:
1. Holds a GameState snapshot (piles, tableaux, phase)
2. Validates operations with is_valid()
3. Produces the next snapshot with make()
4. Resolves combat against the card registry
5. Evaluates pile edge rules
"""

from .state import GameState, PileState, TableauState, Phase, PLAYER_1, PLAYER_2, DRAW
from .errors import EngineError, NotFound, InvalidOperation, UnresolvedOutcome
from .queries import (
    get_pile_state,
    get_pile_owner,
    is_player1_turn,
    get_turn_player,
    get_current_phase,
)
from .changer import StateChanger
from .shuffle import Shuffle
from .move import Move
from .attack import Attack
from .combat import CombatOutcome, resolve_attack, preview_attack
from .expression import (
    RuleContext,
    RuleEvaluator,
    RuleSyntaxError,
    RuleEvaluationError,
    parse_rule,
    check_rules,
)

__all__ = [
    "GameState",
    "PileState",
    "TableauState",
    "Phase",
    "PLAYER_1",
    "PLAYER_2",
    "DRAW",
    "EngineError",
    "NotFound",
    "InvalidOperation",
    "UnresolvedOutcome",
    "get_pile_state",
    "get_pile_owner",
    "is_player1_turn",
    "get_turn_player",
    "get_current_phase",
    "StateChanger",
    "Shuffle",
    "Move",
    "Attack",
    "CombatOutcome",
    "resolve_attack",
    "preview_attack",
    "RuleContext",
    "RuleEvaluator",
    "RuleSyntaxError",
    "RuleEvaluationError",
    "parse_rule",
    "check_rules",
]
