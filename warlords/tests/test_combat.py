"""
Tests for combat resolution arithmetic.
"""

import pytest

from ..engine_core.combat import (
    CombatOutcome,
    as_outcome,
    classify,
    preview_attack,
    resolve_attack,
)
from ..engine_core.errors import UnresolvedOutcome
from .conftest import card


class TestResolveAttack:
    """Simultaneous damage and outcome classification."""

    def test_defender_dies(self):
        """3/5 attacking 4/2: defender at -1 dies, attacker survives at 1."""
        attacker = card("a", 3, 5)
        defender = card("d", 4, 2)

        outcome = resolve_attack(attacker, defender)

        assert outcome == CombatOutcome.DEFENDER_DIES
        assert outcome == 2
        assert attacker.health_value == 1
        assert defender.health_value == -1

    def test_mutual_destruction(self):
        attacker = card("a", 5, 4)
        defender = card("d", 5, 4)

        assert resolve_attack(attacker, defender) == CombatOutcome.BOTH_DIE
        assert attacker.health_value == -1
        assert defender.health_value == -1

    def test_no_death(self):
        attacker = card("a", 1, 5)
        defender = card("d", 1, 5)
        assert resolve_attack(attacker, defender) == CombatOutcome.NO_DEATH

    def test_attacker_dies(self):
        attacker = card("a", 1, 2)
        defender = card("d", 3, 5)
        assert resolve_attack(attacker, defender) == CombatOutcome.ATTACKER_DIES

    def test_damage_uses_pre_attack_values(self):
        """An attacker killed in the exchange still deals full damage."""
        attacker = card("a", 4, 1)
        defender = card("d", 9, 3)
        assert resolve_attack(attacker, defender) == CombatOutcome.BOTH_DIE
        assert defender.health_value == -1

    def test_health_accumulates(self):
        """Health is not clamped and persists between fights."""
        attacker = card("a", 1, 10)
        defender = card("d", 3, 10)
        resolve_attack(attacker, defender)
        resolve_attack(attacker, defender)
        assert attacker.health_value == 4
        assert defender.health_value == 8

    def test_zero_health_is_dead(self):
        assert classify(0, 1) == CombatOutcome.ATTACKER_DIES
        assert classify(1, 0) == CombatOutcome.DEFENDER_DIES


class TestPreviewAttack:
    def test_preview_does_not_mutate(self):
        attacker = card("a", 3, 5)
        defender = card("d", 4, 2)
        assert preview_attack(attacker, defender) == CombatOutcome.DEFENDER_DIES
        assert attacker.health_value == 5
        assert defender.health_value == 2


class TestOutcomeCodes:
    def test_known_codes(self):
        assert as_outcome(-1) == CombatOutcome.NO_DEATH
        assert as_outcome(0) == CombatOutcome.BOTH_DIE

    def test_unknown_code_is_fatal(self):
        with pytest.raises(UnresolvedOutcome):
            as_outcome(7)
