"""Tests for condition-derived roll modifiers."""

from __future__ import annotations

import pytest

from dnd_conditions.core.exceptions import ValidationError
from dnd_conditions.engine.modifiers import get_status_modifiers_for_roll
from dnd_conditions.engine.status import apply_condition
from dnd_conditions.models import Ability, ConditionKind, GameEntity, RollModifiers, RollType


def with_conditions(entity: GameEntity, *kinds: ConditionKind, level: int | None = None) -> GameEntity:
    for kind in kinds:
        entity, _ = apply_condition(entity, kind, level=level)
    return entity


class TestRollModifiers:
    """Tests for get_status_modifiers_for_roll."""

    def test_no_conditions(self, fighter: GameEntity) -> None:
        """Test a clean entity gets no flags."""
        assert get_status_modifiers_for_roll(fighter, "attack") == RollModifiers()

    def test_invisible_attack(self, fighter: GameEntity) -> None:
        """Test invisible grants advantage on attacks only."""
        entity = with_conditions(fighter, ConditionKind.INVISIBLE)

        assert get_status_modifiers_for_roll(entity, RollType.ATTACK) == RollModifiers(advantage=True)

    def test_advantage_and_disadvantage_coexist(self, fighter: GameEntity) -> None:
        """Test invisible plus restrained sets both flags."""
        entity = with_conditions(fighter, ConditionKind.INVISIBLE, ConditionKind.RESTRAINED)

        mods = get_status_modifiers_for_roll(entity, "attack")

        assert mods.advantage is True
        assert mods.disadvantage is True
        assert mods.auto_fail is False
        assert mods.auto_success is False

    @pytest.mark.parametrize(
        "kind,roll_type,expected",
        [
            (ConditionKind.BLINDED, "attack", True),
            (ConditionKind.BLINDED, "ability_check", False),
            (ConditionKind.PRONE, "attack", True),
            (ConditionKind.FRIGHTENED, "attack", True),
            (ConditionKind.FRIGHTENED, "ability_check", True),
            (ConditionKind.FRIGHTENED, "skill_check", False),
            (ConditionKind.POISONED, "ability_check", True),
            (ConditionKind.POISONED, "saving_throw", False),
            (ConditionKind.CHARMED, "attack", False),
        ],
    )
    def test_disadvantage_table(
        self,
        fighter: GameEntity,
        kind: ConditionKind,
        roll_type: str,
        expected: bool,
    ) -> None:
        """Test single-condition disadvantage rules."""
        entity = with_conditions(fighter, kind)
        assert get_status_modifiers_for_roll(entity, roll_type).disadvantage is expected

    def test_skill_checks_carry_no_check_disadvantage(self, fighter: GameEntity) -> None:
        """Test skill checks ignore the ability-check disadvantage rules."""
        entity = with_conditions(fighter, ConditionKind.FRIGHTENED, ConditionKind.POISONED)
        entity, _ = apply_condition(entity, ConditionKind.EXHAUSTION, level=3)

        assert get_status_modifiers_for_roll(entity, "ability_check").disadvantage is True
        assert get_status_modifiers_for_roll(entity, RollType.SKILL_CHECK) == RollModifiers()

    def test_restrained_dexterity_saves(self, fighter: GameEntity) -> None:
        """Test restrained imposes disadvantage on DEX saves only."""
        entity = with_conditions(fighter, ConditionKind.RESTRAINED)

        assert get_status_modifiers_for_roll(entity, "saving_throw", "dexterity").disadvantage
        assert not get_status_modifiers_for_roll(entity, "saving_throw", "wisdom").disadvantage
        assert not get_status_modifiers_for_roll(entity, "saving_throw").disadvantage

    @pytest.mark.parametrize(
        "kind",
        [ConditionKind.PARALYZED, ConditionKind.STUNNED, ConditionKind.UNCONSCIOUS],
    )
    @pytest.mark.parametrize(
        "ability,expected",
        [(Ability.STR, True), ("DEX", True), ("constitution", False)],
    )
    def test_auto_fail_physical_saves(
        self,
        fighter: GameEntity,
        kind: ConditionKind,
        ability: Ability | str,
        expected: bool,
    ) -> None:
        """Test STR and DEX saves auto-fail while helpless."""
        entity = with_conditions(fighter, kind)
        assert get_status_modifiers_for_roll(entity, "saving_throw", ability).auto_fail is expected

    @pytest.mark.parametrize(
        "level,check,attack,save",
        [
            (1, True, False, False),
            (2, True, False, False),
            (3, True, True, True),
            (5, True, True, True),
        ],
    )
    def test_exhaustion_levels(
        self,
        fighter: GameEntity,
        level: int,
        check: bool,
        attack: bool,
        save: bool,
    ) -> None:
        """Test exhaustion thresholds at levels 1 and 3."""
        entity = with_conditions(fighter, ConditionKind.EXHAUSTION, level=level)

        assert get_status_modifiers_for_roll(entity, "ability_check").disadvantage is check
        assert get_status_modifiers_for_roll(entity, "attack").disadvantage is attack
        assert get_status_modifiers_for_roll(entity, "saving_throw", "wisdom").disadvantage is save

    def test_unknown_roll_type(self, fighter: GameEntity) -> None:
        """Test unknown roll types are rejected."""
        with pytest.raises(ValidationError):
            get_status_modifiers_for_roll(fighter, "initiative_dance")

    def test_unknown_ability(self, fighter: GameEntity) -> None:
        """Test unknown abilities are rejected."""
        with pytest.raises(ValidationError):
            get_status_modifiers_for_roll(fighter, "saving_throw", "luck")
