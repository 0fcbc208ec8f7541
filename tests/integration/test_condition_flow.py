"""Integration tests for a full condition lifecycle across an encounter."""

from __future__ import annotations

from pathlib import Path

from dnd_conditions import (
    ConditionKind,
    Duration,
    GameEntity,
    SQLiteEntityStore,
    apply_condition,
    apply_long_rest,
    apply_short_rest,
    get_active_conditions,
    get_condition,
    get_exhaustion_level,
    get_status_modifiers_for_roll,
    has_condition,
    remove_condition,
    save_entity_status,
    tick_durations,
)


class TestEncounterFlow:
    """Tests chaining engine operations the way a turn driver would."""

    def test_web_then_rest(self, fighter: GameEntity) -> None:
        """Test restraint by a Web spell, rounds passing, and a long rest."""
        hero, result = apply_condition(
            fighter,
            ConditionKind.RESTRAINED,
            source="Web",
            duration=Duration.rounds(2),
            save_dc=13,
            save_type="strength",
        )
        assert result.success
        assert hero.speed == 0
        assert get_status_modifiers_for_roll(hero, "saving_throw", "dexterity").disadvantage

        hero, _ = apply_condition(hero, ConditionKind.EXHAUSTION, level=2)
        hero, _ = tick_durations(hero, "round")
        assert has_condition(hero, ConditionKind.RESTRAINED)

        hero, result = tick_durations(hero, "round")
        assert [e.kind for e in result.removed_effects] == [ConditionKind.RESTRAINED]
        assert hero.speed == 30

        hero, _ = apply_short_rest(hero)
        assert get_exhaustion_level(hero) == 2

        hero, _ = apply_long_rest(hero)
        hero, _ = apply_long_rest(hero)
        assert get_active_conditions(hero) == []

    def test_knocked_out(self, fighter: GameEntity) -> None:
        """Test falling unconscious clears prone and restores speed on waking."""
        hero, _ = apply_condition(fighter, ConditionKind.PRONE, source="Trip attack")
        hero, result = apply_condition(hero, ConditionKind.UNCONSCIOUS, source="0 HP")

        assert [e.kind for e in result.removed_effects] == [ConditionKind.PRONE]
        assert get_status_modifiers_for_roll(hero, "saving_throw", "strength").auto_fail
        assert hero.speed == 0

        hero, _ = remove_condition(hero, ConditionKind.UNCONSCIOUS)
        assert hero.speed == 30
        assert get_active_conditions(hero) == []


class TestPersistence:
    """Tests for queries surviving serialization and storage."""

    def test_queries_survive_round_trip(self, tmp_path: Path, wyvern: GameEntity) -> None:
        """Test every query gives the same answer after a store round trip."""
        monster, _ = apply_condition(wyvern, ConditionKind.GRAPPLED, source="Net")
        monster, _ = apply_condition(monster, ConditionKind.EXHAUSTION, level=3)
        monster, _ = apply_condition(
            monster,
            ConditionKind.FRIGHTENED,
            duration=Duration.minutes(1),
            metadata={"source_creature": "Adult Red Dragon"},
        )

        store = SQLiteEntityStore(tmp_path / "entities.db")
        save_entity_status(monster, store)
        loaded = store.load(monster.id)

        for kind in ConditionKind:
            assert has_condition(loaded, kind) == has_condition(monster, kind)
            assert get_condition(loaded, kind) == get_condition(monster, kind)
        assert get_active_conditions(loaded) == get_active_conditions(monster)
        for roll in ("attack", "ability_check", "saving_throw", "skill_check"):
            assert get_status_modifiers_for_roll(loaded, roll, "dexterity") == (
                get_status_modifiers_for_roll(monster, roll, "dexterity")
            )

        loaded, _ = remove_condition(loaded, ConditionKind.GRAPPLED)
        assert loaded.speed == wyvern.speed

    def test_json_round_trip(self, fighter: GameEntity) -> None:
        """Test JSON serialization preserves query results."""
        hero, _ = apply_condition(fighter, ConditionKind.POISONED, duration=Duration.hours(8))
        hero, _ = apply_condition(hero, ConditionKind.INVISIBLE)

        restored = GameEntity.model_validate_json(hero.model_dump_json())

        assert restored == hero
        assert restored.notes == "Carries a longsword"
        assert get_status_modifiers_for_roll(restored, "attack") == (
            get_status_modifiers_for_roll(hero, "attack")
        )
