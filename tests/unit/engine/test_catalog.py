"""Tests for the condition catalog."""

from __future__ import annotations

import pytest

from dnd_conditions.core.exceptions import UnknownConditionError
from dnd_conditions.engine.catalog import (
    CONDITION_CATALOG,
    EXHAUSTION_EFFECTS,
    coerce_kind,
    get_template,
)
from dnd_conditions.models import Ability, ConditionKind, DurationType


class TestCatalogContents:
    """Tests for catalog defaults."""

    def test_every_kind_has_a_template(self) -> None:
        """Test the catalog covers the closed enumeration exactly."""
        assert set(CONDITION_CATALOG) == set(ConditionKind)

    def test_exhaustion_defaults(self) -> None:
        """Test exhaustion lasts until a long rest and starts at level 1."""
        template = get_template(ConditionKind.EXHAUSTION)
        assert template.default_duration.type == DurationType.UNTIL_LONG_REST
        assert template.default_level == 1

    @pytest.mark.parametrize(
        "kind",
        [ConditionKind.PARALYZED, ConditionKind.POISONED, ConditionKind.STUNNED],
    )
    def test_repeatable_constitution_saves(self, kind: ConditionKind) -> None:
        """Test conditions that end on a repeated CON save."""
        template = get_template(kind)
        assert template.default_save_type == Ability.CON
        assert template.can_repeat_save is True

    def test_other_defaults_are_custom(self) -> None:
        """Test non-exhaustion conditions default to a custom duration."""
        template = get_template(ConditionKind.GRAPPLED)
        assert template.name == "Grappled"
        assert template.default_duration.type == DurationType.CUSTOM
        assert template.default_save_type is None

    def test_make_duration_returns_copy(self) -> None:
        """Test template durations are copied, never shared."""
        template = get_template(ConditionKind.EXHAUSTION)
        assert template.make_duration() is not template.default_duration

    def test_catalog_is_read_only(self) -> None:
        """Test the catalog mapping rejects writes."""
        with pytest.raises(TypeError):
            CONDITION_CATALOG[ConditionKind.PRONE] = get_template("blinded")  # type: ignore[index]

    def test_exhaustion_effects_table(self) -> None:
        """Test one entry per level plus level 0."""
        assert len(EXHAUSTION_EFFECTS) == 7
        assert EXHAUSTION_EFFECTS[6] == "Death"


class TestCoerceKind:
    """Tests for boundary conversion of condition names."""

    @pytest.mark.parametrize("value", ["prone", "Prone", " PRONE ", ConditionKind.PRONE])
    def test_accepts_names(self, value: str) -> None:
        """Test case-insensitive names and enum members."""
        assert coerce_kind(value) == ConditionKind.PRONE

    def test_unknown_kind(self) -> None:
        """Test unknown names raise UnknownConditionError."""
        with pytest.raises(UnknownConditionError) as exc_info:
            get_template("sleepy")
        assert exc_info.value.details["value"] == "sleepy"
