"""Tests for plain-text status summaries."""

from __future__ import annotations

import pytest

from dnd_conditions.core.exceptions import ValidationError
from dnd_conditions.engine.status import apply_condition
from dnd_conditions.engine.summary import describe_exhaustion, format_status_summary
from dnd_conditions.models import ConditionKind, Duration, GameEntity


class TestDescribeExhaustion:
    """Tests for describe_exhaustion."""

    def test_level_zero(self) -> None:
        """Test no exhaustion."""
        assert describe_exhaustion(0) == "No exhaustion effects."

    def test_cumulative_levels(self) -> None:
        """Test each level lists every lower level too."""
        text = describe_exhaustion(3)
        assert text.splitlines() == [
            "Level 1: Disadvantage on ability checks",
            "Level 2: Speed halved",
            "Level 3: Disadvantage on attack rolls and saving throws",
        ]

    @pytest.mark.parametrize("level", [-1, 7])
    def test_out_of_range(self, level: int) -> None:
        """Test levels outside 0-6 are rejected."""
        with pytest.raises(ValidationError):
            describe_exhaustion(level)


class TestFormatStatusSummary:
    """Tests for format_status_summary."""

    def test_no_conditions(self, fighter: GameEntity) -> None:
        """Test an entity without conditions."""
        assert format_status_summary(fighter) == "Conditions for Test Fighter:\n- none"

    def test_effect_lines(self, fighter: GameEntity) -> None:
        """Test duration, source, level and save details are rendered."""
        entity, _ = apply_condition(
            fighter,
            ConditionKind.POISONED,
            source="Spider",
            duration=Duration.rounds(2),
            save_dc=13,
        )
        entity, _ = apply_condition(entity, ConditionKind.EXHAUSTION, level=2)

        lines = format_status_summary(entity).splitlines()

        assert lines[1] == "- Poisoned [2 rounds; source: Spider; DC 13 CON save, repeats each turn]"
        assert lines[2] == "- Exhaustion (level 2) [until long rest; source: Unknown]"

    def test_immunities_listed(self, wyvern: GameEntity) -> None:
        """Test declared immunities appear even without a status record."""
        assert format_status_summary(wyvern).endswith("Immunities: poisoned")
