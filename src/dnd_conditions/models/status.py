"""Status effect models.

A ``StatusEffect`` is one applied condition; an ``EntityStatus`` is the
record embedded in an entity that holds every active effect plus the
immunities, resistances, and the original-stats snapshot used to undo
mechanical changes. Both serialize to JSON with the owning entity.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Self
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dnd_conditions.core.constants import MAX_EXHAUSTION_LEVEL, MIN_EXHAUSTION_LEVEL
from dnd_conditions.models.enums import Ability, ConditionKind, DurationType


def _new_effect_id() -> str:
    return uuid4().hex


# =============================================================================
# Duration
# =============================================================================


class Duration(BaseModel):
    """Tagged duration policy for a status effect.

    Countdown types (rounds, minutes, hours) carry a mutable ``remaining``
    counter; every other type carries none.

    Example:
        >>> Duration.rounds(3).remaining
        3
        >>> Duration.until_long_rest().type
        <DurationType.UNTIL_LONG_REST: 'until_long_rest'>
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    type: DurationType = Field(description="How the duration is tracked")
    remaining: int | None = Field(default=None, ge=0, description="Units left for countdowns")
    end_condition: str | None = Field(default=None, description="What ends a custom duration")

    @model_validator(mode="after")
    def validate_remaining(self) -> Self:
        """Require a counter on countdown durations and forbid it elsewhere."""
        if self.type.is_countdown and self.remaining is None:
            msg = f"{self.type} duration requires a remaining count"
            raise ValueError(msg)
        if not self.type.is_countdown and self.remaining is not None:
            msg = f"{self.type} duration cannot carry a remaining count"
            raise ValueError(msg)
        return self

    @classmethod
    def permanent(cls) -> Duration:
        return cls(type=DurationType.PERMANENT)

    @classmethod
    def rounds(cls, count: int) -> Duration:
        return cls(type=DurationType.ROUNDS, remaining=count)

    @classmethod
    def minutes(cls, count: int) -> Duration:
        return cls(type=DurationType.MINUTES, remaining=count)

    @classmethod
    def hours(cls, count: int) -> Duration:
        return cls(type=DurationType.HOURS, remaining=count)

    @classmethod
    def until_long_rest(cls) -> Duration:
        return cls(type=DurationType.UNTIL_LONG_REST)

    @classmethod
    def until_short_rest(cls) -> Duration:
        return cls(type=DurationType.UNTIL_SHORT_REST)

    @classmethod
    def concentration(cls) -> Duration:
        return cls(type=DurationType.CONCENTRATION)

    @classmethod
    def custom(cls, end_condition: str | None = None) -> Duration:
        return cls(type=DurationType.CUSTOM, end_condition=end_condition)

    def describe(self) -> str:
        """Render the duration for display (e.g., '3 rounds', 'until long rest')."""
        if self.type.is_countdown:
            unit = self.type.value if self.remaining != 1 else self.type.value[:-1]
            return f"{self.remaining} {unit}"
        if self.type == DurationType.CUSTOM and self.end_condition:
            return f"until {self.end_condition}"
        return self.type.value.replace("_", " ")


# =============================================================================
# Status Effect
# =============================================================================


class StatusEffect(BaseModel):
    """One applied condition on an entity.

    Attributes:
        id: Unique effect identifier, generated at application time.
        kind: The condition this effect represents.
        name: Display name (defaults from the catalog).
        description: Rules text (defaults from the catalog).
        source: What caused the effect (spell, trap, ability).
        duration: Duration policy and remaining counter.
        level: Exhaustion level (1-6); unset for every other kind.
        save_type: Ability used for a save that ends the effect.
        save_dc: DC of that save.
        can_repeat_save: Whether the save may be repeated each turn.
        applied_at: When the effect was applied.
        metadata: Free-form condition-specific data.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    id: str = Field(default_factory=_new_effect_id, description="Unique effect ID")
    kind: ConditionKind = Field(description="Condition kind")
    name: str = Field(description="Display name")
    description: str = Field(default="", description="Rules text")
    source: str | None = Field(default=None, description="What applied this effect")
    duration: Duration = Field(default_factory=Duration.custom)
    level: int | None = Field(
        default=None,
        ge=MIN_EXHAUSTION_LEVEL,
        le=MAX_EXHAUSTION_LEVEL,
        description="Exhaustion level",
    )
    save_type: Ability | None = Field(default=None, description="Save that ends the effect")
    save_dc: int | None = Field(default=None, ge=1, description="DC of the ending save")
    can_repeat_save: bool = Field(default=False)
    applied_at: datetime = Field(default_factory=datetime.now)
    metadata: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Entity Status
# =============================================================================


class EntityStatus(BaseModel):
    """Status record embedded in a game entity.

    ``active_conditions`` keeps application order. ``original_stats`` is
    written once per attribute, the first time a condition changes it, and
    is what the mechanics layer restores from.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    entity_id: str = Field(description="Owning entity's id")
    active_conditions: list[StatusEffect] = Field(default_factory=list)
    immunities: set[ConditionKind] = Field(default_factory=set)
    resistances: set[ConditionKind] = Field(default_factory=set)
    last_updated: datetime = Field(default_factory=datetime.now)
    original_stats: dict[str, Any] = Field(default_factory=dict)

    @property
    def active_kinds(self) -> list[ConditionKind]:
        """Kinds of all active effects, in application order."""
        return [effect.kind for effect in self.active_conditions]

    def get(self, kind: ConditionKind) -> StatusEffect | None:
        """Get the first active effect of a kind."""
        for effect in self.active_conditions:
            if effect.kind == kind:
                return effect
        return None

    def get_by_id(self, effect_id: str) -> StatusEffect | None:
        """Get an active effect by its id."""
        for effect in self.active_conditions:
            if effect.id == effect_id:
                return effect
        return None

    def discard(self, effect: StatusEffect) -> None:
        """Drop an effect from the active list by id."""
        self.active_conditions = [c for c in self.active_conditions if c.id != effect.id]

    def touch(self) -> None:
        """Mark the record as modified now."""
        self.last_updated = datetime.now()


# =============================================================================
# Results
# =============================================================================


class StatusApplicationResult(BaseModel):
    """Outcome of an engine mutation.

    Game-rule refusals come back with ``success=False``; non-fatal
    advisories (exhaustion reaching level 6) go in ``warnings``.
    """

    success: bool
    message: str
    applied_effect: StatusEffect | None = None
    removed_effects: list[StatusEffect] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class RollModifiers(BaseModel):
    """Condition-derived flags for a single d20 roll.

    Advantage and disadvantage are reported independently; cancelling them
    is left to the caller.
    """

    model_config = ConfigDict(frozen=True)

    advantage: bool = False
    disadvantage: bool = False
    auto_fail: bool = False
    auto_success: bool = False


__all__ = [
    "Duration",
    "StatusEffect",
    "EntityStatus",
    "StatusApplicationResult",
    "RollModifiers",
]
