"""Game entity shape the condition engine reads and writes.

The engine only touches ``speed`` and ``status``; everything else a
character, NPC or monster record carries belongs to other subsystems and is
passed through untouched (``extra="allow"``).
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, computed_field

from dnd_conditions.core.constants import DEFAULT_SPEED
from dnd_conditions.models.enums import ConditionKind, EntityType
from dnd_conditions.models.status import EntityStatus


Feet = Annotated[int, Field(ge=0, le=1000)]


class SpeedComponent(BaseModel):
    """Movement speeds by type, as monsters declare them.

    Attributes:
        walk: Walking speed in feet.
        fly: Flying speed in feet (0 if cannot fly).
        swim: Swimming speed in feet.
        climb: Climbing speed in feet.
        burrow: Burrowing speed in feet.
        hover: Whether the entity can hover while flying.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",  # Ignore computed fields when deserializing
    )

    walk: Feet = DEFAULT_SPEED
    fly: Feet = 0
    swim: Feet = 0
    climb: Feet = 0
    burrow: Feet = 0
    hover: bool = Field(
        default=False,
        description="Whether the entity can hover while flying",
    )

    @computed_field(description="Primary movement speed (usually walking)")
    @property
    def primary_speed(self) -> int:
        """Get the primary movement speed."""
        return self.walk if self.walk > 0 else max(self.fly, self.swim, self.climb)


class GameEntity(BaseModel):
    """A character, NPC or monster as seen by the condition engine.

    Attributes:
        id: Unique entity id (the store's key).
        name: Display name used in result messages.
        type: Entity type.
        speed: Flat walking speed, or a structured speed record.
        condition_immunities: Immunities declared by the stat block; copied
            into the status record when it is first created.
        status: Condition state, created on first application.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="allow",
    )

    id: str = Field(description="Unique entity id")
    name: str = Field(default="Unknown", description="Display name")
    type: EntityType = Field(default=EntityType.CHARACTER)
    speed: int | SpeedComponent = Field(default=DEFAULT_SPEED)
    condition_immunities: list[ConditionKind] = Field(default_factory=list)
    status: EntityStatus | None = Field(default=None)

    @property
    def walking_speed(self) -> int:
        """Current walking speed in feet, whichever speed shape is used."""
        if isinstance(self.speed, SpeedComponent):
            return self.speed.walk
        return self.speed


__all__ = [
    "SpeedComponent",
    "GameEntity",
]
