"""Pydantic V2 models for the condition engine.

Submodules:
    enums: Closed vocabularies (ConditionKind, Ability, DurationType, ...).
    status: StatusEffect, EntityStatus, Duration and result models.
    entity: GameEntity and SpeedComponent.
"""

from __future__ import annotations

from dnd_conditions.models.entity import GameEntity, SpeedComponent
from dnd_conditions.models.enums import (
    Ability,
    ConditionKind,
    DurationType,
    EntityType,
    RollType,
    TimeUnit,
)
from dnd_conditions.models.status import (
    Duration,
    EntityStatus,
    RollModifiers,
    StatusApplicationResult,
    StatusEffect,
)


__all__ = [
    # Enums
    "Ability",
    "ConditionKind",
    "DurationType",
    "EntityType",
    "RollType",
    "TimeUnit",
    # Status
    "Duration",
    "EntityStatus",
    "RollModifiers",
    "StatusApplicationResult",
    "StatusEffect",
    # Entity
    "GameEntity",
    "SpeedComponent",
]
