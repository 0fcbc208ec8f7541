"""dnd_conditions - D&D 5E condition tracking engine.

Tracks the fifteen 5E conditions on characters, NPCs and monsters: applying
and stacking them, removing them, ticking their durations, clearing them on
rests, and deriving the advantage/disadvantage they impose on d20 rolls.

The engine is a set of pure functions over a ``GameEntity`` value. Each
mutation returns a new entity and a ``StatusApplicationResult``; the caller
decides what to persist.

Example:
    >>> from dnd_conditions import GameEntity, apply_condition, tick_durations, Duration
    >>>
    >>> hero = GameEntity(id="pc-1", name="Thorin", speed=25)
    >>> hero, result = apply_condition(hero, "restrained", duration=Duration.rounds(2))
    >>> hero.speed
    0
    >>> hero, result = tick_durations(hero, "round")
    >>> hero, result = tick_durations(hero, "round")
    >>> [e.name for e in result.removed_effects], hero.speed
    (['Restrained'], 25)

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 models (GameEntity, EntityStatus, StatusEffect).
    engine: Condition catalog, status engine, durations, roll modifiers.
    storage: Entity store protocol and SQLite implementation.
"""

from __future__ import annotations

# Core
from dnd_conditions.core.config import Settings, get_settings
from dnd_conditions.core.exceptions import DndConditionsError, UnknownConditionError
from dnd_conditions.core.logging import configure_logging, get_logger

# Models
from dnd_conditions.models import (
    Ability,
    ConditionKind,
    Duration,
    DurationType,
    EntityStatus,
    GameEntity,
    RollModifiers,
    RollType,
    SpeedComponent,
    StatusApplicationResult,
    StatusEffect,
    TimeUnit,
)

# Engine
from dnd_conditions.engine import (
    apply_condition,
    apply_long_rest,
    apply_short_rest,
    describe_exhaustion,
    format_status_summary,
    get_active_conditions,
    get_condition,
    get_exhaustion_level,
    get_status_modifiers_for_roll,
    get_template,
    has_condition,
    is_incapacitated,
    remove_condition,
    tick_durations,
)

# Storage
from dnd_conditions.storage import EntityStore, SQLiteEntityStore, save_entity_status


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "DndConditionsError",
    "UnknownConditionError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Ability",
    "ConditionKind",
    "Duration",
    "DurationType",
    "EntityStatus",
    "GameEntity",
    "RollModifiers",
    "RollType",
    "SpeedComponent",
    "StatusApplicationResult",
    "StatusEffect",
    "TimeUnit",
    # Engine
    "apply_condition",
    "remove_condition",
    "has_condition",
    "get_condition",
    "get_active_conditions",
    "get_exhaustion_level",
    "is_incapacitated",
    "tick_durations",
    "apply_long_rest",
    "apply_short_rest",
    "get_status_modifiers_for_roll",
    "get_template",
    "describe_exhaustion",
    "format_status_summary",
    # Storage
    "EntityStore",
    "SQLiteEntityStore",
    "save_entity_status",
]
