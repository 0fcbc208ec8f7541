"""Status engine: apply, remove and query conditions on a game entity.

Every mutation works on a deep copy of the entity it is given and returns
``(new_entity, StatusApplicationResult)``; the caller's object is never
modified. Rule refusals (immunity, duplicate condition, nothing to remove)
come back as ``success=False`` results rather than exceptions.

Example:
    >>> goblin = GameEntity(id="goblin-1", name="Goblin", speed=30)
    >>> goblin, result = apply_condition(goblin, ConditionKind.GRAPPLED, source="Net")
    >>> result.success, goblin.speed
    (True, 0)
    >>> goblin, result = remove_condition(goblin, "grappled")
    >>> goblin.speed
    30
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from dnd_conditions.core.config import get_settings
from dnd_conditions.core.constants import MAX_EXHAUSTION_LEVEL, MIN_EXHAUSTION_LEVEL
from dnd_conditions.core.exceptions import UnknownConditionError
from dnd_conditions.core.logging import get_logger, log_mutation
from dnd_conditions.engine.catalog import coerce_kind, get_template
from dnd_conditions.engine.mechanics import apply_mechanical_effects, remove_mechanical_effects
from dnd_conditions.models.entity import GameEntity
from dnd_conditions.models.enums import Ability, ConditionKind
from dnd_conditions.models.status import (
    Duration,
    EntityStatus,
    StatusApplicationResult,
    StatusEffect,
)


logger = get_logger(__name__)


IMPLIED_CONDITIONS: Mapping[ConditionKind, tuple[ConditionKind, ...]] = MappingProxyType({
    ConditionKind.UNCONSCIOUS: (ConditionKind.PRONE, ConditionKind.INCAPACITATED),
    ConditionKind.PARALYZED: (ConditionKind.INCAPACITATED,),
    ConditionKind.STUNNED: (ConditionKind.INCAPACITATED,),
})
"""Conditions that include others; applying the key clears the listed kinds."""

INCAPACITATING_KINDS: frozenset[ConditionKind] = frozenset({
    ConditionKind.INCAPACITATED,
    ConditionKind.PARALYZED,
    ConditionKind.PETRIFIED,
    ConditionKind.STUNNED,
    ConditionKind.UNCONSCIOUS,
})


# =============================================================================
# Internal helpers
# =============================================================================


def _immunities(entity: GameEntity) -> set[ConditionKind]:
    if entity.status is not None:
        return entity.status.immunities
    return set(entity.condition_immunities)


def _ensure_status(entity: GameEntity) -> EntityStatus:
    """Create the status record on first application."""
    if entity.status is None:
        entity.status = EntityStatus(
            entity_id=entity.id,
            immunities=set(entity.condition_immunities),
        )
    return entity.status


def _failure(message: str) -> StatusApplicationResult:
    return StatusApplicationResult(success=False, message=message)


def _find_effect(status: EntityStatus, key: ConditionKind | str) -> StatusEffect | None:
    needle = str(key)
    for effect in status.active_conditions:
        if effect.id == needle or effect.kind == needle.lower():
            return effect
    return None


def _clear_implied(entity: GameEntity, kind: ConditionKind) -> list[StatusEffect]:
    status = _ensure_status(entity)
    removed: list[StatusEffect] = []
    for implied in IMPLIED_CONDITIONS.get(kind, ()):
        effect = status.get(implied)
        if effect is None:
            continue
        status.discard(effect)
        remove_mechanical_effects(entity, effect)
        removed.append(effect)
    return removed


def _clamp_exhaustion(entity: GameEntity, level: int) -> tuple[int, list[str]]:
    if level >= MAX_EXHAUSTION_LEVEL:
        return MAX_EXHAUSTION_LEVEL, [
            f"{entity.name} has reached exhaustion level {MAX_EXHAUSTION_LEVEL} and dies"
        ]
    return level, []


def _stack_exhaustion(
    entity: GameEntity,
    existing: StatusEffect,
    added: int,
) -> tuple[GameEntity, StatusApplicationResult]:
    new_level, warnings = _clamp_exhaustion(entity, (existing.level or MIN_EXHAUSTION_LEVEL) + added)
    existing.level = new_level
    _ensure_status(entity).touch()

    log_mutation(logger, "Exhaustion increased", entity_id=entity.id, level=new_level)
    if warnings:
        logger.warning("Exhaustion reached terminal level", entity_id=entity.id)

    return entity, StatusApplicationResult(
        success=True,
        message=f"Increased {existing.name} on {entity.name} to level {new_level}",
        applied_effect=existing.model_copy(deep=True),
        warnings=warnings,
    )


# =============================================================================
# Mutations
# =============================================================================


def apply_condition(
    entity: GameEntity,
    kind: ConditionKind | str,
    *,
    source: str | None = None,
    duration: Duration | None = None,
    level: int | None = None,
    save_dc: int | None = None,
    save_type: Ability | str | None = None,
    can_repeat_save: bool | None = None,
    metadata: dict[str, Any] | None = None,
) -> tuple[GameEntity, StatusApplicationResult]:
    """Apply a condition to an entity.

    Exhaustion stacks: applying it while active adds ``level`` (default 1)
    onto the existing effect, clamped to 6 with a death warning. Applying
    unconscious, paralyzed or stunned clears the conditions they include;
    those are reported in ``removed_effects``.

    Args:
        entity: The entity to affect. Not modified.
        kind: Condition to apply.
        source: What caused it. Defaults to the configured default source.
        duration: Overrides the catalog's default duration.
        level: Exhaustion levels to apply; ignored for other kinds.
        save_dc: Overrides the catalog's save DC.
        save_type: Overrides the catalog's save ability.
        can_repeat_save: Overrides the catalog's repeat-save flag.
        metadata: Opaque condition-specific data stored on the effect.

    Returns:
        Tuple of (updated entity copy, result).

    Raises:
        UnknownConditionError: If ``kind`` is not a known condition or
            an exhaustion ``level`` is below 1.
    """
    kind = coerce_kind(kind)
    template = get_template(kind)
    if kind == ConditionKind.EXHAUSTION and level is not None and level < MIN_EXHAUSTION_LEVEL:
        raise UnknownConditionError(
            f"Exhaustion level must be at least {MIN_EXHAUSTION_LEVEL}",
            field="level",
            value=level,
        )

    working = entity.model_copy(deep=True)

    if kind in _immunities(working):
        logger.info("Condition blocked by immunity", entity_id=entity.id, condition=kind)
        return working, _failure(f"{entity.name} is immune to {kind}")

    existing = working.status.get(kind) if working.status is not None else None
    if existing is not None:
        if kind == ConditionKind.EXHAUSTION:
            return _stack_exhaustion(working, existing, level or MIN_EXHAUSTION_LEVEL)
        logger.info("Condition already active", entity_id=entity.id, condition=kind)
        return working, _failure(f"{entity.name} already has the {kind} condition")

    status = _ensure_status(working)
    removed = _clear_implied(working, kind)

    warnings: list[str] = []
    effect_level: int | None = None
    if kind == ConditionKind.EXHAUSTION:
        effect_level, warnings = _clamp_exhaustion(working, level or template.default_level or 1)

    effect = StatusEffect(
        kind=kind,
        name=template.name,
        description=template.description,
        source=source or get_settings().engine.default_source,
        duration=duration.model_copy(deep=True) if duration else template.make_duration(),
        level=effect_level,
        save_type=save_type if save_type is not None else template.default_save_type,
        save_dc=save_dc if save_dc is not None else template.default_save_dc,
        can_repeat_save=(
            can_repeat_save if can_repeat_save is not None else template.can_repeat_save
        ),
        metadata=dict(metadata or {}),
    )

    status.active_conditions.append(effect)
    status.touch()
    apply_mechanical_effects(working, effect)

    log_mutation(
        logger,
        "Condition applied",
        entity_id=working.id,
        condition=kind,
        effect_id=effect.id,
        level=effect.level,
        cleared=[e.kind for e in removed],
    )
    if warnings:
        logger.warning("Exhaustion reached terminal level", entity_id=working.id)

    level_note = f" (level {effect.level})" if effect.level else ""
    return working, StatusApplicationResult(
        success=True,
        message=f"Applied {effect.name} to {entity.name}{level_note}",
        applied_effect=effect.model_copy(deep=True),
        removed_effects=removed,
        warnings=warnings,
    )


def remove_condition(
    entity: GameEntity,
    kind_or_effect_id: ConditionKind | str,
) -> tuple[GameEntity, StatusApplicationResult]:
    """Remove a condition by kind or by effect id.

    When a kind is given, the earliest-applied effect of that kind is
    removed. Mechanical overrides are undone only if no remaining condition
    still requires them.

    Args:
        entity: The entity to affect. Not modified.
        kind_or_effect_id: A ConditionKind, its string value, or an effect id.

    Returns:
        Tuple of (updated entity copy, result).
    """
    working = entity.model_copy(deep=True)
    status = working.status
    if status is None:
        return working, _failure(f"{entity.name} has no active status effects")

    effect = _find_effect(status, kind_or_effect_id)
    if effect is None:
        return working, _failure(
            f"{entity.name} does not have the {kind_or_effect_id} condition"
        )

    status.discard(effect)
    status.touch()
    remove_mechanical_effects(working, effect)

    log_mutation(
        logger,
        "Condition removed",
        entity_id=working.id,
        condition=effect.kind,
        effect_id=effect.id,
    )
    return working, StatusApplicationResult(
        success=True,
        message=f"Removed {effect.name} from {entity.name}",
        removed_effects=[effect],
    )


# =============================================================================
# Queries
# =============================================================================


def has_condition(entity: GameEntity, kind: ConditionKind | str) -> bool:
    """Check whether an entity has an active condition of a kind."""
    return get_condition(entity, kind) is not None


def get_condition(entity: GameEntity, kind: ConditionKind | str) -> StatusEffect | None:
    """Get the active effect of a kind, or None."""
    kind = coerce_kind(kind)
    if entity.status is None:
        return None
    return entity.status.get(kind)


def get_active_conditions(entity: GameEntity) -> list[StatusEffect]:
    """Get all active effects in application order."""
    if entity.status is None:
        return []
    return list(entity.status.active_conditions)


def get_exhaustion_level(entity: GameEntity) -> int:
    """Get the current exhaustion level, 0 when not exhausted."""
    effect = get_condition(entity, ConditionKind.EXHAUSTION)
    if effect is None:
        return 0
    return effect.level or MIN_EXHAUSTION_LEVEL


def is_incapacitated(entity: GameEntity) -> bool:
    """Check whether the entity can't take actions or reactions.

    True for incapacitated itself and for every condition that includes it.
    """
    return any(effect.kind in INCAPACITATING_KINDS for effect in get_active_conditions(entity))


__all__ = [
    "IMPLIED_CONDITIONS",
    "INCAPACITATING_KINDS",
    "apply_condition",
    "remove_condition",
    "has_condition",
    "get_condition",
    "get_active_conditions",
    "get_exhaustion_level",
    "is_incapacitated",
]
