"""Mechanical effects of conditions on entity attributes.

Some conditions override a concrete attribute while active (grappled,
restrained and unconscious drop speed to 0). The first time any such
override is applied the entity's current value is snapshotted into
``status.original_stats``; removal restores from that snapshot only when no
other active condition still locks the attribute.

These helpers mutate the working copy handed to them by the status engine;
they are never called on a caller's entity directly.
"""

from __future__ import annotations

from typing import Any

from dnd_conditions.core.constants import SPEED_STAT
from dnd_conditions.core.logging import get_logger, log_mutation
from dnd_conditions.models.entity import GameEntity, SpeedComponent
from dnd_conditions.models.enums import ConditionKind
from dnd_conditions.models.status import EntityStatus, StatusEffect


logger = get_logger(__name__)


SPEED_ZEROING_KINDS: frozenset[ConditionKind] = frozenset({
    ConditionKind.GRAPPLED,
    ConditionKind.RESTRAINED,
    ConditionKind.UNCONSCIOUS,
})
"""Conditions whose application sets speed to 0."""

SPEED_LOCKING_KINDS: frozenset[ConditionKind] = frozenset({
    *SPEED_ZEROING_KINDS,
    ConditionKind.PARALYZED,
    ConditionKind.STUNNED,
    ConditionKind.PETRIFIED,
})
"""Conditions that keep speed at 0 while any of them remains active."""


def _require_status(entity: GameEntity) -> EntityStatus:
    if entity.status is None:
        msg = f"Entity {entity.id} has no status record"
        raise RuntimeError(msg)
    return entity.status


def _speed_value(speed: int | SpeedComponent) -> Any:
    if isinstance(speed, SpeedComponent):
        return speed.model_dump(exclude={"primary_speed"})
    return speed


def _zeroed(speed: int | SpeedComponent) -> int | SpeedComponent:
    # Structured speed only loses its walking component
    if isinstance(speed, SpeedComponent):
        return speed.model_copy(update={"walk": 0})
    return 0


def _restored(snapshot: Any) -> int | SpeedComponent:
    if isinstance(snapshot, dict):
        return SpeedComponent.model_validate(snapshot)
    return int(snapshot)


def snapshot_original_stats(entity: GameEntity) -> None:
    """Record pre-condition attribute values, first write wins.

    Args:
        entity: Working copy whose status record receives the snapshot.
    """
    status = _require_status(entity)
    if SPEED_STAT not in status.original_stats:
        status.original_stats[SPEED_STAT] = _speed_value(entity.speed)
        log_mutation(
            logger,
            "Original stats captured",
            entity_id=entity.id,
            speed=status.original_stats[SPEED_STAT],
        )


def apply_mechanical_effects(entity: GameEntity, effect: StatusEffect) -> None:
    """Apply the attribute overrides a newly added effect causes.

    Args:
        entity: Working copy to modify in place.
        effect: The effect that was just appended.
    """
    if effect.kind in SPEED_ZEROING_KINDS:
        snapshot_original_stats(entity)
        entity.speed = _zeroed(entity.speed)
        log_mutation(logger, "Speed set to 0", entity_id=entity.id, condition=effect.kind)


def remove_mechanical_effects(entity: GameEntity, effect: StatusEffect) -> bool:
    """Undo the attribute overrides of a removed effect where nothing else holds them.

    Args:
        entity: Working copy to modify in place.
        effect: The effect being removed. It may or may not still be in the
            active list; it is excluded from the remaining-lock check either way.

    Returns:
        True if an attribute was restored.
    """
    status = _require_status(entity)
    if effect.kind not in SPEED_LOCKING_KINDS or SPEED_STAT not in status.original_stats:
        return False

    still_locked = [
        c.kind
        for c in status.active_conditions
        if c.id != effect.id and c.kind in SPEED_LOCKING_KINDS
    ]
    if still_locked:
        log_mutation(
            logger,
            "Speed stays locked",
            entity_id=entity.id,
            removed=effect.kind,
            locked_by=still_locked,
        )
        return False

    entity.speed = _restored(status.original_stats[SPEED_STAT])
    log_mutation(logger, "Speed restored", entity_id=entity.id, speed=entity.walking_speed)
    return True


__all__ = [
    "SPEED_ZEROING_KINDS",
    "SPEED_LOCKING_KINDS",
    "snapshot_original_stats",
    "apply_mechanical_effects",
    "remove_mechanical_effects",
]
