"""Duration decay and rest handling for status effects.

The turn driver calls ``tick_durations`` at every round, minute or hour
boundary; rest handling calls ``apply_long_rest`` / ``apply_short_rest``.
Like the rest of the engine these return a new entity plus a
``StatusApplicationResult`` whose ``removed_effects`` lists what ended.
"""

from __future__ import annotations

from dnd_conditions.core.exceptions import ValidationError
from dnd_conditions.core.logging import get_logger, log_mutation
from dnd_conditions.engine.mechanics import remove_mechanical_effects
from dnd_conditions.models.entity import GameEntity
from dnd_conditions.models.enums import ConditionKind, DurationType, TimeUnit
from dnd_conditions.models.status import StatusApplicationResult, StatusEffect


logger = get_logger(__name__)


def _coerce_unit(unit: TimeUnit | str) -> TimeUnit:
    try:
        return TimeUnit(unit)
    except ValueError as exc:
        raise ValidationError(
            f"Unknown time unit: {unit!r}",
            field="unit",
            value=unit,
        ) from exc


def _names(effects: list[StatusEffect]) -> str:
    return ", ".join(effect.name for effect in effects)


def _drop_effects(entity: GameEntity, removed: list[StatusEffect]) -> None:
    """Remove effects from the active list, then undo their mechanics."""
    status = entity.status
    if status is None or not removed:
        return
    removed_ids = {effect.id for effect in removed}
    status.active_conditions = [c for c in status.active_conditions if c.id not in removed_ids]
    for effect in removed:
        remove_mechanical_effects(entity, effect)


def tick_durations(
    entity: GameEntity,
    unit: TimeUnit | str,
) -> tuple[GameEntity, StatusApplicationResult]:
    """Advance countdown durations by one unit.

    Only effects whose duration is measured in ``unit`` are decremented;
    those that reach zero expire. Permanent, rest-gated, concentration and
    custom durations are untouched.

    Args:
        entity: The entity to tick. Not modified.
        unit: ``round``, ``minute`` or ``hour``.

    Returns:
        Tuple of (updated entity copy, result listing expired effects).

    Raises:
        ValidationError: If ``unit`` is not a known time unit.
    """
    unit = _coerce_unit(unit)
    working = entity.model_copy(deep=True)
    status = working.status
    if status is None:
        return working, StatusApplicationResult(
            success=True,
            message=f"{entity.name} has no active status effects",
        )

    target = unit.duration_type
    expired: list[StatusEffect] = []
    decremented = False
    for effect in status.active_conditions:
        duration = effect.duration
        if duration.type != target or duration.remaining is None:
            continue
        if duration.remaining > 0:
            duration.remaining -= 1
            decremented = True
        if duration.remaining == 0:
            expired.append(effect)

    _drop_effects(working, expired)
    if decremented or expired:
        status.touch()

    if expired:
        log_mutation(
            logger,
            "Effects expired",
            entity_id=working.id,
            unit=unit,
            expired=[e.kind for e in expired],
        )
        message = f"Expired on {entity.name}: {_names(expired)}"
    else:
        message = f"No effects expired on {entity.name}"

    return working, StatusApplicationResult(
        success=True,
        message=message,
        removed_effects=expired,
    )


def apply_long_rest(entity: GameEntity) -> tuple[GameEntity, StatusApplicationResult]:
    """End effects that last until a long rest and reduce exhaustion by one level.

    Exhaustion is removed only when its level would drop to 0.

    Returns:
        Tuple of (updated entity copy, result listing removed effects).
    """
    working = entity.model_copy(deep=True)
    status = working.status
    if status is None:
        return working, StatusApplicationResult(
            success=True,
            message=f"{entity.name} has no active status effects",
        )

    removed: list[StatusEffect] = []
    notes: list[str] = []
    for effect in status.active_conditions:
        if effect.kind == ConditionKind.EXHAUSTION:
            level = effect.level or 1
            if level > 1:
                effect.level = level - 1
                notes.append(f"exhaustion reduced to level {effect.level}")
            else:
                removed.append(effect)
        elif effect.duration.type == DurationType.UNTIL_LONG_REST:
            removed.append(effect)

    _drop_effects(working, removed)
    if removed or notes:
        status.touch()

    if removed:
        notes.insert(0, f"removed {_names(removed)}")
    log_mutation(
        logger,
        "Long rest applied",
        entity_id=working.id,
        removed=[e.kind for e in removed],
    )

    summary = "; ".join(notes) if notes else "no conditions changed"
    return working, StatusApplicationResult(
        success=True,
        message=f"Long rest for {entity.name}: {summary}",
        removed_effects=removed,
    )


def apply_short_rest(entity: GameEntity) -> tuple[GameEntity, StatusApplicationResult]:
    """End effects that last until a short rest. Exhaustion is unaffected.

    Returns:
        Tuple of (updated entity copy, result listing removed effects).
    """
    working = entity.model_copy(deep=True)
    status = working.status
    if status is None:
        return working, StatusApplicationResult(
            success=True,
            message=f"{entity.name} has no active status effects",
        )

    removed = [
        effect
        for effect in status.active_conditions
        if effect.duration.type == DurationType.UNTIL_SHORT_REST
    ]
    _drop_effects(working, removed)
    if removed:
        status.touch()
        message = f"Short rest for {entity.name}: removed {_names(removed)}"
    else:
        message = f"Short rest for {entity.name}: no conditions changed"

    log_mutation(
        logger,
        "Short rest applied",
        entity_id=working.id,
        removed=[e.kind for e in removed],
    )
    return working, StatusApplicationResult(
        success=True,
        message=message,
        removed_effects=removed,
    )


__all__ = [
    "tick_durations",
    "apply_long_rest",
    "apply_short_rest",
]
