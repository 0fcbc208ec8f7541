"""Plain-text summaries of condition state for tool responses."""

from __future__ import annotations

from dnd_conditions.core.constants import MAX_EXHAUSTION_LEVEL
from dnd_conditions.core.exceptions import ValidationError
from dnd_conditions.engine.catalog import EXHAUSTION_EFFECTS
from dnd_conditions.engine.status import get_active_conditions
from dnd_conditions.models.entity import GameEntity
from dnd_conditions.models.status import StatusEffect


def describe_exhaustion(level: int) -> str:
    """List the cumulative effects of an exhaustion level.

    Args:
        level: Exhaustion level, 0 through 6.

    Returns:
        One line per level up to ``level``, or a no-effect line for 0.

    Raises:
        ValidationError: If the level is outside 0-6.

    Example:
        >>> print(describe_exhaustion(2))
        Level 1: Disadvantage on ability checks
        Level 2: Speed halved
    """
    if not 0 <= level <= MAX_EXHAUSTION_LEVEL:
        raise ValidationError(
            f"Exhaustion level must be between 0 and {MAX_EXHAUSTION_LEVEL}",
            field="level",
            value=level,
        )
    if level == 0:
        return "No exhaustion effects."
    return "\n".join(f"Level {i}: {EXHAUSTION_EFFECTS[i]}" for i in range(1, level + 1))


def _effect_line(effect: StatusEffect) -> str:
    line = f"- {effect.name}"
    if effect.level:
        line += f" (level {effect.level})"
    details = [effect.duration.describe()]
    if effect.source:
        details.append(f"source: {effect.source}")
    if effect.save_type and effect.save_dc:
        repeat = ", repeats each turn" if effect.can_repeat_save else ""
        details.append(f"DC {effect.save_dc} {effect.save_type.abbreviation} save{repeat}")
    return f"{line} [{'; '.join(details)}]"


def format_status_summary(entity: GameEntity) -> str:
    """Render an entity's conditions and immunities as text.

    Example output::

        Conditions for Goblin:
        - Grappled [custom; source: Net]
        Immunities: poisoned
    """
    effects = get_active_conditions(entity)
    lines = [f"Conditions for {entity.name}:"]
    if effects:
        lines.extend(_effect_line(effect) for effect in effects)
    else:
        lines.append("- none")

    immunities = entity.status.immunities if entity.status else set(entity.condition_immunities)
    if immunities:
        lines.append(f"Immunities: {', '.join(sorted(immunities))}")
    return "\n".join(lines)


__all__ = [
    "describe_exhaustion",
    "format_status_summary",
]
