"""Read-only catalog of D&D 5E conditions.

Maps each ``ConditionKind`` to its display name, rules text, default
duration, default exhaustion level and default saving throw. The catalog is
closed: asking for a kind it does not know is a programming error.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

from dnd_conditions.core.exceptions import UnknownConditionError
from dnd_conditions.models.enums import Ability, ConditionKind
from dnd_conditions.models.status import Duration


class ConditionTemplate(BaseModel):
    """Catalog defaults for one condition kind."""

    model_config = ConfigDict(frozen=True)

    kind: ConditionKind
    name: str
    description: str
    default_duration: Duration
    default_level: int | None = None
    default_save_type: Ability | None = None
    default_save_dc: int | None = None
    can_repeat_save: bool = False

    def make_duration(self) -> Duration:
        """Fresh copy of the default duration, safe to count down."""
        return self.default_duration.model_copy(deep=True)


def _template(
    kind: ConditionKind,
    description: str,
    *,
    duration: Duration | None = None,
    level: int | None = None,
    save_type: Ability | None = None,
    can_repeat_save: bool = False,
) -> ConditionTemplate:
    return ConditionTemplate(
        kind=kind,
        name=kind.display_name,
        description=description,
        default_duration=duration or Duration.custom(),
        default_level=level,
        default_save_type=save_type,
        can_repeat_save=can_repeat_save,
    )


CONDITION_CATALOG: Mapping[ConditionKind, ConditionTemplate] = MappingProxyType({
    t.kind: t
    for t in (
        _template(
            ConditionKind.BLINDED,
            "Can't see, automatically fails sight-based ability checks, attack rolls "
            "have disadvantage, attacks against you have advantage.",
        ),
        _template(
            ConditionKind.CHARMED,
            "Can't attack the charmer or target them with harmful abilities or spells, "
            "charmer has advantage on social interactions with you.",
        ),
        _template(
            ConditionKind.DEAFENED,
            "Can't hear, automatically fails hearing-based ability checks.",
        ),
        _template(
            ConditionKind.EXHAUSTION,
            "Has levels of increasing severity, from disadvantage on ability checks "
            "(level 1) to death (level 6).",
            duration=Duration.until_long_rest(),
            level=1,
        ),
        _template(
            ConditionKind.FRIGHTENED,
            "Disadvantage on ability checks and attack rolls while the source of fear "
            "is within line of sight, can't willingly move closer to the source.",
        ),
        _template(
            ConditionKind.GRAPPLED,
            "Speed becomes 0, can't benefit from bonuses to speed, ends if grappler is "
            "incapacitated or moved away.",
        ),
        _template(
            ConditionKind.INCAPACITATED,
            "Can't take actions or reactions.",
        ),
        _template(
            ConditionKind.INVISIBLE,
            "Considered heavily obscured for hiding purposes, attack rolls have "
            "advantage, attacks against you have disadvantage.",
        ),
        _template(
            ConditionKind.PARALYZED,
            "Incapacitated and can't move or speak, automatically fails Strength and "
            "Dexterity saves, attacks have advantage and are critical hits if made "
            "within 5 feet.",
            save_type=Ability.CON,
            can_repeat_save=True,
        ),
        _template(
            ConditionKind.PETRIFIED,
            "Transformed into stone along with possessions, incapacitated, can't move "
            "or speak, resistant to all damage, immune to poison and disease.",
        ),
        _template(
            ConditionKind.POISONED,
            "Disadvantage on attack rolls and ability checks.",
            save_type=Ability.CON,
            can_repeat_save=True,
        ),
        _template(
            ConditionKind.PRONE,
            "Can only crawl or use action to stand, disadvantage on attack rolls, "
            "attacks have advantage if within 5 feet (disadvantage if farther).",
        ),
        _template(
            ConditionKind.RESTRAINED,
            "Speed becomes 0, attacks have disadvantage, attacks against you have "
            "advantage, disadvantage on Dexterity saves.",
        ),
        _template(
            ConditionKind.STUNNED,
            "Incapacitated, can't move, can speak falteringly, automatically fails "
            "Strength and Dexterity saves, attacks against you have advantage.",
            save_type=Ability.CON,
            can_repeat_save=True,
        ),
        _template(
            ConditionKind.UNCONSCIOUS,
            "Incapacitated and prone, can't move or speak, unaware of surroundings, "
            "automatically fails Strength and Dexterity saves, attacks have advantage "
            "and are critical hits within 5 feet.",
        ),
    )
})


# Cumulative effect gained at each exhaustion level; index 0 is no exhaustion.
EXHAUSTION_EFFECTS: tuple[str, ...] = (
    "No effect",
    "Disadvantage on ability checks",
    "Speed halved",
    "Disadvantage on attack rolls and saving throws",
    "Hit point maximum halved",
    "Speed reduced to 0",
    "Death",
)


def coerce_kind(value: ConditionKind | str) -> ConditionKind:
    """Convert boundary input into a ``ConditionKind``.

    Args:
        value: A ConditionKind or its string value (case-insensitive).

    Returns:
        The matching ConditionKind.

    Raises:
        UnknownConditionError: If the value names no known condition.

    Example:
        >>> coerce_kind("Prone")
        <ConditionKind.PRONE: 'prone'>
    """
    if isinstance(value, ConditionKind):
        return value
    try:
        return ConditionKind(str(value).strip().lower())
    except ValueError as exc:
        raise UnknownConditionError(
            f"Unknown condition: {value!r}",
            field="kind",
            value=value,
        ) from exc


def get_template(kind: ConditionKind | str) -> ConditionTemplate:
    """Look up catalog defaults for a condition kind.

    Raises:
        UnknownConditionError: If the kind is not in the catalog.
    """
    return CONDITION_CATALOG[coerce_kind(kind)]


__all__ = [
    "ConditionTemplate",
    "CONDITION_CATALOG",
    "EXHAUSTION_EFFECTS",
    "coerce_kind",
    "get_template",
]
