"""Roll modifiers derived from active conditions.

Combat logic calls ``get_status_modifiers_for_roll`` before resolving a d20
roll. The rules live in ``MODIFIER_RULES``, one row per (condition, rolls,
abilities, minimum level) combination; every matching row sets its flag and
flags from different conditions are OR-ed together.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Literal

from dnd_conditions.core.exceptions import ValidationError
from dnd_conditions.engine.status import get_active_conditions
from dnd_conditions.models.entity import GameEntity
from dnd_conditions.models.enums import Ability, ConditionKind, RollType
from dnd_conditions.models.status import RollModifiers


ModifierFlag = Literal["advantage", "disadvantage", "auto_fail", "auto_success"]

ATTACK = frozenset({RollType.ATTACK})
CHECKS = frozenset({RollType.ABILITY_CHECK})  # skill_check matches no rule
SAVES = frozenset({RollType.SAVING_THROW})
PHYSICAL = frozenset({Ability.STR, Ability.DEX})


@dataclass(frozen=True)
class ModifierRule:
    """One row of the condition roll-modifier table.

    Attributes:
        kind: Condition the rule belongs to.
        rolls: Roll types the rule applies to.
        flag: Flag set when the rule matches.
        abilities: Restrict to these abilities; None matches any.
        min_level: Minimum exhaustion level; None for other conditions.
    """

    kind: ConditionKind
    rolls: frozenset[RollType]
    flag: ModifierFlag
    abilities: frozenset[Ability] | None = None
    min_level: int | None = None

    def matches(self, roll_type: RollType, ability: Ability | None, level: int | None) -> bool:
        if roll_type not in self.rolls:
            return False
        if self.abilities is not None and ability not in self.abilities:
            return False
        if self.min_level is not None and (level or 0) < self.min_level:
            return False
        return True


MODIFIER_RULES: tuple[ModifierRule, ...] = (
    ModifierRule(ConditionKind.BLINDED, ATTACK, "disadvantage"),
    ModifierRule(ConditionKind.PRONE, ATTACK, "disadvantage"),
    ModifierRule(ConditionKind.FRIGHTENED, ATTACK | CHECKS, "disadvantage"),
    ModifierRule(ConditionKind.POISONED, ATTACK | CHECKS, "disadvantage"),
    ModifierRule(ConditionKind.RESTRAINED, ATTACK, "disadvantage"),
    ModifierRule(ConditionKind.RESTRAINED, SAVES, "disadvantage", abilities=frozenset({Ability.DEX})),
    ModifierRule(ConditionKind.PARALYZED, SAVES, "auto_fail", abilities=PHYSICAL),
    ModifierRule(ConditionKind.STUNNED, SAVES, "auto_fail", abilities=PHYSICAL),
    ModifierRule(ConditionKind.UNCONSCIOUS, SAVES, "auto_fail", abilities=PHYSICAL),
    ModifierRule(ConditionKind.EXHAUSTION, CHECKS, "disadvantage", min_level=1),
    ModifierRule(ConditionKind.EXHAUSTION, ATTACK | SAVES, "disadvantage", min_level=3),
    ModifierRule(ConditionKind.INVISIBLE, ATTACK, "advantage"),
)

_RULES_BY_KIND: dict[ConditionKind, list[ModifierRule]] = defaultdict(list)
for _rule in MODIFIER_RULES:
    _RULES_BY_KIND[_rule.kind].append(_rule)


def _coerce_roll_type(value: RollType | str) -> RollType:
    try:
        return RollType(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown roll type: {value!r}", field="roll_type", value=value) from exc


def _coerce_ability(value: Ability | str | None) -> Ability | None:
    if value is None or isinstance(value, Ability):
        return value
    text = str(value).strip()
    try:
        return Ability(text.lower())
    except ValueError:
        pass
    try:
        return Ability[text.upper()]
    except KeyError as exc:
        raise ValidationError(f"Unknown ability: {value!r}", field="ability", value=value) from exc


def get_status_modifiers_for_roll(
    entity: GameEntity,
    roll_type: RollType | str,
    ability: Ability | str | None = None,
) -> RollModifiers:
    """Derive advantage, disadvantage and auto-fail/success flags for a roll.

    Advantage and disadvantage may both be set; cancelling them is the
    caller's job.

    Args:
        entity: The rolling entity.
        roll_type: Kind of roll (attack, ability_check, saving_throw, skill_check).
        ability: Ability the roll uses ("dexterity" or "DEX"), where relevant.

    Returns:
        The combined RollModifiers.

    Raises:
        ValidationError: If the roll type or ability is unknown.

    Example:
        >>> get_status_modifiers_for_roll(entity, "saving_throw", "dexterity").auto_fail
        True
    """
    roll = _coerce_roll_type(roll_type)
    ability_kind = _coerce_ability(ability)

    flags: dict[str, bool] = {}
    for effect in get_active_conditions(entity):
        for rule in _RULES_BY_KIND.get(effect.kind, ()):
            if rule.matches(roll, ability_kind, effect.level):
                flags[rule.flag] = True

    return RollModifiers(**flags)


__all__ = [
    "ModifierRule",
    "MODIFIER_RULES",
    "get_status_modifiers_for_roll",
]
