"""Enumeration types for the condition engine.

These enums are the closed vocabularies the engine works with: the fifteen
D&D 5E conditions, the ability scores used for saving throws, duration
policies, tick granularities, and the kinds of d20 roll a modifier lookup can
be asked about.
"""

from __future__ import annotations

from enum import StrEnum


class ConditionKind(StrEnum):
    """D&D 5E conditions that can affect creatures.

    Fixed set; the engine never adds kinds at runtime.
    """

    BLINDED = "blinded"
    CHARMED = "charmed"
    DEAFENED = "deafened"
    EXHAUSTION = "exhaustion"
    FRIGHTENED = "frightened"
    GRAPPLED = "grappled"
    INCAPACITATED = "incapacitated"
    INVISIBLE = "invisible"
    PARALYZED = "paralyzed"
    PETRIFIED = "petrified"
    POISONED = "poisoned"
    PRONE = "prone"
    RESTRAINED = "restrained"
    STUNNED = "stunned"
    UNCONSCIOUS = "unconscious"

    @property
    def display_name(self) -> str:
        """Get the capitalised condition name (e.g., 'Blinded')."""
        return self.value.capitalize()


class Ability(StrEnum):
    """D&D 5E ability scores, used as saving throw types."""

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation (e.g., 'CON')."""
        return self.name


class DurationType(StrEnum):
    """How a status effect's duration is tracked."""

    PERMANENT = "permanent"
    ROUNDS = "rounds"  # 6 seconds each
    MINUTES = "minutes"
    HOURS = "hours"
    UNTIL_LONG_REST = "until_long_rest"
    UNTIL_SHORT_REST = "until_short_rest"
    CONCENTRATION = "concentration"
    CUSTOM = "custom"  # ended by an external trigger described in end_condition

    @property
    def is_countdown(self) -> bool:
        """Whether this duration carries a remaining counter."""
        return self in (DurationType.ROUNDS, DurationType.MINUTES, DurationType.HOURS)


class TimeUnit(StrEnum):
    """Granularity of a duration tick."""

    ROUND = "round"
    MINUTE = "minute"
    HOUR = "hour"

    @property
    def duration_type(self) -> DurationType:
        """Get the countdown duration type this unit decrements."""
        units = {
            TimeUnit.ROUND: DurationType.ROUNDS,
            TimeUnit.MINUTE: DurationType.MINUTES,
            TimeUnit.HOUR: DurationType.HOURS,
        }
        return units[self]


class RollType(StrEnum):
    """Kinds of d20 roll a condition can modify."""

    ATTACK = "attack"
    ABILITY_CHECK = "ability_check"
    SAVING_THROW = "saving_throw"
    SKILL_CHECK = "skill_check"


class EntityType(StrEnum):
    """Type of game entity carrying a status record."""

    CHARACTER = "character"
    NPC = "npc"
    MONSTER = "monster"


__all__ = [
    "ConditionKind",
    "Ability",
    "DurationType",
    "TimeUnit",
    "RollType",
    "EntityType",
]
