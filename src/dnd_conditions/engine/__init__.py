"""Condition engine for D&D 5E status effects.

Submodules:
    catalog: Read-only condition defaults
    status: Apply, remove and query conditions
    durations: Duration ticking and rests
    modifiers: Advantage/disadvantage lookup for d20 rolls
    mechanics: Attribute overrides (speed) and their reversal
    summary: Plain-text status summaries

Example:
    >>> from dnd_conditions.engine import apply_condition, get_status_modifiers_for_roll
    >>> hero, result = apply_condition(hero, "restrained", source="Web")
    >>> get_status_modifiers_for_roll(hero, "attack").disadvantage
    True
"""

from __future__ import annotations

# =============================================================================
# Catalog
# =============================================================================
from dnd_conditions.engine.catalog import (
    CONDITION_CATALOG,
    EXHAUSTION_EFFECTS,
    ConditionTemplate,
    coerce_kind,
    get_template,
)

# =============================================================================
# Apply / Remove / Query
# =============================================================================
from dnd_conditions.engine.status import (
    IMPLIED_CONDITIONS,
    INCAPACITATING_KINDS,
    apply_condition,
    get_active_conditions,
    get_condition,
    get_exhaustion_level,
    has_condition,
    is_incapacitated,
    remove_condition,
)

# =============================================================================
# Durations & Rests
# =============================================================================
from dnd_conditions.engine.durations import (
    apply_long_rest,
    apply_short_rest,
    tick_durations,
)

# =============================================================================
# Roll Modifiers
# =============================================================================
from dnd_conditions.engine.modifiers import (
    MODIFIER_RULES,
    ModifierRule,
    get_status_modifiers_for_roll,
)

# =============================================================================
# Mechanics
# =============================================================================
from dnd_conditions.engine.mechanics import (
    SPEED_LOCKING_KINDS,
    SPEED_ZEROING_KINDS,
)

# =============================================================================
# Summaries
# =============================================================================
from dnd_conditions.engine.summary import (
    describe_exhaustion,
    format_status_summary,
)


__all__ = [
    # Catalog
    "CONDITION_CATALOG",
    "EXHAUSTION_EFFECTS",
    "ConditionTemplate",
    "coerce_kind",
    "get_template",
    # Status
    "IMPLIED_CONDITIONS",
    "INCAPACITATING_KINDS",
    "apply_condition",
    "remove_condition",
    "has_condition",
    "get_condition",
    "get_active_conditions",
    "get_exhaustion_level",
    "is_incapacitated",
    # Durations
    "tick_durations",
    "apply_long_rest",
    "apply_short_rest",
    # Modifiers
    "ModifierRule",
    "MODIFIER_RULES",
    "get_status_modifiers_for_roll",
    # Mechanics
    "SPEED_ZEROING_KINDS",
    "SPEED_LOCKING_KINDS",
    # Summaries
    "describe_exhaustion",
    "format_status_summary",
]
