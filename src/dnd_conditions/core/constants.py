"""Rules constants for the condition engine."""

from __future__ import annotations

# =============================================================================
# Exhaustion (PHB p.291)
# =============================================================================

MIN_EXHAUSTION_LEVEL = 1
"""Lowest level an active exhaustion effect can hold."""

MAX_EXHAUSTION_LEVEL = 6
"""Exhaustion level at which a creature dies."""

# =============================================================================
# Movement
# =============================================================================

DEFAULT_SPEED = 30
"""Default walking speed in feet (most medium creatures)."""

SPEED_STAT = "speed"
"""Key under which the speed snapshot is kept in ``original_stats``."""


__all__ = [
    "MIN_EXHAUSTION_LEVEL",
    "MAX_EXHAUSTION_LEVEL",
    "DEFAULT_SPEED",
    "SPEED_STAT",
]
