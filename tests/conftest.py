"""Pytest configuration and shared fixtures.

This module provides common fixtures for the condition engine test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from dnd_conditions.models import ConditionKind, EntityType, GameEntity, SpeedComponent


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from dnd_conditions.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory with no engine env vars set.

    Returns:
        The temporary working directory.
    """
    for name in (
        "DND_CONDITIONS_LOG_LEVEL",
        "DND_CONDITIONS_DEBUG",
        "DND_CONDITIONS_JSON_LOGS",
        "DND_CONDITIONS_LOG_FILE",
        "DND_CONDITIONS_DATABASE_PATH",
        "DND_CONDITIONS_ENGINE_DEFAULT_SOURCE",
        "DND_CONDITIONS_ENGINE_LOG_MUTATIONS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# =============================================================================
# Entity Fixtures
# =============================================================================


@pytest.fixture
def fighter() -> GameEntity:
    """Player character with a flat 30 ft speed and no status record."""
    return GameEntity(
        id="pc-fighter",
        name="Test Fighter",
        type=EntityType.CHARACTER,
        speed=30,
        notes="Carries a longsword",
    )


@pytest.fixture
def wyvern() -> GameEntity:
    """Monster with structured speed and a poison immunity."""
    return GameEntity(
        id="mon-wyvern",
        name="Wyvern",
        type=EntityType.MONSTER,
        speed=SpeedComponent(walk=20, fly=80),
        condition_immunities=[ConditionKind.POISONED],
    )
