"""Tests for the SQLite entity store."""

from __future__ import annotations

from pathlib import Path

import pytest

from dnd_conditions.core.exceptions import EntityNotFoundError, StorageError
from dnd_conditions.engine.status import apply_condition
from dnd_conditions.models import ConditionKind, GameEntity
from dnd_conditions.storage import SQLiteEntityStore, save_entity_status


@pytest.fixture
def store(tmp_path: Path) -> SQLiteEntityStore:
    """Store backed by a temporary database."""
    return SQLiteEntityStore(tmp_path / "db" / "entities.db")


class TestSQLiteEntityStore:
    """Tests for SQLiteEntityStore."""

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """Test the database directory is created."""
        SQLiteEntityStore(tmp_path / "nested" / "dir" / "e.db")
        assert (tmp_path / "nested" / "dir" / "e.db").exists()

    def test_configured_path(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the default path comes from settings."""
        monkeypatch.setenv("DND_CONDITIONS_DATABASE_PATH", str(isolated_env / "cfg.db"))

        assert SQLiteEntityStore().db_path == isolated_env / "cfg.db"

    def test_save_and_load(self, store: SQLiteEntityStore, fighter: GameEntity) -> None:
        """Test an entity with conditions round-trips."""
        entity, _ = apply_condition(fighter, ConditionKind.GRAPPLED, source="Ogre")

        save_entity_status(entity, store)
        loaded = store.load(entity.id)

        assert loaded == entity
        assert loaded.speed == 0
        assert loaded.status.original_stats == {"speed": 30}  # type: ignore[union-attr]

    def test_save_overwrites(self, store: SQLiteEntityStore, fighter: GameEntity) -> None:
        """Test saving the same id replaces the record."""
        store.save(fighter)
        entity, _ = apply_condition(fighter, ConditionKind.PRONE)
        store.save(entity)

        assert store.list_ids() == [fighter.id]
        assert store.load(fighter.id).status is not None

    def test_load_missing(self, store: SQLiteEntityStore) -> None:
        """Test loading an unknown id raises EntityNotFoundError."""
        with pytest.raises(EntityNotFoundError) as exc_info:
            store.load("nobody")
        assert exc_info.value.details["entity_id"] == "nobody"

    def test_load_corrupt(self, store: SQLiteEntityStore) -> None:
        """Test invalid stored JSON raises StorageError."""
        with store._get_connection() as conn:
            conn.execute(
                "INSERT INTO entities (id, name, entity_json, updated_at) VALUES (?, ?, ?, ?)",
                ("bad", "Bad", '{"name": "no id"}', "2024-01-01T00:00:00"),
            )

        with pytest.raises(StorageError):
            store.load("bad")

    def test_delete(self, store: SQLiteEntityStore, fighter: GameEntity) -> None:
        """Test deleting an entity."""
        store.save(fighter)

        assert store.delete(fighter.id) is True
        assert store.delete(fighter.id) is False
        assert store.list_ids() == []
