"""SQLite entity store.

The condition engine never performs I/O itself. Callers load an entity,
run engine operations on it, and hand the returned entity back to a store.
``EntityStore`` is that collaborator's interface; ``SQLiteEntityStore``
keeps each entity as a JSON document keyed by its id.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator, Protocol

import pydantic

from dnd_conditions.core.config import get_settings
from dnd_conditions.core.exceptions import EntityNotFoundError, StorageError
from dnd_conditions.core.logging import get_logger
from dnd_conditions.models.entity import GameEntity

logger = get_logger(__name__)


class EntityStore(Protocol):
    """Load/save interface the engine's callers persist through."""

    def load(self, entity_id: str) -> GameEntity: ...

    def save(self, entity: GameEntity) -> None: ...


class SQLiteEntityStore:
    """Entity store backed by a single SQLite table.

    Each row holds the entity's full JSON, status record included.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize the store.

        Args:
            db_path: Path to database file. If None, uses the configured path.
        """
        if db_path is None:
            self.db_path = get_settings().storage.database_path
        else:
            self.db_path = Path(db_path)

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

        logger.info("Entity store initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(str(self.db_path))
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS entities (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    entity_json TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            cursor.execute("""
                INSERT OR REPLACE INTO schema_version (version) VALUES (?)
            """, (self.SCHEMA_VERSION,))

    def save(self, entity: GameEntity) -> None:
        """Insert or replace an entity.

        Args:
            entity: Entity to persist.
        """
        with self._get_connection() as conn:
            conn.execute("""
                INSERT OR REPLACE INTO entities (id, name, entity_json, updated_at)
                VALUES (?, ?, ?, ?)
            """, (entity.id, entity.name, entity.model_dump_json(), datetime.now().isoformat()))

        logger.debug("Entity saved", entity_id=entity.id)

    def load(self, entity_id: str) -> GameEntity:
        """Load an entity by id.

        Raises:
            EntityNotFoundError: If no entity with that id was saved.
            StorageError: If the stored JSON no longer validates.
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT entity_json FROM entities WHERE id = ?",
                (entity_id,),
            ).fetchone()

        if row is None:
            raise EntityNotFoundError("Entity not found", entity_id=entity_id)

        try:
            return GameEntity.model_validate_json(row[0])
        except pydantic.ValidationError as exc:
            raise StorageError(
                f"Stored entity {entity_id} is invalid",
                details={"errors": exc.error_count()},
            ) from exc

    def delete(self, entity_id: str) -> bool:
        """Delete an entity. Returns True if a row was removed."""
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM entities WHERE id = ?", (entity_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Entity deleted", entity_id=entity_id)
        return deleted

    def list_ids(self) -> list[str]:
        """Get all stored entity ids, most recently saved first."""
        with self._get_connection() as conn:
            rows = conn.execute("SELECT id FROM entities ORDER BY updated_at DESC").fetchall()
        return [row[0] for row in rows]


def save_entity_status(entity: GameEntity, store: EntityStore) -> None:
    """Persist an entity after a condition change.

    Args:
        entity: The entity returned by an engine operation.
        store: Where to save it.
    """
    store.save(entity)


__all__ = [
    "EntityStore",
    "SQLiteEntityStore",
    "save_entity_status",
]
