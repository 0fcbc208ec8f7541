"""Storage module for entity persistence.

Provides the ``EntityStore`` protocol and a SQLite-backed implementation
for saving entities (status record included) between engine calls.
"""

from dnd_conditions.storage.database import (
    EntityStore,
    SQLiteEntityStore,
    save_entity_status,
)

__all__ = [
    "EntityStore",
    "SQLiteEntityStore",
    "save_entity_status",
]
