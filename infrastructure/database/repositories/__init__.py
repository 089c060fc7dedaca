"""Repository facades exposing typed accessors over low-level mixins."""

from infrastructure.database.repositories.persistence_store import Collection, PersistenceStore

__all__ = [
    "Collection",
    "PersistenceStore",
]
