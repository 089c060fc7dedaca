from __future__ import annotations

import logging
import sqlite3

from app.utils.time import iso_now

logger = logging.getLogger(__name__)


class KeyValueOperations:
    """Raw text storage keyed by namespaced collection key."""

    def get_value(self, key: str) -> str | None:
        """Stored text for *key*, or None when absent or unreadable."""
        try:
            db = self.get_db()
            row = db.execute("SELECT value FROM KeyValueStore WHERE key = ?", (key,)).fetchone()
            return row["value"] if row else None
        except sqlite3.Error as exc:
            logger.warning("KeyValueOperations.get_value(%s) failed: %s", key, exc)
            return None

    def set_value(self, key: str, value: str) -> None:
        """Insert or replace *key*. sqlite3 errors propagate to the caller."""
        with self.connection() as db:
            db.execute(
                """
                INSERT INTO KeyValueStore (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value, iso_now()),
            )

    def list_keys(self, prefix: str = "") -> list[str]:
        try:
            db = self.get_db()
            rows = db.execute(
                "SELECT key FROM KeyValueStore WHERE key LIKE ? ORDER BY key",
                (f"{prefix}%",),
            ).fetchall()
            return [row["key"] for row in rows]
        except sqlite3.Error as exc:
            logger.warning("KeyValueOperations.list_keys failed: %s", exc)
            return []
