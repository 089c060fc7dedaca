"""
Persistence Store
=================

Per-user key-value persistence for the four SmartGrow collections:

=============  ==========================  ======================
Collection     Base key                    New records go
=============  ==========================  ======================
scans          ``smartgrow_scans``         front (newest first)
monitoring     ``smartgrow_monitoring``    back (creation order)
alerts         ``smartgrow_alerts``        front (newest first)
userStats      ``smartgrow_user_stats``    single record
=============  ==========================  ======================

Every key is suffixed with the injected user's id (see
:class:`~app.domain.user_context.UserContext`). Each write replaces the
whole collection in one statement.

Reads fail soft: a collection that cannot be parsed is treated as absent
and individual records that fail validation are skipped. Skipped items
are written back unchanged by upsert, delete and toggle_archive. Writes
that fail raise :class:`~app.domain.exceptions.StorageError`.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Sequence

from pydantic import ValidationError as PydanticValidationError

from app.constants import StorageKeys
from app.domain.exceptions import StorageError
from app.domain.user_context import UserContext
from app.schemas.records import AppAlert, DiagnosisRecord, MonitoringSession, StoredRecord, UserStats
from infrastructure.database.ops.key_value import KeyValueOperations

logger = logging.getLogger(__name__)


class Collection(str, Enum):
    """Logical collection names."""

    SCANS = "scans"
    MONITORING = "monitoring"
    ALERTS = "alerts"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class _CollectionSpec:
    base_key: str
    model: type[StoredRecord]
    prepend: bool


_SPECS: dict[Collection, _CollectionSpec] = {
    Collection.SCANS: _CollectionSpec(StorageKeys.SCANS, DiagnosisRecord, prepend=True),
    Collection.MONITORING: _CollectionSpec(StorageKeys.MONITORING, MonitoringSession, prepend=False),
    Collection.ALERTS: _CollectionSpec(StorageKeys.ALERTS, AppAlert, prepend=True),
}


@dataclass(frozen=True)
class PersistenceStore:
    """Repository facade over :class:`KeyValueOperations`, bound to one user."""

    _backend: KeyValueOperations
    user: UserContext = field(default_factory=UserContext.anonymous)

    def for_user(self, user: UserContext) -> PersistenceStore:
        """Same database, different namespace. The current user's data is left untouched."""
        return replace(self, user=user)

    def namespaced_key(self, base_key: str) -> str:
        return self.user.namespaced(base_key)

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def _load_json(self, base_key: str) -> Any | None:
        key = self.namespaced_key(base_key)
        raw = self._backend.get_value(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            logger.warning("Malformed data under %s, treating as absent: %s", key, exc)
            return None

    def _write_json(self, base_key: str, payload: Any) -> None:
        key = self.namespaced_key(base_key)
        try:
            text = json.dumps(payload, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Could not serialize {key}", detail={"key": key}) from exc
        try:
            self._backend.set_value(key, text)
        except sqlite3.Error as exc:
            raise StorageError(f"Could not write {key}: {exc}", detail={"key": key}) from exc

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def _load_entries(self, collection: Collection) -> list[tuple[Any, StoredRecord | None]]:
        """Stored items paired with their validated record (None when invalid).

        Invalid items stay in the list so that a rewrite of the collection
        carries them over unchanged.
        """
        spec = _SPECS[Collection(collection)]
        data = self._load_json(spec.base_key)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Expected a list under %s, got %s", self.namespaced_key(spec.base_key), type(data).__name__)
            return []

        entries: list[tuple[Any, StoredRecord | None]] = []
        for index, item in enumerate(data):
            try:
                entries.append((item, spec.model.model_validate(item)))
            except PydanticValidationError as exc:
                logger.warning(
                    "Skipping invalid %s record #%s under %s: %s",
                    collection,
                    index,
                    self.namespaced_key(spec.base_key),
                    exc.errors(include_url=False),
                )
                entries.append((item, None))
        return entries

    def _save_entries(self, collection: Collection, entries: Sequence[tuple[Any, StoredRecord | None]]) -> None:
        spec = _SPECS[Collection(collection)]
        self._write_json(
            spec.base_key,
            [record.to_storage() if record is not None else raw for raw, record in entries],
        )

    def get_all(self, collection: Collection) -> list[Any]:
        """All valid records of *collection* in stored order; [] when absent or malformed."""
        return [record for _raw, record in self._load_entries(collection) if record is not None]

    def _save_all(self, collection: Collection, records: Sequence[StoredRecord]) -> None:
        """Replace the whole collection with *records*."""
        self._save_entries(collection, [(None, record) for record in records])

    def find(self, collection: Collection, record_id: str) -> Any | None:
        for record in self.get_all(collection):
            if record.id == record_id:
                return record
        return None

    def upsert(self, collection: Collection, record: StoredRecord) -> None:
        """Replace the record with the same id in place, else insert it (front or back per collection)."""
        collection = Collection(collection)
        spec = _SPECS[collection]
        if not isinstance(record, spec.model):
            raise TypeError(f"{collection} stores {spec.model.__name__}, got {type(record).__name__}")

        entries = self._load_entries(collection)
        for index, (_raw, existing) in enumerate(entries):
            if existing is not None and existing.id == record.id:
                entries[index] = (None, record)
                break
        else:
            if spec.prepend:
                entries.insert(0, (None, record))
            else:
                entries.append((None, record))
        self._save_entries(collection, entries)

    def delete(self, collection: Collection, record_id: str) -> bool:
        """Remove the record; False (and no write) when it does not exist."""
        entries = self._load_entries(collection)
        remaining = [(raw, record) for raw, record in entries if record is None or record.id != record_id]
        if len(remaining) == len(entries):
            logger.debug("delete(%s, %s): not found", collection, record_id)
            return False
        self._save_entries(collection, remaining)
        return True

    def toggle_archive(self, scan_id: str) -> DiagnosisRecord | None:
        """Flip ``archived`` on the scan; None when it does not exist."""
        entries = self._load_entries(Collection.SCANS)
        for _raw, scan in entries:
            if scan is not None and scan.id == scan_id:
                scan.archived = not scan.archived
                self._save_entries(Collection.SCANS, entries)
                return scan
        logger.debug("toggle_archive(%s): not found", scan_id)
        return None

    # ------------------------------------------------------------------
    # Convenience accessors
    # ------------------------------------------------------------------

    def get_scans(self) -> list[DiagnosisRecord]:
        return self.get_all(Collection.SCANS)

    def get_scan(self, scan_id: str) -> DiagnosisRecord | None:
        return self.find(Collection.SCANS, scan_id)

    def save_scan(self, scan: DiagnosisRecord) -> None:
        self.upsert(Collection.SCANS, scan)

    def delete_scan(self, scan_id: str) -> bool:
        return self.delete(Collection.SCANS, scan_id)

    def get_sessions(self) -> list[MonitoringSession]:
        return self.get_all(Collection.MONITORING)

    def get_session(self, session_id: str) -> MonitoringSession | None:
        return self.find(Collection.MONITORING, session_id)

    def save_session(self, session: MonitoringSession) -> None:
        self.upsert(Collection.MONITORING, session)

    def delete_session(self, session_id: str) -> bool:
        return self.delete(Collection.MONITORING, session_id)

    # ------------------------------------------------------------------
    # User stats
    # ------------------------------------------------------------------

    def get_stats(self) -> UserStats:
        """Stored stats, or a fresh default profile when none (or unreadable)."""
        data = self._load_json(StorageKeys.USER_STATS)
        if data is None:
            return UserStats()
        try:
            return UserStats.model_validate(data)
        except PydanticValidationError as exc:
            logger.warning(
                "Invalid user stats under %s, using defaults: %s",
                self.namespaced_key(StorageKeys.USER_STATS),
                exc.errors(include_url=False),
            )
            return UserStats()

    def save_stats(self, stats: UserStats) -> None:
        self._write_json(StorageKeys.USER_STATS, stats.to_storage())

    # ------------------------------------------------------------------
    # Alerts (capping is the caller's job)
    # ------------------------------------------------------------------

    def get_alerts(self) -> list[AppAlert]:
        return self.get_all(Collection.ALERTS)

    def save_alerts(self, alerts: Sequence[AppAlert]) -> None:
        self._save_all(Collection.ALERTS, alerts)

    def add_alert(self, alert: AppAlert) -> None:
        self.save_alerts([alert, *self.get_alerts()])

    def clear_alerts(self) -> None:
        self.save_alerts([])
